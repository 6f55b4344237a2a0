#!/usr/bin/env python3
"""CLI interface for the export stage."""

import argparse
import re
from pathlib import Path

from common.constants import EXIT_CONFIG, EXIT_OK
from common.env import ConfigError, env
from common.identities import IdentityDirectory
from common.logger import error, get_logger, setup_logging, success
from source.base import RecordQueryError
from source.notion import NotionSchema, NotionSnippetSource

from .main import run_export

logger = get_logger(__name__)

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def cmd_run(args):
    """Export snippet pages for one date.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        token = env.require("NOTION_TOKEN")
        database_id = args.database_id or env.require("NOTION_DB_ID")
        date = (args.date or env.target_date() or "")[:10]
        if not date:
            raise ConfigError("TARGET_DATE is missing (YYYY-MM-DD)")
        if not DATE_RE.match(date):
            raise ConfigError(f"TARGET_DATE must be YYYY-MM-DD, got {date!r}")
        filter_mode = env.unprocessed_filter()
        identities = IdentityDirectory.from_file(args.authors_file)
    except (ConfigError, ValueError) as e:
        error(str(e))
        return EXIT_CONFIG

    source = NotionSnippetSource.from_token(
        token,
        database_id,
        schema=NotionSchema.from_env(),
        filter_mode=filter_mode,
    )

    try:
        result = run_export(
            source,
            date,
            root=args.root,
            identities=identities,
            extension=args.extension,
            title=env.snippet_title(),
        )
    except RecordQueryError as e:
        error(f"Query failed: {e}")
        return EXIT_CONFIG
    except OSError as e:
        error(f"Could not write export output: {e}")
        return EXIT_CONFIG

    success(
        f"Export {date}: records={result.records}, written={result.written}, "
        f"existing={result.skipped_existing}, unknown={result.skipped_unknown}, "
        f"empty={result.skipped_empty}, failed={result.failed_records}"
    )
    return EXIT_OK


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Export daily snippets from Notion to local files")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Export snippet pages for one date")
    run_parser.add_argument(
        "--date",
        default=None,
        help="Target date YYYY-MM-DD (default: TARGET_DATE)",
    )
    run_parser.add_argument(
        "--database-id",
        default=None,
        help="Notion database id (default: NOTION_DB_ID)",
    )
    run_parser.add_argument(
        "--root",
        type=Path,
        default=env.snippets_root(),
        help="Working root holding snippets/ and .cache/ (default: SNIPPETS_ROOT or .)",
    )
    run_parser.add_argument(
        "--authors-file",
        type=Path,
        default=env.authors_file(),
        help="JSON folder -> email directory (default: ./snippet_authors.json)",
    )
    run_parser.add_argument(
        "--extension",
        default=env.snippet_extension(),
        help="Extension of written files (default: txt)",
    )
    run_parser.add_argument("--log-file", default=None, help="Also log to this file")
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args()
    setup_logging(log_file=args.log_file, debug=env.debug())
    return args.func(args)


if __name__ == "__main__":
    exit(main())
