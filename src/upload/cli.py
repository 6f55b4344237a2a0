#!/usr/bin/env python3
"""CLI interface for the upload stage."""

import argparse
from pathlib import Path

from common.constants import EXIT_ALL_FAILED, EXIT_CONFIG, EXIT_NO_CANDIDATES, EXIT_OK
from common.env import ConfigError, env
from common.identities import IdentityDirectory
from common.logger import error, get_logger, setup_logging, success
from export.export_map import export_map_path, read_export_map
from source.notion import NotionSchema, NotionSnippetSource
from source.status import RemoteStatusUpdater

from .dispatcher import SnippetEndpoint
from .main import run_upload
from .models import UploadOutcome

logger = get_logger(__name__)


def build_status_updater(args) -> RemoteStatusUpdater | None:
    """Status updater when Notion access is configured, else None."""
    token = env.notion_token()
    database_id = env.notion_database_id()
    if args.no_mark_processed or not token or not database_id:
        logger.debug("Marking pages processed is disabled")
        return None

    source = NotionSnippetSource.from_token(token, database_id, schema=NotionSchema.from_env())
    export_map = read_export_map(export_map_path(args.root))
    return RemoteStatusUpdater(source, export_map)


def cmd_run(args):
    """Upload changed snippet files.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code: 0 on success (even with some failures), 2 when no file
        needed uploading, 3 when every upload failed, 1 for config errors
    """
    try:
        url = args.url or env.require("DAILY_SNIPPET_URL")
        identities = IdentityDirectory.from_file(args.authors_file)
        status_updater = build_status_updater(args)
    except (ConfigError, ValueError) as e:
        error(str(e))
        return EXIT_CONFIG

    endpoint = SnippetEndpoint(
        url,
        api_key=env.daily_snippet_api_key(),
        timeout=env.upload_timeout(),
    )

    try:
        result = run_upload(
            args.root,
            identities,
            endpoint,
            team_name=args.team_name,
            api_id=env.api_id(),
            force=args.force or env.force_full(),
            status_updater=status_updater,
        )
    except OSError as e:
        error(f"Could not save upload state: {e}")
        return EXIT_CONFIG

    if result.outcome is UploadOutcome.NO_CANDIDATES:
        error("No candidate files")
        return EXIT_NO_CANDIDATES
    if result.outcome is UploadOutcome.ALL_FAILED:
        error(f"0 of {result.candidates} uploads succeeded (check api_id / endpoint)")
        return EXIT_ALL_FAILED

    success(
        f"Uploaded {result.uploaded}/{result.candidates} file(s), "
        f"{result.failed} failed, {result.marked} page(s) marked processed"
    )
    return EXIT_OK


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Upload changed daily snippets")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Upload snippet files changed since last run")
    run_parser.add_argument(
        "--url",
        default=None,
        help="Ingestion endpoint (default: DAILY_SNIPPET_URL)",
    )
    run_parser.add_argument(
        "--root",
        type=Path,
        default=env.snippets_root(),
        help="Working root holding snippets/ and state files (default: SNIPPETS_ROOT or .)",
    )
    run_parser.add_argument(
        "--authors-file",
        type=Path,
        default=env.authors_file(),
        help="JSON folder -> email directory (default: ./snippet_authors.json)",
    )
    run_parser.add_argument(
        "--team-name",
        default=env.team_name(),
        help="Team name sent with each snippet (default: TEAM_NAME)",
    )
    run_parser.add_argument(
        "--force",
        action="store_true",
        help="Upload every file, ignoring recorded fingerprints (or FORCE_FULL=1)",
    )
    run_parser.add_argument(
        "--no-mark-processed",
        action="store_true",
        help="Do not flag Notion pages as processed after upload",
    )
    run_parser.add_argument("--log-file", default=None, help="Also log to this file")
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args()
    setup_logging(log_file=args.log_file, debug=env.debug())
    return args.func(args)


if __name__ == "__main__":
    exit(main())
