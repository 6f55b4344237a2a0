"""
Export one day's snippet pages from the remote database to local files.

Queries unprocessed records for the target date, renders each page to text,
merges pages that share an author and date, writes
snippets/<folder>/<date>.<ext> and records which pages went into each file.
"""

from pathlib import Path

from common.constants import SNIPPETS_DIRNAME
from common.identities import IdentityDirectory
from common.logger import get_logger
from source.base import ContentFetchError, SnippetSource
from source.models import SourceRecord

from .export_map import export_map_path
from .extraction import PageTextExtractor
from .grouping import group_snippets
from .models import ExportResult
from .writer import ExportWriter

logger = get_logger(__name__)


def run_export(
    source: SnippetSource,
    date: str,
    root: Path,
    identities: IdentityDirectory,
    extension: str = "txt",
    title: str | None = None,
) -> ExportResult:
    """Run the export stage for one date.

    Args:
        source: Remote snippet store
        date: Target date (YYYY-MM-DD)
        root: Working root holding snippets/ and .cache/
        identities: Folder <-> email directory
        extension: Extension of written snippet files
        title: Title used when stripping echoed header lines

    Returns:
        ExportResult with per-outcome counts and the written export map

    Raises:
        RecordQueryError: If the record query fails
        OSError: If files or the export map cannot be written
    """
    result = ExportResult(date=date)
    writer = ExportWriter(
        snippets_dir=root / SNIPPETS_DIRNAME,
        identities=identities,
        map_path=export_map_path(root),
        extension=extension,
    )

    records = source.query_records(date)
    result.records = len(records)

    if not records:
        logger.info(f"No pages for {date}")
        return writer.write({}, result)

    logger.info(f"Found {len(records)} pages for {date}")

    extractor = PageTextExtractor(source, title=title)
    pairs: list[tuple[SourceRecord, str]] = []
    for record in records:
        if not record.identity or not record.date:
            # Grouping warns about these; don't spend a fetch on them
            pairs.append((record, ""))
            continue

        try:
            body = extractor.extract(record)
        except ContentFetchError as e:
            logger.warning(f"Skip {record.record_id}: {e}")
            result.failed_records += 1
            continue

        pairs.append((record, body))

    groups = group_snippets(pairs)
    return writer.write(groups, result)
