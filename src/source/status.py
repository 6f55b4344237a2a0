"""Flag source records as processed once their snippet is uploaded."""

from datetime import datetime, timezone

from common.logger import get_logger

from .base import SnippetSource, StatusUpdateError

logger = get_logger(__name__)


class RemoteStatusUpdater:
    """Marks the records behind an uploaded (identity, date) as processed.

    The record ids come from the export map written by the export stage,
    keyed by "identity|date".
    """

    def __init__(self, source: SnippetSource, export_map: dict[str, list[str]]):
        self.source = source
        self.export_map = export_map
        # Emails in Notion and in the identity directory may differ in case
        self._index = {key.lower(): ids for key, ids in export_map.items()}

    def mark_processed(self, identity: str, date: str) -> int:
        """Mark every record exported for `identity` on `date`.

        Args:
            identity: Owner email
            date: YYYY-MM-DD

        Returns:
            Number of records successfully updated (0 when the key is unknown)
        """
        key = f"{identity}|{date}"
        record_ids = self._index.get(key.lower(), [])
        if not record_ids:
            logger.debug(f"No exported records for {key}, nothing to mark")
            return 0

        updated = 0
        for record_id in record_ids:
            timestamp = datetime.now(timezone.utc).isoformat()
            try:
                self.source.mark_processed(record_id, timestamp)
                updated += 1
            except StatusUpdateError as e:
                logger.warning(f"{key}: {e}")

        logger.info(f"Marked {updated}/{len(record_ids)} records processed for {key}")
        return updated
