"""Turn a snippet page's content blocks into one plain-text body."""

from common.env import env
from common.logger import get_logger
from source.base import SnippetSource
from source.models import SourceRecord

from .headers import strip_title_echo
from .rendering import render_unit

logger = get_logger(__name__)


class PageTextExtractor:
    """Reads every content block of a record and renders it as text."""

    def __init__(self, source: SnippetSource, title: str | None = None):
        self.source = source
        self.title = title or env.snippet_title()

    def extract(self, record: SourceRecord) -> str:
        """Extract the body text of a record.

        Blocks are fetched page by page, rendered, empty lines dropped and
        joined with newlines. Leading lines that echo the snippet title,
        date or author are then stripped.

        Args:
            record: Source record to read

        Returns:
            Trimmed body text (may be empty)

        Raises:
            ContentFetchError: If fetching the blocks fails
        """
        lines = []
        for unit in self.source.iter_content(record.record_id):
            line = render_unit(unit)
            if line.strip():
                lines.append(line)

        body = "\n".join(lines).strip()
        logger.debug(f"{record.record_id}: {len(lines)} lines extracted")
        return strip_title_echo(body, record.date or "", record.identity or "", title=self.title)
