"""Abstract interface for the remote snippet database."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from .models import ContentUnit, SourceRecord


class SnippetSource(ABC):
    """Base class for remote snippet stores.

    The export stage reads records and their content through this interface;
    the upload stage uses it to flag records as processed.
    """

    @abstractmethod
    def query_records(self, date: str) -> list[SourceRecord]:
        """Return every unprocessed record dated exactly `date`.

        Args:
            date: Calendar date as YYYY-MM-DD

        Returns:
            Records in the order the store returned them

        Raises:
            RecordQueryError: If any page of the query fails
        """
        pass

    @abstractmethod
    def iter_content(self, record_id: str) -> Iterator[ContentUnit]:
        """Yield the content units of a record, following pagination.

        Raises:
            ContentFetchError: If a page of children cannot be fetched
        """
        pass

    @abstractmethod
    def mark_processed(self, record_id: str, timestamp: str) -> None:
        """Flag a record as processed at `timestamp` (ISO-8601).

        Raises:
            StatusUpdateError: If the update fails
        """
        pass


class SourceError(Exception):
    """Base exception for remote snippet store errors."""

    pass


class RecordQueryError(SourceError):
    """Querying records failed."""

    pass


class ContentFetchError(SourceError):
    """Fetching a record's content failed."""

    pass


class StatusUpdateError(SourceError):
    """Marking a record as processed failed."""

    pass
