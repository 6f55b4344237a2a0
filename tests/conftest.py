"""Shared fixtures: an in-memory snippet source."""

import pytest

from source.base import ContentFetchError, SnippetSource
from source.models import ContentUnit, SourceRecord


class InMemorySnippetSource(SnippetSource):
    """Snippet source backed by dicts, for exercising the stages offline."""

    def __init__(self):
        self.records: dict[str, list[SourceRecord]] = {}
        self.content: dict[str, list[ContentUnit]] = {}
        self.broken: set[str] = set()
        self.marked: list[tuple[str, str]] = []
        self.fetched: list[str] = []

    def add(self, record_id, identity, date, *paragraphs):
        self.records.setdefault(date or "", []).append(
            SourceRecord(record_id=record_id, identity=identity, date=date)
        )
        self.content[record_id] = [
            ContentUnit(block_type="paragraph", texts=[text]) for text in paragraphs
        ]

    def query_records(self, date):
        return list(self.records.get(date, []))

    def iter_content(self, record_id):
        self.fetched.append(record_id)
        if record_id in self.broken:
            raise ContentFetchError(f"Could not read blocks of {record_id}")
        yield from self.content.get(record_id, [])

    def mark_processed(self, record_id, timestamp):
        self.marked.append((record_id, timestamp))


@pytest.fixture
def snippet_source():
    return InMemorySnippetSource()
