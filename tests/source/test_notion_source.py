"""Tests for the Notion snippet source."""

from unittest.mock import Mock

import httpx
import pytest
from notion_client.errors import RequestTimeoutError

from source.base import ContentFetchError, RecordQueryError, StatusUpdateError
from source.models import ContentUnit
from source.notion import (
    NotionSchema,
    NotionSnippetSource,
    build_date_filter,
    unprocessed_filter,
)


def make_page(page_id, date="2024-01-01", email="a@x.com", people_email=None):
    properties = {
        "Date": {"date": {"start": date} if date else None},
        "Email": {"email": email},
        "Posted": {"checkbox": False},
    }
    if people_email:
        properties["Author"] = {"people": [{"person": {"email": people_email}}]}
    return {"id": page_id, "properties": properties}


def paragraph(text):
    return {"type": "paragraph", "paragraph": {"rich_text": [{"plain_text": text}]}}


@pytest.fixture
def client():
    return Mock()


@pytest.fixture
def source(client):
    return NotionSnippetSource(client, "db-123")


class TestFilters:
    """Tests for the query filter builders."""

    def test_equals_false(self):
        assert unprocessed_filter(NotionSchema(), "equals_false") == {
            "property": "Posted",
            "checkbox": {"equals": False},
        }

    def test_false_or_empty(self):
        clause = unprocessed_filter(NotionSchema(processed="Done"), "false_or_empty")
        assert clause == {
            "or": [
                {"property": "Done", "checkbox": {"equals": False}},
                {"property": "Done", "checkbox": {"is_empty": True}},
            ]
        }

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            unprocessed_filter(NotionSchema(), "maybe")

    def test_date_filter_is_exact_day(self):
        compound = build_date_filter(NotionSchema(), "2024-01-01", "equals_false")
        assert compound["and"][0] == {"property": "Date", "date": {"equals": "2024-01-01"}}
        assert len(compound["and"]) == 2


class TestQueryRecords:
    """Tests for paginated record queries."""

    def test_accumulates_all_pages_in_order(self, client, source):
        client.databases.query.side_effect = [
            {"results": [make_page("p1"), make_page("p2")], "has_more": True, "next_cursor": "c1"},
            {"results": [make_page("p3")], "has_more": False, "next_cursor": None},
        ]

        records = source.query_records("2024-01-01")

        assert [r.record_id for r in records] == ["p1", "p2", "p3"]
        assert client.databases.query.call_count == 2
        second_call = client.databases.query.call_args_list[1].kwargs
        assert second_call["start_cursor"] == "c1"
        assert second_call["database_id"] == "db-123"

    def test_first_call_has_no_cursor(self, client, source):
        client.databases.query.return_value = {"results": [], "has_more": False}

        assert source.query_records("2024-01-01") == []
        assert "start_cursor" not in client.databases.query.call_args.kwargs

    def test_falls_back_to_raw_request(self):
        """Client releases without databases.query use the raw endpoint."""
        client = Mock()
        client.databases = Mock(spec=[])
        client.request.return_value = {"results": [make_page("p1")], "has_more": False}

        records = NotionSnippetSource(client, "db-123").query_records("2024-01-01")

        assert [r.record_id for r in records] == ["p1"]
        assert client.request.call_args.kwargs["path"] == "databases/db-123/query"
        assert client.request.call_args.kwargs["method"] == "POST"

    def test_query_error_raises(self, client, source):
        client.databases.query.side_effect = RequestTimeoutError()

        with pytest.raises(RecordQueryError):
            source.query_records("2024-01-01")


class TestToRecord:
    """Tests for mapping Notion pages to records."""

    def test_email_and_date(self, source):
        record = source.to_record(make_page("p1", date="2024-01-01T10:00:00.000+09:00"))
        assert record.identity == "a@x.com"
        assert record.date == "2024-01-01"
        assert record.processed is False

    def test_people_fallback(self, source):
        record = source.to_record(make_page("p1", email=None, people_email=" b@x.com "))
        assert record.identity == "b@x.com"

    def test_missing_identity_and_date(self, source):
        record = source.to_record({"id": "p1", "properties": {}})
        assert record.identity is None
        assert record.date is None


class TestIterContent:
    """Tests for paginated block reads."""

    def test_follows_cursor(self, client, source):
        client.blocks.children.list.side_effect = [
            {"results": [paragraph("one")], "has_more": True, "next_cursor": "c1"},
            {"results": [paragraph("two")], "has_more": False, "next_cursor": None},
        ]

        units = list(source.iter_content("p1"))

        assert [u.text for u in units] == ["one", "two"]
        assert all(isinstance(u, ContentUnit) for u in units)
        assert client.blocks.children.list.call_args_list[0].kwargs == {
            "block_id": "p1",
            "page_size": 100,
        }
        assert client.blocks.children.list.call_args_list[1].kwargs["start_cursor"] == "c1"

    def test_fetch_error_raises(self, client, source):
        client.blocks.children.list.side_effect = RequestTimeoutError()

        with pytest.raises(ContentFetchError):
            list(source.iter_content("p1"))


class TestMarkProcessed:
    """Tests for flagging pages processed."""

    def test_updates_checkbox_and_timestamp(self, client, source):
        source.mark_processed("p1", "2024-01-02T00:00:00+00:00")

        client.pages.update.assert_called_once_with(
            page_id="p1",
            properties={
                "Posted": {"checkbox": True},
                "Posted At": {"date": {"start": "2024-01-02T00:00:00+00:00"}},
            },
        )

    def test_update_error_raises(self, client, source):
        client.pages.update.side_effect = RequestTimeoutError()

        with pytest.raises(StatusUpdateError):
            source.mark_processed("p1", "2024-01-02T00:00:00+00:00")


class TestTransportErrors:
    """httpx errors are wrapped like API errors."""

    def test_query(self, client, source):
        client.databases.query.side_effect = httpx.ReadTimeout("read timed out")

        with pytest.raises(RecordQueryError):
            source.query_records("2024-01-01")

    def test_iter_content(self, client, source):
        client.blocks.children.list.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ContentFetchError):
            list(source.iter_content("p1"))

    def test_mark_processed(self, client, source):
        client.pages.update.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(StatusUpdateError):
            source.mark_processed("p1", "2024-01-02T00:00:00+00:00")
