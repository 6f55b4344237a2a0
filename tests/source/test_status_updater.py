"""Tests for marking exported records processed."""

from unittest.mock import Mock

import httpx

from source.base import StatusUpdateError
from source.notion import NotionSnippetSource
from source.status import RemoteStatusUpdater


def test_marks_every_exported_record():
    source = Mock()
    updater = RemoteStatusUpdater(source, {"a@x.com|2024-01-01": ["p1", "p2"]})

    assert updater.mark_processed("a@x.com", "2024-01-01") == 2
    assert [c.args[0] for c in source.mark_processed.call_args_list] == ["p1", "p2"]


def test_unknown_key_is_a_noop():
    source = Mock()
    updater = RemoteStatusUpdater(source, {"a@x.com|2024-01-01": ["p1"]})

    assert updater.mark_processed("a@x.com", "2024-01-02") == 0
    source.mark_processed.assert_not_called()


def test_key_lookup_ignores_case():
    source = Mock()
    updater = RemoteStatusUpdater(source, {"A@X.com|2024-01-01": ["p1"]})

    assert updater.mark_processed("a@x.com", "2024-01-01") == 1


def test_failure_does_not_stop_remaining_updates(caplog):
    source = Mock()
    source.mark_processed.side_effect = [StatusUpdateError("boom"), None]
    updater = RemoteStatusUpdater(source, {"a@x.com|2024-01-01": ["p1", "p2"]})

    assert updater.mark_processed("a@x.com", "2024-01-01") == 1
    assert source.mark_processed.call_count == 2
    assert "boom" in caplog.text


def test_transport_error_does_not_stop_remaining_updates(caplog):
    """Connection errors from the Notion client are logged per record."""
    client = Mock()
    client.pages.update.side_effect = [httpx.ConnectError("connection refused"), {}]
    updater = RemoteStatusUpdater(
        NotionSnippetSource(client, "db-123"), {"a@x.com|2024-01-01": ["p1", "p2"]}
    )

    assert updater.mark_processed("a@x.com", "2024-01-01") == 1
    assert client.pages.update.call_count == 2
    assert "p1" in caplog.text
