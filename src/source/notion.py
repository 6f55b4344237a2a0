"""Notion database client for daily snippet pages."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx
from notion_client import Client
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from common.constants import NOTION_PAGE_SIZE
from common.env import env
from common.logger import get_logger

from .base import (
    ContentFetchError,
    RecordQueryError,
    SnippetSource,
    StatusUpdateError,
)
from .models import ContentUnit, SourceRecord

logger = get_logger(__name__)

# notion_client lets httpx transport errors (connect, read, ...) through unwrapped
NOTION_ERRORS = (HTTPResponseError, RequestTimeoutError, httpx.HTTPError)


@dataclass
class NotionSchema:
    """Property names of the snippet database."""

    date: str = "Date"
    email: str = "Email"
    people: str = "Author"
    processed: str = "Posted"
    processed_at: str = "Posted At"

    @classmethod
    def from_env(cls) -> "NotionSchema":
        return cls(
            date=env.notion_date_property(),
            email=env.notion_email_property(),
            people=env.notion_people_property(),
            processed=env.notion_processed_property(),
            processed_at=env.notion_processed_at_property(),
        )


def format_api_error(exc: Exception) -> str:
    """Best human-readable message from a notion_client error."""
    body = getattr(exc, "body", None)
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return str(exc)


def unprocessed_filter(schema: NotionSchema, mode: str) -> dict[str, Any]:
    """Build the "not yet processed" filter clause.

    Args:
        schema: Database property names
        mode: 'equals_false' for a plain checkbox check, 'false_or_empty'
              to also accept records where the property is empty

    Returns:
        Notion filter object
    """
    equals_false = {"property": schema.processed, "checkbox": {"equals": False}}
    if mode == "equals_false":
        return equals_false
    if mode == "false_or_empty":
        return {
            "or": [
                equals_false,
                {"property": schema.processed, "checkbox": {"is_empty": True}},
            ]
        }
    raise ValueError(f"Unknown unprocessed filter mode: {mode}")


def build_date_filter(schema: NotionSchema, date: str, mode: str) -> dict[str, Any]:
    """Compound filter: date equals `date` AND record is unprocessed."""
    return {
        "and": [
            {"property": schema.date, "date": {"equals": date}},
            unprocessed_filter(schema, mode),
        ]
    }


class NotionSnippetSource(SnippetSource):
    """Snippet store backed by a Notion database.

    One instance wraps the process-wide notion_client.Client; it is built
    once by the CLI and handed to every stage that talks to Notion.
    """

    def __init__(
        self,
        client: Client,
        database_id: str,
        schema: NotionSchema | None = None,
        filter_mode: str = "equals_false",
    ):
        self.client = client
        self.database_id = database_id
        self.schema = schema or NotionSchema()
        self.filter_mode = filter_mode

    @classmethod
    def from_token(cls, token: str, database_id: str, **kwargs) -> "NotionSnippetSource":
        return cls(Client(auth=token), database_id, **kwargs)

    def _query_page(self, body: dict[str, Any]) -> dict[str, Any]:
        # Newer client releases dropped databases.query in favour of data sources
        if hasattr(self.client.databases, "query"):
            return self.client.databases.query(database_id=self.database_id, **body)
        return self.client.request(
            path=f"databases/{self.database_id}/query",
            method="POST",
            body=body,
        )

    def query_records(self, date: str) -> list[SourceRecord]:
        body: dict[str, Any] = {
            "filter": build_date_filter(self.schema, date, self.filter_mode),
            "page_size": NOTION_PAGE_SIZE,
        }

        pages: list[dict[str, Any]] = []
        cursor = None
        while True:
            if cursor:
                body["start_cursor"] = cursor
            try:
                resp = self._query_page(body)
            except NOTION_ERRORS as e:
                raise RecordQueryError(
                    f"Query for {date} failed after {len(pages)} records: {format_api_error(e)}"
                ) from e

            pages.extend(resp.get("results", []))
            cursor = resp.get("next_cursor") if resp.get("has_more") else None
            if not cursor:
                break

        logger.debug(f"Query for {date} returned {len(pages)} pages")
        return [self.to_record(page) for page in pages]

    def to_record(self, page: dict[str, Any]) -> SourceRecord:
        """Map a raw Notion page onto a SourceRecord.

        Identity comes from the email property, falling back to the first
        person on the people property. Missing values become None.
        """
        props = page.get("properties") or {}

        date_prop = (props.get(self.schema.date) or {}).get("date") or {}
        date = (date_prop.get("start") or "")[:10]

        email = ((props.get(self.schema.email) or {}).get("email") or "").strip()
        if not email:
            people = (props.get(self.schema.people) or {}).get("people") or []
            if people:
                email = (((people[0] or {}).get("person") or {}).get("email") or "").strip()

        processed = (props.get(self.schema.processed) or {}).get("checkbox") is True

        return SourceRecord(
            record_id=page["id"],
            identity=email or None,
            date=date or None,
            processed=processed,
        )

    def iter_content(self, record_id: str) -> Iterator[ContentUnit]:
        cursor = None
        while True:
            kwargs: dict[str, Any] = {"block_id": record_id, "page_size": NOTION_PAGE_SIZE}
            if cursor:
                kwargs["start_cursor"] = cursor
            try:
                resp = self.client.blocks.children.list(**kwargs)
            except NOTION_ERRORS as e:
                raise ContentFetchError(
                    f"Could not read blocks of {record_id}: {format_api_error(e)}"
                ) from e

            for block in resp.get("results", []):
                yield ContentUnit.from_block(block)

            cursor = resp.get("next_cursor") if resp.get("has_more") else None
            if not cursor:
                break

    def mark_processed(self, record_id: str, timestamp: str) -> None:
        properties = {
            self.schema.processed: {"checkbox": True},
            self.schema.processed_at: {"date": {"start": timestamp}},
        }
        try:
            self.client.pages.update(page_id=record_id, properties=properties)
        except NOTION_ERRORS as e:
            raise StatusUpdateError(
                f"Could not mark {record_id} as processed: {format_api_error(e)}"
            ) from e
