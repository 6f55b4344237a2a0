"""Data models for records and content read from the snippet database."""

from dataclasses import dataclass, field
from typing import Any

MEDIA_TYPES: set[str] = {"image", "video", "file", "pdf", "audio"}


def plain_text(rich_text: list[dict[str, Any]] | None) -> str:
    """Concatenate the plain text of a list of Notion rich-text runs."""
    if not rich_text:
        return ""
    return "".join(run.get("plain_text") or "" for run in rich_text)


@dataclass
class ContentUnit:
    """One content block of a snippet page."""

    block_type: str
    texts: list[str] = field(default_factory=list)
    checked: bool = False
    language: str | None = None
    url: str | None = None
    caption: str = ""
    icon: str | None = None

    @property
    def text(self) -> str:
        """All inline runs joined verbatim."""
        return "".join(self.texts)

    @classmethod
    def from_block(cls, block: dict[str, Any]) -> "ContentUnit":
        """Build a content unit from a raw Notion block object.

        Example:
            >>> ContentUnit.from_block(
            ...     {"type": "to_do", "to_do": {"rich_text": [{"plain_text": "ship"}], "checked": True}}
            ... )
            ContentUnit(block_type='to_do', texts=['ship'], checked=True, ...)
        """
        block_type = block.get("type") or "unsupported"
        data = block.get(block_type)
        if not isinstance(data, dict):
            data = {}

        runs = data.get("rich_text") or data.get("text") or []
        url = data.get("url")
        if url is None and block_type in MEDIA_TYPES:
            hosted = data.get("external") or data.get("file") or {}
            url = hosted.get("url")

        icon = data.get("icon") or {}
        return cls(
            block_type=block_type,
            texts=[run.get("plain_text") or "" for run in runs if isinstance(run, dict)],
            checked=bool(data.get("checked", False)),
            language=data.get("language"),
            url=url,
            caption=plain_text(data.get("caption")),
            icon=icon.get("emoji") if isinstance(icon, dict) else None,
        )


@dataclass
class SourceRecord:
    """A snippet page in the remote database."""

    record_id: str
    identity: str | None
    date: str | None  # YYYY-MM-DD
    processed: bool = False
