"""Render snippet content blocks as plain text lines."""

from collections.abc import Callable

from source.models import MEDIA_TYPES, ContentUnit


def _prefixed(prefix: str) -> Callable[[ContentUnit], str]:
    return lambda unit: f"{prefix}{unit.text}"


def _to_do(unit: ContentUnit) -> str:
    return f"{'[x]' if unit.checked else '[ ]'} {unit.text}"


def _callout(unit: ContentUnit) -> str:
    if unit.icon:
        return f"> {unit.icon} {unit.text}"
    return f"> {unit.text}"


def _code(unit: ContentUnit) -> str:
    return f"```{unit.language or ''}\n{unit.text}\n```"


def _reference(label: str, caption: str, url: str | None) -> str:
    parts = [f"[{label}]"]
    if caption:
        parts.append(caption)
    if url:
        parts.append(f"({url})")
    return " ".join(parts)


def _media(unit: ContentUnit) -> str:
    return _reference(unit.block_type, unit.caption, unit.url)


def _bookmark(unit: ContentUnit) -> str:
    return _reference("bookmark", unit.caption or unit.text, unit.url)


def _link_preview(unit: ContentUnit) -> str:
    return unit.url or unit.text


RENDERERS: dict[str, Callable[[ContentUnit], str]] = {
    "heading_1": _prefixed("# "),
    "heading_2": _prefixed("## "),
    "heading_3": _prefixed("### "),
    "bulleted_list_item": _prefixed("- "),
    "numbered_list_item": _prefixed("1. "),
    "to_do": _to_do,
    "quote": _prefixed("> "),
    "divider": lambda unit: "---",
    "callout": _callout,
    "code": _code,
    "bookmark": _bookmark,
    "link_preview": _link_preview,
    **{media_type: _media for media_type in MEDIA_TYPES},
}


def render_unit(unit: ContentUnit) -> str:
    """Render one content unit as a line of text.

    Every known block type has a fixed format. Paragraphs, unsupported
    blocks and unknown types render as their inline text verbatim, so the
    result is empty only when the block carries no text.

    Args:
        unit: Content unit to render

    Returns:
        Rendered text (several lines for code blocks)
    """
    renderer = RENDERERS.get(unit.block_type)
    if renderer is None:
        return unit.text
    return renderer(unit)
