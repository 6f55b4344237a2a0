"""Group extracted snippet bodies by (identity, date)."""

from common.logger import get_logger
from source.models import SourceRecord

from .models import GroupKey, SnippetGroup

logger = get_logger(__name__)


def group_snippets(pairs: list[tuple[SourceRecord, str]]) -> dict[GroupKey, SnippetGroup]:
    """Merge records that share an identity and date.

    Records missing an identity or a date are skipped with a warning.
    Every remaining record contributes its id; only non-empty bodies are
    kept.

    Args:
        pairs: (record, extracted body) in query order

    Returns:
        Insertion-ordered mapping of GroupKey -> SnippetGroup
    """
    groups: dict[GroupKey, SnippetGroup] = {}

    for record, body in pairs:
        if not record.identity or not record.date:
            logger.warning(f"Skip (missing date or email): {record.record_id}")
            continue

        key = GroupKey(identity=record.identity, date=record.date)
        group = groups.setdefault(key, SnippetGroup())
        if body and body.strip():
            group.bodies.append(body.strip())
        group.record_ids.append(record.record_id)

    return groups
