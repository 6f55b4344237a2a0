"""Data models for the export stage."""

from dataclasses import dataclass, field

KEY_SEPARATOR = "|"


@dataclass(frozen=True)
class GroupKey:
    """Identity and date shared by every record merged into one file."""

    identity: str
    date: str  # YYYY-MM-DD

    def serialize(self) -> str:
        return f"{self.identity}{KEY_SEPARATOR}{self.date}"

    @classmethod
    def parse(cls, key: str) -> "GroupKey":
        """Parse an "identity|date" key.

        Raises:
            ValueError: If the key has no separator
        """
        identity, sep, date = key.rpartition(KEY_SEPARATOR)
        if not sep or not identity or not date:
            raise ValueError(f"Invalid group key: {key!r}")
        return cls(identity=identity, date=date)

    def __str__(self) -> str:
        return self.serialize()


@dataclass
class SnippetGroup:
    """Accumulated content for one GroupKey.

    `record_ids` lists every contributing record; `bodies` only the
    non-empty ones, so the two lists may differ in length.
    """

    bodies: list[str] = field(default_factory=list)
    record_ids: list[str] = field(default_factory=list)


@dataclass
class ExportResult:
    """Outcome of one export run."""

    date: str
    records: int = 0
    written: int = 0
    skipped_existing: int = 0
    skipped_unknown: int = 0
    skipped_empty: int = 0
    failed_records: int = 0
    export_map: dict[str, list[str]] = field(default_factory=dict)
