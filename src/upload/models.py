"""Data models for the upload stage."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass
class UploadStateEntry:
    """Last successful upload of a local file."""

    hash: str  # sha256 of the trimmed content
    at: str  # ISO-8601 timestamp


@dataclass
class UploadCandidate:
    """A local snippet file that needs uploading."""

    path: Path
    state_key: str  # path relative to the working root
    folder: str
    identity: str
    content: str  # trimmed
    fingerprint: str


class UploadOutcome(Enum):
    """How an upload run ended."""

    SUCCESS = "success"  # At least one upload succeeded
    NO_CANDIDATES = "no_candidates"  # Nothing needed uploading
    ALL_FAILED = "all_failed"  # Candidates existed but none succeeded


@dataclass
class UploadResult:
    """Tally of one upload run."""

    candidates: int = 0
    uploaded: int = 0
    failed: int = 0
    marked: int = 0

    @property
    def outcome(self) -> UploadOutcome:
        if self.candidates == 0:
            return UploadOutcome.NO_CANDIDATES
        if self.uploaded == 0:
            return UploadOutcome.ALL_FAILED
        return UploadOutcome.SUCCESS
