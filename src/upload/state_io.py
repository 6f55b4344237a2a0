"""Upload state file I/O.

The state file remembers the fingerprint of every file at its last
successful upload:

    {"files": {"snippets/eunho/2024-01-01.txt": {"hash": "...", "at": "..."}}}
"""

import json
from pathlib import Path

from common.constants import UPLOAD_STATE_FILENAME
from common.logger import get_logger

from .models import UploadStateEntry

logger = get_logger(__name__)


def upload_state_path(root: Path) -> Path:
    return root / UPLOAD_STATE_FILENAME


def load_upload_state(file_path: Path) -> dict[str, UploadStateEntry]:
    """
    Load the upload state, treating a missing or unreadable file as empty.

    Args:
        file_path: Path to the state file

    Returns:
        Mapping of state key -> UploadStateEntry
    """
    if not file_path.exists():
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable upload state {file_path}: {e}")
        return {}

    files = data.get("files") if isinstance(data, dict) else None
    if not isinstance(files, dict):
        return {}

    state = {}
    for key, entry in files.items():
        if isinstance(entry, dict) and entry.get("hash"):
            state[key] = UploadStateEntry(hash=entry["hash"], at=entry.get("at", ""))
    return state


def save_upload_state(file_path: Path, state: dict[str, UploadStateEntry]) -> None:
    """
    Write the upload state.

    Args:
        file_path: Path to the state file
        state: Mapping of state key -> UploadStateEntry

    Raises:
        OSError: If the file cannot be written
    """
    data = {
        "files": {key: {"hash": entry.hash, "at": entry.at} for key, entry in state.items()}
    }

    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
