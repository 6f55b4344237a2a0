"""Identity directory: which snippets/ folder belongs to which email."""

import json
from pathlib import Path

from common.logger import get_logger

logger = get_logger(__name__)


class IdentityDirectory:
    """Two-way lookup between author folders and identities (emails).

    Loaded from a JSON object mapping folder name to email, e.g.:

        {"eunho": "jeh0224@gachon.ac.kr", "jieun": "wldms4849@gachon.ac.kr"}

    Email lookups are case-insensitive.
    """

    def __init__(self, folder_to_identity: dict[str, str]):
        self.folder_to_identity = {
            folder: identity.strip() for folder, identity in folder_to_identity.items()
        }
        self._identity_to_folder = {
            identity.lower(): folder for folder, identity in self.folder_to_identity.items()
        }

    @classmethod
    def from_file(cls, path: Path) -> "IdentityDirectory":
        """Load the directory from a JSON file.

        A missing file gives an empty directory; every lookup then fails
        and callers skip with a warning.

        Raises:
            ValueError: If the file is not a JSON object of strings
        """
        if not path.exists():
            logger.warning(f"Identity directory not found: {path} (no folders are known)")
            return cls({})

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise ValueError(f"{path} must contain a JSON object of folder -> email")

        return cls(data)

    def folder_for(self, identity: str) -> str | None:
        return self._identity_to_folder.get(identity.strip().lower())

    def identity_for(self, folder: str) -> str | None:
        return self.folder_to_identity.get(folder)

    def __len__(self) -> int:
        return len(self.folder_to_identity)
