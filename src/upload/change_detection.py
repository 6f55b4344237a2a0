"""Change detection for incremental uploads."""

import hashlib
from pathlib import Path

from common.constants import UPLOADABLE_EXTENSIONS
from common.identities import IdentityDirectory
from common.logger import get_logger

from .models import UploadCandidate, UploadStateEntry

logger = get_logger(__name__)


def fingerprint(content: str) -> str:
    """sha256 hex digest of the trimmed content."""
    return hashlib.sha256(content.strip().encode("utf-8")).hexdigest()


def iter_snippet_files(
    snippets_dir: Path, identities: IdentityDirectory
) -> list[tuple[str, str, Path]]:
    """
    List uploadable files under snippets/<folder>/.

    Folders without a known identity are skipped with a warning.

    Args:
        snippets_dir: The snippets/ directory
        identities: Folder <-> email directory

    Returns:
        Sorted list of (folder, identity, file path)
    """
    found = []
    for folder_dir in sorted(p for p in snippets_dir.iterdir() if p.is_dir()):
        identity = identities.identity_for(folder_dir.name)
        if not identity:
            logger.warning(f'Skip: unknown author "{folder_dir.name}"')
            continue

        for file_path in sorted(folder_dir.iterdir()):
            if file_path.is_file() and file_path.suffix.lower() in UPLOADABLE_EXTENSIONS:
                found.append((folder_dir.name, identity, file_path))

    return found


def needs_upload(
    current_hash: str, previous: UploadStateEntry | None, force: bool = False
) -> bool:
    """
    Decide whether a file must be uploaded.

    True when forced, when the file was never uploaded, or when its
    fingerprint differs from the one recorded at the last upload.
    """
    if force or previous is None:
        return True
    return previous.hash != current_hash


def detect_changes(
    root: Path,
    snippets_dir: Path,
    identities: IdentityDirectory,
    state: dict[str, UploadStateEntry],
    force: bool = False,
) -> list[UploadCandidate]:
    """
    Find local snippet files whose content changed since the last upload.

    Args:
        root: Working root; state keys are paths relative to it
        snippets_dir: The snippets/ directory
        identities: Folder <-> email directory
        state: Upload state loaded from disk
        force: Upload every file regardless of state

    Returns:
        Candidates in folder/file order, each with its new fingerprint
    """
    candidates = []

    for folder, identity, file_path in iter_snippet_files(snippets_dir, identities):
        # Undecodable bytes become U+FFFD instead of failing the whole run
        content = file_path.read_text(encoding="utf-8", errors="replace").strip()
        current_hash = fingerprint(content)
        state_key = state_key_for(root, file_path)

        if not needs_upload(current_hash, state.get(state_key), force=force):
            logger.debug(f"Unchanged, skip: {folder}/{file_path.name}")
            continue

        candidates.append(
            UploadCandidate(
                path=file_path,
                state_key=state_key,
                folder=folder,
                identity=identity,
                content=content,
                fingerprint=current_hash,
            )
        )

    return candidates


def state_key_for(root: Path, file_path: Path) -> str:
    """Key of a file in the upload state: its path relative to the root."""
    try:
        return file_path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return file_path.resolve().as_posix()
