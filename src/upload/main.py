"""
Upload changed local snippet files to the ingestion endpoint.

Scans snippets/<folder>/ for text files, uploads the ones whose content
changed since their last successful upload, records the new fingerprints
and, when Notion access is configured, flags the exported source pages as
processed.
"""

from pathlib import Path

from common.constants import SNIPPETS_DIRNAME
from common.identities import IdentityDirectory
from common.logger import get_logger
from source.status import RemoteStatusUpdater

from .change_detection import detect_changes
from .dispatcher import SnippetEndpoint, UploadDispatcher
from .models import UploadResult
from .state_io import load_upload_state, save_upload_state, upload_state_path

logger = get_logger(__name__)


def run_upload(
    root: Path,
    identities: IdentityDirectory,
    endpoint: SnippetEndpoint,
    team_name: str,
    api_id: str | None = None,
    force: bool = False,
    status_updater: RemoteStatusUpdater | None = None,
) -> UploadResult:
    """Run the upload stage.

    Args:
        root: Working root holding snippets/ and the state file
        identities: Folder <-> email directory
        endpoint: Ingestion endpoint client
        team_name: Team name sent with every snippet
        api_id: Optional api_id sent with every snippet
        force: Upload every file regardless of recorded fingerprints
        status_updater: Marks source pages processed after an upload

    Returns:
        UploadResult; its outcome distinguishes "no candidates" and
        "all failed" from success

    Raises:
        OSError: If the upload state cannot be written
    """
    snippets_dir = root / SNIPPETS_DIRNAME
    if not snippets_dir.is_dir():
        logger.error(f"No {SNIPPETS_DIRNAME}/ directory under {root}")
        return UploadResult()

    state_path = upload_state_path(root)
    state = load_upload_state(state_path)

    candidates = detect_changes(root, snippets_dir, identities, state, force=force)
    logger.info(f"{len(candidates)} changed file(s) to upload")

    dispatcher = UploadDispatcher(
        endpoint,
        state,
        team_name=team_name,
        api_id=api_id,
        status_updater=status_updater,
    )
    try:
        result = dispatcher.dispatch(candidates)
    finally:
        # Keep fingerprints of files already posted, even if the batch broke off
        save_upload_state(state_path, state)

    logger.info(f"Done. Candidates={result.candidates}, Uploaded={result.uploaded}.")

    return result
