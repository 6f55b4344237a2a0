"""Write merged snippet groups to snippets/<folder>/<date>.<ext>."""

from pathlib import Path

from common.constants import SNIPPET_SEPARATOR
from common.identities import IdentityDirectory
from common.logger import get_logger

from .export_map import write_export_map
from .models import ExportResult, GroupKey, SnippetGroup

logger = get_logger(__name__)


def merge_bodies(bodies: list[str]) -> str:
    """Join group bodies with a horizontal-rule separator."""
    return SNIPPET_SEPARATOR.join(body for body in bodies if body).strip()


class ExportWriter:
    """Writes one file per group and the export map.

    An existing target file is never overwritten: local content wins over
    freshly fetched content.
    """

    def __init__(
        self,
        snippets_dir: Path,
        identities: IdentityDirectory,
        map_path: Path,
        extension: str = "txt",
    ):
        self.snippets_dir = snippets_dir
        self.identities = identities
        self.map_path = map_path
        self.extension = extension.lstrip(".")

    def target_path(self, folder: str, date: str) -> Path:
        return self.snippets_dir / folder / f"{date}.{self.extension}"

    def write(self, groups: dict[GroupKey, SnippetGroup], result: ExportResult) -> ExportResult:
        """Write every group and persist the export map.

        The map is written even when there are no groups, so the upload
        stage never reads a map left over from another date.

        Args:
            groups: Groups from group_snippets()
            result: Result to fill in

        Returns:
            The updated result, with export_map set

        Raises:
            OSError: If a snippet file or the map cannot be written
        """
        export_map: dict[str, list[str]] = {}

        for key, group in groups.items():
            folder = self.identities.folder_for(key.identity)
            if not folder:
                logger.warning(f"Unknown email → folder: {key.identity}")
                result.skipped_unknown += 1
                continue

            file_path = self.target_path(folder, key.date)
            if file_path.exists():
                logger.info(f"Exists, skip: {file_path}")
                result.skipped_existing += 1
                export_map[key.serialize()] = list(group.record_ids)
                continue

            content = merge_bodies(group.bodies)
            if not content:
                logger.warning(f"No content for {key}, not writing {file_path}")
                result.skipped_empty += 1
                continue

            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
            logger.info(f"Wrote: {file_path}")
            result.written += 1
            export_map[key.serialize()] = list(group.record_ids)

        write_export_map(self.map_path, export_map)
        logger.info(f"Map saved: {self.map_path} ({len(export_map)} keys)")

        result.export_map = export_map
        return result
