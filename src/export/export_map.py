"""Export map file I/O.

The export map records, for each "identity|date" key, the ids of the source
records that produced that key's snippet file. The upload stage reads it to
flag those records as processed.
"""

import json
from pathlib import Path

from common.constants import CACHE_DIRNAME, EXPORT_MAP_FILENAME


def export_map_path(root: Path) -> Path:
    return root / CACHE_DIRNAME / EXPORT_MAP_FILENAME


def write_export_map(file_path: Path, export_map: dict[str, list[str]]) -> None:
    """
    Write the export map, replacing any previous one.

    Args:
        file_path: Path to write the file
        export_map: Mapping of "identity|date" -> record ids

    Raises:
        OSError: If the file cannot be written
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(export_map, f, indent=2, ensure_ascii=False)


def read_export_map(file_path: Path) -> dict[str, list[str]]:
    """
    Read the export map written by the last export run.

    Args:
        file_path: Path to the map file

    Returns:
        Mapping of "identity|date" -> record ids (empty if the file is missing)

    Raises:
        ValueError: If the file format is invalid
    """
    if not file_path.exists():
        return {}

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Export map must be a JSON object: {file_path}")

    return {str(key): [str(record_id) for record_id in ids] for key, ids in data.items()}
