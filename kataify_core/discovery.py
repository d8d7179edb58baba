"""
Mapping discovery - Build FileMappings from a directory tree

Author: Kataify maintainers | 2026-10-18
"""

import fnmatch
import logging
from pathlib import Path
from typing import List, Sequence, Union

from .batch import FileMapping

logger = logging.getLogger(__name__)


def _matches_any(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatch(name, p) for p in patterns)


def discover_mappings(
    source_dir: Union[str, Path],
    destination_dir: Union[str, Path],
    patterns: Sequence[str] = ("*",),
    exclude: Sequence[str] = (),
) -> List[FileMapping]:
    """
    Map every matching file under source_dir to the same relative path
    under destination_dir.

    Args:
        source_dir: Directory to walk recursively
        destination_dir: Directory mirroring source_dir
        patterns: Glob patterns matched against file names
        exclude: Glob patterns matched against paths relative to source_dir

    Returns:
        Mappings sorted by source path

    Raises:
        NotADirectoryError: If source_dir is not a directory
    """
    source_root = Path(source_dir)
    destination_root = Path(destination_dir)

    if not source_root.is_dir():
        raise NotADirectoryError(f"Source directory not found: {source_root}")

    mappings = []
    for path in sorted(source_root.rglob("*")):
        if not path.is_file():
            continue
        relative = path.relative_to(source_root)
        if not _matches_any(path.name, patterns):
            continue
        if exclude and _matches_any(relative.as_posix(), exclude):
            logger.debug(f"Excluded {relative}")
            continue
        mappings.append(FileMapping(str(path), str(destination_root / relative)))

    logger.info(f"Discovered {len(mappings)} file(s) under {source_root}")
    return mappings


def parse_mapping_arg(value: str) -> FileMapping:
    """
    Parse a ``SRC:DEST`` command-line mapping.

    The split happens on the last colon, so ``C:\\src\\a.js:out/a.js``
    keeps its drive letter.
    """
    source, sep, destination = value.rpartition(":")
    if not sep or not source or not destination:
        raise ValueError(f"Expected SRC:DEST, got {value!r}")
    return FileMapping(source, destination)
