"""Filesystem scanning: find project source files and capture their text."""

from __future__ import annotations

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable

from vueprune.errors import AnalysisError
from vueprune.exclusion import FileExcluder
from vueprune.models.graph import SourceFile

logger = logging.getLogger(__name__)


def _is_included(rel_str: str, includes: list[str]) -> bool:
    for pattern in includes:
        if fnmatch.fnmatch(rel_str, pattern):
            return True
        # **/*.vue must also match files at the root
        if pattern.startswith("**/") and fnmatch.fnmatch(rel_str, pattern[3:]):
            return True
    return False


def find_source_files(
    path: Path,
    includes: list[str],
    excludes: list[str],
    include_ignored: bool = False,
) -> list[Path]:
    """Find source files matching include/exclude patterns.

    Excluded directories are pruned during the walk, so ``node_modules`` is
    never descended into. Results are sorted by relative path.
    """
    root = Path(os.path.abspath(path))
    excluder = FileExcluder(root, include_ignored=include_ignored, extra_excludes=excludes)

    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames if not excluder.should_exclude_dir(current / d)
        )

        for filename in sorted(filenames):
            file_path = current / filename
            if excluder.should_exclude(file_path):
                continue
            rel_str = file_path.relative_to(root).as_posix()
            if _is_included(rel_str, includes):
                files.append(file_path)

    logger.debug("Found %d source files under %s", len(files), root)
    return files


def read_source_file(file_path: Path, root: Path) -> SourceFile:
    """Capture one file's text.

    Raises:
        AnalysisError: If the file cannot be read.
    """
    try:
        content = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise AnalysisError(f"Cannot read {file_path}: {e}") from e

    return SourceFile(
        absolute_path=file_path,
        relative_path=file_path.relative_to(root).as_posix(),
        extension=file_path.suffix,
        content=content,
    )


def read_corpus(files: Iterable[Path], root: Path) -> list[SourceFile]:
    """Capture every file's text once; any read failure aborts the scan."""
    root = Path(os.path.abspath(root))
    return [read_source_file(Path(os.path.abspath(f)), root) for f in files]
