"""Import specifier resolution against the filesystem."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from vueprune.models.graph import ImportEdge, ImportKind, RequireContext
from vueprune.models.project import ProjectConfig

logger = logging.getLogger(__name__)

# Tried inside a directory before the configured extensions
INDEX_CANDIDATES = ("index", "index.js", "index.ts", "index.vue")

Resolution = Path | list[Path] | None


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def _canonical(path: str | Path) -> Path:
    return Path(os.path.abspath(os.path.normpath(path)))


class ImportResolver:
    """Resolves raw import specifiers to absolute file paths.

    One resolver lives for one analysis run; results are cached per
    (specifier, importing file) because the self-resolution guard depends
    on the importing file.
    """

    def __init__(self, project_config: ProjectConfig) -> None:
        self.project_config = project_config
        # Longest prefix first so "@components" wins over "@"
        self.alias_map = {
            prefix: _canonical(project_config.alias_map[prefix])
            for prefix in sorted(project_config.alias_map, key=len, reverse=True)
        }
        self.extensions = list(project_config.extensions)

        # Cache of (specifier, from_file) -> resolution
        self._cache: dict[tuple[str, Path], Resolution] = {}

    def resolve(self, specifier: str, from_file: Path) -> Resolution:
        """Resolve a specifier imported by ``from_file``.

        Returns:
            None when unresolved, a single path, or a list of paths for
            wildcard specifiers (possibly empty).
        """
        key = (specifier, from_file)
        if key not in self._cache:
            self._cache[key] = self._resolve(specifier, from_file)
        return self._cache[key]

    def resolve_edge(self, edge: ImportEdge, from_file: Path) -> list[Path]:
        """Resolve an import edge to a (possibly empty) list of paths."""
        if edge.kind is ImportKind.REQUIRE_CONTEXT:
            return self.resolve_require_context(
                edge.raw_specifier, from_file, edge.context or RequireContext()
            )

        resolved = self.resolve(edge.raw_specifier, from_file)
        if resolved is None:
            logger.debug("Unresolved import %r in %s", edge.raw_specifier, from_file)
            return []
        if isinstance(resolved, list):
            return resolved
        return [resolved]

    def _resolve(self, specifier: str, from_file: Path) -> Resolution:
        if specifier in (".", "./"):
            return None

        if "*" in specifier:
            return self.resolve_wildcard(specifier, from_file)

        base = self._base_path(specifier, from_file, exact_alias=True)
        if base is None:
            return None
        return self._try_extensions(base, from_file)

    def _base_path(
        self, specifier: str, from_file: Path, exact_alias: bool
    ) -> Path | None:
        """Apply alias substitution or relative resolution; None for bare specifiers."""
        for prefix, directory in self.alias_map.items():
            if (exact_alias and specifier == prefix) or specifier.startswith(prefix + "/"):
                remainder = specifier[len(prefix):].lstrip("/")
                return _canonical(directory / remainder) if remainder else directory

        if specifier.startswith((".", "/")):
            return _canonical(from_file.parent / specifier)

        return None

    def _try_extensions(self, candidate: Path, from_file: Path) -> Path | None:
        """Exact file, then directory index files, then appended extensions."""
        if _is_file(candidate):
            return candidate if candidate != from_file else None

        if _is_dir(candidate):
            for index_name in INDEX_CANDIDATES:
                index_path = candidate / index_name
                if _is_file(index_path) and index_path != from_file:
                    return index_path

            for ext in self.extensions:
                index_path = candidate / f"index{ext}"
                if _is_file(index_path) and index_path != from_file:
                    return index_path

        for ext in self.extensions:
            with_ext = Path(f"{candidate}{ext}")
            if _is_file(with_ext) and with_ext != from_file:
                return with_ext

        return None

    def resolve_wildcard(self, specifier: str, from_file: Path) -> list[Path]:
        """Expand a single-``*`` specifier by scanning its directory."""
        resolved: list[Path] = []

        base = self._base_path(specifier, from_file, exact_alias=False)
        if base is None:
            return resolved

        # Only one * per specifier is supported
        parts = str(base).split("*")
        if len(parts) != 2:
            return resolved
        before, after = parts

        search_dir, prefix = os.path.split(before)
        # "*.vue" matches within one entry name; "*/index" descends into it
        name_suffix, sep, rest = after.partition("/")
        try:
            names = sorted(os.listdir(search_dir))
        except OSError as e:
            logger.debug("Cannot list %s for %r: %s", search_dir, specifier, e)
            return resolved

        suffixes = [name_suffix] + [name_suffix + ext for ext in self.extensions]
        for name in names:
            if not name.startswith(prefix):
                continue
            tail = name[len(prefix):]
            if not any(tail.endswith(s) and len(tail) > len(s) for s in suffixes):
                continue

            base = os.path.join(search_dir, name, rest) if sep else os.path.join(search_dir, name)
            candidates = [base] + [base + ext for ext in self.extensions]
            for candidate in candidates:
                path = _canonical(candidate)
                if _is_file(path) and path != from_file and path not in resolved:
                    resolved.append(path)

        return resolved

    def resolve_require_context(
        self, directory: str, from_file: Path, context: RequireContext
    ) -> list[Path]:
        """Resolve a ``require.context`` call to every matching file."""
        base = self._base_path(directory, from_file, exact_alias=True)
        if base is None or not _is_dir(base):
            return []

        flags = re.IGNORECASE if "i" in context.flags else 0
        try:
            pattern = re.compile(context.pattern, flags)
        except re.error as e:
            logger.debug("Unsupported require.context pattern %r: %s", context.pattern, e)
            return []

        matches: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(base):
            dirnames.sort()
            if not context.recursive:
                dirnames.clear()
            for filename in sorted(filenames):
                path = _canonical(os.path.join(dirpath, filename))
                request = "./" + path.relative_to(base).as_posix()
                if path != from_file and pattern.search(request):
                    matches.append(path)

        return matches
