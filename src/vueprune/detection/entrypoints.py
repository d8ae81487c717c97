"""Entry file classification: which files are reachability roots."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Collection, Iterable

from vueprune.errors import ConfigError
from vueprune.models.graph import EntryReason, SourceFile

# Bare filenames that bootstrap an application or its build
ENTRY_FILENAMES = {
    "main.js",
    "main.ts",
    "index.js",
    "index.ts",
    "App.vue",
    "app.vue",
    "vite.config.js",
    "vite.config.ts",
    "vue.config.js",
}

# Matched anywhere in the "/"-separated relative path
ENTRY_PATH_PATTERNS = [
    re.compile(r"src/main\."),
    re.compile(r"src/index\."),
    re.compile(r"src/App\."),
    re.compile(r"src/app\."),
    re.compile(r"router/index\."),
    re.compile(r"store/index\."),
    re.compile(r"plugins/"),
    re.compile(r"utils/request\."),
    re.compile(r"utils/auth\."),
    re.compile(r"assets/.*\.(css|scss|less|stylus)$"),
    re.compile(r"public/"),
    re.compile(r"tests?/.*\.(test|spec)\."),
]

# Anchored at the project root
CONFIG_FILE_PATTERNS = [
    re.compile(r"^[^/]*\.config\.(js|ts|mjs)$"),
    re.compile(r"^(babel|webpack|rollup|postcss)\."),
    re.compile(r"^\.env"),
    re.compile(r"^tsconfig\."),
    re.compile(r"^jest\."),
    re.compile(r"^cypress\."),
]


def _normalize(relative_path: str) -> str:
    return relative_path.replace("\\", "/")


def is_special_configuration_file(relative_path: str) -> bool:
    """Check for root-level build, environment and type-checker config files."""
    rel = _normalize(relative_path)
    return any(pattern.search(rel) for pattern in CONFIG_FILE_PATTERNS)


def classify_entry(
    file: SourceFile,
    custom_entries: Collection[Path] = (),
) -> EntryReason | None:
    """Decide whether a file is a reachability root.

    Args:
        file: The scanned file.
        custom_entries: Canonical absolute paths forced into the entry set.

    Returns:
        The first matching rule, or None if the file is not an entry.
    """
    if file.absolute_path in custom_entries:
        return EntryReason.CUSTOM

    if file.name in ENTRY_FILENAMES:
        return EntryReason.CONVENTIONAL_NAME

    rel = _normalize(file.relative_path)
    if any(pattern.search(rel) for pattern in ENTRY_PATH_PATTERNS):
        return EntryReason.PATH_PATTERN

    if is_special_configuration_file(rel):
        return EntryReason.CONFIG_FILE

    return None


def is_entry_file(file: SourceFile, custom_entries: Collection[Path] = ()) -> bool:
    return classify_entry(file, custom_entries) is not None


def resolve_custom_entries(project_root: Path, entries: Iterable[str]) -> list[Path]:
    """Resolve user-declared entry files to canonical absolute paths.

    Raises:
        ConfigError: If an entry does not exist.
    """
    resolved: list[Path] = []
    for entry in entries:
        entry = entry.strip()
        if not entry:
            continue
        path = Path(entry)
        if not path.is_absolute():
            path = project_root / path
        path = Path(os.path.abspath(os.path.normpath(path)))
        if not path.is_file():
            raise ConfigError(f"Custom entry file not found: {entry}")
        if path not in resolved:
            resolved.append(path)
    return resolved
