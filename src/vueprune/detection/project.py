"""Project type detection and resolution settings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from vueprune.config import get_aliases, get_extensions
from vueprune.models.project import ProjectConfig

logger = logging.getLogger(__name__)

GENERIC_PROJECT = "Generic Vue/JS"

# package.json dependency -> project type label, checked in order
PROJECT_TYPE_PATTERNS = [
    ("vite", "Vite"),
    ("@vue/cli-service", "Vue CLI"),
]


def detect_project_type(project_path: Path) -> str:
    """Label the project from its package.json dependencies."""
    package_json = project_path / "package.json"
    if not package_json.exists():
        return GENERIC_PROJECT

    try:
        with open(package_json, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Cannot read %s: %s", package_json, e)
        return GENERIC_PROJECT

    if not isinstance(data, dict):
        return GENERIC_PROJECT

    deps: set[str] = set()
    for section in ("dependencies", "devDependencies"):
        value = data.get(section)
        if isinstance(value, dict):
            deps.update(value)

    for dep_name, project_type in PROJECT_TYPE_PATTERNS:
        if dep_name in deps:
            return project_type
    return GENERIC_PROJECT


def load_project_config(project_path: Path, config: dict | None = None) -> ProjectConfig:
    """Build the alias map and extension list for a project.

    The ``@`` alias defaults to ``<root>/src``. Aliases from the user's
    config are resolved relative to the project root and override the
    default.
    """
    config = config or {}
    root = Path(os.path.abspath(project_path))

    alias_map: dict[str, Path] = {"@": root / "src"}
    for prefix, directory in get_aliases(config).items():
        prefix = prefix.rstrip("/")
        if not prefix:
            continue
        alias_map[prefix] = Path(os.path.abspath(root / directory))

    extensions = [
        ext if ext.startswith(".") else f".{ext}" for ext in get_extensions(config)
    ]

    return ProjectConfig(
        root=root,
        alias_map=alias_map,
        extensions=extensions,
        project_type=detect_project_type(root),
    )
