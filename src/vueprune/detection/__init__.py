"""Detection modules for entry files and project settings."""

from vueprune.detection.entrypoints import (
    classify_entry,
    is_entry_file,
    resolve_custom_entries,
)
from vueprune.detection.project import detect_project_type, load_project_config

__all__ = [
    "classify_entry",
    "detect_project_type",
    "is_entry_file",
    "load_project_config",
    "resolve_custom_entries",
]
