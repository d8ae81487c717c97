"""Centralized path management for vueprune output files."""

from pathlib import Path

# Directory name for vueprune outputs
VUEPRUNE_DIR = ".vueprune"

# File names within the .vueprune directory
CONFIG_FILE = "config.json"
RESULTS_FILE = "results.json"


def get_vueprune_dir(project_path: Path) -> Path:
    """Get the .vueprune directory path for a project."""
    return project_path / VUEPRUNE_DIR


def ensure_vueprune_dir(project_path: Path) -> Path:
    """Ensure .vueprune directory exists and return its path."""
    vueprune_dir = get_vueprune_dir(project_path)
    vueprune_dir.mkdir(parents=True, exist_ok=True)
    return vueprune_dir


def get_config_path(project_path: Path) -> Path:
    """Get the config.json path for a project."""
    return get_vueprune_dir(project_path) / CONFIG_FILE


def get_results_path(project_path: Path) -> Path:
    """Get the results.json path for a project."""
    return get_vueprune_dir(project_path) / RESULTS_FILE
