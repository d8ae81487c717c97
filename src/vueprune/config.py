"""Configuration loading and saving for vueprune."""

import json
from pathlib import Path

from vueprune.errors import ConfigError

DEFAULT_INCLUDES = [
    "**/*.vue",
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
]

DEFAULT_EXTENSIONS = [".vue", ".js", ".jsx", ".ts", ".tsx", ".json"]


def load_config(config_path: Path) -> dict:
    """Load a .vueprune/config.json configuration file."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")
    return data


def save_config(config: dict, config_path: Path) -> None:
    """Save configuration to .vueprune/config.json."""
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def build_default_config() -> dict:
    """Build the configuration written by ``vueprune init``."""
    return {
        "version": "1.0",
        "analysis": {
            "include": list(DEFAULT_INCLUDES),
            "exclude": [],
        },
        "resolve": {
            "alias": {"@": "src"},
            "extensions": list(DEFAULT_EXTENSIONS),
        },
        "entries": [],
        "routes": {"enabled": True},
    }


def get_analysis_includes(config: dict) -> list[str]:
    """Get include patterns from config."""
    return config.get("analysis", {}).get("include", list(DEFAULT_INCLUDES))


def get_analysis_excludes(config: dict) -> list[str]:
    """Get extra exclude patterns from config (built-in excludes always apply)."""
    return config.get("analysis", {}).get("exclude", [])


def get_aliases(config: dict) -> dict[str, str]:
    """Get alias prefix -> directory mapping (directories relative to the project root)."""
    return config.get("resolve", {}).get("alias", {})


def get_extensions(config: dict) -> list[str]:
    """Get the ordered extension lookup list."""
    return config.get("resolve", {}).get("extensions", list(DEFAULT_EXTENSIONS))


def get_custom_entries(config: dict) -> list[str]:
    """Get user-declared entry files."""
    return config.get("entries", [])


def routes_enabled(config: dict) -> bool:
    """Check if route usage analysis should run."""
    return config.get("routes", {}).get("enabled", True)
