"""Centralized file exclusion logic for vueprune.

Handles default patterns, .gitignore patterns and user excludes from
.vueprune/config.json, using the pathspec library for gitignore-style
matching.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


@dataclass
class ExclusionConfig:
    """Configuration for file exclusion."""

    default_patterns: list[str] = field(default_factory=list)
    gitignore_patterns: list[str] = field(default_factory=list)
    user_patterns: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)  # For --debug output


# Always excluded unless --include-ignored is given
DEFAULT_EXCLUDES = [
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    ".vueprune",
    ".nuxt",
    ".output",
    ".cache",
    ".vite",
    "*.min.js",
    "*.d.ts",
]


class FileExcluder:
    """Handles file exclusion with gitignore-style pattern matching."""

    def __init__(
        self,
        project_root: Path,
        include_ignored: bool = False,
        extra_excludes: list[str] | None = None,
    ) -> None:
        """Initialize the file excluder.

        Args:
            project_root: Root directory of the project.
            include_ignored: If True, don't exclude any files (bypass all patterns).
            extra_excludes: User patterns from the analysis config.
        """
        self.project_root = project_root
        self.include_ignored = include_ignored
        self._config = ExclusionConfig()
        self._spec: pathspec.PathSpec | None = None

        if not include_ignored:
            self._load_patterns(extra_excludes or [])
            self._build_spec()

    def _load_patterns(self, extra_excludes: list[str]) -> None:
        self._config.default_patterns = list(DEFAULT_EXCLUDES)
        self._config.sources.append("defaults")

        self._load_gitignore()

        if extra_excludes:
            self._config.user_patterns = list(extra_excludes)
            self._config.sources.append("config")

    def _load_gitignore(self) -> None:
        gitignore_path = self.project_root / ".gitignore"
        if not gitignore_path.exists():
            return
        try:
            content = gitignore_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Ignoring unreadable %s: %s", gitignore_path, e)
            return

        self._config.gitignore_patterns = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.startswith("#")
        ]
        self._config.sources.append(str(gitignore_path))

    def _build_spec(self) -> None:
        self._spec = pathspec.PathSpec.from_lines("gitignore", self.patterns)

    def should_exclude(self, file_path: Path) -> bool:
        """Check if a file should be excluded.

        Args:
            file_path: Path to the file to check.

        Returns:
            True if the file should be excluded, False otherwise.
        """
        if self.include_ignored or self._spec is None:
            return False

        try:
            rel_path = file_path.relative_to(self.project_root)
        except ValueError:
            return False

        if self._spec.match_file(rel_path.as_posix()):
            return True

        # "node_modules" must also match "node_modules/vue/index.js"
        for part in rel_path.parts[:-1]:
            if self._spec.match_file(part):
                return True

        return False

    def should_exclude_dir(self, dir_path: Path) -> bool:
        """Check if a whole directory can be skipped while walking."""
        if self.include_ignored or self._spec is None:
            return False
        try:
            rel = dir_path.relative_to(self.project_root).as_posix()
        except ValueError:
            return False
        return self._spec.match_file(rel) or self._spec.match_file(rel + "/")

    @property
    def sources(self) -> list[str]:
        """Return list of config sources used."""
        return self._config.sources

    @property
    def patterns(self) -> list[str]:
        """Return all loaded patterns (for debugging)."""
        return (
            self._config.default_patterns
            + self._config.gitignore_patterns
            + self._config.user_patterns
        )
