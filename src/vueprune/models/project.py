"""Project-level resolution settings consumed by the analyzer."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ProjectConfig:
    """Alias map and extension list used to resolve import specifiers."""

    root: Path
    alias_map: dict[str, Path] = field(default_factory=dict)  # prefix -> absolute dir
    extensions: list[str] = field(default_factory=list)
    project_type: str = "Generic Vue/JS"

    @property
    def alias_prefixes(self) -> tuple[str, ...]:
        return tuple(self.alias_map)
