"""Data models for the module dependency graph."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator


class ImportKind(Enum):
    """Syntactic form an import edge was extracted from."""

    STATIC = "static"
    COMMONJS = "commonjs"
    DYNAMIC = "dynamic"
    DYNAMIC_TEMPLATE = "dynamic-template"
    RE_EXPORT = "re-export"
    RE_EXPORT_ALL = "re-export-all"
    RE_EXPORT_NAMESPACE = "re-export-namespace"
    LAZY_COMPONENT = "lazy-component"
    CHUNKED_REQUIRE = "chunked-require"
    STRING_REFERENCE = "string-reference"
    REQUIRE_CONTEXT = "require-context"


class SymbolKind(Enum):
    """How a single imported name is bound."""

    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"
    SIDE_EFFECT = "sideEffect"
    REQUIRE = "require"
    DYNAMIC = "dynamic"


class ExportKind(Enum):
    """Types of exported symbols."""

    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


class EntryReason(Enum):
    """Why a file was classified as a reachability root."""

    CUSTOM = "custom"
    CONVENTIONAL_NAME = "conventional_name"
    PATH_PATTERN = "path_pattern"
    CONFIG_FILE = "config_file"


@dataclass(frozen=True)
class SourceFile:
    """One scanned file and its captured text."""

    absolute_path: Path
    relative_path: str  # always "/"-separated
    extension: str
    content: str = field(default="", repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.absolute_path.name


@dataclass(frozen=True)
class ImportedSymbol:
    """A name pulled in by an import edge."""

    name: str
    kind: SymbolKind
    alias: str | None = None


@dataclass(frozen=True)
class RequireContext:
    """Arguments of a ``require.context(dir, recursive, /regex/)`` call."""

    recursive: bool = True
    pattern: str = r"^\.\/.*$"
    flags: str = ""


@dataclass
class ImportEdge:
    """An unresolved import declaration."""

    from_file: Path
    raw_specifier: str
    kind: ImportKind
    imported_symbols: list[ImportedSymbol] = field(default_factory=list)
    context: RequireContext | None = None

    def to_dict(self) -> dict:
        result = {
            "from": self.raw_specifier,
            "kind": self.kind.value,
            "symbols": [
                {"name": s.name, "kind": s.kind.value} for s in self.imported_symbols
            ],
        }
        if self.context:
            result["context"] = {
                "recursive": self.context.recursive,
                "pattern": self.context.pattern,
            }
        return result


@dataclass(frozen=True)
class ExportSymbol:
    """A name declared as exported by a file."""

    file: Path
    name: str
    kind: ExportKind
    re_export_from: str | None = None

    def to_dict(self) -> dict:
        result = {"name": self.name, "kind": self.kind.value}
        if self.re_export_from:
            result["re_export_from"] = self.re_export_from
        return result


@dataclass
class FileNode:
    """A node in the dependency graph."""

    file: SourceFile
    imports: list[ImportEdge] = field(default_factory=list)
    exports: list[ExportSymbol] = field(default_factory=list)
    is_entry: bool = False
    entry_reason: EntryReason | None = None

    @property
    def path(self) -> Path:
        return self.file.absolute_path


@dataclass
class DependencyGraph:
    """Canonical absolute path -> FileNode. Built fresh for every run."""

    nodes: dict[Path, FileNode] = field(default_factory=dict)

    def add(self, node: FileNode) -> bool:
        """Add a node; returns False if the path is already present."""
        if node.path in self.nodes:
            return False
        self.nodes[node.path] = node
        return True

    def get(self, path: Path) -> FileNode | None:
        return self.nodes.get(path)

    def entries(self) -> list[FileNode]:
        """All entry-flagged nodes, in insertion order."""
        return [node for node in self.nodes.values() if node.is_entry]

    def __contains__(self, path: object) -> bool:
        return path in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[FileNode]:
        return iter(self.nodes.values())

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            node.file.relative_path: {
                "is_entry": node.is_entry,
                "entry_reason": node.entry_reason.value if node.entry_reason else None,
                "imports": [edge.to_dict() for edge in node.imports],
                "exports": [exp.to_dict() for exp in node.exports],
            }
            for node in self.nodes.values()
        }
