"""Data models for analysis results."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from vueprune.models.routes import RouteAnalysis


@dataclass
class AnalysisMetadata:
    """Metadata about the analysis run."""

    project: str
    analyzed_at: datetime
    vueprune_version: str
    files_analyzed: int
    entry_files: int
    analysis_duration_ms: int
    project_type: str = "Generic Vue/JS"

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "analyzed_at": self.analyzed_at.isoformat(),
            "vueprune_version": self.vueprune_version,
            "files_analyzed": self.files_analyzed,
            "entry_files": self.entry_files,
            "analysis_duration_ms": self.analysis_duration_ms,
            "project_type": self.project_type,
        }


@dataclass
class DeadFile:
    """A graph node unreachable from every entry."""

    path: Path
    relative_path: str

    def to_dict(self) -> dict:
        return {"path": str(self.path), "relative_path": self.relative_path}


@dataclass
class DeadExport:
    """A declared export never required at per-symbol granularity."""

    file: str  # relative path
    name: str
    kind: str
    path: Path | None = None

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "name": self.name,
            "kind": self.kind,
            "path": str(self.path) if self.path else None,
        }


@dataclass
class DeadCodeReport:
    """Output of the reachability engine."""

    dead_files: list[DeadFile] = field(default_factory=list)
    dead_exports: list[DeadExport] = field(default_factory=list)
    used_file_count: int = 0
    total_file_count: int = 0

    # Diagnostics, not serialized
    used_files: set[Path] = field(default_factory=set, repr=False)
    used_exports: dict[Path, set[str]] = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return {
            "dead_files": [f.to_dict() for f in self.dead_files],
            "dead_exports": [e.to_dict() for e in self.dead_exports],
            "used_file_count": self.used_file_count,
            "total_file_count": self.total_file_count,
        }


@dataclass
class AnalysisSummary:
    """Summary of analysis results."""

    dead_files: int = 0
    dead_exports: int = 0
    used_files: int = 0
    total_files: int = 0
    total_routes: int = 0
    unused_routes: int = 0

    def to_dict(self) -> dict:
        return {
            "dead_files": self.dead_files,
            "dead_exports": self.dead_exports,
            "used_files": self.used_files,
            "total_files": self.total_files,
            "total_routes": self.total_routes,
            "unused_routes": self.unused_routes,
        }


@dataclass
class AnalysisResults:
    """Complete analysis results."""

    version: str = "1.0"
    metadata: AnalysisMetadata | None = None
    summary: AnalysisSummary | None = None
    report: DeadCodeReport = field(default_factory=DeadCodeReport)
    routes: RouteAnalysis | None = None
    dependency_graph: dict = field(default_factory=dict)

    @property
    def is_clean(self) -> bool:
        unused = self.routes.unused_routes if self.routes else []
        return not (self.report.dead_files or self.report.dead_exports or unused)

    def to_dict(self) -> dict:
        result: dict = {"version": self.version}

        if self.metadata:
            result["metadata"] = self.metadata.to_dict()

        if self.summary:
            result["summary"] = self.summary.to_dict()

        result.update(self.report.to_dict())
        result["routes"] = self.routes.to_dict() if self.routes else None
        result["dependency_graph"] = self.dependency_graph

        return result
