"""Data models for vueprune."""

from vueprune.models.graph import (
    DependencyGraph,
    EntryReason,
    ExportKind,
    ExportSymbol,
    FileNode,
    ImportedSymbol,
    ImportEdge,
    ImportKind,
    RequireContext,
    SourceFile,
    SymbolKind,
)
from vueprune.models.project import ProjectConfig
from vueprune.models.results import (
    AnalysisMetadata,
    AnalysisResults,
    AnalysisSummary,
    DeadCodeReport,
    DeadExport,
    DeadFile,
)
from vueprune.models.routes import RouteAnalysis, RouteDefinition, RouteUsage, UsageKind

__all__ = [
    # Graph models
    "DependencyGraph",
    "EntryReason",
    "ExportKind",
    "ExportSymbol",
    "FileNode",
    "ImportedSymbol",
    "ImportEdge",
    "ImportKind",
    "RequireContext",
    "SourceFile",
    "SymbolKind",
    # Project models
    "ProjectConfig",
    # Results models
    "AnalysisMetadata",
    "AnalysisResults",
    "AnalysisSummary",
    "DeadCodeReport",
    "DeadExport",
    "DeadFile",
    # Route models
    "RouteAnalysis",
    "RouteDefinition",
    "RouteUsage",
    "UsageKind",
]
