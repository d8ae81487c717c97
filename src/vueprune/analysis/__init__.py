"""Analysis modules for dead file, dead export and unused route detection."""

from vueprune.analysis.extractor import ExtractionResult, extract, extract_file, is_external_specifier
from vueprune.analysis.graph import build_graph
from vueprune.analysis.reachability import find_dead_code, needed_exports
from vueprune.analysis.resolver import ImportResolver
from vueprune.analysis.routes import (
    analyze_routes,
    expand_optional,
    extract_route_definitions,
    extract_route_usages,
    find_unused_routes,
    is_router_file,
    matches_route,
)

__all__ = [
    "ExtractionResult",
    "ImportResolver",
    "analyze_routes",
    "build_graph",
    "expand_optional",
    "extract",
    "extract_file",
    "extract_route_definitions",
    "extract_route_usages",
    "find_dead_code",
    "find_unused_routes",
    "is_external_specifier",
    "is_router_file",
    "matches_route",
    "needed_exports",
]
