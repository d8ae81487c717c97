"""Reachability analysis: which files and exports are live from the entries."""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Optional

from vueprune.analysis.extractor import WILDCARD
from vueprune.analysis.resolver import ImportResolver
from vueprune.models.graph import DependencyGraph, ExportKind, ImportEdge, SymbolKind
from vueprune.models.results import DeadCodeReport, DeadExport, DeadFile

logger = logging.getLogger(__name__)

VisitKey = tuple[Path, tuple[str, ...]]


def needed_exports(edge: ImportEdge) -> list[str]:
    """Export names an import edge requires from its target.

    ``default`` symbols require ``'default'``; namespace and ``*`` symbols
    require the whole file (``'*'``); anything else requires its own name.
    """
    needed: list[str] = []
    for symbol in edge.imported_symbols:
        if symbol.kind is SymbolKind.DEFAULT:
            name = "default"
        elif symbol.kind is SymbolKind.NAMESPACE or symbol.name == WILDCARD:
            name = WILDCARD
        else:
            name = symbol.name
        if name not in needed:
            needed.append(name)
    return needed or [WILDCARD]


def _visit_key(path: Path, required: Optional[list[str]]) -> VisitKey:
    if required is None:
        return (path, (WILDCARD,))
    return (path, tuple(sorted(set(required))))


def find_dead_code(graph: DependencyGraph, resolver: ImportResolver) -> DeadCodeReport:
    """Walk the graph breadth-first from every entry and report what was never reached.

    The visited key is (file, sorted required exports), so a file reached
    again with a new export requirement is expanded again while cycles
    settle once every requirement set has been seen.
    """
    used_files: set[Path] = set()
    used_exports: dict[Path, set[str]] = {}
    visited: set[VisitKey] = set()

    queue: deque[tuple[Path, Optional[list[str]]]] = deque(
        (node.path, None) for node in graph.entries()
    )

    while queue:
        path, required = queue.popleft()
        key = _visit_key(path, required)
        if key in visited:
            continue
        visited.add(key)

        used_files.add(path)
        used_exports.setdefault(path, set()).update(
            required if required is not None else [WILDCARD]
        )

        node = graph.get(path)
        if node is None:
            continue

        for edge in node.imports:
            needed = needed_exports(edge)
            for target in resolver.resolve_edge(edge, path):
                if target not in graph:
                    logger.debug(
                        "Resolved %r to %s outside the corpus", edge.raw_specifier, target
                    )
                    continue
                if _visit_key(target, needed) not in visited:
                    queue.append((target, needed))

    return _build_report(graph, used_files, used_exports)


def _build_report(
    graph: DependencyGraph,
    used_files: set[Path],
    used_exports: dict[Path, set[str]],
) -> DeadCodeReport:
    dead_files: list[DeadFile] = []
    dead_exports: list[DeadExport] = []

    for node in graph:
        if node.is_entry:
            continue

        if node.path not in used_files:
            dead_files.append(DeadFile(path=node.path, relative_path=node.file.relative_path))
            continue

        used = used_exports.get(node.path, set())
        if WILDCARD in used:
            continue

        seen: set[tuple[str, str]] = set()
        for export in node.exports:
            if export.name == WILDCARD:
                continue
            lookup = "default" if export.kind is ExportKind.DEFAULT else export.name
            if lookup in used:
                continue
            key = (export.name, export.kind.value)
            if key in seen:
                continue
            seen.add(key)
            dead_exports.append(
                DeadExport(
                    file=node.file.relative_path,
                    name=export.name,
                    kind=export.kind.value,
                    path=node.path,
                )
            )

    dead_files.sort(key=lambda f: f.relative_path)
    # Stable sort keeps declaration order within each file
    dead_exports.sort(key=lambda e: e.file)

    return DeadCodeReport(
        dead_files=dead_files,
        dead_exports=dead_exports,
        used_file_count=len(used_files),
        total_file_count=len(graph),
        used_files=used_files,
        used_exports=used_exports,
    )
