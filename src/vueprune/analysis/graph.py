"""Dependency graph construction from a scanned corpus."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Collection, Iterable

from vueprune.analysis.extractor import extract_file
from vueprune.detection.entrypoints import classify_entry
from vueprune.models.graph import DependencyGraph, FileNode, SourceFile

logger = logging.getLogger(__name__)


def build_graph(
    corpus: Iterable[SourceFile],
    custom_entries: Collection[Path] = (),
    alias_prefixes: Iterable[str] = (),
) -> DependencyGraph:
    """Build the dependency graph for every file in the corpus.

    Each file contributes one node holding its unresolved import edges and
    its exports. Resolution happens later, during reachability, so edges
    here still carry raw specifiers.

    Args:
        corpus: Scanned files with captured text.
        custom_entries: Canonical absolute paths forced into the entry set.
        alias_prefixes: Alias prefixes so aliased specifiers are kept as edges.

    Returns:
        A fresh DependencyGraph. A path seen twice keeps its first node.
    """
    graph = DependencyGraph()
    prefixes = tuple(alias_prefixes)
    custom = set(custom_entries)

    for source in corpus:
        if source.absolute_path in graph:
            logger.debug("Skipping duplicate file %s", source.relative_path)
            continue

        extraction = extract_file(source, prefixes)
        reason = classify_entry(source, custom)
        graph.add(
            FileNode(
                file=source,
                imports=extraction.imports,
                exports=extraction.exports,
                is_entry=reason is not None,
                entry_reason=reason,
            )
        )

    logger.debug(
        "Built graph with %d nodes (%d entries)", len(graph), len(graph.entries())
    )
    return graph
