"""Output modules for CLI display and file writing."""

from vueprune.output.json_writer import load_results, write_results
from vueprune.output.tree import build_results_tree, build_summary_tree, display_tree

__all__ = [
    "build_results_tree",
    "build_summary_tree",
    "display_tree",
    "load_results",
    "write_results",
]
