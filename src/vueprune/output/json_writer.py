"""JSON output writers for results."""

import json
from pathlib import Path

from vueprune.errors import VuePruneError
from vueprune.models.results import AnalysisResults


def write_results(results: AnalysisResults, output_path: Path) -> None:
    """Write the .vueprune/results.json file."""
    data = results.to_dict()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def load_results(results_path: Path) -> dict:
    """Load a .vueprune/results.json file."""
    try:
        with open(results_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise VuePruneError(f"Invalid results file {results_path}: {e}") from e
