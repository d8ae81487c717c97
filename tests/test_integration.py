"""Integration tests for the full analysis pipeline."""

import shutil
from pathlib import Path

import pytest

from vueprune.analysis.graph import build_graph
from vueprune.analysis.reachability import find_dead_code
from vueprune.analysis.resolver import ImportResolver
from vueprune.analysis.routes import analyze_routes
from vueprune.config import DEFAULT_INCLUDES
from vueprune.detection.entrypoints import resolve_custom_entries
from vueprune.detection.project import load_project_config
from vueprune.models.graph import EntryReason
from vueprune.scanner import find_source_files, read_corpus


# Path to test fixtures
FIXTURES_PATH = Path(__file__).parent / "fixtures" / "vue_app"


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A private copy of the fixture app."""
    target = tmp_path / "vue_app"
    shutil.copytree(FIXTURES_PATH, target)
    return target


def run_pipeline(root: Path, entries: list[str] | None = None):
    config = load_project_config(root)
    custom = resolve_custom_entries(root, entries or [])
    files = find_source_files(root, list(DEFAULT_INCLUDES), [])
    corpus = read_corpus(files, root)
    graph = build_graph(corpus, custom, config.alias_prefixes)
    report = find_dead_code(graph, ImportResolver(config))
    routes = analyze_routes(corpus, custom)
    return config, graph, report, routes


class TestProjectDetection:
    """Tests for project settings detection on the fixture app."""

    def test_detects_vite(self, project: Path):
        """Should detect Vite from package.json."""
        config, _, _, _ = run_pipeline(project)

        assert config.project_type == "Vite"

    def test_entries(self, project: Path):
        """Bootstrap files, the router index and the build config are entries."""
        _, graph, _, _ = run_pipeline(project)

        entries = {node.file.relative_path: node.entry_reason for node in graph.entries()}
        assert entries == {
            "src/App.vue": EntryReason.CONVENTIONAL_NAME,
            "src/main.js": EntryReason.CONVENTIONAL_NAME,
            "src/router/index.js": EntryReason.CONVENTIONAL_NAME,
            "vite.config.js": EntryReason.CONVENTIONAL_NAME,
        }


class TestDeadCode:
    """Tests for dead file and dead export detection."""

    def test_orphan_component(self, project: Path):
        """The banner nobody imports is the only dead file."""
        _, _, report, _ = run_pipeline(project)

        assert [f.relative_path for f in report.dead_files] == [
            "src/components/LegacyBanner.vue"
        ]
        assert report.used_file_count == 11
        assert report.total_file_count == 12

    def test_unused_helper_export(self, project: Path):
        """formatDate is exported but never imported."""
        _, _, report, _ = run_pipeline(project)

        assert [(e.file, e.name, e.kind) for e in report.dead_exports] == [
            ("src/utils/format.js", "formatDate", "named"),
        ]

    def test_lazy_route_components_are_live(self, project: Path):
        """Components loaded by route factories are reachable."""
        _, _, report, _ = run_pipeline(project)

        dead = {f.relative_path for f in report.dead_files}
        assert "src/views/PromoView.vue" not in dead
        assert "src/views/ProductDetail.vue" not in dead

    def test_custom_entry_revives_file(self, project: Path):
        """Declaring the orphan as an entry removes it from the report."""
        _, _, report, _ = run_pipeline(project, ["src/components/LegacyBanner.vue"])

        assert report.dead_files == []

    def test_node_modules_are_not_scanned(self, project: Path):
        """Vendored packages never enter the graph."""
        vendored = project / "node_modules" / "vue" / "index.js"
        vendored.parent.mkdir(parents=True)
        vendored.write_text("export const createApp = () => {}\n")

        _, graph, report, _ = run_pipeline(project)

        assert vendored not in graph
        assert report.total_file_count == 12


class TestRoutes:
    """Tests for unused route detection."""

    def test_route_definitions(self, project: Path):
        """Child routes are prefixed with their parent's path."""
        _, _, _, routes = run_pipeline(project)

        assert [r.path for r in routes.route_definitions] == [
            "/",
            "/products",
            "/products/:id",
            "/legacy-promo",
        ]

    def test_unused_route(self, project: Path):
        """Only the promo route is never navigated to."""
        _, _, _, routes = run_pipeline(project)

        assert [r.path for r in routes.unused_routes] == ["/legacy-promo"]

    def test_dynamic_navigation_recorded(self, project: Path):
        """The template literal push becomes a dynamic-path usage."""
        _, _, _, routes = run_pipeline(project)

        dynamic = [u for u in routes.route_usages if u.kind.value == "dynamic-path"]
        assert [(u.reference, u.file) for u in dynamic] == [
            ("/products/:param1", "src/views/ProductsView.vue"),
        ]

    def test_router_as_custom_entry(self, project: Path):
        """A router file declared as an entry keeps all of its routes."""
        _, _, _, routes = run_pipeline(project, ["src/router/index.js"])

        assert routes.unused_routes == []
