"""Tests for the command line interface."""

import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from vueprune import __version__
from vueprune.cli import app

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "vue_app"

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    target = tmp_path / "vue_app"
    shutil.copytree(FIXTURES_PATH, target)
    return target


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestInit:
    """Tests for the init command."""

    def test_writes_default_config(self, project: Path):
        result = runner.invoke(app, ["init", str(project)])

        assert result.exit_code == 0
        config = json.loads((project / ".vueprune" / "config.json").read_text())
        assert config["resolve"]["alias"] == {"@": "src"}
        assert config["routes"]["enabled"] is True

    def test_refuses_to_overwrite(self, project: Path):
        runner.invoke(app, ["init", str(project)])

        result = runner.invoke(app, ["init", str(project)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(app, ["init", str(project), "--force"])
        assert result.exit_code == 0


class TestAnalyze:
    """Tests for the analyze command."""

    def test_writes_results(self, project: Path):
        result = runner.invoke(app, ["analyze", str(project)])

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".vueprune" / "results.json").read_text())
        assert data["metadata"]["project_type"] == "Vite"
        assert [f["relative_path"] for f in data["dead_files"]] == [
            "src/components/LegacyBanner.vue"
        ]
        assert [e["name"] for e in data["dead_exports"]] == ["formatDate"]
        assert [r["path"] for r in data["routes"]["unused"]] == ["/legacy-promo"]
        assert data["summary"]["total_files"] == 12
        assert "Dead Code Summary" in result.output

    def test_custom_output_path(self, project: Path, tmp_path: Path):
        output = tmp_path / "out" / "report.json"

        result = runner.invoke(app, ["analyze", str(project), "--output", str(output)])

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert not (project / ".vueprune" / "results.json").exists()

    def test_no_routes(self, project: Path):
        result = runner.invoke(app, ["analyze", str(project), "--no-routes"])

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".vueprune" / "results.json").read_text())
        assert data["routes"] is None

    def test_routes_disabled_in_config(self, project: Path):
        (project / ".vueprune").mkdir()
        (project / ".vueprune" / "config.json").write_text(
            json.dumps({"routes": {"enabled": False}})
        )

        result = runner.invoke(app, ["analyze", str(project)])

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".vueprune" / "results.json").read_text())
        assert data["routes"] is None

    def test_entry_option(self, project: Path):
        result = runner.invoke(
            app,
            [
                "analyze",
                str(project),
                "--entry",
                "src/components/LegacyBanner.vue,src/router/index.js",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads((project / ".vueprune" / "results.json").read_text())
        assert data["dead_files"] == []
        assert data["routes"]["unused"] == []

    def test_missing_entry_fails(self, project: Path):
        result = runner.invoke(app, ["analyze", str(project), "-e", "src/missing.js"])

        assert result.exit_code == 1
        assert "Custom entry file not found" in result.output
        assert not (project / ".vueprune" / "results.json").exists()

    def test_missing_project_fails(self, tmp_path: Path):
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope")])

        assert result.exit_code == 1
        assert "Project directory not found" in result.output

    def test_invalid_config_fails(self, project: Path):
        (project / ".vueprune").mkdir()
        (project / ".vueprune" / "config.json").write_text("{broken")

        result = runner.invoke(app, ["analyze", str(project)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_verbose_tree(self, project: Path):
        result = runner.invoke(app, ["analyze", str(project), "--verbose"])

        assert result.exit_code == 0, result.output
        assert "LegacyBanner.vue" in result.output
        assert "formatDate" in result.output

    def test_debug(self, project: Path):
        result = runner.invoke(app, ["analyze", str(project), "--debug"])

        assert result.exit_code == 0, result.output
        assert "Graph nodes" in result.output
        assert "Extensions" in result.output

    def test_clean_project(self, tmp_path: Path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "main.js").write_text("import { a } from './a'\na()\n")
        (tmp_path / "src" / "a.js").write_text("export const a = () => {}\n")

        result = runner.invoke(app, ["analyze", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "No dead code found" in result.output


class TestShow:
    """Tests for the show command."""

    def test_show_summary(self, project: Path):
        runner.invoke(app, ["analyze", str(project)])

        result = runner.invoke(app, ["show", str(project / ".vueprune" / "results.json")])

        assert result.exit_code == 0, result.output
        assert "unused files (1 items)" in result.output

    def test_show_verbose(self, project: Path):
        runner.invoke(app, ["analyze", str(project)])

        result = runner.invoke(
            app, ["show", str(project / ".vueprune" / "results.json"), "--verbose"]
        )

        assert result.exit_code == 0, result.output
        assert "vue_app" in result.output
        assert "LegacyBanner.vue" in result.output

    def test_missing_results(self, tmp_path: Path):
        result = runner.invoke(app, ["show", str(tmp_path / "results.json")])

        assert result.exit_code == 1
        assert "Results file not found" in result.output
