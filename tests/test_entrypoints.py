"""Tests for entry classification and project settings."""

import json
from pathlib import Path

import pytest

from vueprune.detection.entrypoints import (
    classify_entry,
    is_entry_file,
    resolve_custom_entries,
)
from vueprune.detection.project import detect_project_type, load_project_config
from vueprune.errors import ConfigError
from vueprune.models.graph import EntryReason, SourceFile


ROOT = Path("/project")


def source(rel: str) -> SourceFile:
    return SourceFile(
        absolute_path=ROOT / rel,
        relative_path=rel,
        extension=Path(rel).suffix,
    )


class TestClassifyEntry:
    """Tests for the entry file rules."""

    @pytest.mark.parametrize(
        "rel",
        ["src/main.js", "src/main.ts", "src/App.vue", "index.js", "vite.config.ts"],
    )
    def test_conventional_names(self, rel: str):
        assert classify_entry(source(rel)) == EntryReason.CONVENTIONAL_NAME

    @pytest.mark.parametrize(
        "rel",
        [
            "src/router/index.js",
            "src/store/index.ts",
            "src/plugins/element.js",
            "src/utils/request.js",
            "src/utils/auth.ts",
            "public/config.js",
            "tests/unit/Button.spec.js",
            "test/api.test.ts",
        ],
    )
    def test_path_patterns(self, rel: str):
        assert is_entry_file(source(rel))

    @pytest.mark.parametrize(
        "rel",
        ["babel.config.js", "postcss.config.js", "jest.config.ts", ".env.production"],
    )
    def test_config_files(self, rel: str):
        assert classify_entry(source(rel)) == EntryReason.CONFIG_FILE

    def test_lint_config_is_not_entry(self):
        assert classify_entry(source(".eslintrc.js")) is None

    def test_nested_config_file_is_not_entry(self):
        assert classify_entry(source("src/lib/babel.helpers.js")) is None

    def test_ordinary_component_is_not_entry(self):
        assert classify_entry(source("src/components/Button.vue")) is None

    def test_custom_entry_takes_precedence(self):
        file = source("src/components/Widget.vue")

        assert classify_entry(file, {ROOT / "src/components/Widget.vue"}) == EntryReason.CUSTOM


class TestResolveCustomEntries:
    """Tests for user-declared entry files."""

    def test_resolves_relative_to_root(self, tmp_path: Path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "bootstrap.js").write_text("")

        entries = resolve_custom_entries(tmp_path, ["src/bootstrap.js", " src/bootstrap.js "])

        assert entries == [tmp_path / "src" / "bootstrap.js"]

    def test_missing_entry_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            resolve_custom_entries(tmp_path, ["src/missing.js"])

    def test_blank_entries_are_skipped(self, tmp_path: Path):
        assert resolve_custom_entries(tmp_path, ["", "  "]) == []


class TestProjectConfig:
    """Tests for project type and alias detection."""

    def test_vite_project(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(
            json.dumps({"devDependencies": {"vite": "^5.0.0"}})
        )

        assert detect_project_type(tmp_path) == "Vite"

    def test_vue_cli_project(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(
            json.dumps({"devDependencies": {"@vue/cli-service": "^5.0.0"}})
        )

        assert detect_project_type(tmp_path) == "Vue CLI"

    def test_generic_project(self, tmp_path: Path):
        (tmp_path / "package.json").write_text(json.dumps({"dependencies": {"vue": "^3"}}))

        assert detect_project_type(tmp_path) == "Generic Vue/JS"

    def test_missing_or_invalid_package_json(self, tmp_path: Path):
        assert detect_project_type(tmp_path) == "Generic Vue/JS"

        (tmp_path / "package.json").write_text("{not json")
        assert detect_project_type(tmp_path) == "Generic Vue/JS"

    def test_default_alias(self, tmp_path: Path):
        config = load_project_config(tmp_path)

        assert config.alias_map == {"@": tmp_path / "src"}
        assert config.extensions[0] == ".vue"

    def test_user_aliases_and_extensions(self, tmp_path: Path):
        config = load_project_config(
            tmp_path,
            {
                "resolve": {
                    "alias": {"~": "src", "@shared": "../shared"},
                    "extensions": ["ts", ".vue"],
                }
            },
        )

        assert config.alias_map["~"] == tmp_path / "src"
        assert config.alias_map["@shared"] == tmp_path.parent / "shared"
        assert config.alias_map["@"] == tmp_path / "src"
        assert config.extensions == [".ts", ".vue"]
