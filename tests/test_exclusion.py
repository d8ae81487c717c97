"""Tests for the exclusion and scanner modules."""

import warnings
from pathlib import Path

import pytest

from vueprune.config import DEFAULT_INCLUDES
from vueprune.errors import AnalysisError
from vueprune.exclusion import DEFAULT_EXCLUDES, FileExcluder
from vueprune.scanner import find_source_files, read_corpus, read_source_file


def touch(root: Path, *paths: str) -> None:
    for rel in paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


class TestDefaultExcludes:
    """Tests for default exclusion patterns."""

    def test_default_excludes_list(self) -> None:
        """Verify DEFAULT_EXCLUDES contains expected patterns."""
        assert "node_modules" in DEFAULT_EXCLUDES
        assert "dist" in DEFAULT_EXCLUDES
        assert ".git" in DEFAULT_EXCLUDES
        assert ".vueprune" in DEFAULT_EXCLUDES

    def test_excludes_node_modules(self, tmp_path: Path) -> None:
        """Should exclude anything under node_modules."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "node_modules" / "vue" / "index.js")

    def test_excludes_build_output(self, tmp_path: Path) -> None:
        """Should exclude dist and build directories."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "dist" / "assets" / "index.js")
        assert excluder.should_exclude(tmp_path / "build" / "app.js")

    def test_excludes_generated_files(self, tmp_path: Path) -> None:
        """Should exclude minified bundles and declaration files."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "public" / "lib.min.js")
        assert excluder.should_exclude(tmp_path / "src" / "shims-vue.d.ts")

    def test_does_not_exclude_source_files(self, tmp_path: Path) -> None:
        """Should not exclude normal source files."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "src" / "App.vue")
        assert not excluder.should_exclude(tmp_path / "main.js")

    def test_excluded_directory(self, tmp_path: Path) -> None:
        """should_exclude_dir should match directories for pruning."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude_dir(tmp_path / "node_modules")
        assert not excluder.should_exclude_dir(tmp_path / "src")


class TestGitignorePatterns:
    """Tests for .gitignore pattern parsing."""

    def test_loads_gitignore_patterns(self, tmp_path: Path) -> None:
        """Should load patterns from .gitignore."""
        (tmp_path / ".gitignore").write_text("*.local.js\ngenerated/\n# comment\n\n")

        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "src" / "env.local.js")
        assert excluder.should_exclude(tmp_path / "generated" / "api.ts")

    def test_gitignore_comments_ignored(self, tmp_path: Path) -> None:
        """Should ignore comments in .gitignore."""
        (tmp_path / ".gitignore").write_text("# *.vue\nlegacy/\n")

        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "src" / "App.vue")
        assert excluder.should_exclude(tmp_path / "legacy" / "old.js")

    def test_invalid_gitignore_encoding(self, tmp_path: Path) -> None:
        """Should skip a .gitignore that is not valid UTF-8."""
        (tmp_path / ".gitignore").write_bytes(b"\xff\xfe*.js\n")

        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "main.js")
        assert str(tmp_path / ".gitignore") not in excluder.sources

    def test_patterns_compile_without_deprecation_warnings(self, tmp_path: Path) -> None:
        """Building the matcher should not emit DeprecationWarning."""
        (tmp_path / ".gitignore").write_text("*.local.js\ngenerated/\n")

        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            excluder = FileExcluder(tmp_path, extra_excludes=["src/mocks"])

        assert excluder.should_exclude(tmp_path / "src" / "env.local.js")
        assert excluder.should_exclude(tmp_path / "src" / "mocks" / "api.js")
        assert not excluder.should_exclude(tmp_path / "src" / "App.vue")


class TestIncludeIgnoredFlag:
    """Tests for the include_ignored flag."""

    def test_include_ignored_bypasses_all_exclusions(self, tmp_path: Path) -> None:
        """When include_ignored=True, nothing should be excluded."""
        (tmp_path / ".gitignore").write_text("*.js\n")

        excluder = FileExcluder(tmp_path, include_ignored=True)

        assert not excluder.should_exclude(tmp_path / "main.js")
        assert not excluder.should_exclude(tmp_path / "node_modules" / "vue" / "index.js")
        assert not excluder.should_exclude_dir(tmp_path / "node_modules")


class TestExtraExcludes:
    """Tests for user exclude patterns."""

    def test_extra_excludes_merge_with_defaults(self, tmp_path: Path) -> None:
        """Extra excludes should apply alongside the defaults."""
        excluder = FileExcluder(tmp_path, extra_excludes=["src/mocks"])

        assert excluder.should_exclude(tmp_path / "src" / "mocks" / "api.js")
        assert excluder.should_exclude(tmp_path / "node_modules" / "x.js")
        assert "config" in excluder.sources
        assert "src/mocks" in excluder.patterns

    def test_file_outside_project_root(self, tmp_path: Path) -> None:
        """Files outside the project root are not excluded."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path.parent / "outside.js")


class TestFindSourceFiles:
    """Tests for walking a project tree."""

    def test_finds_sources_sorted(self, tmp_path: Path) -> None:
        """Should return included files in sorted order."""
        touch(tmp_path, "src/main.js", "src/App.vue", "src/util.ts", "index.js", "README.md")

        files = find_source_files(tmp_path, list(DEFAULT_INCLUDES), [])

        assert [f.relative_to(tmp_path).as_posix() for f in files] == [
            "index.js",
            "src/App.vue",
            "src/main.js",
            "src/util.ts",
        ]

    def test_prunes_excluded_directories(self, tmp_path: Path) -> None:
        """Should never report files under node_modules or .vueprune."""
        touch(
            tmp_path,
            "src/main.js",
            "node_modules/vue/index.js",
            "src/node_modules/local/index.js",
            ".vueprune/results.js",
        )

        files = find_source_files(tmp_path, list(DEFAULT_INCLUDES), [])

        assert files == [tmp_path / "src" / "main.js"]

    def test_respects_gitignore_and_user_excludes(self, tmp_path: Path) -> None:
        """Should drop .gitignore and config exclude matches."""
        touch(tmp_path, "src/main.js", "src/secret.js", "src/stories/Button.stories.js")
        (tmp_path / ".gitignore").write_text("secret.js\n")

        files = find_source_files(tmp_path, list(DEFAULT_INCLUDES), ["*.stories.js"])

        assert files == [tmp_path / "src" / "main.js"]

    def test_include_patterns(self, tmp_path: Path) -> None:
        """Only files matching an include pattern are returned."""
        touch(tmp_path, "src/App.vue", "src/main.js")

        files = find_source_files(tmp_path, ["**/*.vue"], [])

        assert files == [tmp_path / "src" / "App.vue"]

    def test_include_ignored(self, tmp_path: Path) -> None:
        """include_ignored walks into otherwise excluded directories."""
        touch(tmp_path, "src/main.js", "dist/bundle.js")

        files = find_source_files(tmp_path, list(DEFAULT_INCLUDES), [], include_ignored=True)

        assert tmp_path / "dist" / "bundle.js" in files


class TestReadCorpus:
    """Tests for capturing file text."""

    def test_reads_content_and_relative_path(self, tmp_path: Path) -> None:
        """Should capture text, extension and a '/'-separated relative path."""
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "App.vue").write_text("<template></template>")

        [source] = read_corpus([tmp_path / "src" / "App.vue"], tmp_path)

        assert source.relative_path == "src/App.vue"
        assert source.extension == ".vue"
        assert source.content == "<template></template>"

    def test_invalid_utf8_is_replaced(self, tmp_path: Path) -> None:
        """Undecodable bytes should not abort the scan."""
        (tmp_path / "a.js").write_bytes(b"const a = '\xff'\n")

        source = read_source_file(tmp_path / "a.js", tmp_path)

        assert source.content.startswith("const a = '")

    def test_unreadable_file_aborts(self, tmp_path: Path) -> None:
        """A file that cannot be read raises AnalysisError."""
        with pytest.raises(AnalysisError, match="Cannot read"):
            read_corpus([tmp_path / "missing.js"], tmp_path)
