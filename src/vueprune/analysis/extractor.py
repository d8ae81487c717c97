"""Lexical import/export extraction for JS, TS and Vue single-file components.

This is deliberately not a parser: every recognized construct has its own
regular expression, each one is applied independently, and text that matches
nothing simply contributes nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from vueprune.models.graph import (
    ExportKind,
    ExportSymbol,
    ImportedSymbol,
    ImportEdge,
    ImportKind,
    RequireContext,
    SourceFile,
    SymbolKind,
)

SOURCE_EXTENSIONS = (".vue", ".js", ".jsx", ".ts", ".tsx")

WILDCARD = "*"

_SCRIPT_BLOCK_RE = re.compile(r"<script\b[^>]*>([\s\S]*?)</script\s*>", re.IGNORECASE)

# Optional webpack/vite magic comments inside import( ... )
_MAGIC = r"(?:/\*[\s\S]*?\*/\s*)*"

_DEFAULT_IMPORT_RE = re.compile(
    r"\bimport\s+(?:type\s+)?([\w$]+)\s+from\s*(['\"])([^'\"]+)\2"
)
_NAMESPACE_IMPORT_RE = re.compile(
    r"\bimport\s+\*\s*as\s+([\w$]+)\s+from\s*(['\"])([^'\"]+)\2"
)
_NAMED_IMPORT_RE = re.compile(
    r"\bimport\s+(?:type\s+)?\{([^}]*)\}\s*from\s*(['\"])([^'\"]+)\2"
)
_MIXED_IMPORT_RE = re.compile(
    r"\bimport\s+([\w$]+)\s*,\s*\{([^}]*)\}\s*from\s*(['\"])([^'\"]+)\3"
)
_MIXED_NAMESPACE_IMPORT_RE = re.compile(
    r"\bimport\s+([\w$]+)\s*,\s*\*\s*as\s+([\w$]+)\s+from\s*(['\"])([^'\"]+)\3"
)
_SIDE_EFFECT_IMPORT_RE = re.compile(r"\bimport\s*(['\"])([^'\"]+)\1")

_REQUIRE_RE = re.compile(r"\brequire\s*\(\s*(['\"`])([^'\"`]+)\1\s*\)")
_DYNAMIC_IMPORT_RE = re.compile(
    r"\bimport\s*\(\s*" + _MAGIC + r"(['\"`])([^'\"`]+)\1\s*\)"
)
_TEMPLATE_IMPORT_RE = re.compile(r"\bimport\s*\(\s*" + _MAGIC + r"`([^`]+)`\s*\)")
_LAZY_COMPONENT_RE = re.compile(
    r"\bcomponent\s*:\s*(?:(?:async\s*)?\(\s*\)\s*=>\s*)?import\s*\(\s*"
    + _MAGIC
    + r"(['\"`])([^'\"`]+)\1\s*\)"
)
_REQUIRE_ENSURE_RE = re.compile(
    r"\brequire\.ensure\s*\(\s*(?:\[[^\]]*\]|[^,]*?)\s*,\s*"
    r"(?:function\s*\([^)]*\)\s*\{[^}]*?\brequire\s*\(\s*(['\"`])([^'\"`]+)\1\s*\)"
    r"|[^;]*?\brequire\s*\(\s*(['\"`])([^'\"`]+)\3\s*\))"
)
_REQUIRE_CONTEXT_RE = re.compile(
    r"\brequire\.context\s*\(\s*(['\"`])([^'\"`]+)\1"
    r"(?:\s*,\s*(true|false)"
    # a '/' inside a [...] class does not close the regex literal
    r"(?:\s*,\s*/((?:\\.|\[(?:\\.|[^\]\\\n])*\]|[^/\\\[\n])+)/([a-z]*)"
    r"(?:\s*,\s*(['\"])[\w-]+\6)?)?)?\s*\)"
)
_STRING_REFERENCE_RE = re.compile(
    r"(['\"`])(\.\.?[/\\][^'\"`\n]*\.(?:vue|js|jsx|ts|tsx))\1"
)

_EXPORT_DEFAULT_RE = re.compile(r"\bexport\s+default\b")
_EXPORT_DEFAULT_DECL_RE = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?(?:function\s*\*?\s*([\w$]+)|(?:abstract\s+)?class\s+([\w$]+))"
)
_EXPORT_DEFAULT_IDENT_RE = re.compile(
    r"\bexport\s+default\s+([\w$]+)\s*(?:;|$)", re.MULTILINE
)
_EXPORT_DECL_RE = re.compile(
    r"\bexport\s+(?:declare\s+)?(?:"
    r"(?:async\s+)?function\s*\*?\s*([\w$]+)"
    r"|(?:abstract\s+)?class\s+([\w$]+)"
    r"|(?:const\s+)?enum\s+([\w$]+)"
    r"|(?:const|let|var)\s+([\w$]+)"
    r"|interface\s+([\w$]+)"
    r"|type\s+([\w$]+)\s*(?:<[^=]*>)?\s*="
    r")"
)
_EXPORT_LIST_RE = re.compile(r"\bexport\s*(?:type\s+)?\{([^}]*)\}(?!\s*from\b)")
_EXPORT_FROM_RE = re.compile(
    r"\bexport\s*(?:type\s+)?\{([^}]*)\}\s*from\s*(['\"])([^'\"]+)\2"
)
_EXPORT_ALL_RE = re.compile(r"\bexport\s*\*\s*from\s*(['\"])([^'\"]+)\1")
_EXPORT_NAMESPACE_RE = re.compile(
    r"\bexport\s*\*\s*as\s+([\w$]+)\s*from\s*(['\"])([^'\"]+)\2"
)

_INTERPOLATION_RE = re.compile(r"\$\{[^}]*\}")
_CLAUSE_COMMENT_RE = re.compile(r"//[^\n]*|/\*[\s\S]*?\*/")
_SOURCE_EXT_RE = re.compile(r"\.(?:vue|js|jsx|ts|tsx)$")
_PACKAGE_START_RE = re.compile(r"[A-Za-z0-9_]")


@dataclass
class ExtractionResult:
    """Imports and exports found in one file."""

    imports: list[ImportEdge] = field(default_factory=list)
    exports: list[ExportSymbol] = field(default_factory=list)


def is_external_specifier(specifier: str, alias_prefixes: Iterable[str] = ()) -> bool:
    """Check if a specifier names a third-party package rather than a project file."""
    if not specifier:
        return True

    if specifier.startswith((".", "/")):
        return False

    for alias in alias_prefixes:
        if specifier == alias or specifier.startswith(alias + "/"):
            return False

    if specifier.startswith("@"):
        # @scope/pkg is a package; "@/..." and deeper paths look like aliases
        parts = specifier.split("/")
        return len(parts) == 2 and len(parts[0]) > 1 and "." not in parts[1]

    if _SOURCE_EXT_RE.search(specifier):
        return False

    return bool(_PACKAGE_START_RE.match(specifier)) and "/" not in specifier


def script_content(content: str, extension: str) -> str:
    """Return the text that should be scanned for imports and exports."""
    if extension != ".vue":
        return content
    return "\n".join(m.group(1) for m in _SCRIPT_BLOCK_RE.finditer(content))


def extract_file(source: SourceFile, alias_prefixes: Iterable[str] = ()) -> ExtractionResult:
    """Extract imports and exports from a scanned file."""
    return extract(source.content, source.extension, source.absolute_path, alias_prefixes)


def extract(
    content: str,
    extension: str,
    file_path: Path | None = None,
    alias_prefixes: Iterable[str] = (),
) -> ExtractionResult:
    """Extract import and export declarations from raw file text.

    Args:
        content: Raw file text.
        extension: File extension including the dot (``.vue`` selects script blocks).
        file_path: Absolute path recorded on the produced edges and exports.
        alias_prefixes: Configured alias prefixes, so ``@/x`` is not mistaken for a package.

    Returns:
        ExtractionResult; never raises on malformed input.
    """
    extractor = _Extractor(file_path or Path(), tuple(alias_prefixes))
    extractor.run(script_content(content, extension))
    return extractor.result


def _split_clause(clause: str) -> list[tuple[str, str | None]]:
    """Split ``a, b as c, type D`` into (name, alias) pairs."""
    items: list[tuple[str, str | None]] = []
    for raw in _CLAUSE_COMMENT_RE.sub("", clause).split(","):
        item = raw.strip()
        if item.startswith("type "):
            item = item[5:].strip()
        if not item:
            continue
        parts = re.split(r"\s+as\s+", item)
        name = parts[0].strip()
        alias = parts[1].strip() if len(parts) > 1 else None
        if name:
            items.append((name, alias))
    return items


class _Extractor:
    """Runs every pattern over one file's script text."""

    def __init__(self, file_path: Path, alias_prefixes: tuple[str, ...]) -> None:
        self.file_path = file_path
        self.alias_prefixes = alias_prefixes
        self.result = ExtractionResult()

    def run(self, text: str) -> None:
        self._static_imports(text)
        self._calls(text)
        self._re_exports(text)
        self._local_exports(text)
        self._string_references(text)

    def _add_import(
        self,
        specifier: str,
        kind: ImportKind,
        symbols: list[ImportedSymbol],
        context: RequireContext | None = None,
    ) -> None:
        if is_external_specifier(specifier, self.alias_prefixes):
            return
        self.result.imports.append(
            ImportEdge(
                from_file=self.file_path,
                raw_specifier=specifier,
                kind=kind,
                imported_symbols=symbols,
                context=context,
            )
        )

    def _add_export(
        self, name: str, kind: ExportKind, re_export_from: str | None = None
    ) -> None:
        self.result.exports.append(
            ExportSymbol(
                file=self.file_path, name=name, kind=kind, re_export_from=re_export_from
            )
        )

    def _static_imports(self, text: str) -> None:
        for m in _DEFAULT_IMPORT_RE.finditer(text):
            self._add_import(
                m.group(3), ImportKind.STATIC, [ImportedSymbol(m.group(1), SymbolKind.DEFAULT)]
            )

        for m in _NAMESPACE_IMPORT_RE.finditer(text):
            self._add_import(
                m.group(3),
                ImportKind.STATIC,
                [ImportedSymbol(m.group(1), SymbolKind.NAMESPACE)],
            )

        for m in _NAMED_IMPORT_RE.finditer(text):
            symbols = [
                ImportedSymbol(name, SymbolKind.NAMED, alias)
                for name, alias in _split_clause(m.group(1))
            ]
            # import {} from './x' still loads the module
            self._add_import(
                m.group(3),
                ImportKind.STATIC,
                symbols or [ImportedSymbol(WILDCARD, SymbolKind.SIDE_EFFECT)],
            )

        for m in _MIXED_IMPORT_RE.finditer(text):
            symbols = [ImportedSymbol(m.group(1), SymbolKind.DEFAULT)]
            symbols += [
                ImportedSymbol(name, SymbolKind.NAMED, alias)
                for name, alias in _split_clause(m.group(2))
            ]
            self._add_import(m.group(4), ImportKind.STATIC, symbols)

        for m in _MIXED_NAMESPACE_IMPORT_RE.finditer(text):
            self._add_import(
                m.group(4),
                ImportKind.STATIC,
                [
                    ImportedSymbol(m.group(1), SymbolKind.DEFAULT),
                    ImportedSymbol(m.group(2), SymbolKind.NAMESPACE),
                ],
            )

        for m in _SIDE_EFFECT_IMPORT_RE.finditer(text):
            self._add_import(
                m.group(2),
                ImportKind.STATIC,
                [ImportedSymbol(WILDCARD, SymbolKind.SIDE_EFFECT)],
            )

    def _calls(self, text: str) -> None:
        for m in _REQUIRE_RE.finditer(text):
            specifier = _INTERPOLATION_RE.sub(WILDCARD, m.group(2))
            self._add_import(
                specifier, ImportKind.COMMONJS, [ImportedSymbol(WILDCARD, SymbolKind.REQUIRE)]
            )

        for m in _DYNAMIC_IMPORT_RE.finditer(text):
            specifier = m.group(2)
            if "${" in specifier:
                continue  # template form below
            self._add_import(
                specifier, ImportKind.DYNAMIC, [ImportedSymbol(WILDCARD, SymbolKind.DYNAMIC)]
            )

        for m in _TEMPLATE_IMPORT_RE.finditer(text):
            if "${" not in m.group(1):
                continue
            self._add_import(
                _INTERPOLATION_RE.sub(WILDCARD, m.group(1)),
                ImportKind.DYNAMIC_TEMPLATE,
                [ImportedSymbol(WILDCARD, SymbolKind.DYNAMIC)],
            )

        for m in _LAZY_COMPONENT_RE.finditer(text):
            specifier = m.group(2)
            if "${" in specifier:
                continue
            self._add_import(
                specifier,
                ImportKind.LAZY_COMPONENT,
                [ImportedSymbol("default", SymbolKind.DEFAULT)],
            )

        for m in _REQUIRE_ENSURE_RE.finditer(text):
            specifier = m.group(2) or m.group(4)
            if specifier:
                self._add_import(
                    specifier,
                    ImportKind.CHUNKED_REQUIRE,
                    [ImportedSymbol(WILDCARD, SymbolKind.REQUIRE)],
                )

        for m in _REQUIRE_CONTEXT_RE.finditer(text):
            context = RequireContext(
                recursive=m.group(3) != "false",
                pattern=m.group(4) or RequireContext.pattern,
                flags=m.group(5) or "",
            )
            self._add_import(
                m.group(2),
                ImportKind.REQUIRE_CONTEXT,
                [ImportedSymbol(WILDCARD, SymbolKind.REQUIRE)],
                context=context,
            )

    def _re_exports(self, text: str) -> None:
        for m in _EXPORT_FROM_RE.finditer(text):
            specifier = m.group(3)
            if is_external_specifier(specifier, self.alias_prefixes):
                continue
            items = _split_clause(m.group(1))
            symbols = [
                ImportedSymbol(
                    name,
                    SymbolKind.DEFAULT if name == "default" else SymbolKind.NAMED,
                    alias,
                )
                for name, alias in items
            ]
            self._add_import(specifier, ImportKind.RE_EXPORT, symbols)
            for name, alias in items:
                exported = alias or name
                kind = ExportKind.DEFAULT if exported == "default" else ExportKind.NAMED
                self._add_export(exported, kind, re_export_from=specifier)

        for m in _EXPORT_ALL_RE.finditer(text):
            specifier = m.group(2)
            if is_external_specifier(specifier, self.alias_prefixes):
                continue
            self._add_import(
                specifier,
                ImportKind.RE_EXPORT_ALL,
                [ImportedSymbol(WILDCARD, SymbolKind.NAMESPACE)],
            )
            self._add_export(WILDCARD, ExportKind.NAMESPACE, re_export_from=specifier)

        for m in _EXPORT_NAMESPACE_RE.finditer(text):
            specifier = m.group(3)
            if is_external_specifier(specifier, self.alias_prefixes):
                continue
            self._add_import(
                specifier,
                ImportKind.RE_EXPORT_NAMESPACE,
                [ImportedSymbol(WILDCARD, SymbolKind.NAMESPACE, alias=m.group(1))],
            )
            self._add_export(m.group(1), ExportKind.NAMESPACE, re_export_from=specifier)

    def _local_exports(self, text: str) -> None:
        if _EXPORT_DEFAULT_RE.search(text):
            decl = _EXPORT_DEFAULT_DECL_RE.search(text)
            ident = _EXPORT_DEFAULT_IDENT_RE.search(text)
            if decl:
                name = decl.group(1) or decl.group(2)
            elif ident:
                name = ident.group(1)
            else:
                name = "default"
            self._add_export(name, ExportKind.DEFAULT)

        for m in _EXPORT_DECL_RE.finditer(text):
            name = next((g for g in m.groups() if g), None)
            if name:
                self._add_export(name, ExportKind.NAMED)

        for m in _EXPORT_LIST_RE.finditer(text):
            for name, alias in _split_clause(m.group(1)):
                exported = alias or name
                kind = ExportKind.DEFAULT if exported == "default" else ExportKind.NAMED
                self._add_export(exported, kind)

    def _string_references(self, text: str) -> None:
        captured = {edge.raw_specifier for edge in self.result.imports}
        for m in _STRING_REFERENCE_RE.finditer(text):
            specifier = m.group(2)
            if specifier in captured or "${" in specifier:
                continue
            captured.add(specifier)
            self._add_import(
                specifier,
                ImportKind.STRING_REFERENCE,
                [ImportedSymbol(WILDCARD, SymbolKind.DYNAMIC)],
            )
