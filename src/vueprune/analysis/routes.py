"""Route definition extraction, route usage extraction and unused-route matching.

Route matching is approximate on purpose. Anything that could plausibly
navigate to a route counts as a usage, so a route is only reported when
nothing in the project can reach it.
"""

from __future__ import annotations

import itertools
import logging
import re
from pathlib import Path
from typing import Collection, Iterable

from vueprune.models.graph import SourceFile
from vueprune.models.routes import RouteAnalysis, RouteDefinition, RouteUsage, UsageKind

logger = logging.getLogger(__name__)

CUSTOM_ENTRY_SOURCE = "custom-entry"

ROUTER_FILE_PATTERNS = [
    re.compile(r"router[/\\]index\.(js|ts)$"),
    re.compile(r"router\.(js|ts)$"),
    re.compile(r"routes\.(js|ts)$"),
    re.compile(r"router[/\\]routes\.(js|ts)$"),
]

_QUOTES = "'\"`"
_OPENERS = {"{": "}", "[": "]", "(": ")"}

# Keys of a route object, matched at the object's top level only
_PATH_KEY_RE = re.compile(r"(?<![\w$.])path\s*:\s*(['\"`])([^'\"`]*)\1")
_NAME_KEY_RE = re.compile(r"(?<![\w$.])name\s*:\s*(['\"`])([^'\"`]+)\1")
_CHILDREN_KEY_RE = re.compile(r"(?<![\w$.])children\s*:\s*\[")

# <router-link to="/path">
_LINK_TO_RE = re.compile(
    r"(?:router-link|RouterLink)\b[^>]*?(?<![:\w-])to\s*=\s*(['\"])([^'\"]+)\1"
)
# :to="'/path'"
_BOUND_TO_LITERAL_RE = re.compile(r"(?<![\w-]):to\s*=\s*\"\s*(['`])([^'`$]+)\1\s*\"")
# :to="{ name: 'x' }" / :to="{ path: '/x' }"
_BOUND_TO_OBJECT_RE = re.compile(
    r"(?<![\w-]):to\s*=\s*['\"]?\s*\{\s*(name|path)\s*:\s*(['\"`])([^'\"`]+)\2"
)
_NAVIGATOR = r"(?:\$router|\brouter|useRouter\(\s*\))\s*\.\s*(?:push|replace|go|back|forward)"
_NAVIGATE_LITERAL_RE = re.compile(_NAVIGATOR + r"\s*\(\s*(['\"`])([^'\"`]+)\1\s*\)")
_NAVIGATE_OBJECT_RE = re.compile(
    _NAVIGATOR + r"\s*\(\s*\{[^}]*?(?<![\w$.])(name|path)\s*:\s*(['\"`])([^'\"`]+)\2"
)
# `/user/${id}`
_DYNAMIC_TEMPLATE_RE = re.compile(r"`(/[^`]*?\$\{[^}]+\}[^`]*)`")
# '/user/' + id
_DYNAMIC_CONCAT_RE = re.compile(r"(['\"`])(/[^'\"`\n]*)\1\s*\+\s*([^;,)\n]+)")
_QUOTED_PART_RE = re.compile(r"\s*(['\"`])([^'\"`]*)\1")
_INTERPOLATION_RE = re.compile(r"\$\{[^}]+\}")

# :name, :name(regex), with an optional ?, * or + modifier
_PARAM_RE = re.compile(r"(/?):(\w+)(\((?:[^()]|\([^()]*\))*\))?([?*+])?")
_OPTIONAL_SEGMENT_RE = re.compile(r"/:\w+(?:\((?:[^()]|\([^()]*\))*\))?\?")
_SYNTHETIC_PARAM_RE = re.compile(r":param\d*")


def is_router_file(relative_path: str) -> bool:
    """Check if a file follows a router configuration naming convention."""
    return any(pattern.search(relative_path) for pattern in ROUTER_FILE_PATTERNS)


def _line_number(text: str, index: int) -> int:
    return text.count("\n", 0, index) + 1


def _skip_string(text: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    quote = text[start]
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n" and quote != "`":
            return i
        i += 1
    return len(text)


def blank_comments(text: str) -> str:
    """Replace comments with spaces, keeping newlines and string contents intact."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            end = _skip_string(text, i)
            out.append(text[i:end])
            i = end
        elif text.startswith("//", i):
            end = text.find("\n", i)
            end = n if end == -1 else end
            out.append(" " * (end - i))
            i = end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.append(re.sub(r"[^\n]", " ", text[i:end]))
            i = end
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _find_closing(text: str, open_index: int, limit: int) -> int:
    """Index of the bracket closing the one at ``open_index``; ``limit`` if unbalanced."""
    stack = [_OPENERS[text[open_index]]]
    i = open_index + 1
    while i < limit:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
            if not stack:
                return i
        i += 1
    return limit


def _top_level(text: str, start: int, end: int) -> str:
    """Text between start and end with nested bracket contents masked by spaces."""
    out: list[str] = []
    i = start
    while i < end:
        ch = text[i]
        if ch in _QUOTES:
            stop = min(_skip_string(text, i), end)
            out.append(text[i:stop])
            i = stop
        elif ch in _OPENERS:
            close = min(_find_closing(text, i, end), end - 1)
            if close <= i:
                out.append(ch)
                i += 1
                continue
            out.append(ch + " " * (close - i - 1) + text[close])
            i = close + 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _join_route_path(parent: str | None, child: str) -> str:
    if parent is None or child.startswith("/"):
        return child
    if not child:
        return parent
    return parent.rstrip("/") + "/" + child


class _RouteScanner:
    """Walks object literals and collects those with a ``path`` key."""

    def __init__(self, text: str, relative_path: str) -> None:
        self.text = text
        self.relative_path = relative_path
        self.routes: list[RouteDefinition] = []

    def scan(self, start: int, end: int, parent: str | None = None) -> None:
        i = start
        while i < end:
            ch = self.text[i]
            if ch in _QUOTES:
                i = _skip_string(self.text, i)
            elif ch == "{":
                close = _find_closing(self.text, i, end)
                self._visit_object(i, close, parent)
                i = close + 1
            else:
                i += 1

    def _visit_object(self, open_index: int, close_index: int, parent: str | None) -> None:
        inner_start = open_index + 1
        top = _top_level(self.text, inner_start, close_index)

        path_match = _PATH_KEY_RE.search(top)
        if path_match is None:
            self.scan(inner_start, close_index, parent)
            return

        full_path = _join_route_path(parent, path_match.group(2))
        name_match = _NAME_KEY_RE.search(top)
        self.routes.append(
            RouteDefinition(
                path=full_path,
                name=name_match.group(2) if name_match else None,
                file=self.relative_path,
                line=_line_number(self.text, open_index),
            )
        )

        children = _CHILDREN_KEY_RE.search(top)
        if children:
            bracket = inner_start + children.end() - 1
            self.scan(bracket + 1, _find_closing(self.text, bracket, close_index), full_path)


def extract_route_definitions(content: str, relative_path: str) -> list[RouteDefinition]:
    """Extract route objects from a router file.

    Child routes whose path is not absolute are prefixed with their parent's
    path; an empty child path resolves to the parent's path.
    """
    text = blank_comments(content)
    scanner = _RouteScanner(text, relative_path)
    scanner.scan(0, len(text))
    return scanner.routes


def normalize_route_path(path: str) -> str:
    """Drop query string, hash and trailing slash from a literal path."""
    path = re.split(r"[?#]", path, maxsplit=1)[0]
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _number_params(pattern: str) -> str:
    counter = itertools.count(1)
    return re.sub(r":param(?!\d)", lambda _: f":param{next(counter)}", pattern)


def template_route_pattern(body: str) -> str:
    """``/user/${id}`` -> ``/user/:param1``."""
    return _number_params(_INTERPOLATION_RE.sub(":param", body))


def concat_route_pattern(expression: str) -> str | None:
    """``'/user/' + id + '/edit'`` -> ``/user/:param1/edit``."""
    parts: list[str] = []
    for part in expression.split("+"):
        quoted = _QUOTED_PART_RE.match(part)
        if quoted and not part[quoted.end():].strip():
            parts.append(_INTERPOLATION_RE.sub(":param", quoted.group(2)))
        elif part.strip():
            parts.append(":param")
    if not parts:
        return None
    return _number_params("".join(parts))


def extract_route_usages(content: str, relative_path: str) -> list[RouteUsage]:
    """Find every navigation target referenced in a file."""
    usages: list[RouteUsage] = []

    def add(kind: UsageKind, reference: str, index: int, original: str | None = None) -> None:
        reference = reference.strip()
        if not reference:
            return
        if kind is UsageKind.PATH:
            reference = normalize_route_path(reference)
        usages.append(
            RouteUsage(
                reference=reference,
                kind=kind,
                file=relative_path,
                line=_line_number(content, index),
                original=original,
            )
        )

    for m in _LINK_TO_RE.finditer(content):
        add(UsageKind.PATH, m.group(2), m.start())

    for m in _BOUND_TO_LITERAL_RE.finditer(content):
        add(UsageKind.PATH, m.group(2), m.start())

    for m in _BOUND_TO_OBJECT_RE.finditer(content):
        add(UsageKind(m.group(1)), m.group(3), m.start())

    for m in _NAVIGATE_LITERAL_RE.finditer(content):
        if "${" not in m.group(2):
            add(UsageKind.PATH, m.group(2), m.start())

    for m in _NAVIGATE_OBJECT_RE.finditer(content):
        if "${" not in m.group(3):
            add(UsageKind(m.group(1)), m.group(3), m.start())

    for m in _DYNAMIC_TEMPLATE_RE.finditer(content):
        add(
            UsageKind.DYNAMIC_PATH,
            template_route_pattern(m.group(1)),
            m.start(),
            original=m.group(0),
        )

    for m in _DYNAMIC_CONCAT_RE.finditer(content):
        pattern = concat_route_pattern(m.group(0).strip())
        if pattern:
            add(UsageKind.DYNAMIC_PATH, pattern, m.start(), original=m.group(0).strip())

    usages.sort(key=lambda u: u.line)
    return usages


def expand_optional(route_path: str) -> list[str]:
    """Expand ``/:name?`` segments into every present/absent combination.

    ``/docs/:a?/:b?`` yields ``/docs/:a/:b``, ``/docs/:a``, ``/docs/:b`` and
    ``/docs``. A path that collapses to nothing becomes ``/``.
    """
    optionals = list(_OPTIONAL_SEGMENT_RE.finditer(route_path))
    if not optionals:
        return [route_path]

    variants: list[str] = []
    for choice in itertools.product((True, False), repeat=len(optionals)):
        pieces: list[str] = []
        last = 0
        for keep, m in zip(choice, optionals):
            pieces.append(route_path[last:m.start()])
            if keep:
                pieces.append(m.group(0)[:-1])
            last = m.end()
        pieces.append(route_path[last:])
        variant = "".join(pieces) or "/"
        if variant not in variants:
            variants.append(variant)
    return variants


def route_pattern_to_regex(route_path: str) -> re.Pattern[str]:
    """Compile a route path with ``:params`` into a full-match regex."""
    regex: list[str] = []
    last = 0
    for m in _PARAM_RE.finditer(route_path):
        regex.append(_escape_literal(route_path[last:m.start()]))
        slash, _name, custom, modifier = m.groups()
        body = ".*" if custom and ".*" in custom else "[^/]+"
        sep = "/" if slash else ""
        if modifier == "*":
            regex.append(f"(?:{sep}.*)?")
        elif modifier == "+":
            regex.append(f"{sep}.+")
        elif modifier == "?":
            regex.append(f"(?:{sep}{body})?")
        else:
            regex.append(f"{sep}{body}")
        last = m.end()
    regex.append(_escape_literal(route_path[last:]))
    return re.compile("".join(regex))


def _escape_literal(text: str) -> str:
    # A bare * is the legacy catch-all
    return "".join(".*" if ch == "*" else re.escape(ch) for ch in text)


def _usage_to_regex(reference: str) -> re.Pattern[str]:
    parts = _SYNTHETIC_PARAM_RE.split(reference)
    return re.compile("[^/]+".join(re.escape(part) for part in parts))


def matches_route(route_path: str, reference: str) -> bool:
    """Check whether a route path and a usage path could refer to each other.

    Both directions are tried: the route pattern against the usage, and the
    usage (with synthetic ``:paramN`` placeholders) against the route.
    """
    if route_path == reference:
        return True

    for variant in expand_optional(route_path):
        try:
            if route_pattern_to_regex(variant).fullmatch(reference):
                return True
            if _usage_to_regex(reference).fullmatch(variant):
                return True
        except re.error as e:
            logger.debug("Cannot match route %r against %r: %s", variant, reference, e)
    return False


def find_unused_routes(
    definitions: Iterable[RouteDefinition],
    usages: Iterable[RouteUsage],
) -> list[RouteDefinition]:
    """Return the definitions matched by no usage."""
    usages = list(usages)
    paths = {u.reference for u in usages if u.kind is UsageKind.PATH}
    names = {u.reference for u in usages if u.kind is UsageKind.NAME}
    patterns = [u.reference for u in usages if u.kind is not UsageKind.NAME]

    unused: list[RouteDefinition] = []
    for route in definitions:
        if route.path in paths or normalize_route_path(route.path) in paths:
            continue
        if route.name and route.name in names:
            continue
        if any(matches_route(route.path, reference) for reference in patterns):
            continue
        unused.append(route)
    return unused


def custom_entry_usages(
    definitions: Iterable[RouteDefinition], router_file: str
) -> list[RouteUsage]:
    """Mark every route declared in a custom-entry router file as used."""
    usages: list[RouteUsage] = []
    for route in definitions:
        if route.file != router_file:
            continue
        usages.append(
            RouteUsage(
                reference=route.path,
                kind=UsageKind.PATH,
                file=router_file,
                line=route.line,
                source=CUSTOM_ENTRY_SOURCE,
            )
        )
        if route.name:
            usages.append(
                RouteUsage(
                    reference=route.name,
                    kind=UsageKind.NAME,
                    file=router_file,
                    line=route.line,
                    source=CUSTOM_ENTRY_SOURCE,
                )
            )
    return usages


def analyze_routes(
    corpus: Iterable[SourceFile],
    custom_entries: Collection[Path] = (),
) -> RouteAnalysis:
    """Run route definition and usage extraction over the corpus.

    Args:
        corpus: Scanned files with captured text.
        custom_entries: Canonical absolute paths of user-declared entries. A
            custom entry that is itself a router file has all of its routes
            treated as used.

    Returns:
        RouteAnalysis with definitions, usages and unused routes.
    """
    files = list(corpus)
    analysis = RouteAnalysis()

    router_files = [f for f in files if is_router_file(f.relative_path)]
    for source in router_files:
        analysis.route_definitions.extend(
            extract_route_definitions(source.content, source.relative_path)
        )

    for source in files:
        analysis.route_usages.extend(
            extract_route_usages(source.content, source.relative_path)
        )

    custom = set(custom_entries)
    for source in router_files:
        if source.absolute_path in custom:
            forced = custom_entry_usages(analysis.route_definitions, source.relative_path)
            logger.debug(
                "Custom entry router file %s marks %d usages",
                source.relative_path,
                len(forced),
            )
            analysis.route_usages.extend(forced)

    analysis.unused_routes = find_unused_routes(
        analysis.route_definitions, analysis.route_usages
    )
    logger.debug(
        "Found %d route definitions, %d usages, %d unused",
        len(analysis.route_definitions),
        len(analysis.route_usages),
        len(analysis.unused_routes),
    )
    return analysis
