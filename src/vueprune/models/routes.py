"""Data models for route definitions and route usages."""

from dataclasses import dataclass, field
from enum import Enum


class UsageKind(Enum):
    """What a route usage refers to."""

    PATH = "path"
    NAME = "name"
    DYNAMIC_PATH = "dynamic-path"


@dataclass
class RouteDefinition:
    """A declared route object. Child paths are already prefixed with the parent's."""

    path: str
    name: str | None
    file: str  # relative path of the router file
    line: int

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "name": self.name,
            "file": self.file,
            "line": self.line,
        }


@dataclass
class RouteUsage:
    """Any expression that references or builds a navigation target."""

    reference: str
    kind: UsageKind
    file: str
    line: int
    source: str | None = None  # "custom-entry" for synthesized usages
    original: str | None = None  # raw expression a dynamic-path pattern came from

    def to_dict(self) -> dict:
        result = {
            "reference": self.reference,
            "kind": self.kind.value,
            "file": self.file,
            "line": self.line,
        }
        if self.source:
            result["source"] = self.source
        if self.original:
            result["original"] = self.original
        return result


@dataclass
class RouteAnalysis:
    """Result of the route usage pass."""

    route_definitions: list[RouteDefinition] = field(default_factory=list)
    route_usages: list[RouteUsage] = field(default_factory=list)
    unused_routes: list[RouteDefinition] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "definitions": [r.to_dict() for r in self.route_definitions],
            "usages": [u.to_dict() for u in self.route_usages],
            "unused": [r.to_dict() for r in self.unused_routes],
        }
