"""Rich tree visualization for analysis results.

The builders take the serialized results dict so ``show`` can render a
saved results.json the same way ``analyze`` renders a fresh run.
"""

from collections import defaultdict
from pathlib import PurePosixPath

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

console = Console()


def build_results_tree(data: dict, project_name: str) -> Tree:
    """Build a Rich tree showing dead files and dead exports by directory."""
    # relative path -> dead export entries; None marks a dead file
    by_file: dict[PurePosixPath, list[dict] | None] = {}
    for item in data.get("dead_files", []):
        by_file[PurePosixPath(item["relative_path"])] = None
    for item in data.get("dead_exports", []):
        rel = PurePosixPath(item["file"])
        if by_file.get(rel, []) is not None:
            by_file.setdefault(rel, []).append(item)

    root = Tree(f"[bold]{project_name}[/]", guide_style="dim")
    dir_nodes: dict[PurePosixPath, Tree] = {}

    for file_path in sorted(by_file):
        parent = root
        for i, part in enumerate(file_path.parts[:-1]):
            dir_path = PurePosixPath(*file_path.parts[: i + 1])
            if dir_path not in dir_nodes:
                dir_nodes[dir_path] = parent.add(f"[bold blue]{part}/[/]")
            parent = dir_nodes[dir_path]

        exports = by_file[file_path]
        if exports is None:
            label = Text()
            label.append("x ", style="red bold")
            label.append(file_path.name, style="red")
            label.append(" (unused file)", style="dim")
            parent.add(label)
            continue

        file_node = parent.add(f"[yellow]{file_path.name}[/]")
        for item in exports:
            label = Text()
            label.append("x ", style="red bold")
            label.append(item["name"], style="red")
            label.append(f" ({item['kind']} export)", style="dim")
            file_node.add(label)

    routes = data.get("routes") or {}
    unused_routes = routes.get("unused", [])
    if unused_routes:
        routes_node = root.add("[bold magenta]unused routes[/]")
        for route in unused_routes:
            routes_node.add(_route_label(route))

    return root


def _route_label(route: dict) -> Text:
    label = Text()
    label.append("x ", style="red bold")
    label.append(route["path"], style="red")
    if route.get("name"):
        label.append(f" ({route['name']})", style="cyan")
    label.append(f" {route['file']}:{route['line']}", style="dim")
    return label


def build_summary_tree(data: dict, examples: int = 3) -> Tree:
    """Build a summary tree with counts and a few examples per category."""
    root = Tree("[bold]Dead Code Summary[/]", guide_style="dim")

    dead_files = data.get("dead_files", [])
    files_node = root.add(f"[cyan]unused files[/] ({len(dead_files)} items)")
    for item in dead_files[:examples]:
        files_node.add(f"[red]{item['relative_path']}[/]")

    dead_exports = data.get("dead_exports", [])
    by_kind: dict[str, int] = defaultdict(int)
    for item in dead_exports:
        by_kind[item["kind"]] += 1
    exports_node = root.add(f"[cyan]unused exports[/] ({len(dead_exports)} items)")
    for kind, count in sorted(by_kind.items()):
        exports_node.add(f"{kind}: {count}")
    for item in dead_exports[:examples]:
        exports_node.add(f"[red]{item['name']}[/] in {item['file']}")

    routes = data.get("routes")
    if routes is not None:
        unused = routes.get("unused", [])
        routes_node = root.add(
            f"[cyan]unused routes[/] ({len(unused)} of "
            f"{len(routes.get('definitions', []))} routes)"
        )
        for route in unused[:examples]:
            routes_node.add(_route_label(route))

    return root


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()
