"""Command-line interface for Arachnet.

Usage::

    arachnet generate graph.json --target go --name shop
    arachnet preview graph.json --target python --file main.py
    arachnet openapi graph.json --output openapi.json
    arachnet example ecommerce --output graph.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from . import __version__
from .assembler import AssemblyError, write_tree
from .config import GeneratorConfig
from .generator import ProjectGenerator
from .graph.models import Graph, NodeKind
from .samples import sample_names, sample_payload
from .scaffolder.registry import EMITTERS, UnsupportedTargetError
from .store import ProjectStore
from .utils import (
    console,
    load_json,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
    setup_logging,
)

logger = logging.getLogger(__name__)

# Node kinds that produce source files.
_COMPONENT_KINDS = (NodeKind.MODEL, NodeKind.SERVICE, NodeKind.CONTROLLER, NodeKind.ROUTE)


class CLIError(Exception):
    """A user-facing failure that ends the command with exit status 1."""


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Config from ``--config FILE`` when given, else from the environment."""
    if not args.config:
        return GeneratorConfig.from_env()
    config_path = Path(args.config)
    if not config_path.is_file():
        raise CLIError(f"Config file not found: {config_path}")
    return GeneratorConfig.load(config_path)


def _read_graph(path: str) -> Graph:
    graph_path = Path(path)
    if not graph_path.is_file():
        raise CLIError(f"Graph file not found: {graph_path}")
    try:
        payload = load_json(graph_path)
    except json.JSONDecodeError as exc:
        raise CLIError(f"Graph file is not valid JSON: {graph_path} ({exc})") from exc
    if not isinstance(payload, dict) or not (payload.keys() & {"nodes", "edges"}):
        raise CLIError(f"Graph file must hold an object with 'nodes' and 'edges': {graph_path}")
    return Graph.from_payload(payload)


def _resolve_graph(args: argparse.Namespace, config: GeneratorConfig) -> Graph:
    """Graph from ``--project`` (saved store) or from the GRAPH file argument."""
    project_id = getattr(args, "project", None)
    if project_id:
        stored = ProjectStore(config.store_dir).load(project_id)
        if stored is None:
            raise CLIError(f"No saved project with id {project_id!r}")
        return stored.graph
    if not args.graph:
        raise CLIError("A GRAPH file is required unless --project is given")
    return _read_graph(args.graph)


def _warn_if_empty(graph: Graph) -> None:
    if not any(graph.nodes_of(kind) for kind in _COMPONENT_KINDS):
        print_warning("Graph has no component nodes; only project files will be generated")


def _write_or_print_json(data: dict[str, Any], output: Optional[str]) -> None:
    if output:
        path = save_json(data, output)
        print_success(f"Wrote {path}")
    else:
        console.print_json(json.dumps(data, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_generate(args: argparse.Namespace, config: GeneratorConfig) -> None:
    graph = _resolve_graph(args, config)
    _warn_if_empty(graph)
    generator = ProjectGenerator(config)
    name = args.name or config.project_name

    if args.extract:
        tree = generator.build(graph, args.target, name)
        written = write_tree(tree, args.extract)
        print_summary_table(
            {"Target": args.target, "Files": len(written), "Directory": args.extract},
            title="Generated project",
        )
        print_success(f"Extracted {len(written)} file(s) to {args.extract}")
        return

    archive = generator.generate(graph, args.target, name)
    output = Path(args.output) if args.output else Path(archive.filename)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(archive.content)
    except OSError as exc:
        raise AssemblyError(f"Failed to write {output}: {exc}") from exc
    print_summary_table(
        {"Target": archive.target.value, "Files": archive.file_count, "Archive": output},
        title="Generated project",
    )
    print_success(f"Wrote {output}")


def cmd_preview(args: argparse.Namespace, config: GeneratorConfig) -> None:
    graph = _read_graph(args.graph)
    files = ProjectGenerator(config).preview(graph, args.target)
    if args.file:
        if args.file not in files:
            raise CLIError(f"No generated file named {args.file!r}")
        console.print(files[args.file], markup=False, highlight=False, soft_wrap=True, end="")
        return

    _warn_if_empty(graph)
    table = Table(title=f"Preview ({args.target})", header_style="bold cyan")
    table.add_column("Path")
    table.add_column("Bytes", justify="right")
    for path, content in files.items():
        table.add_row(path, str(len(content.encode("utf-8"))))
    console.print(table)


def cmd_openapi(args: argparse.Namespace, config: GeneratorConfig) -> None:
    document = ProjectGenerator(config).openapi(_read_graph(args.graph))
    _write_or_print_json(document, args.output)


def cmd_targets(args: argparse.Namespace, config: GeneratorConfig) -> None:
    table = Table(title="Supported targets", header_style="bold cyan")
    table.add_column("Target", no_wrap=True)
    table.add_column("Stack")
    for target, emitter_cls in EMITTERS.items():
        table.add_row(target.value, emitter_cls.display_name)
    console.print(table)


def cmd_example(args: argparse.Namespace, config: GeneratorConfig) -> None:
    try:
        payload = sample_payload(args.name)
    except KeyError as exc:
        raise CLIError(exc.args[0]) from exc
    _write_or_print_json(payload, args.output)


def cmd_save(args: argparse.Namespace, config: GeneratorConfig) -> None:
    graph = _read_graph(args.graph)
    store = ProjectStore(config.store_dir)
    if store.exists(args.id):
        print_warning(f"Overwriting saved project {args.id!r}")
    project = store.save(args.id, graph, name=args.name or "")
    print_success(f"Saved project {project.id!r} ({len(graph.nodes)} node(s))")


def cmd_load(args: argparse.Namespace, config: GeneratorConfig) -> None:
    stored = ProjectStore(config.store_dir).load(args.id)
    if stored is None:
        raise CLIError(f"No saved project with id {args.id!r}")
    _write_or_print_json(stored.graph.model_dump(mode="json"), args.output)


def cmd_list(args: argparse.Namespace, config: GeneratorConfig) -> None:
    projects = ProjectStore(config.store_dir).list_projects()
    if not projects:
        print_warning(f"No saved projects in {config.store_dir}")
        return
    table = Table(title="Saved projects", header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Nodes", justify="right")
    table.add_column("Saved")
    for project in projects:
        table.add_row(
            escape(project.id),
            escape(project.name),
            str(len(project.graph.nodes)),
            project.saved_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


def cmd_config(args: argparse.Namespace, config: GeneratorConfig) -> None:
    if args.output:
        path = config.save(Path(args.output))
        print_success(f"Wrote {path}")
    else:
        console.print_json(config.model_dump_json())


_COMMANDS: dict[str, Callable[[argparse.Namespace, GeneratorConfig], None]] = {
    "generate": cmd_generate,
    "preview": cmd_preview,
    "openapi": cmd_openapi,
    "targets": cmd_targets,
    "example": cmd_example,
    "save": cmd_save,
    "load": cmd_load,
    "list": cmd_list,
    "config": cmd_config,
}


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    target_names = [t.value for t in EMITTERS]

    parser = argparse.ArgumentParser(
        prog="arachnet",
        description="Arachnet -- generate backend projects from architecture graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  arachnet example auth --output auth.json\n"
            "  arachnet generate auth.json --target node\n"
            "  arachnet generate auth.json --target go --extract ./auth-go\n"
            "  arachnet openapi auth.json\n"
            "  arachnet --config arachnet.json generate auth.json -t java\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Load settings from this JSON file instead of ARACHNET_* variables",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a project archive")
    gen.add_argument("graph", nargs="?", help="Path to the graph JSON file")
    gen.add_argument("--target", "-t", required=True, help=f"One of: {', '.join(target_names)}")
    gen.add_argument("--name", "-n", default=None, help="Project name (archive folder)")
    out = gen.add_mutually_exclusive_group()
    out.add_argument("--output", "-o", default=None, help="Archive path (default: <name>.zip)")
    out.add_argument("--extract", "-x", default=None, help="Write files to this directory")
    gen.add_argument("--project", "-p", default=None, help="Use a saved project instead of GRAPH")

    prev = sub.add_parser("preview", help="List or show generated files without an archive")
    prev.add_argument("graph", help="Path to the graph JSON file")
    prev.add_argument("--target", "-t", required=True, help=f"One of: {', '.join(target_names)}")
    prev.add_argument("--file", "-f", default=None, help="Print one generated file")

    api = sub.add_parser("openapi", help="Emit the interface descriptor only")
    api.add_argument("graph", help="Path to the graph JSON file")
    api.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")

    sub.add_parser("targets", help="List supported targets")

    ex = sub.add_parser("example", help="Emit an example graph")
    ex.add_argument("name", help=f"One of: {', '.join(sample_names())}")
    ex.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")

    save = sub.add_parser("save", help="Save a graph under a project id")
    save.add_argument("graph", help="Path to the graph JSON file")
    save.add_argument("--id", required=True, help="Project id")
    save.add_argument("--name", default=None, help="Display name")

    load = sub.add_parser("load", help="Print a saved graph")
    load.add_argument("id", help="Project id")
    load.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")

    sub.add_parser("list", help="List saved projects")

    cfg = sub.add_parser("config", help="Show the effective settings or write them to a file")
    cfg.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")

    return parser


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``arachnet`` / ``python -m arachnet``."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = _load_config(args)
        _COMMANDS[args.command](args, config)
    except ValidationError as exc:
        print_error(f"Error: invalid input\n{escape(str(exc))}")
        sys.exit(1)
    except (CLIError, UnsupportedTargetError, AssemblyError, ValueError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
