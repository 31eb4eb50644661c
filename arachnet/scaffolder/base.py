"""Shared traversal skeleton for the target emitters.

Every target walks the graph the same way:

1. ``openapi.json``, the dependency manifest and the entrypoint.
2. One source file per model node (fields -> native record syntax).
3. One source file per service node (a data-access stub per connected model,
   plus a stub per rule).
4. One source file per controller node (a handler per (service, model) pair
   reachable through connected services, plus a handler per rule).
5. One source file per route node (a registration per endpoint).
6. Packaging files (Dockerfile, README).

Subclasses only supply the dialect: type table, file layout, templates and
the four ``render_*`` methods that produce source text.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import GeneratorConfig
from ..descriptor import Descriptor, build_descriptor, normalize_path
from ..graph.models import (
    BaseNode,
    ControllerNode,
    FieldType,
    Graph,
    ModelNode,
    NodeKind,
    RouteNode,
    ServiceNode,
)
from . import naming
from .docker_gen import DockerGenerator
from .templates import TemplateRenderer
from .tree import Directory

logger = logging.getLogger(__name__)


class TargetEmitter:
    """Base class for one backend stack.

    Attributes:
        target: Registry key, e.g. ``"node"``.
        display_name: Human-readable stack name.
        source_root: Directory the component sub-directories live under
            (empty for the project root).
        type_map: ``FieldType`` value -> native type.
        any_type: Native type for unrecognised field types.
        file_patterns: Node kind -> path pattern relative to
            ``source_root``.  ``{stem}`` is the lowercased node name and
            ``{name}`` the node name.
        project_templates: Template -> output path for the manifest,
            entrypoint and other graph-level files.
        run_command: How to start the generated app (shown in the README).
    """

    target: str = ""
    display_name: str = ""
    source_root: str = ""
    type_map: dict[str, str] = {}
    any_type: str = ""
    file_patterns: dict[NodeKind, str] = {}
    project_templates: dict[str, str] = {}
    run_command: str = ""

    # Node kind -> render method.  Database, auth and middleware nodes are
    # annotation-only and produce no output.
    _NODE_HANDLERS: dict[NodeKind, Optional[str]] = {
        NodeKind.MODEL: "render_model",
        NodeKind.SERVICE: "render_service",
        NodeKind.CONTROLLER: "render_controller",
        NodeKind.ROUTE: "render_route",
        NodeKind.DATABASE: None,
        NodeKind.AUTH: None,
        NodeKind.MIDDLEWARE: None,
    }

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.renderer = renderer or TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def emit(self, tree: Directory, graph: Graph | dict[str, Any]) -> None:
        """Write this target's project for *graph* into *tree*."""
        graph = Graph.coerce(graph)
        descriptor = build_descriptor(graph, self.config)
        context = self.build_context(graph)

        # 1. Descriptor, manifest, entrypoint
        tree.add_file("openapi.json", descriptor.to_json())
        self.emit_project_files(tree, graph, context, descriptor)

        # 2-5. One source file per model / service / controller / route
        for node in graph.nodes:
            handler = self._NODE_HANDLERS[node.kind]
            if handler is None:
                continue
            path = self.source_path(node)
            tree.add_file(path, getattr(self, handler)(node, graph))
            logger.debug("%s: %s node %r -> %s", self.target, node.type, node.label, path)

        # 6. Packaging
        self.docker_gen.generate(tree, self.target, context)
        self.renderer.render_into(tree, "README.md.j2", "README.md", context)

    def emit_project_files(
        self,
        tree: Directory,
        graph: Graph,
        context: dict[str, Any],
        descriptor: Descriptor,
    ) -> None:
        """Render the manifest, entrypoint and other graph-level files."""
        self.renderer.render_many(tree, self.project_templates, context)

    # -- Render hooks ------------------------------------------------------

    def render_model(self, node: ModelNode, graph: Graph) -> str:
        raise NotImplementedError

    def render_service(self, node: ServiceNode, graph: Graph) -> str:
        raise NotImplementedError

    def render_controller(self, node: ControllerNode, graph: Graph) -> str:
        raise NotImplementedError

    def render_route(self, node: RouteNode, graph: Graph) -> str:
        raise NotImplementedError

    # -- Dialect helpers ---------------------------------------------------

    def map_type(self, field_type: str) -> str:
        """Native type for *field_type*, falling back to ``any_type``."""
        return self.type_map.get(field_type, self.any_type)

    def source_path(self, node: BaseNode) -> str:
        """Path of *node*'s source file inside the generated project."""
        pattern = self.file_patterns[node.kind]
        relative = pattern.format(stem=naming.file_stem(node.name), name=node.name)
        if self.source_root:
            return f"{self.source_root}/{relative}"
        return relative

    def build_context(self, graph: Graph) -> dict[str, Any]:
        """Build the Jinja2 template context for graph-level files."""
        components = {
            key: [self._component(node) for node in graph.nodes_of(kind)]
            for key, kind in (
                ("models", NodeKind.MODEL),
                ("services", NodeKind.SERVICE),
                ("controllers", NodeKind.CONTROLLER),
                ("routes", NodeKind.ROUTE),
            )
        }
        uses_dates = any(
            field.type == FieldType.DATE.value
            for node in graph.nodes_of(NodeKind.MODEL)
            for field in node.data.fields
        )
        return {
            "target": self.target,
            "display_name": self.display_name,
            "project_name": self.config.project_name,
            "project_slug": naming.slugify(self.config.project_name) or "arachnet-project",
            "api_title": self.config.api_title,
            "api_version": self.config.api_version,
            "api_description": self.config.api_description,
            "docs_path": self.config.docs_path,
            "port": self.config.port,
            "run_command": self.run_command,
            "uses_dates": uses_dates,
            **components,
        }

    def _component(self, node: BaseNode) -> dict[str, Any]:
        return {
            "id": node.id,
            "name": node.name,
            "label": node.label,
            "stem": naming.file_stem(node.name),
            "path": self.source_path(node),
        }

    # -- Graph helpers -----------------------------------------------------

    @staticmethod
    def connected_models(node: BaseNode, graph: Graph) -> list[ModelNode]:
        return graph.neighbors(node, NodeKind.MODEL)

    @staticmethod
    def connected_services(node: BaseNode, graph: Graph) -> list[ServiceNode]:
        return graph.neighbors(node, NodeKind.SERVICE)

    @staticmethod
    def connected_controllers(node: BaseNode, graph: Graph) -> list[ControllerNode]:
        return graph.neighbors(node, NodeKind.CONTROLLER)

    @classmethod
    def controller_bindings(
        cls, node: ControllerNode, graph: Graph
    ) -> list[tuple[ServiceNode, list[ModelNode]]]:
        """Connected services of a controller, each with its connected models."""
        return [
            (service, cls.connected_models(service, graph))
            for service in cls.connected_services(node, graph)
        ]

    @staticmethod
    def endpoint_path(path: str) -> str:
        return normalize_path(path)


def join_lines(lines: list[str]) -> str:
    """Join generated source lines, ending the file with a newline."""
    return "\n".join(lines).rstrip("\n") + "\n"
