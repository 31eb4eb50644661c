"""Interface descriptor (OpenAPI document) builder.

Derives one language-neutral API description from the graph: a schema per
model node and an operation per route endpoint.  The document is shallow on
purpose.  Rules are free text, so no parameters, request bodies or security
schemes are derived.

The same descriptor is written into every generated project as
``openapi.json`` and can be served on its own for interactive docs.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field

from .config import GeneratorConfig
from .graph.models import FieldType, Graph, ModelNode, NodeKind, RouteNode

logger = logging.getLogger(__name__)


_SCHEMA_TYPE_MAP: dict[str, str] = {
    FieldType.NUMBER.value: "number",
    FieldType.BOOLEAN.value: "boolean",
}


class DescriptorInfo(BaseModel):
    """Document metadata (the ``info`` object)."""
    title: str
    version: str
    description: str = ""


class Descriptor(BaseModel):
    """The canonical API description derived from a graph."""
    openapi: str = Field(default="3.0.0")
    info: DescriptorInfo
    paths: dict[str, dict[str, dict[str, Any]]] = Field(default_factory=dict)
    schemas: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def as_document(self) -> dict[str, Any]:
        """Return the descriptor in its fixed top-level document shape."""
        return {
            "openapi": self.openapi,
            "info": self.info.model_dump(),
            "paths": self.paths,
            "components": {"schemas": self.schemas},
        }

    def to_json(self) -> str:
        """Pretty-print the document as JSON."""
        return json.dumps(self.as_document(), indent=2, ensure_ascii=False)


def normalize_path(path: str) -> str:
    """Prefix *path* with ``/`` unless it already starts with one."""
    return path if path.startswith("/") else f"/{path}"


def schema_type(field_type: str) -> str:
    """Map a model field type to its OpenAPI scalar type."""
    return _SCHEMA_TYPE_MAP.get(field_type, "string")


def build_descriptor(
    graph: Graph | dict[str, Any],
    config: GeneratorConfig | None = None,
) -> Descriptor:
    """Build the interface descriptor for *graph*.

    Nodes are processed in graph order.  When two endpoints share the same
    path and method, the one processed last wins.

    Args:
        graph: A validated ``Graph`` or a raw graph payload.
        config: Supplies the document metadata.  Defaults are used when
            omitted.

    Returns:
        A ``Descriptor``.  Equal graphs always produce equal descriptors.
    """
    graph = Graph.coerce(graph)
    config = config or GeneratorConfig()

    descriptor = Descriptor(
        openapi=config.openapi_version,
        info=DescriptorInfo(
            title=config.api_title,
            version=config.api_version,
            description=config.api_description,
        ),
    )

    for node in graph.nodes:
        if node.type == NodeKind.MODEL.value:
            descriptor.schemas[node.data.label] = _model_schema(node)
        elif node.type == NodeKind.ROUTE.value:
            _add_route_operations(descriptor, node)

    logger.debug(
        "Built descriptor with %d schema(s) and %d path(s)",
        len(descriptor.schemas),
        len(descriptor.paths),
    )
    return descriptor


def _model_schema(node: ModelNode) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    for field in node.data.fields:
        properties[field.name] = {"type": schema_type(field.type)}
        if field.required:
            required.append(field.name)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    # An empty ``required`` list is omitted rather than emitted as [].
    if required:
        schema["required"] = required
    return schema


def _add_route_operations(descriptor: Descriptor, node: RouteNode) -> None:
    for endpoint in node.data.endpoints:
        path = normalize_path(endpoint.path)
        operations = descriptor.paths.setdefault(path, {})
        operations[endpoint.method.value.lower()] = _placeholder_operation(endpoint.name)


def _placeholder_operation(summary: str) -> dict[str, Any]:
    return {
        "summary": summary,
        "responses": {
            "200": {
                "description": "Successful response",
                "content": {
                    "application/json": {
                        "schema": {
                            "type": "object",
                            "properties": {"message": {"type": "string"}},
                        }
                    }
                },
            }
        },
    }
