"""Pydantic v2 models for the architecture graph.

A graph is the user's description of a backend: typed nodes (models, services,
controllers, routes, ...) and the edges that connect them.  The node payload
shape depends on the node ``type``, so ``Node`` is a discriminated union with
one variant per node kind.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    """Component kinds a graph node can have."""
    MODEL = "model"
    CONTROLLER = "controller"
    SERVICE = "service"
    ROUTE = "route"
    DATABASE = "database"
    AUTH = "auth"
    MIDDLEWARE = "middleware"


class FieldType(str, Enum):
    """Closed vocabulary of model field types.

    Anything outside this set is still accepted on a field and maps to the
    target's most permissive type.
    """
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATE = "Date"
    OBJECT_ID = "ObjectId"


class HTTPMethod(str, Enum):
    """HTTP methods an endpoint can declare."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# ---------------------------------------------------------------------------
# Payload items
# ---------------------------------------------------------------------------

class ModelField(BaseModel):
    """A single field on a model node."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Field identifier")
    type: str = Field(default=FieldType.STRING.value, description="Field type, e.g. 'String'")
    required: bool = Field(default=False, description="Whether the field is required")


class Endpoint(BaseModel):
    """An HTTP endpoint declared on a route node."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Human-readable endpoint label")
    method: HTTPMethod = Field(default=HTTPMethod.GET, description="HTTP method")
    path: str = Field(default="/", description="URL path, with or without a leading slash")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class Rule(BaseModel):
    """A free-text business rule, emitted as a named stub method."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description="Rule name")
    description: str = Field(default="", description="What the rule should do")


# ---------------------------------------------------------------------------
# Node payloads
# ---------------------------------------------------------------------------

class NodeData(BaseModel):
    """Payload shared by every node kind.

    Editor-only keys (``description``, ``config``, ...) are kept but never
    consumed by generation.
    """
    model_config = ConfigDict(extra="allow")

    label: str = Field(default="", description="Component name")


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class ModelData(NodeData):
    fields: list[ModelField] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def _default_fields(cls, value: Any) -> Any:
        return _none_to_list(value)


class LogicData(NodeData):
    """Payload of service and controller nodes."""
    rules: list[Rule] = Field(default_factory=list)

    @field_validator("rules", mode="before")
    @classmethod
    def _default_rules(cls, value: Any) -> Any:
        return _none_to_list(value)


class RouteData(NodeData):
    endpoints: list[Endpoint] = Field(default_factory=list)

    @field_validator("endpoints", mode="before")
    @classmethod
    def _default_endpoints(cls, value: Any) -> Any:
        return _none_to_list(value)


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class BaseNode(BaseModel):
    """Fields common to every node variant."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Opaque id, unique within a graph")
    data: NodeData = Field(default_factory=NodeData)

    # Set by ``Graph`` when another node of the same kind has the same name.
    _unique_name: Optional[str] = PrivateAttr(default=None)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("data", mode="before")
    @classmethod
    def _default_data(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def kind(self) -> NodeKind:
        return NodeKind(self.type)  # type: ignore[attr-defined]

    @property
    def label(self) -> str:
        return self.data.label

    @property
    def name(self) -> str:
        """Identifier-safe component name, unique per kind within a graph.

        See ``base_name``.  When several nodes of one kind share a base name
        (ignoring case), every node after the first gets its id appended.
        """
        if self._unique_name is not None:
            return self._unique_name
        return self.base_name

    @property
    def base_name(self) -> str:
        """The label with every non-identifier character removed.

        Unlabelled nodes fall back to ``<Kind><id>`` so generated identifiers
        are never empty, and names starting with a digit get the kind as a
        prefix.
        """
        kind = self.kind.value.capitalize()
        name = re.sub(r"\W+", "", self.data.label)
        if not name:
            return kind + re.sub(r"\W+", "", self.id)
        if name[0].isdigit():
            return kind + name
        return name


class ModelNode(BaseNode):
    type: Literal["model"] = "model"
    data: ModelData = Field(default_factory=ModelData)


class ServiceNode(BaseNode):
    type: Literal["service"] = "service"
    data: LogicData = Field(default_factory=LogicData)


class ControllerNode(BaseNode):
    type: Literal["controller"] = "controller"
    data: LogicData = Field(default_factory=LogicData)


class RouteNode(BaseNode):
    type: Literal["route"] = "route"
    data: RouteData = Field(default_factory=RouteData)


class DatabaseNode(BaseNode):
    type: Literal["database"] = "database"


class AuthNode(BaseNode):
    type: Literal["auth"] = "auth"


class MiddlewareNode(BaseNode):
    type: Literal["middleware"] = "middleware"


Node = Annotated[
    Union[
        ModelNode,
        ServiceNode,
        ControllerNode,
        RouteNode,
        DatabaseNode,
        AuthNode,
        MiddlewareNode,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Edges & graph
# ---------------------------------------------------------------------------

class Edge(BaseModel):
    """A connection between two nodes.  Direction carries no meaning."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(default=None, description="Edge id")
    source: str = Field(..., description="Source node id")
    target: str = Field(..., description="Target node id")

    @field_validator("id", "source", "target", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            return str(value)
        return value


class Graph(BaseModel):
    """The architecture graph handed to the generators.

    Treated as immutable for the duration of one generation request.
    """
    model_config = ConfigDict(extra="ignore")

    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    @field_validator("nodes", "edges", mode="before")
    @classmethod
    def _default_lists(cls, value: Any) -> Any:
        return _none_to_list(value)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "Graph":
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id!r}")
            seen.add(node.id)
        return self

    @model_validator(mode="after")
    def _unique_component_names(self) -> "Graph":
        # Generated file names are case-insensitive on some platforms.
        taken: dict[str, set[str]] = {}
        for node in self.nodes:
            used = taken.setdefault(node.type, set())
            name = node.base_name
            if name.lower() in used:
                base = name + re.sub(r"\W+", "", node.id)
                name, counter = base, 2
                while name.lower() in used:
                    name = f"{base}{counter}"
                    counter += 1
            used.add(name.lower())
            node._unique_name = name
        return self

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Graph":
        """Validate a raw ``{"nodes": [...], "edges": [...]}`` payload."""
        return cls.model_validate(payload)

    @classmethod
    def coerce(cls, graph: "Graph | dict[str, Any]") -> "Graph":
        """Return *graph* unchanged if it is already a ``Graph``, else validate it."""
        if isinstance(graph, Graph):
            return graph
        return cls.from_payload(graph)

    # -- Queries -----------------------------------------------------------

    def node(self, node_id: str) -> Optional[BaseNode]:
        """Return the node with *node_id*, or ``None``."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of(self, kind: NodeKind | str) -> list[BaseNode]:
        """Return every node of *kind*, in graph order."""
        kind = NodeKind(kind)
        return [n for n in self.nodes if n.type == kind.value]

    def neighbors(
        self, node: BaseNode | str, kind: NodeKind | str | None = None
    ) -> list[BaseNode]:
        """Nodes connected to *node* by any edge, optionally filtered by *kind*."""
        from .resolver import neighbors

        node_id = node if isinstance(node, str) else node.id
        return neighbors(node_id, self.edges, self.nodes, kind)
