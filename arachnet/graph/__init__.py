"""Architecture graph model and connectivity resolution.

Usage::

    from arachnet.graph import Graph, NodeKind

    graph = Graph.from_payload({"nodes": [...], "edges": [...]})
    for service in graph.nodes_of(NodeKind.SERVICE):
        models = graph.neighbors(service, NodeKind.MODEL)
"""

from arachnet.graph.models import (
    AuthNode,
    BaseNode,
    ControllerNode,
    DatabaseNode,
    Edge,
    Endpoint,
    FieldType,
    Graph,
    HTTPMethod,
    MiddlewareNode,
    ModelField,
    ModelNode,
    Node,
    NodeKind,
    RouteNode,
    Rule,
    ServiceNode,
)
from arachnet.graph.resolver import neighbors

__all__ = [
    "AuthNode",
    "BaseNode",
    "ControllerNode",
    "DatabaseNode",
    "Edge",
    "Endpoint",
    "FieldType",
    "Graph",
    "HTTPMethod",
    "MiddlewareNode",
    "ModelField",
    "ModelNode",
    "Node",
    "NodeKind",
    "RouteNode",
    "Rule",
    "ServiceNode",
    "neighbors",
]
