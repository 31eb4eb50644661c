"""Connectivity resolution over the architecture graph.

Edges are treated as undirected: a node is a neighbor of another when any
edge names both of them, whichever side was recorded as ``source``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import BaseNode, Edge, NodeKind


def neighbors(
    node_id: str,
    edges: Iterable[Edge],
    nodes: Sequence[BaseNode],
    kind: NodeKind | str | None = None,
) -> list[BaseNode]:
    """Return the nodes connected to *node_id*.

    Args:
        node_id: Id of the node whose neighbors are wanted.
        edges: Edge set to search.  Dangling edges (ids with no matching
            node) are tolerated and simply produce no match.
        nodes: Node sequence.  The result follows this order, not the
            order in which edges were recorded.
        kind: Optional node kind to filter the result by.

    Returns:
        Neighboring nodes, each at most once.
    """
    connected: set[str] = set()
    for edge in edges:
        if edge.source == node_id:
            connected.add(edge.target)
        elif edge.target == node_id:
            connected.add(edge.source)

    wanted = NodeKind(kind).value if kind is not None else None
    return [
        node
        for node in nodes
        if node.id in connected and (wanted is None or node.type == wanted)
    ]
