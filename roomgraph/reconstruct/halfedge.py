"""Arena records for the half-edge graph.

Nodes and half-edges reference each other by integer identity only; an
identity is the record's index in its container.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from roomgraph.geometry.contract import UNRESOLVED
from roomgraph.geometry.primitives import Point


@dataclass
class Node:
    id: int
    pos: Point
    out_edges: List[int] = field(default_factory=list)


@dataclass
class HalfEdge:
    """Directed edge origin -> dest; each segment yields two opposite twins."""
    id: int
    origin: int
    dest: int
    angle: float  # direction at the origin node, in (-pi, pi]
    twin: int = UNRESOLVED
    next: int = UNRESOLVED
    used: bool = False


@dataclass
class HalfEdgeGraph:
    nodes: List[Node] = field(default_factory=list)
    edges: List[HalfEdge] = field(default_factory=list)

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()

    def twin_of(self, edge: HalfEdge) -> HalfEdge:
        return self.edges[edge.twin]

    def position(self, node_id: int) -> Point:
        return self.nodes[node_id].pos
