from __future__ import annotations

from roomgraph.reconstruct.halfedge import HalfEdgeGraph


def sort_outgoing_by_angle(graph: HalfEdgeGraph) -> None:
    """Order each node's outgoing half-edges counter-clockwise by direction.

    Exactly equal angles (overlapping collinear segments) are ordered by
    half-edge identity, i.e. by segment input order.
    """
    edges = graph.edges
    for node in graph.nodes:
        if len(node.out_edges) <= 1:
            continue
        node.out_edges.sort(key=lambda eid: (edges[eid].angle, eid))
