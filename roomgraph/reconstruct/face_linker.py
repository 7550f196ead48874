from __future__ import annotations

from loguru import logger

from roomgraph.geometry.contract import UNRESOLVED
from roomgraph.reconstruct.halfedge import HalfEdge, HalfEdgeGraph


def resolve_next(graph: HalfEdgeGraph, edge: HalfEdge) -> int:
    """Return the half-edge that follows ``edge`` along its face, or ``UNRESOLVED``.

    Standing at the destination node, the twin of ``edge`` is the reference
    direction; the successor is the outgoing edge just before it in
    counter-clockwise order. The walk keeps its face on the left, so bounded
    faces come out counter-clockwise.
    """
    if edge.dest < 0 or edge.dest >= len(graph.nodes):
        return UNRESOLVED

    out = graph.nodes[edge.dest].out_edges
    if not out:
        return UNRESOLVED

    try:
        pos = out.index(edge.twin)
    except ValueError:
        return UNRESOLVED

    return out[(pos - 1) % len(out)]


def link_faces(graph: HalfEdgeGraph) -> int:
    """Resolve ``next`` for every half-edge; returns how many stayed unresolved."""
    unresolved = 0
    for edge in graph.edges:
        edge.next = resolve_next(graph, edge)
        if edge.next == UNRESOLVED:
            unresolved += 1
            logger.debug("Half-edge {eid} has no face successor", eid=edge.id)
    return unresolved
