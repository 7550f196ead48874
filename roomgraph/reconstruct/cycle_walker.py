from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from loguru import logger
from shapely.geometry import Polygon

from roomgraph.geometry.contract import AREA_EPSILON, MIN_ROOM_VERTICES, UNRESOLVED
from roomgraph.geometry.primitives import Point
from roomgraph.metrics.build_metrics import BuildMetrics
from roomgraph.metrics.polygon import centroid, signed_area
from roomgraph.reconstruct.halfedge import HalfEdgeGraph


@dataclass(frozen=True)
class Room:
    """Closed counter-clockwise polygon bounded by input segments."""
    polygon: Tuple[Point, ...]
    center: Point
    area: float

    def to_polygon(self) -> Polygon:
        return Polygon([p.to_tuple() for p in self.polygon])


@dataclass(frozen=True)
class TracedCycle:
    start_edge: int
    edge_ids: Tuple[int, ...]
    vertices: Tuple[Point, ...]
    closed: bool


def iter_cycles(graph: HalfEdgeGraph) -> Iterator[TracedCycle]:
    """Lazily trace face boundaries by following ``next`` links.

    Every half-edge is consumed by at most one walk. A walk ends when it comes
    back to its start edge (closed), reaches an already consumed edge, or hits
    an unresolved link (both open). The generator is single pass: consumed
    flags persist on the graph until it is rebuilt.
    """
    edges = graph.edges
    for start in edges:
        if start.used:
            continue

        edge_ids: List[int] = []
        vertices: List[Point] = []
        closed = False
        current = start.id

        while True:
            edge = edges[current]
            if edge.used:
                break
            edge.used = True
            edge_ids.append(edge.id)
            vertices.append(graph.position(edge.origin))

            if edge.next == UNRESOLVED:
                break
            if edge.next == start.id:
                closed = True
                break
            current = edge.next

        yield TracedCycle(
            start_edge=start.id,
            edge_ids=tuple(edge_ids),
            vertices=tuple(vertices),
            closed=closed,
        )


def walk_cycles(
    graph: HalfEdgeGraph,
    area_epsilon: float = AREA_EPSILON,
    metrics: BuildMetrics | None = None,
) -> List[Room]:
    """Turn closed counter-clockwise cycles into rooms.

    The clockwise twin trace of each bounded face (and the trace of the outer
    face) has negative signed area and is dropped, so each enclosed region
    yields one room.
    """
    if metrics is None:
        metrics = BuildMetrics()

    rooms: List[Room] = []
    for cycle in iter_cycles(graph):
        metrics.cycles_traced += 1
        if not cycle.closed:
            metrics.cycles_open += 1
            logger.debug("Discarding open walk from half-edge {eid}", eid=cycle.start_edge)
            continue
        metrics.cycles_closed += 1

        poly = cycle.vertices
        if len(poly) < MIN_ROOM_VERTICES:
            metrics.cycles_too_small += 1
            continue

        area = signed_area(poly)
        if abs(area) <= area_epsilon:
            metrics.cycles_degenerate += 1
            continue
        if area <= 0.0:
            metrics.cycles_clockwise += 1
            continue

        rooms.append(Room(polygon=poly, center=centroid(poly, area), area=abs(area)))

    metrics.rooms = len(rooms)
    return rooms
