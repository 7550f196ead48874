"""Room reconstruction from unordered wall segments.

``RoomGraph`` snaps segment endpoints onto shared nodes, stores every segment
as two opposite half-edges, orders the half-edges around each node by angle,
links each half-edge to its successor along the face it borders and finally
walks those links. Every closed counter-clockwise walk with non-trivial area is
a room.

Malformed input is excluded rather than reported: degenerate segments, dangling
walls and zero-area loops simply do not produce rooms. ``RoomGraph.metrics``
counts what was excluded.
"""

from __future__ import annotations

import math
import time
from dataclasses import replace
from enum import Enum
from typing import Iterable, Tuple

from loguru import logger

from roomgraph.exceptions import ConfigurationError
from roomgraph.geometry.contract import AREA_EPSILON, DEFAULT_SNAP_SIZE
from roomgraph.geometry.primitives import Segment
from roomgraph.metrics.build_metrics import BuildMetrics
from roomgraph.reconstruct.angular_sort import sort_outgoing_by_angle
from roomgraph.reconstruct.cycle_walker import Room, walk_cycles
from roomgraph.reconstruct.face_linker import link_faces
from roomgraph.reconstruct.graph_builder import build_nodes_and_edges
from roomgraph.reconstruct.halfedge import HalfEdge, HalfEdgeGraph, Node
from roomgraph.reconstruct.spatial_index import SpatialIndex


class GraphState(str, Enum):
    EMPTY = "empty"
    BUILT = "built"
    LINKED = "linked"
    WALKED = "walked"


class RoomGraph:
    """Half-edge graph over a set of segments and the rooms it encloses.

    An instance is not thread-safe; independent instances share nothing.
    """

    def __init__(
        self,
        snap_size: float = DEFAULT_SNAP_SIZE,
        area_epsilon: float = AREA_EPSILON,
    ) -> None:
        self._snap_size = _positive("snap_size", snap_size)
        self._area_epsilon = _positive("area_epsilon", area_epsilon)
        self._index = SpatialIndex(self._snap_size)
        self._graph = HalfEdgeGraph()
        self._rooms: Tuple[Room, ...] = ()
        self._metrics = BuildMetrics()
        self._state = GraphState.EMPTY

    @property
    def snap_size(self) -> float:
        return self._snap_size

    @property
    def area_epsilon(self) -> float:
        return self._area_epsilon

    @property
    def state(self) -> GraphState:
        return self._state

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """Detached copies of the node records; editing them leaves the graph intact."""
        return tuple(replace(node, out_edges=list(node.out_edges)) for node in self._graph.nodes)

    @property
    def edges(self) -> Tuple[HalfEdge, ...]:
        """Detached copies of the half-edge records."""
        return tuple(replace(edge) for edge in self._graph.edges)

    @property
    def rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    @property
    def metrics(self) -> BuildMetrics:
        return self._metrics

    def get_rooms(self) -> Tuple[Room, ...]:
        return self._rooms

    def clear(self) -> None:
        self._graph.clear()
        self._index.clear()
        self._rooms = ()
        self._metrics = BuildMetrics()
        self._state = GraphState.EMPTY

    def build(self, segments: Iterable[Segment]) -> None:
        """Rebuild the graph from ``segments`` and extract its rooms.

        Prior nodes, edges and rooms are discarded first.
        """
        self.clear()
        segments = list(segments)
        if not segments:
            return

        metrics = self._metrics
        started = time.perf_counter()

        build_nodes_and_edges(segments, self._graph, self._index, metrics)
        self._state = GraphState.BUILT
        graph_done = time.perf_counter()

        sort_outgoing_by_angle(self._graph)
        metrics.unlinked_half_edges = link_faces(self._graph)
        self._state = GraphState.LINKED
        linking_done = time.perf_counter()

        self._rooms = tuple(walk_cycles(self._graph, self._area_epsilon, metrics))
        self._state = GraphState.WALKED
        finished = time.perf_counter()

        metrics.time_graph = graph_done - started
        metrics.time_linking = linking_done - graph_done
        metrics.time_walk = finished - linking_done
        metrics.time_total = finished - started

        if metrics.segments_dropped:
            metrics.add_warning(f"{metrics.segments_dropped} segment(s) dropped")
        if metrics.unlinked_half_edges:
            metrics.add_warning(f"{metrics.unlinked_half_edges} half-edge(s) without face successor")

        logger.debug(
            "Room graph built: {segments} segments, {nodes} nodes, {edges} half-edges, {rooms} rooms",
            segments=metrics.segments_total,
            nodes=metrics.nodes,
            edges=metrics.half_edges,
            rooms=metrics.rooms,
        )


def find_rooms(
    segments: Iterable[Segment],
    *,
    snap_size: float = DEFAULT_SNAP_SIZE,
    area_epsilon: float = AREA_EPSILON,
) -> Tuple[Room, ...]:
    """Build a throwaway graph over ``segments`` and return its rooms."""
    graph = RoomGraph(snap_size=snap_size, area_epsilon=area_epsilon)
    graph.build(segments)
    return graph.rooms


def _positive(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number", {name: repr(value)}) from exc
    if not math.isfinite(number) or number <= 0.0:
        raise ConfigurationError(f"{name} must be a positive finite number", {name: repr(value)})
    return number
