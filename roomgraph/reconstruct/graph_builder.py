from __future__ import annotations

import math
from typing import Iterable

from loguru import logger

from roomgraph.geometry.primitives import Segment
from roomgraph.metrics.build_metrics import BuildMetrics
from roomgraph.reconstruct.halfedge import HalfEdge, HalfEdgeGraph
from roomgraph.reconstruct.spatial_index import SpatialIndex


def build_nodes_and_edges(
    segments: Iterable[Segment],
    graph: HalfEdgeGraph,
    index: SpatialIndex,
    metrics: BuildMetrics | None = None,
) -> None:
    """Convert raw segments into nodes and paired half-edges.

    Endpoints are merged through ``index``. A segment whose endpoints land on
    the same node is dropped, as is one with a non-finite coordinate or a
    coordinate too large to quantize on the snap grid.
    """
    if metrics is None:
        metrics = BuildMetrics()

    for seg_index, seg in enumerate(segments):
        metrics.segments_total += 1

        if not seg.is_finite():
            metrics.segments_non_finite += 1
            logger.warning("Skipping segment #{idx} with non-finite coordinates", idx=seg_index)
            continue
        if not _fits_grid(seg, index.snap_size):
            metrics.segments_non_finite += 1
            logger.warning("Skipping segment #{idx} outside the snap grid range", idx=seg_index)
            continue

        a = index.find_or_create(seg.a, graph.nodes)
        b = index.find_or_create(seg.b, graph.nodes)
        if a == b:
            metrics.segments_degenerate += 1
            logger.debug("Skipping degenerate segment #{idx} collapsing onto node {node}", idx=seg_index, node=a)
            continue

        _add_edge_pair(graph, a, b)
        metrics.segments_accepted += 1

    metrics.nodes = len(graph.nodes)
    metrics.half_edges = len(graph.edges)
    metrics.dead_end_nodes = sum(1 for node in graph.nodes if len(node.out_edges) == 1)


def _add_edge_pair(graph: HalfEdgeGraph, a: int, b: int) -> None:
    pa = graph.nodes[a].pos
    pb = graph.nodes[b].pos

    forward_id = len(graph.edges)
    backward_id = forward_id + 1

    # Angles come from the resolved node positions so every edge leaving a
    # node is measured from the same point.
    forward = HalfEdge(
        id=forward_id,
        origin=a,
        dest=b,
        angle=_direction(pb.x - pa.x, pb.y - pa.y),
        twin=backward_id,
    )
    backward = HalfEdge(
        id=backward_id,
        origin=b,
        dest=a,
        angle=_direction(pa.x - pb.x, pa.y - pb.y),
        twin=forward_id,
    )

    graph.edges.append(forward)
    graph.edges.append(backward)
    graph.nodes[a].out_edges.append(forward_id)
    graph.nodes[b].out_edges.append(backward_id)


def _direction(dx: float, dy: float) -> float:
    angle = math.atan2(dy, dx)
    # atan2(-0.0, x<0) gives -pi; keep the range half-open at -pi
    if angle == -math.pi:
        return math.pi
    return angle


def _fits_grid(seg: Segment, snap_size: float) -> bool:
    # v / s overflows to inf for huge coordinates and the grid key cannot be floored
    return all(math.isfinite(v / snap_size + 0.5) for v in (seg.a.x, seg.a.y, seg.b.x, seg.b.y))
