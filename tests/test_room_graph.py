from __future__ import annotations

import random
import threading

import pytest

from roomgraph import GraphState, Point, RoomGraph, find_rooms
from roomgraph.exceptions import ConfigurationError
from roomgraph.geometry.primitives import Segment

from tests.utils_segments import rectangle, seg, shoelace, two_rooms_sharing_wall, unit_grid


def _centers(rooms) -> list[tuple[float, float]]:
    return sorted((round(r.center.x, 6), round(r.center.y, 6)) for r in rooms)


def test_single_rectangle_yields_one_room() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 4, 3))

    rooms = graph.get_rooms()
    assert len(rooms) == 1
    room = rooms[0]
    assert len(room.polygon) == 4
    assert room.area == pytest.approx(12.0)
    assert room.center.x == pytest.approx(2.0)
    assert room.center.y == pytest.approx(1.5)
    assert graph.state is GraphState.WALKED


def test_two_rooms_sharing_a_wall() -> None:
    graph = RoomGraph()
    graph.build(two_rooms_sharing_wall())

    rooms = sorted(graph.rooms, key=lambda r: r.center.x)
    assert len(rooms) == 2
    assert [r.area for r in rooms] == pytest.approx([1.0, 1.0])
    assert (rooms[0].center.x, rooms[0].center.y) == pytest.approx((0.5, 0.5))
    assert (rooms[1].center.x, rooms[1].center.y) == pytest.approx((1.5, 0.5))


def test_dangling_segment_adds_no_room() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 2, 2) + [seg(2, 2, 3, 3)])

    assert len(graph.rooms) == 1
    assert graph.rooms[0].area == pytest.approx(4.0)
    assert graph.metrics.dead_end_nodes == 1


def test_empty_input_gives_empty_graph() -> None:
    graph = RoomGraph()
    graph.build([])

    assert graph.nodes == ()
    assert graph.edges == ()
    assert graph.rooms == ()
    assert graph.state is GraphState.EMPTY
    assert graph.metrics.segments_total == 0


def test_every_room_is_counter_clockwise() -> None:
    segments = unit_grid(3) + [seg(3, 3, 5, 4), seg(0, 0, 0.0001, 0.0001)]
    graph = RoomGraph()
    graph.build(segments)

    assert len(graph.rooms) == 9
    for room in graph.rooms:
        assert shoelace(room.polygon) > 0.0
        assert room.area == pytest.approx(1.0)


def test_twin_symmetry_holds_after_build() -> None:
    graph = RoomGraph()
    graph.build(unit_grid(2))

    edges = graph.edges
    for edge in edges:
        twin = edges[edge.twin]
        assert edges[twin.twin].id == edge.id
        assert edge.origin == twin.dest


def test_nearby_endpoints_merge_into_one_node() -> None:
    graph = RoomGraph(snap_size=1e-3)
    graph.build(
        [
            seg(0, 0, 1, 0),
            seg(1.0003, -0.0002, 1, 1),
            seg(1, 1, 0, 1),
            seg(0.0001, 0.9998, 0, 0),
        ]
    )

    assert len(graph.nodes) == 4
    assert len(graph.rooms) == 1
    assert graph.rooms[0].area == pytest.approx(1.0, abs=1e-3)


def test_degenerate_segment_is_excluded() -> None:
    graph = RoomGraph()
    graph.build([seg(5, 5, 5.0002, 5.0001)])

    assert graph.edges == ()
    assert graph.rooms == ()
    assert graph.metrics.segments_degenerate == 1
    assert graph.metrics.segments_dropped == 1


def test_overflowing_coordinate_is_dropped_not_fatal() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 1, 1) + [seg(0, 0, 1e306, 0)])

    assert len(graph.rooms) == 1
    assert graph.state is GraphState.WALKED
    assert graph.metrics.segments_non_finite == 1
    assert len(graph.nodes) == 4


def test_rebuild_replaces_previous_results() -> None:
    segments = two_rooms_sharing_wall()
    graph = RoomGraph()

    graph.build(segments)
    first = (len(graph.nodes), len(graph.edges), sorted(r.area for r in graph.rooms))
    graph.build(segments)
    second = (len(graph.nodes), len(graph.edges), sorted(r.area for r in graph.rooms))

    assert first == second

    graph.build(rectangle(10, 10, 13, 12))
    assert len(graph.rooms) == 1
    assert graph.rooms[0].area == pytest.approx(6.0)


def test_input_order_and_direction_do_not_matter() -> None:
    segments = unit_grid(3)
    shuffled = [Segment(s.b, s.a) for s in segments]
    random.Random(7).shuffle(shuffled)

    assert _centers(find_rooms(segments)) == _centers(find_rooms(shuffled))


def test_room_vertices_are_node_positions() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 1, 1))

    positions = {node.pos for node in graph.nodes}
    assert set(graph.rooms[0].polygon) <= positions
    assert Point(0.0, 0.0) in graph.rooms[0].polygon


def test_nested_rectangles_yield_both_rooms() -> None:
    rooms = find_rooms(rectangle(0, 0, 10, 10) + rectangle(4, 4, 6, 6))

    # The walk does not subtract holes: the outer room keeps its full area.
    assert sorted(r.area for r in rooms) == pytest.approx([4.0, 100.0])


def test_accepts_generators() -> None:
    graph = RoomGraph()
    graph.build(s for s in rectangle(0, 0, 1, 2))
    assert len(graph.rooms) == 1


def test_node_and_edge_views_are_detached() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 1, 1))

    graph.nodes[0].out_edges.clear()
    graph.edges[0].next = -1
    graph.edges[0].used = False

    assert len(graph.nodes[0].out_edges) == 2
    assert graph.edges[0].next != -1
    assert graph.edges[0].used


@pytest.mark.parametrize("value", [0.0, -1.0, float("nan"), float("inf"), "abc"])
def test_invalid_snap_size_rejected(value) -> None:
    with pytest.raises(ConfigurationError):
        RoomGraph(snap_size=value)


def test_parameters_are_read_only() -> None:
    graph = RoomGraph(snap_size=0.01, area_epsilon=1e-4)
    assert graph.snap_size == 0.01
    assert graph.area_epsilon == 1e-4
    with pytest.raises(AttributeError):
        graph.snap_size = 1.0  # type: ignore[misc]


def test_clear_resets_state() -> None:
    graph = RoomGraph()
    graph.build(rectangle(0, 0, 1, 1))
    graph.clear()

    assert graph.state is GraphState.EMPTY
    assert graph.nodes == () and graph.edges == () and graph.rooms == ()


def test_independent_instances_run_in_parallel_threads() -> None:
    results: dict[int, int] = {}

    def worker(n: int) -> None:
        graph = RoomGraph()
        graph.build(unit_grid(n))
        results[n] = len(graph.rooms)

    threads = [threading.Thread(target=worker, args=(n,)) for n in (1, 2, 3, 4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == {1: 1, 2: 4, 3: 9, 4: 16}


def test_metrics_account_for_all_closed_cycles() -> None:
    graph = RoomGraph()
    graph.build(unit_grid(2) + [seg(2, 2, 3, 2)])
    m = graph.metrics

    assert m.cycles_closed == m.rooms + m.cycles_too_small + m.cycles_degenerate + m.cycles_clockwise
    assert m.segments_total == m.segments_accepted + m.segments_dropped
    assert m.cycles_open == 0
    assert m.to_dict()["cycles"]["rooms"] == 4
    assert m.get_summary()["rooms"] == 4
