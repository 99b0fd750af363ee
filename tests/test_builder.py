import random

import pytest
from PySide6 import QtCore

from mesh2d import BuilderState, IllegalStateError, IncrementalBuilder, MeshGraph

P = QtCore.QPointF


def place_all(builder, points):
    for x, y in points:
        builder.place_or_grab(P(x, y))


def test_new_builder_is_idle() -> None:
    b = IncrementalBuilder()
    assert b.state is BuilderState.IDLE
    assert not b.dragging
    assert b.graph.vertex_count == 0


def test_builder_uses_given_graph() -> None:
    g = MeshGraph()
    b = IncrementalBuilder(g)
    assert b.graph is g


def test_first_two_vertices_make_no_triangle(builder) -> None:
    place_all(builder, [(0, 0), (1, 0)])
    assert builder.graph.vertex_count == 2
    assert builder.graph.triangle_count == 0


def test_scenario_a_third_vertex_makes_triangle(triangle_builder) -> None:
    assert triangle_builder.graph.triangles() == [(0, 1, 2)]


def test_scenario_b_nearest_pair_shares_triangle(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(0.5, -1))
    assert triangle_builder.graph.triangles() == [(0, 1, 2), (0, 1, 3)]


def test_scenario_c_grab_does_not_mutate(triangle_builder) -> None:
    g = triangle_builder.graph
    before = (g.vertex_count, g.triangle_count)
    assert triangle_builder.place_or_grab(P(1.1, 0.1)) == 1
    assert triangle_builder.dragging
    assert triangle_builder.dragged_index == 1
    assert (g.vertex_count, g.triangle_count) == before


def test_scenario_d_delete_last(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(0.5, -1))
    assert triangle_builder.delete_last() == 3
    g = triangle_builder.graph
    assert g.vertex_count == 3
    assert g.triangles() == [(0, 1, 2)]


def builder_from(points, tris) -> IncrementalBuilder:
    g = MeshGraph()
    for x, y in points:
        g.add_vertex(P(x, y))
    for t in tris:
        g.add_triangle(*t)

    b = IncrementalBuilder()
    b.load(g.to_flat_buffers())
    b.reopen()
    return b


def test_bridge_vertex_makes_two_triangles() -> None:
    # two triangles meeting only at vertex 2
    b = builder_from(
        [(-1, 1), (-2, 0), (0, 0), (2, 0), (1, 1)],
        [(0, 1, 2), (2, 3, 4)],
    )
    # nearest are 0 and 4, which only connect through vertex 2
    assert b.place_or_grab(P(0, 2)) == 5
    assert b.graph.triangles()[2:] == [(0, 2, 5), (4, 2, 5)]


def test_no_bridge_falls_back_to_single_triangle() -> None:
    b = builder_from(
        [(0, 0), (1, 0), (0, 1), (10, 0), (11, 0), (10, 1)],
        [(0, 1, 2), (3, 4, 5)],
    )
    # nearest are 1 (left cluster) and 3 (right cluster), nothing shared
    b.place_or_grab(P(5.5, 0))
    assert b.graph.triangles()[2:] == [(1, 3, 6)]


def test_duplicate_coordinates_use_index_identity(builder) -> None:
    place_all(builder, [(0, 0), (1, 0), (0, 1)])
    # drag vertex 2 onto vertex 0, then delete it: only triangles using
    # index 2 may disappear
    builder.place_or_grab(P(0, 1))
    builder.drag_to(P(0, 0))
    builder.release_drag()
    builder.delete_last()
    assert builder.graph.vertex_count == 2
    assert builder.graph.vertex(0) == P(0, 0)


def test_drag_moves_grabbed_vertex(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(1, 0))
    triangle_builder.drag_to(P(2, 0.5))
    assert triangle_builder.graph.vertex(1) == P(2, 0.5)
    assert triangle_builder.graph.triangles() == [(0, 1, 2)]


def test_drag_without_grab_raises(triangle_builder) -> None:
    with pytest.raises(IllegalStateError):
        triangle_builder.drag_to(P(2, 2))
    assert triangle_builder.graph.vertex(1) == P(1, 0)


def test_release_drag_twice_is_noop(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(0, 0))
    triangle_builder.release_drag()
    triangle_builder.release_drag()
    assert not triangle_builder.dragging
    assert triangle_builder.state is BuilderState.BUILDING


def test_delete_last_on_empty_raises(builder) -> None:
    with pytest.raises(IllegalStateError):
        builder.delete_last()


def test_delete_last_ends_drag_of_removed_vertex(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(0, 1))
    assert triangle_builder.dragged_index == 2
    triangle_builder.delete_last()
    assert not triangle_builder.dragging


def test_delete_back_to_empty(triangle_builder) -> None:
    for _ in range(3):
        triangle_builder.delete_last()
    assert triangle_builder.graph.vertex_count == 0
    assert triangle_builder.graph.triangle_count == 0


@pytest.mark.parametrize("op, args", [
    ("place_or_grab", (P(0, 0),)),
    ("drag_to", (P(0, 0),)),
    ("release_drag", ()),
    ("delete_last", ()),
    ("finish", ()),
    ("reopen", ()),
    ("export", ()),
])
def test_idle_rejects_operations(op, args) -> None:
    b = IncrementalBuilder()
    with pytest.raises(IllegalStateError):
        getattr(b, op)(*args)
    assert b.state is BuilderState.IDLE
    assert b.graph.vertex_count == 0


def test_finished_rejects_editing(triangle_builder) -> None:
    triangle_builder.finish()
    for call in (lambda: triangle_builder.place_or_grab(P(3, 3)),
                 lambda: triangle_builder.drag_to(P(3, 3)),
                 triangle_builder.release_drag,
                 triangle_builder.delete_last,
                 triangle_builder.finish):
        with pytest.raises(IllegalStateError):
            call()
    assert triangle_builder.graph.vertex_count == 3


def test_building_rejects_start_and_reopen(builder) -> None:
    with pytest.raises(IllegalStateError):
        builder.start()
    with pytest.raises(IllegalStateError):
        builder.reopen()


def test_finish_reopen_keeps_mesh(triangle_builder) -> None:
    triangle_builder.place_or_grab(P(0, 0))
    triangle_builder.finish()
    assert triangle_builder.state is BuilderState.FINISHED
    assert not triangle_builder.dragging
    triangle_builder.reopen()
    assert triangle_builder.state is BuilderState.BUILDING
    assert triangle_builder.graph.triangles() == [(0, 1, 2)]


def test_start_from_finished_clears(triangle_builder) -> None:
    triangle_builder.finish()
    triangle_builder.start()
    assert triangle_builder.state is BuilderState.BUILDING
    assert triangle_builder.graph.vertex_count == 0


def test_clear_and_reset(triangle_builder) -> None:
    triangle_builder.clear()
    assert triangle_builder.state is BuilderState.BUILDING
    assert triangle_builder.graph.vertex_count == 0

    triangle_builder.place_or_grab(P(0, 0))
    triangle_builder.reset()
    assert triangle_builder.state is BuilderState.IDLE
    assert triangle_builder.graph.vertex_count == 0


def test_state_changed_signal() -> None:
    b = IncrementalBuilder()
    seen = []
    b.stateChanged.connect(seen.append)
    b.start()
    b.finish()
    b.reopen()
    b.reset()
    assert seen == [BuilderState.BUILDING, BuilderState.FINISHED,
                    BuilderState.BUILDING, BuilderState.IDLE]


def test_custom_pick_radius() -> None:
    b = IncrementalBuilder(pick_radius=0.05)
    b.start()
    b.place_or_grab(P(0, 0))
    b.place_or_grab(P(0.1, 0))
    assert b.graph.vertex_count == 2
    assert not b.dragging


def test_preview_targets(builder) -> None:
    assert builder.preview_targets(P(0, 0)) == []
    builder.place_or_grab(P(0, 0))
    assert builder.preview_targets(P(5, 5)) == [0]
    place_all(builder, [(1, 0), (0, 1)])
    assert builder.preview_targets(P(0.9, 0.1)) == [1, 0]


def test_random_sessions_keep_triangles_valid() -> None:
    rng = random.Random(12345)
    b = IncrementalBuilder()
    b.start()
    g = b.graph

    for _ in range(400):
        roll = rng.random()
        pt = P(rng.uniform(-3, 3), rng.uniform(-3, 3))
        if roll < 0.6:
            b.place_or_grab(pt)
        elif roll < 0.75 and b.dragging:
            b.drag_to(pt)
        elif roll < 0.85:
            b.release_drag()
        elif g.vertex_count:
            last = g.vertex_count - 1
            count = g.vertex_count
            b.delete_last()
            assert g.vertex_count == count - 1
            assert all(last not in t for t in g.triangles())

        assert g.is_valid()
        n = g.vertex_count
        for t in g.triangles():
            assert len(set(t)) == 3
            assert all(0 <= v < n for v in t)
