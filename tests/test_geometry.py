import pytest

from diagonal_links.geometry import (
    build_grid_spec,
    corner_point,
    in_bounds,
    neighbors_of,
    opponent_of,
    orientation_of,
    other_corner,
    seed_anchors,
)


def test_orientation_alternates_like_a_checkerboard():
    assert orientation_of(0, 0) == "down"
    assert orientation_of(1, 0) == "up"
    assert orientation_of(0, 1) == "up"
    assert orientation_of(3, 5) == "down"


def test_down_cell_neighbor_table():
    assert neighbors_of(2, 2, "down", "left") == [(1, 1, "right"), (1, 2, "right"), (2, 1, "left")]
    assert neighbors_of(2, 2, "down", "right") == [(3, 3, "left"), (3, 2, "left"), (2, 3, "right")]


def test_up_cell_neighbor_table_is_mirrored():
    assert neighbors_of(2, 1, "up", "left") == [(1, 2, "right"), (1, 1, "right"), (2, 2, "left")]
    assert neighbors_of(2, 1, "up", "right") == [(3, 0, "left"), (3, 1, "left"), (2, 0, "right")]


def test_out_of_range_neighbors_are_dropped():
    assert neighbors_of(0, 0, "down", "left", cell_count=4) == []
    assert neighbors_of(0, 0, "down", "right", cell_count=4) == [(1, 1, "left"), (1, 0, "left"), (0, 1, "right")]
    assert neighbors_of(3, 3, "down", "right", cell_count=4) == []
    # Without a size nothing is filtered.
    assert len(neighbors_of(0, 0, "down", "left")) == 3


@pytest.mark.parametrize("n", [1, 2, 5, 8])
def test_adjacency_is_symmetric(n):
    for x in range(n):
        for y in range(n):
            for corner in ("left", "right"):
                for nx, ny, nc in neighbors_of(x, y, orientation_of(x, y), corner, n):
                    back = neighbors_of(nx, ny, orientation_of(nx, ny), nc, n)
                    assert (x, y, corner) in back
                    assert (nx, ny) != (x, y)


def test_neighbors_share_the_same_lattice_point():
    for x in range(6):
        for y in range(6):
            for corner in ("left", "right"):
                point = corner_point(x, y, corner)
                for nx, ny, nc in neighbors_of(x, y, orientation_of(x, y), corner):
                    assert corner_point(nx, ny, nc) == point


def test_corner_points_follow_the_diagonal():
    assert corner_point(0, 0, "left") == (0, 0)
    assert corner_point(0, 0, "right") == (1, 1)
    assert corner_point(1, 0, "left") == (1, 1)
    assert corner_point(1, 0, "right") == (2, 0)


def test_seed_anchors_sit_on_the_middle_row():
    assert seed_anchors(build_grid_spec(4)) == [(0, 1, "left", "red"), (3, 1, "right", "green")]
    assert seed_anchors(build_grid_spec(20)) == [(0, 9, "left", "red"), (19, 9, "right", "green")]


def test_helpers():
    grid = build_grid_spec(3)
    assert in_bounds(grid, 2, 0)
    assert not in_bounds(grid, 3, 0)
    assert not in_bounds(grid, 0, -1)
    assert other_corner("left") == "right"
    assert opponent_of("red") == "green"
    assert opponent_of("green") == "red"


@pytest.mark.parametrize("bad", [0, -3])
def test_grid_spec_rejects_non_positive_sizes(bad):
    with pytest.raises(ValueError):
        build_grid_spec(bad)
