import pytest

from diagonal_links.board import Board, InvariantViolation, dirty_union
from diagonal_links.geometry import build_grid_spec


def test_new_board_is_neutral_and_disconnected():
    board = Board(build_grid_spec(3))
    cells = list(board.cells())
    assert len(cells) == 9
    assert all(c.left == "neutral" and c.right == "neutral" and not c.connected for c in cells)
    assert board.cell(1, 2).orientation == "up"
    assert board.cell(2, 2).orientation == "down"


def test_cell_lookup_outside_board_raises():
    board = Board(build_grid_spec(3))
    with pytest.raises(IndexError):
        board.cell(3, 0)


def test_set_corner_reports_changes_only():
    board = Board(build_grid_spec(3))
    assert board.set_corner(1, 1, "left", "red") is True
    assert board.set_corner(1, 1, "left", "red") is False
    assert board.cell(1, 1).left == "red"
    assert board.cell(1, 1).right == "neutral"


def test_toggle_connected_flips():
    board = Board(build_grid_spec(3))
    assert board.toggle_connected(0, 0) is True
    assert board.cell(0, 0).connected
    assert board.toggle_connected(0, 0) is False


def test_invariant_check_flags_mismatched_connected_cell():
    board = Board(build_grid_spec(3))
    board.toggle_connected(2, 1)
    board.check_invariants()
    board.set_corner(2, 1, "left", "green")
    with pytest.raises(InvariantViolation):
        board.check_invariants()


def test_copy_is_independent():
    board = Board(build_grid_spec(3))
    clone = board.copy()
    clone.set_corner(0, 0, "right", "green")
    assert board.cell(0, 0).right == "neutral"
    assert clone != board
    assert board.copy() == board


def test_dirty_union_keeps_first_order():
    assert dirty_union([(0, 0), (1, 1)], [(1, 1), (2, 0)], []) == [(0, 0), (1, 1), (2, 0)]
