from __future__ import annotations

from typing import Dict, Set, Tuple

from diagonal_links.board import Board
from diagonal_links.engine import GameState, on_cell_click
from diagonal_links.geometry import corner_point


def play(state: GameState, *coords: Tuple[int, int]) -> GameState:
    """Apply moves in order, alternating turns as the controller does."""
    for x, y in coords:
        state, _ = on_cell_click(state, x, y)
    return state


def board_colors(board: Board) -> Dict[Tuple[int, int], Set[str]]:
    """Lattice point -> colors of every corner sitting on it."""
    out: Dict[Tuple[int, int], Set[str]] = {}
    for cell in board.cells():
        for side in ("left", "right"):
            out.setdefault(corner_point(cell.x, cell.y, side), set()).add(cell.corner(side))
    return out
