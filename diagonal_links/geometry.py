from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

# --- Types ---

Coord = Tuple[int, int]
Point = Tuple[int, int]

Orientation = Literal["down", "up"]
Corner = Literal["left", "right"]
Color = Literal["neutral", "red", "green"]
PlayerColor = Literal["red", "green"]

Neighbor = Tuple[int, int, Corner]
Anchor = Tuple[int, int, Corner, PlayerColor]

NEUTRAL: Color = "neutral"

# (dx, dy, neighbor corner) per orientation and propagated corner.
# "up" is the "down" table reflected across the vertical axis.
_NEIGHBOR_OFFSETS: Dict[Tuple[Orientation, Corner], List[Tuple[int, int, Corner]]] = {
    ("down", "left"): [(-1, -1, "right"), (-1, 0, "right"), (0, -1, "left")],
    ("down", "right"): [(1, 1, "left"), (1, 0, "left"), (0, 1, "right")],
    ("up", "left"): [(-1, 1, "right"), (-1, 0, "right"), (0, 1, "left")],
    ("up", "right"): [(1, -1, "left"), (1, 0, "left"), (0, -1, "right")],
}


@dataclass(frozen=True)
class GridSpec:
    """Static geometry contract.

    Notes
    -----
    - Cells are addressed ``(x, y)`` with ``x`` the column, as in ``board[x][y]``.
    - Nothing here is cached per cell: neighbors are recomputed from
      coordinates on every call.
    """

    cell_count: int

    @property
    def middle_row(self) -> int:
        return (self.cell_count - 1) // 2


def build_grid_spec(cell_count: int) -> GridSpec:
    if int(cell_count) <= 0:
        raise ValueError(f"cell_count must be a positive integer, got {cell_count!r}")
    return GridSpec(cell_count=int(cell_count))


def orientation_of(x: int, y: int) -> Orientation:
    return "down" if (x + y) % 2 == 0 else "up"


def other_corner(corner: Corner) -> Corner:
    return "right" if corner == "left" else "left"


def opponent_of(color: PlayerColor) -> PlayerColor:
    return "green" if color == "red" else "red"


def in_bounds(grid: GridSpec, x: int, y: int) -> bool:
    return 0 <= x < grid.cell_count and 0 <= y < grid.cell_count


def neighbors_of(
    x: int,
    y: int,
    orientation: Orientation,
    corner: Corner,
    cell_count: Optional[int] = None,
) -> List[Neighbor]:
    """Corners of other cells that share a lattice point with ``corner``.

    Order follows the offset table. With ``cell_count`` set, entries that fall
    outside ``[0, cell_count)`` are dropped; the boundary never wraps.
    """
    out: List[Neighbor] = []
    for dx, dy, ncorner in _NEIGHBOR_OFFSETS[(orientation, corner)]:
        nx, ny = x + dx, y + dy
        if cell_count is not None and not (0 <= nx < cell_count and 0 <= ny < cell_count):
            continue
        out.append((nx, ny, ncorner))
    return out


def corner_point(x: int, y: int, corner: Corner) -> Point:
    """Lattice point (top-left origin) a corner sits on.

    A "down" cell runs from its top-left to its bottom-right point; an "up"
    cell from its bottom-left to its top-right point.
    """
    if orientation_of(x, y) == "down":
        return (x, y) if corner == "left" else (x + 1, y + 1)
    return (x, y + 1) if corner == "left" else (x + 1, y)


def seed_anchors(grid: GridSpec) -> List[Anchor]:
    """Starting anchors: the edge cells nearest the middle row.

    Red owns the left corner of the left edge cell, green the right corner of
    the right edge cell.
    """
    mid = grid.middle_row
    last = grid.cell_count - 1
    return [(0, mid, "left", "red"), (last, mid, "right", "green")]
