from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, List

from .geometry import NEUTRAL, Color, Coord, Corner, GridSpec, Orientation, in_bounds, orientation_of


class InvariantViolation(RuntimeError):
    """A connected cell holds two colors, or a corner was forced to hold two colors."""


@dataclass(frozen=True)
class Cell:
    x: int
    y: int
    orientation: Orientation
    left: Color = NEUTRAL
    right: Color = NEUTRAL
    connected: bool = False

    def corner(self, side: Corner) -> Color:
        return self.left if side == "left" else self.right

    def with_corner(self, side: Corner, color: Color) -> "Cell":
        if side == "left":
            return replace(self, left=color)
        return replace(self, right=color)

    def toggled(self) -> "Cell":
        return replace(self, connected=not self.connected)

    @property
    def consistent(self) -> bool:
        return not self.connected or self.left == self.right


class Board:
    """Arena of cell records addressed ``board.cell(x, y)``.

    The board owns every record. Mutations swap in a new record and report
    whether anything changed so callers can collect dirty coordinates.
    """

    def __init__(self, grid: GridSpec) -> None:
        self.grid = grid
        n = grid.cell_count
        # Internal lists are columns, read like columns[x][y].
        self._columns: List[List[Cell]] = [
            [Cell(x=x, y=y, orientation=orientation_of(x, y)) for y in range(n)]
            for x in range(n)
        ]

    @property
    def cell_count(self) -> int:
        return self.grid.cell_count

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(self.grid, x, y)

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.cell_count}x{self.cell_count} board")
        return self._columns[x][y]

    def cells(self) -> Iterator[Cell]:
        for column in self._columns:
            yield from column

    def set_corner(self, x: int, y: int, side: Corner, color: Color) -> bool:
        current = self.cell(x, y)
        if current.corner(side) == color:
            return False
        self._columns[x][y] = current.with_corner(side, color)
        return True

    def toggle_connected(self, x: int, y: int) -> bool:
        updated = self.cell(x, y).toggled()
        self._columns[x][y] = updated
        return updated.connected

    def check_invariants(self) -> None:
        for c in self.cells():
            if not c.consistent:
                raise InvariantViolation(
                    f"Connection between corners of different colors at ({c.x}, {c.y}): "
                    f"left={c.left}, right={c.right}"
                )

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.grid = self.grid
        clone._columns = [list(column) for column in self._columns]
        return clone

    def snapshot(self) -> List[List[Cell]]:
        """Columns of records; safe to compare, records are immutable."""
        return [list(column) for column in self._columns]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid and self._columns == other._columns

    def __repr__(self) -> str:
        return f"Board(cell_count={self.cell_count})"


def dirty_union(*groups: List[Coord]) -> List[Coord]:
    seen = set()
    out: List[Coord] = []
    for group in groups:
        for coord in group:
            if coord not in seen:
                seen.add(coord)
                out.append(coord)
    return out
