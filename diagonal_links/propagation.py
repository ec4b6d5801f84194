from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Set, Tuple

from .board import Board, InvariantViolation
from .geometry import NEUTRAL, Coord, Corner, PlayerColor, neighbors_of, other_corner

logger = logging.getLogger(__name__)

_Item = Tuple[int, int, Corner]


def propagate_corner(board: Board, x: int, y: int, side: Corner, color: PlayerColor) -> List[Coord]:
    """Push ``color`` from one corner across every corner that shares its point.

    The walk also crosses connected cells from one corner to the other, which
    is how a color travels past its starting point. A corner that already has
    ``color`` is a fixed point and is not expanded; each ``(x, y, side)`` is
    expanded at most once, so the walk always terminates.

    Returns the coordinates whose record changed, first change first.

    Raises
    ------
    InvariantViolation
        When the walk reaches a corner held by the other player. The legality
        check in the turn controller makes this unreachable in play. Calls at
        the board edge never raise on boards where every lattice point holds
        at most one player color, which is every board play can produce.
        Corners set before the clash stay set.
    """
    changed: List[Coord] = []
    changed_set: Set[Coord] = set()
    visited: Set[_Item] = set()
    queue: Deque[_Item] = deque([(x, y, side)])

    while queue:
        item = queue.popleft()
        cx, cy, cside = item
        if not board.in_bounds(cx, cy) or item in visited:
            continue
        visited.add(item)

        cell = board.cell(cx, cy)
        current = cell.corner(cside)
        if current == color:
            continue
        if current != NEUTRAL:
            raise InvariantViolation(
                f"Corner {cside} of ({cx}, {cy}) holds {current}; cannot also hold {color}"
            )

        board.set_corner(cx, cy, cside, color)
        if (cx, cy) not in changed_set:
            changed_set.add((cx, cy))
            changed.append((cx, cy))

        queue.extend(neighbors_of(cx, cy, cell.orientation, cside, board.cell_count))
        if cell.connected:
            queue.append((cx, cy, other_corner(cside)))

    if changed:
        logger.debug("propagated %s from (%d, %d).%s into %d cell(s)", color, x, y, side, len(changed))
    return changed
