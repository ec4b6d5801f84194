from __future__ import annotations

import logging
import threading

from .engine import GameState, GridEvent, init_state, reduce
from .geometry import GridSpec

logger = logging.getLogger(__name__)


class MoveInProgress(RuntimeError):
    pass


class GameSession:
    """Single writer for one game.

    Streamlit may rerun a page script while a previous run is still
    dispatching; a second dispatch is refused instead of interleaving two
    moves on the same board.
    """

    def __init__(self, grid: GridSpec) -> None:
        self.grid = grid
        self.state: GameState = init_state(grid)
        self._lock = threading.Lock()

    def dispatch(self, event: GridEvent) -> GameState:
        if not self._lock.acquire(blocking=False):
            logger.warning("dropped %s: another move is in flight", event.type)
            raise MoveInProgress(f"Cannot apply {event.type} while another move is in flight")
        try:
            self.state = reduce(self.state, event, self.grid)
        finally:
            self._lock.release()
        return self.state

    def click(self, x: int, y: int) -> GameState:
        return self.dispatch(GridEvent(type="CELL_CLICK", payload={"x": x, "y": y}))

    def reset(self) -> GameState:
        return self.dispatch(GridEvent(type="RESET", payload={}))
