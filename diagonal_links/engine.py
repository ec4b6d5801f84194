from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import List, Literal, Tuple

from .board import Board, InvariantViolation, dirty_union
from .geometry import Coord, GridSpec, PlayerColor, opponent_of, seed_anchors
from .propagation import propagate_corner

logger = logging.getLogger(__name__)


# -----------------------------
# Contracts
# -----------------------------

EventType = Literal[
    "CELL_CLICK",
    "RESET",
]


class IllegalMove(Exception):
    """The clicked cell already carries the opponent's color."""

    def __init__(self, x: int, y: int, message: str) -> None:
        super().__init__(message)
        self.x = x
        self.y = y
        self.message = message


@dataclass(frozen=True)
class GridEvent:
    type: EventType
    payload: dict


@dataclass(frozen=True)
class GameState:
    state_id: str  # unique per init/reset (forces frontend resync)

    board: Board
    turn: PlayerColor = "red"
    move_counter: int = 0

    # Cells changed by the last accepted move, for partial redraws.
    last_dirty: Tuple[Coord, ...] = ()

    # User-facing text for the last rejected event; empty once a move lands.
    message: str = ""

    # Highest client_seq processed so far (frontend uses this to ignore stale renders)
    last_client_seq: int = 0
    last_action: str = ""


def new_board(grid: GridSpec) -> Board:
    """Neutral board with both starting anchors colored."""
    board = Board(grid)
    for x, y, side, color in seed_anchors(grid):
        propagate_corner(board, x, y, side, color)
    return board


def init_state(grid: GridSpec) -> GameState:
    return GameState(
        state_id=str(uuid.uuid4()),
        board=new_board(grid),
        turn="red",
        move_counter=0,
        last_dirty=(),
        message="",
        last_client_seq=0,
        last_action="init",
    )


def is_legal(state: GameState, x: int, y: int) -> bool:
    cell = state.board.cell(x, y)
    opponent = opponent_of(state.turn)
    return cell.left != opponent and cell.right != opponent


def on_cell_click(state: GameState, x: int, y: int) -> Tuple[GameState, List[Coord]]:
    """Play one move for ``state.turn`` at ``(x, y)``.

    The legality check runs before any write, and all writes go to a copy of
    the board, so a rejected or failed move leaves ``state`` untouched.

    Returns the new state and the coordinates that need redrawing.
    """
    if not state.board.in_bounds(x, y):
        raise IllegalMove(x, y, f"Cell ({x}, {y}) is not on the board.")
    if not is_legal(state, x, y):
        opponent = opponent_of(state.turn)
        raise IllegalMove(x, y, f"Cell ({x}, {y}) already belongs to {opponent}; {state.turn} cannot play there.")

    board = state.board.copy()
    board.toggle_connected(x, y)
    from_left = propagate_corner(board, x, y, "left", state.turn)
    from_right = propagate_corner(board, x, y, "right", state.turn)
    board.check_invariants()

    dirty = dirty_union([(x, y)], from_left, from_right)
    out = replace(
        state,
        board=board,
        turn=opponent_of(state.turn),
        move_counter=state.move_counter + 1,
        last_dirty=tuple(dirty),
        message="",
    )
    logger.info(
        "move %d: %s toggled (%d, %d) connected=%s, %d cell(s) redrawn",
        out.move_counter,
        state.turn,
        x,
        y,
        board.cell(x, y).connected,
        len(dirty),
    )
    return out, dirty


# -----------------------------
# Reducer
# -----------------------------


def reduce(state: GameState, event: GridEvent, grid: GridSpec) -> GameState:
    """Authoritative state transition (server-side)."""
    payload = event.payload or {}
    client_seq = payload.get("client_seq")
    try:
        client_seq_int = int(client_seq) if client_seq is not None else None
    except (TypeError, ValueError):
        client_seq_int = None

    t = event.type
    if t == "CELL_CLICK":
        out = _on_click(state, payload)
    elif t == "RESET":
        out = _on_reset(grid)
    else:
        out = replace(state, last_action=f"ignored:{t}")

    if client_seq_int is not None and client_seq_int > out.last_client_seq:
        out = replace(out, last_client_seq=client_seq_int)
    return out


def _on_click(state: GameState, payload: dict) -> GameState:
    try:
        x = int(payload["x"])
        y = int(payload["y"])
    except (KeyError, TypeError, ValueError):
        return replace(state, last_action="click:bad_payload")

    try:
        out, _ = on_cell_click(state, x, y)
    except IllegalMove as e:
        logger.info("rejected move by %s at (%d, %d): %s", state.turn, e.x, e.y, e.message)
        return replace(state, message=e.message, last_action="click:illegal")
    except InvariantViolation:
        logger.error("invariant violated while %s played (%d, %d)", state.turn, x, y)
        raise
    return replace(out, last_action="click")


def _on_reset(grid: GridSpec) -> GameState:
    # Fresh board and new state_id; the client sequence restarts with it.
    return replace(init_state(grid), last_action="reset")
