from __future__ import annotations

from typing import Any, Dict, List, Mapping, TypedDict

from .board import Board, Cell
from .engine import GameState
from .geometry import Coord
from .settings_io import BoardSettings, Palette

# Quarter circles are inset from the cell edge; the border square a bit less.
CORNER_INSET = 5
BORDER_INSET = 4
BORDER_WIDTH = 2


class Shape(TypedDict):
    d: str
    fill: str


class CellShapes(TypedDict):
    id: str
    border: Shape
    left: Shape
    right: Shape


def cell_id(coord: Coord) -> str:
    return f"{coord[0]},{coord[1]}"


def _num(v: float) -> str:
    return f"{v:g}"


def _square_path(dimension: int, ox: int, oy: int) -> str:
    lo = BORDER_INSET
    hi = dimension - BORDER_INSET
    minx, maxx, miny, maxy = _num(ox + lo), _num(ox + hi), _num(oy + lo), _num(oy + hi)
    return f"M {minx} {miny} L {minx} {maxy} L {maxx} {maxy} L {maxx} {miny} L {minx} {miny}"


def _corner_path(dimension: int, ox: int, oy: int, corner: tuple, nxt: tuple, end: tuple) -> str:
    # Every quarter circle: start at the cell corner, line to the next point
    # clockwise, then arc to the last point.
    r = _num(dimension / 2)
    return (
        f"M{_num(corner[0] + ox)} {_num(corner[1] + oy)} "
        f"L{_num(nxt[0] + ox)} {_num(nxt[1] + oy)} "
        f"A{r} {r} 1 0 1 {_num(end[0] + ox)} {_num(end[1] + oy)}"
    )


def _top_left(dimension: int, ox: int, oy: int) -> tuple:
    start, half, end = CORNER_INSET, dimension / 2, dimension - CORNER_INSET
    top = _corner_path(dimension, ox, oy, (start, start), (half, start), (start, half))
    bottom = _corner_path(dimension, ox, oy, (end, end), (half, end), (end, half))
    return top, bottom


def _bottom_left(dimension: int, ox: int, oy: int) -> tuple:
    start, half, end = CORNER_INSET, dimension / 2, dimension - CORNER_INSET
    bottom = _corner_path(dimension, ox, oy, (start, end), (start, half), (half, end))
    top = _corner_path(dimension, ox, oy, (end, start), (end, half), (half, start))
    return bottom, top


def cell_shapes(cell: Cell, dimension: int, palette: Mapping[str, str]) -> CellShapes:
    """Border square plus two quarter circles for one cell.

    A disconnected cell shows the end points of its diagonal in the corner
    colors. A connected cell is filled with its color and shows the two
    off-diagonal corners in the background color, which leaves a colored
    band along the diagonal.
    """
    ox, oy = cell.x * dimension, cell.y * dimension
    background = palette["background"]
    left_color = palette[cell.left]
    right_color = palette[cell.right]

    if cell.orientation == "down":
        if cell.connected:
            left_d, right_d = _bottom_left(dimension, ox, oy)
            fill, lf, rf = left_color, background, background
        else:
            left_d, right_d = _top_left(dimension, ox, oy)
            fill, lf, rf = background, left_color, right_color
    else:
        if cell.connected:
            left_d, right_d = _top_left(dimension, ox, oy)
            fill, lf, rf = left_color, background, background
        else:
            left_d, right_d = _bottom_left(dimension, ox, oy)
            fill, lf, rf = background, left_color, right_color

    return {
        "id": cell_id((cell.x, cell.y)),
        "border": {"d": _square_path(dimension, ox, oy), "fill": fill},
        "left": {"d": left_d, "fill": lf},
        "right": {"d": right_d, "fill": rf},
    }


def render_svg(board: Board, dimension: int, palette: Palette) -> str:
    """Standalone SVG document for the whole board (read-only view)."""
    size = board.cell_count * dimension
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">'
    ]
    for cell in board.cells():
        shapes = cell_shapes(cell, dimension, palette)
        parts.append(
            f'<g id="cell-{shapes["id"]}">'
            f'<path d="{shapes["border"]["d"]}" fill="{shapes["border"]["fill"]}" '
            f'stroke="{palette["border"]}" stroke-width="{BORDER_WIDTH}"/>'
            f'<path d="{shapes["left"]["d"]}" fill="{shapes["left"]["fill"]}"/>'
            f'<path d="{shapes["right"]["d"]}" fill="{shapes["right"]["fill"]}"/>'
            "</g>"
        )
    parts.append("</svg>")
    return "".join(parts)


def make_component_props(state: GameState, settings: BoardSettings) -> Dict[str, Any]:
    """Build props for the link_grid component."""

    board = state.board
    dimension = settings.cell_dimension
    palette = settings.palette

    cells_payload: List[Dict[str, Any]] = []
    for cell in board.cells():
        cells_payload.append(
            {
                "id": cell_id((cell.x, cell.y)),
                "x": cell.x,
                "y": cell.y,
                "orientation": cell.orientation,
                "left": cell.left,
                "right": cell.right,
                "connected": cell.connected,
                "shapes": cell_shapes(cell, dimension, palette),
            }
        )

    size = board.cell_count * dimension
    return {
        "schema_version": "linkgrid.v1.props",
        "board": {
            "cell_count": board.cell_count,
            "cell_dimension": dimension,
            "width": size,
            "height": size,
            "border_color": palette["border"],
            "border_width": BORDER_WIDTH,
            "cells": cells_payload,
        },
        "status": {
            "turn": state.turn,
            "turn_color": palette[state.turn],
            "move_counter": state.move_counter,
            "message": state.message,
            "last_action": state.last_action,
        },
        "dirty": [cell_id(c) for c in state.last_dirty],
        "sync": {
            "last_client_seq": int(state.last_client_seq),
            "state_id": state.state_id,
        },
    }
