from __future__ import annotations

import logging
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import streamlit as st

from diagonal_links.board import InvariantViolation
from diagonal_links.engine import GridEvent
from diagonal_links.geometry import build_grid_spec
from diagonal_links.session import GameSession, MoveInProgress
from diagonal_links.settings_io import (
    BoardSettings,
    SettingsValidationError,
    default_settings,
    list_presets,
    load_settings,
)
from diagonal_links.ui_adapters import make_component_props
from diagonal_links.component.link_grid import link_grid


APP_TITLE = "Diagonal Links"

logger = logging.getLogger(__name__)

DEFAULT_INSTRUCTIONS = """**How to Play**

Every square holds a diagonal with a corner at each end. Corners that meet
at the same point of the grid always share one color.

- Click a square to link (or unlink) its two corners.
- Your color spreads from both corners of the square you clicked, and keeps
  spreading through every linked square it reaches.
- You cannot click a square that already shows your opponent's color.
- Red starts from the left edge, green from the right edge. Red moves first.
"""


def _ensure_state() -> None:
    if "settings" not in st.session_state:
        st.session_state.settings = default_settings()
    if "session" not in st.session_state:
        st.session_state.session = GameSession(build_grid_spec(st.session_state.settings.cell_count))
    if "last_event_id" not in st.session_state:
        st.session_state.last_event_id = None
    if "show_instructions" not in st.session_state:
        st.session_state.show_instructions = False


def _start(settings: BoardSettings) -> None:
    st.session_state.settings = settings
    st.session_state.session = GameSession(build_grid_spec(settings.cell_count))
    st.session_state.last_event_id = None


def _dispatch(session: GameSession, event: GridEvent) -> bool:
    try:
        session.dispatch(event)
    except MoveInProgress as e:
        st.toast(str(e))
        return False
    except InvariantViolation as e:
        # Board state is left as it was before the failed move.
        logger.exception("move aborted")
        st.error("Internal error: the board reached an impossible state. The move was not applied.")
        st.exception(e)
        return False
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    st.set_page_config(page_title=APP_TITLE, page_icon="🔗", layout="wide")
    _ensure_state()

    preset_dir = os.path.join(PROJECT_ROOT, "presets")
    metas = list_presets(preset_dir)

    with st.sidebar:
        st.header("Board")
        if metas:
            options = {m.title: m for m in metas}
            pick = st.selectbox("Select a board", list(options.keys()))
            chosen = options[pick]
        else:
            st.warning(f"No presets found in {preset_dir}; using the classic board.")
            chosen = None

        new_clicked = st.button("New game", type="primary", use_container_width=True)
        reset_clicked = st.button("Reset", use_container_width=True)

        st.divider()
        if st.button("Instructions", use_container_width=True):
            st.session_state.show_instructions = not st.session_state.show_instructions

    if new_clicked:
        if chosen is None:
            _start(default_settings())
        else:
            try:
                _start(load_settings(os.path.join(preset_dir, chosen.filename)))
            except SettingsValidationError as e:
                st.error(f"Board preset invalid: {e}")

    session: GameSession = st.session_state.session
    if reset_clicked:
        _dispatch(session, GridEvent(type="RESET", payload={}))
        st.session_state.last_event_id = None

    settings: BoardSettings = st.session_state.settings
    st.title(settings.title or APP_TITLE)
    if settings.subtitle:
        st.caption(settings.subtitle)

    if st.session_state.show_instructions:
        with st.expander("Instructions", expanded=True):
            st.markdown(DEFAULT_INSTRUCTIONS)

    props = make_component_props(session.state, settings)
    event = link_grid(props, key="link_grid")

    # Process component events (dedupe by event_id)
    if isinstance(event, dict) and event.get("schema_version") == "linkgrid.v1":
        ev_id = event.get("event_id")
        if ev_id and ev_id != st.session_state.last_event_id:
            st.session_state.last_event_id = ev_id
            payload = event.get("payload", {}) or {}

            # Ignore stale events from previous state_id
            ev_state_id = payload.get("state_id")
            if ev_state_id is None or ev_state_id == session.state.state_id:
                if _dispatch(session, GridEvent(type=event.get("type", ""), payload=payload)):
                    st.rerun()

    state = session.state
    turn_color = settings.palette[state.turn]
    st.markdown(
        f"Move **{state.move_counter + 1}**: "
        f"<span style='color:{turn_color}'><b>{state.turn}</b></span> to play",
        unsafe_allow_html=True,
    )
    if state.message:
        st.warning(state.message)


if __name__ == "__main__":
    main()
