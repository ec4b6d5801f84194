from __future__ import annotations

from pathlib import Path
import streamlit.components.v1 as components

_FRONTEND_DIR = (Path(__file__).parent / "frontend").resolve()
_INDEX = _FRONTEND_DIR / "index.html"

if not _INDEX.exists():
    raise RuntimeError(
        f"Link grid component frontend not found. Expected: {_INDEX}\n"
        f"Directory contents: {list(_FRONTEND_DIR.glob('*'))}"
    )

_link_grid = components.declare_component(
    name="link_grid",
    path=_FRONTEND_DIR.as_posix(),
)


def link_grid(props: dict, key: str = "link_grid"):
    return _link_grid(props=props, key=key, default=None)
