from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, TypedDict

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "boardsettings.v1"

DEFAULT_CELL_COUNT = 20
DEFAULT_CELL_DIMENSION = 30

MIN_CELL_COUNT, MAX_CELL_COUNT = 2, 60
MIN_CELL_DIMENSION, MAX_CELL_DIMENSION = 8, 200


class SettingsValidationError(ValueError):
    pass


class Palette(TypedDict):
    neutral: str
    red: str
    green: str
    background: str
    border: str


DEFAULT_PALETTE: Palette = {
    "neutral": "grey",
    "red": "red",
    "green": "green",
    "background": "white",
    "border": "grey",
}


def _default_palette() -> Palette:
    return dict(DEFAULT_PALETTE)  # type: ignore[return-value]


@dataclass(frozen=True)
class PresetMeta:
    id: str
    title: str
    subtitle: str
    filename: str


@dataclass(frozen=True)
class BoardSettings:
    id: str
    title: str
    cell_count: int = DEFAULT_CELL_COUNT
    cell_dimension: int = DEFAULT_CELL_DIMENSION
    palette: Palette = field(default_factory=_default_palette)
    subtitle: str = ""
    filename: str = ""

    @property
    def board_dimension(self) -> int:
        return self.cell_count * self.cell_dimension


def default_settings() -> BoardSettings:
    return BoardSettings(id="classic", title="Classic 20×20")


def list_presets(preset_dir: str) -> List[PresetMeta]:
    metas: List[PresetMeta] = []
    if not os.path.isdir(preset_dir):
        return metas

    for fn in sorted(os.listdir(preset_dir)):
        if not fn.lower().endswith(".json"):
            continue
        path = os.path.join(preset_dir, fn)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            meta = raw.get("meta", {}) or {}
            if not isinstance(meta, dict):
                raise ValueError("meta must be an object")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("skipping preset %s: %s", fn, e)
            continue
        metas.append(
            PresetMeta(
                id=str(meta.get("id", fn.replace(".json", ""))),
                title=str(meta.get("title", fn.replace(".json", ""))),
                subtitle=str(meta.get("subtitle", "")),
                filename=fn,
            )
        )
    return metas


def _bounded_int(raw: Dict[str, object], key: str, default: int, lo: int, hi: int) -> int:
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise SettingsValidationError(f"board.{key} must be an integer, got {value!r}")
    if not lo <= value <= hi:
        raise SettingsValidationError(f"board.{key} {value} outside [{lo}, {hi}]")
    return value


def _palette(raw: object) -> Palette:
    if raw is None:
        return _default_palette()
    if not isinstance(raw, dict):
        raise SettingsValidationError("palette must be an object of color strings")
    unknown = sorted(set(raw) - set(DEFAULT_PALETTE))
    if unknown:
        raise SettingsValidationError(f"palette has unknown keys: {unknown}")

    out = _default_palette()
    for key, value in raw.items():
        if not isinstance(value, str) or not value.strip():
            raise SettingsValidationError(f"palette.{key} missing non-empty string")
        out[key] = value.strip()  # type: ignore[literal-required]
    return out


def load_settings(path: str) -> BoardSettings:
    """Load a board preset.

    Schema
    ------
    {
      "schema_version": "boardsettings.v1",
      "meta":    {"id": "...", "title": "...", "subtitle": "..."},
      "board":   {"cell_count": 20, "cell_dimension": 30},
      "palette": {"neutral": "grey", "red": "red", ...}   (optional)
    }
    """

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except ValueError as e:
            raise SettingsValidationError(f"{os.path.basename(path)} is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise SettingsValidationError("Preset must be a JSON object")

    schema_version = str(raw.get("schema_version", "")).strip()
    if schema_version != SCHEMA_VERSION:
        raise SettingsValidationError(
            f"Unsupported or missing schema_version: {schema_version!r}. Expected {SCHEMA_VERSION!r}."
        )

    meta = raw.get("meta", {}) or {}
    if not isinstance(meta, dict):
        raise SettingsValidationError("meta must be an object")
    board_raw = raw.get("board", None)
    if not isinstance(board_raw, dict):
        raise SettingsValidationError("Preset missing required 'board' object")

    cell_count = _bounded_int(board_raw, "cell_count", DEFAULT_CELL_COUNT, MIN_CELL_COUNT, MAX_CELL_COUNT)
    cell_dimension = _bounded_int(
        board_raw, "cell_dimension", DEFAULT_CELL_DIMENSION, MIN_CELL_DIMENSION, MAX_CELL_DIMENSION
    )

    fn = os.path.basename(path)
    return BoardSettings(
        id=str(meta.get("id", fn.replace(".json", ""))),
        title=str(meta.get("title", fn.replace(".json", ""))).strip(),
        subtitle=str(meta.get("subtitle", "")).strip(),
        cell_count=cell_count,
        cell_dimension=cell_dimension,
        palette=_palette(raw.get("palette")),
        filename=fn,
    )
