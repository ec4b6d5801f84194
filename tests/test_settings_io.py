import json
import os

import pytest

from diagonal_links.settings_io import (
    DEFAULT_PALETTE,
    SettingsValidationError,
    default_settings,
    list_presets,
    load_settings,
)

PRESET_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "presets")


def _write(tmp_path, name, raw):
    path = tmp_path / name
    path.write_text(json.dumps(raw) if not isinstance(raw, str) else raw, encoding="utf-8")
    return str(path)


def _preset(**board):
    return {
        "schema_version": "boardsettings.v1",
        "meta": {"id": "t", "title": "Test"},
        "board": board or {"cell_count": 6, "cell_dimension": 40},
    }


def test_bundled_presets_load():
    metas = list_presets(PRESET_DIR)
    assert {m.id for m in metas} >= {"classic", "quick", "tiny"}
    for m in metas:
        settings = load_settings(os.path.join(PRESET_DIR, m.filename))
        assert settings.cell_count >= 2
    tiny = load_settings(os.path.join(PRESET_DIR, "tiny.json"))
    assert tiny.cell_count == 4
    assert tiny.palette["background"] == "white"
    assert tiny.palette["red"] == "#d32f2f"


def test_defaults_match_the_classic_board():
    settings = default_settings()
    assert settings.cell_count == 20
    assert settings.palette == DEFAULT_PALETTE
    assert settings.board_dimension == 20 * settings.cell_dimension


def test_missing_directory_lists_nothing(tmp_path):
    assert list_presets(str(tmp_path / "nope")) == []


def test_unreadable_presets_are_skipped(tmp_path):
    _write(tmp_path, "a.json", _preset())
    _write(tmp_path, "b.json", "{not json")
    _write(tmp_path, "notes.txt", "ignored")
    metas = list_presets(str(tmp_path))
    assert [m.filename for m in metas] == ["a.json"]


def test_load_settings_reads_board(tmp_path):
    settings = load_settings(_write(tmp_path, "a.json", _preset()))
    assert (settings.cell_count, settings.cell_dimension) == (6, 40)
    assert settings.title == "Test"
    assert settings.filename == "a.json"


@pytest.mark.parametrize(
    "raw",
    [
        {"schema_version": "other", "board": {"cell_count": 4}},
        {"schema_version": "boardsettings.v1"},
        _preset(cell_count=1),
        _preset(cell_count=61),
        _preset(cell_count="8"),
        _preset(cell_count=True),
        _preset(cell_count=8, cell_dimension=2),
        dict(_preset(), palette={"purple": "#f0f"}),
        dict(_preset(), palette={"red": "  "}),
        dict(_preset(), palette=["red"]),
        dict(_preset(), palette={"red": None}),
        dict(_preset(), meta="oops"),
        [1, 2, 3],
    ],
)
def test_invalid_presets_are_rejected(tmp_path, raw):
    with pytest.raises(SettingsValidationError):
        load_settings(_write(tmp_path, "bad.json", raw))


def test_broken_json_is_a_validation_error(tmp_path):
    with pytest.raises(SettingsValidationError):
        load_settings(_write(tmp_path, "bad.json", "{"))


def test_preset_with_non_object_meta_is_skipped(tmp_path):
    _write(tmp_path, "a.json", _preset())
    _write(tmp_path, "b.json", dict(_preset(), meta="oops"))
    assert [m.filename for m in list_presets(str(tmp_path))] == ["a.json"]
