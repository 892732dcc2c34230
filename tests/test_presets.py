"""Tests for the saved favourites/scenes library."""

import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from intent.presets import PresetLibrary, SavedScene, load_presets


def _write(tmp_path, data):
    path = tmp_path / "presets.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return str(path)


def test_load_favorites_and_scenes(tmp_path):
    path = _write(tmp_path, {
        "favorites": [{"id": "f1", "name": "Porch Party", "payload": {"on": True}}],
        "scenes": [{"id": "s1", "name": "Game Day"}, {"name": "  "}],
    })
    library = load_presets(path)
    assert [s.name for s in library.favorites] == ["Porch Party"]
    assert [s.name for s in library.scenes] == ["Game Day"]
    assert library.names == ["Porch Party", "Game Day"]
    assert library.get("s1").name == "Game Day"
    assert library.get("missing") is None


def test_missing_file_gives_empty_library(tmp_path):
    library = load_presets(str(tmp_path / "nope.json"))
    assert library.all_scenes == ()


def test_unset_path_gives_empty_library():
    assert load_presets(None).names == []


def test_corrupt_file_gives_empty_library(tmp_path):
    library = load_presets(_write(tmp_path, "{not json"))
    assert library == PresetLibrary()


def test_preview_colors_from_first_segment():
    scene = SavedScene("x", "X", {"seg": [{"col": [[255, 0, 0], "00FF00", "bad"]}]})
    assert scene.preview_colors == [(255, 0, 0), (0, 255, 0)]


def test_preview_colors_empty_payload():
    assert SavedScene("x", "X").preview_colors == []
