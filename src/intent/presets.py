"""Saved favourites and scenes (read-only)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from utils.colors import RGB, coerce_rgb

log = logging.getLogger("lumen.presets")


@dataclass(frozen=True)
class SavedScene:
    id: str
    name: str
    payload: dict = field(default_factory=dict, hash=False, compare=False)

    @property
    def preview_colors(self) -> list[RGB]:
        """Colours of the first segment of the stored payload."""
        segs = self.payload.get("seg") or []
        if not segs or not isinstance(segs[0], dict):
            return []
        colors = [coerce_rgb(c) for c in segs[0].get("col") or []]
        return [c for c in colors if c is not None]


@dataclass(frozen=True)
class PresetLibrary:
    favorites: tuple[SavedScene, ...] = ()
    scenes: tuple[SavedScene, ...] = ()

    @property
    def all_scenes(self) -> tuple[SavedScene, ...]:
        return self.favorites + self.scenes

    @property
    def names(self) -> list[str]:
        """Favourite names first, then scene names."""
        return [s.name for s in self.all_scenes]

    def get(self, scene_id: str) -> SavedScene | None:
        for scene in self.all_scenes:
            if scene.id == scene_id:
                return scene
        return None


def _parse_scenes(items) -> tuple[SavedScene, ...]:
    scenes = []
    for i, item in enumerate(items or []):
        name = (item.get("name") or "").strip()
        if not name:
            continue
        scenes.append(SavedScene(
            id=str(item.get("id", f"scene-{i}")),
            name=name,
            payload=item.get("payload") or {},
        ))
    return tuple(scenes)


def load_presets(path: str | None) -> PresetLibrary:
    """Load favourites and scenes from a JSON file.

    Expected shape: {"favorites": [{id, name, payload}], "scenes": [...]}.
    A missing or unreadable file gives an empty library.
    """
    if not path:
        return PresetLibrary()
    p = Path(path)
    if not p.exists():
        log.info("No presets file at %s", p)
        return PresetLibrary()
    try:
        data = json.loads(p.read_text())
    except (OSError, json.JSONDecodeError):
        log.exception("Failed to read presets from %s", p)
        return PresetLibrary()
    library = PresetLibrary(
        favorites=_parse_scenes(data.get("favorites")),
        scenes=_parse_scenes(data.get("scenes")),
    )
    log.info(
        "Loaded %d favorite(s) and %d scene(s)",
        len(library.favorites), len(library.scenes),
    )
    return library
