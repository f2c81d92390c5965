from __future__ import annotations
from typing import Dict, Optional

from PySide6.QtCore import QPointF

from .models import NoteProps, Point
from .grid import snap_to_grid
from .items import StickyNoteItem
from .utils import NOTE_COLORS, NEW_NOTE_X, NEW_NOTE_Y


class NoteFactory:
    def __init__(self, scene):
        self.scene = scene

    def _random_position(self) -> Point:
        rng = self.scene.rng
        return Point(NEW_NOTE_X[0] + rng.random() * (NEW_NOTE_X[1] - NEW_NOTE_X[0]),
                     NEW_NOTE_Y[0] + rng.random() * (NEW_NOTE_Y[1] - NEW_NOTE_Y[0]))

    def create_note(self, meta: Optional[Dict] = None, scene_pos: Optional[QPointF] = None) -> StickyNoteItem:
        meta = meta or {}
        rng = self.scene.rng
        if scene_pos is None:
            pos = self._random_position()
        else:
            pos = Point(scene_pos.x(), scene_pos.y())
        if self.scene.snap_to_grid:
            pos = snap_to_grid(pos.x, pos.y, self.scene.grid_size, rng=rng)
        else:
            pos = Point(max(0.0, pos.x), max(0.0, pos.y))

        color = meta.get("color")
        if color not in NOTE_COLORS:
            color = rng.choice(list(NOTE_COLORS))

        props = NoteProps(position=pos, color=color)
        if meta.get("title") is not None: props.title = str(meta["title"])
        if meta.get("content") is not None: props.content = str(meta["content"])
        return self.scene.add_note(props)
