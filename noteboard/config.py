from __future__ import annotations
import os
from dataclasses import fields
from typing import List, Optional

from PySide6.QtCore import QSettings

from .models import GridConfig
from .grid import DEFAULT_GRID_CONFIG
from .logging import data_dir, get_logger

ORG_NAME = "NoteBoard"
APP_NAME = "Board"
MAX_RECENT = 12

log = get_logger("config")


class BoardSettings:
    """Persistent user settings backed by QSettings."""

    def __init__(self, settings: Optional[QSettings] = None):
        self._st = settings if settings is not None else QSettings(ORG_NAME, APP_NAME)

    # ---- snapping ----
    @property
    def snap_to_grid(self) -> bool:
        return bool(self._st.value("board/snap_to_grid", True, bool))

    @snap_to_grid.setter
    def snap_to_grid(self, on: bool):
        self._st.setValue("board/snap_to_grid", bool(on))

    @property
    def grid_config(self) -> GridConfig:
        values = {}
        for f in fields(GridConfig):
            default = getattr(DEFAULT_GRID_CONFIG, f.name)
            raw = self._st.value(f"grid/{f.name}", default)
            try:
                values[f.name] = float(raw)
            except (TypeError, ValueError):
                log.warning("ignoring bad grid/%s value %r", f.name, raw)
                values[f.name] = default
        return GridConfig(**values)

    @grid_config.setter
    def grid_config(self, cfg: GridConfig):
        for f in fields(GridConfig):
            self._st.setValue(f"grid/{f.name}", float(getattr(cfg, f.name)))

    # ---- files ----
    @property
    def autosave_path(self) -> str:
        default = str(data_dir() / "noteboard_autosave.json")
        return str(self._st.value("files/autosave_path", default))

    @autosave_path.setter
    def autosave_path(self, path: str):
        self._st.setValue("files/autosave_path", path)

    def recent_files(self) -> List[str]:
        files = self._st.value("files/recent", [], list) or []
        return [p for p in files if os.path.exists(p)]

    def add_recent(self, path: str):
        files = list(self._st.value("files/recent", [], list) or [])
        if path in files: files.remove(path)
        files.insert(0, path)
        self._st.setValue("files/recent", files[:MAX_RECENT])

    def sync(self):
        self._st.sync()
