from __future__ import annotations
from typing import Callable, Dict, Optional, Tuple

from PySide6.QtCore import QObject, QPointF, QTimer
from PySide6.QtGui import QColor

from .models import Point

# ===== Note geometry =====
NOTE_W = 320.0
NOTE_H = 256.0
NOTE_RADIUS = 8.0
NOTE_PADDING = 12.0

# ===== Canvas =====
NEW_NOTE_X = (50.0, 450.0)
NEW_NOTE_Y = (50.0, 350.0)
SCROLL_FRAME_MS = 16
CANVAS_REFRESH_MS = 120

# ===== Colors =====
# name -> (background, border, text)
NOTE_COLORS: Dict[str, Tuple[QColor, QColor, QColor]] = {
    "yellow": (QColor("#FEF08A"), QColor("#FDE047"), QColor("#713F12")),
    "pink":   (QColor("#FBCFE8"), QColor("#F9A8D4"), QColor("#831843")),
    "blue":   (QColor("#BFDBFE"), QColor("#93C5FD"), QColor("#1E3A8A")),
    "green":  (QColor("#BBF7D0"), QColor("#86EFAC"), QColor("#14532D")),
    "purple": (QColor("#E9D5FF"), QColor("#D8B4FE"), QColor("#581C87")),
    "orange": (QColor("#FED7AA"), QColor("#FDBA74"), QColor("#7C2D12")),
}
DEFAULT_COLOR = "yellow"

# ===== Grid visuals =====
MAJOR_EVERY = 5
BG_COLOR = QColor("#F2F4F7")
GRID_MINOR = QColor("#E1E5EC")
GRID_MAJOR = QColor("#C3CBD7")
SELECTED_BORDER = QColor(255, 140, 0)


def to_point(p: QPointF) -> Point:
    return Point(p.x(), p.y())


def to_qpointf(p: Point) -> QPointF:
    return QPointF(p.x, p.y)


def note_colors(name: str) -> Tuple[QColor, QColor, QColor]:
    return NOTE_COLORS.get(name, NOTE_COLORS[DEFAULT_COLOR])


class Debouncer(QObject):
    """Runs ``fn`` once ``delay_ms`` after the last ``call()``."""

    def __init__(self, fn: Callable[[], None], delay_ms: int, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._fn = fn
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def pending(self) -> bool:
        return self._timer.isActive()

    def call(self):
        self._timer.start()

    def flush(self):
        if self._timer.isActive():
            self._timer.stop()
            self._fire()

    def cancel(self):
        self._timer.stop()

    def _fire(self):
        self._fn()
