from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Bounds:
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class GridConfig:
    """Grid cell size in px per responsive breakpoint."""
    mobile: float = 30.0
    tablet: float = 35.0
    desktop: float = 40.0
    large: float = 50.0


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class NoteProps:
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    title: str = "New Note"
    content: str = "Click to start writing..."
    color: str = "yellow"
    position: Point = field(default_factory=Point)
    created_at: str = field(default_factory=_now_iso)
    updated_at: Optional[str] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = self.created_at

    def touch(self):
        self.updated_at = _now_iso()


class Mode:
    EDIT = "edit"
    VIEW = "view"


class Breakpoint:
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"
    LARGE = "large"
