from __future__ import annotations
from typing import Any, Iterable, Mapping

from .models import Point, Bounds

ITEM_W = 400.0
ITEM_H = 400.0
MIN_CANVAS_W = 1200.0
MIN_CANVAS_H = 800.0
CANVAS_PADDING = 200.0


def _position_of(item: Any) -> Point:
    # notes carry a Point; items loaded from JSON carry {"position": {"x", "y"}}
    pos = item["position"] if isinstance(item, Mapping) else item.position
    if isinstance(pos, Mapping):
        return Point(float(pos.get("x", 0)), float(pos.get("y", 0)))
    return pos


def calculate_canvas_size(items: Iterable[Any],
                          item_width: float = ITEM_W, item_height: float = ITEM_H,
                          min_width: float = MIN_CANVAS_W, min_height: float = MIN_CANVAS_H,
                          padding: float = CANVAS_PADDING) -> Bounds:
    """Smallest canvas holding every item plus ``padding``, never below the minimums."""
    positions = [_position_of(it) for it in items]
    if not positions:
        return Bounds(min_width, min_height)

    right = max(p.x + item_width for p in positions)
    bottom = max(p.y + item_height for p in positions)
    return Bounds(max(min_width, right + padding), max(min_height, bottom + padding))
