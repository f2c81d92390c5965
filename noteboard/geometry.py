from __future__ import annotations
import math

from .models import Point

CLICK_THRESHOLD = 5.0


def calculate_distance(a: Point, b: Point) -> float:
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def is_click_not_drag(start: Point, end: Point, threshold: float = CLICK_THRESHOLD) -> bool:
    """True when the pointer barely moved between press and release.

    The check is strict: a travel of exactly ``threshold`` px counts as a drag.
    """
    return calculate_distance(start, end) < threshold
