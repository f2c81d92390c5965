from __future__ import annotations
import math
import random
from typing import Optional

from .models import Point, GridConfig, Breakpoint

# ===== Breakpoints (container width, px) =====
MOBILE_MAX = 768
TABLET_MAX = 1024
DESKTOP_MAX = 1440

DEFAULT_GRID_CONFIG = GridConfig()

# share of a cell used as the jitter span
JITTER_RATIO = 0.15


def breakpoint_for_width(container_width: float) -> str:
    if container_width < MOBILE_MAX:
        return Breakpoint.MOBILE
    if container_width < TABLET_MAX:
        return Breakpoint.TABLET
    if container_width < DESKTOP_MAX:
        return Breakpoint.DESKTOP
    return Breakpoint.LARGE


def get_responsive_grid_size(container_width: float, config: GridConfig = DEFAULT_GRID_CONFIG) -> float:
    return getattr(config, breakpoint_for_width(container_width))


def snap(v: float, step: float) -> float:
    return round(v / step) * step


def snap_to_grid(x: float, y: float, grid_size: float, immediate: bool = False,
                 rng: Optional[random.Random] = None) -> Point:
    """Snap (x, y) to the nearest grid node.

    Unless ``immediate`` is set, each axis gets an independent random offset
    in ``[-r/2, r/2)`` with ``r = floor(0.15 * grid_size)`` so that items
    dropped on the same cell do not cover each other exactly. ``rng`` is
    anything with a ``random()`` method; the ``random`` module is used when
    omitted. The result is clamped to non-negative coordinates.
    """
    sx = snap(x, grid_size)
    sy = snap(y, grid_size)
    if not immediate:
        source = rng if rng is not None else random
        offset_range = math.floor(grid_size * JITTER_RATIO)
        sx += source.random() * offset_range - offset_range / 2
        sy += source.random() * offset_range - offset_range / 2
    return Point(max(0.0, sx), max(0.0, sy))
