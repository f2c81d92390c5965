from __future__ import annotations

SCROLL_THRESHOLD = 100.0
SCROLL_MAX_SPEED = 15.0


def get_auto_scroll_speed(mouse_pos: float, container_start: float, container_end: float,
                          threshold: float = SCROLL_THRESHOLD,
                          max_speed: float = SCROLL_MAX_SPEED) -> float:
    """Scroll velocity (px per frame) for a pointer near a container edge.

    Negative near ``container_start``, positive near ``container_end``, 0 in
    between. Speed grows linearly from 0 at ``threshold`` px away to
    ``max_speed`` at the edge. A pointer past an edge scrolls at ``max_speed``.

    When the container is narrower than ``2 * threshold`` a position can be
    near both edges; the start edge is checked first and wins.
    """
    from_start = mouse_pos - container_start
    if from_start < threshold:
        from_start = max(from_start, 0.0)
        return -((threshold - from_start) / threshold) * max_speed

    from_end = container_end - mouse_pos
    if from_end < threshold:
        from_end = max(from_end, 0.0)
        return ((threshold - from_end) / threshold) * max_speed

    return 0.0
