from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .models import Point
from .geometry import is_click_not_drag, CLICK_THRESHOLD
from .logging import get_logger

log = get_logger("drag")


@dataclass(frozen=True)
class DragState:
    is_dragging: bool = False
    drag_start: Optional[Point] = None
    current_position: Point = field(default_factory=Point)


IDLE = DragState()


@dataclass(frozen=True)
class DragResult:
    start: Point
    end: Point
    is_click: bool


class DragController:
    """Tracks one pointer gesture through start/move/end transitions.

    The state object is replaced on every transition, never mutated, so
    holders of an older ``state`` keep a consistent snapshot.
    """

    def __init__(self, click_threshold: float = CLICK_THRESHOLD):
        self.click_threshold = click_threshold
        self._state: DragState = IDLE

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state.is_dragging

    @property
    def delta(self) -> Point:
        st = self._state
        if not st.is_dragging or st.drag_start is None:
            return Point()
        return st.current_position - st.drag_start

    def start(self, point: Point) -> DragState:
        if self._state.is_dragging:
            log.debug("drag restarted at %s without end", point)
        self._state = DragState(True, point, point)
        log.debug("drag start %s", point)
        return self._state

    def move(self, point: Point) -> DragState:
        if not self._state.is_dragging:
            return self._state
        self._state = DragState(True, self._state.drag_start, point)
        return self._state

    def end(self, point: Optional[Point] = None) -> Optional[DragResult]:
        st = self._state
        if not st.is_dragging or st.drag_start is None:
            return None
        end = point if point is not None else st.current_position
        result = DragResult(st.drag_start, end,
                            is_click_not_drag(st.drag_start, end, self.click_threshold))
        self._state = DragState(False, None, end)
        log.debug("drag end %s (click=%s)", end, result.is_click)
        return result

    def cancel(self):
        if self._state.is_dragging:
            log.debug("drag cancelled at %s", self._state.current_position)
        self._state = DragState(False, None, self._state.current_position)
