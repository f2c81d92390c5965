from .models import Point, Bounds, GridConfig, NoteProps, Mode, Breakpoint
from .geometry import calculate_distance, is_click_not_drag
from .autoscroll import get_auto_scroll_speed
from .grid import (DEFAULT_GRID_CONFIG, get_responsive_grid_size, breakpoint_for_width,
                   snap, snap_to_grid)
from .canvas import calculate_canvas_size
from .drag import DragState, DragResult, DragController
from .errors import NoteBoardError, BoardFileError

__all__ = [
    "Point", "Bounds", "GridConfig", "NoteProps", "Mode", "Breakpoint",
    "calculate_distance", "is_click_not_drag", "get_auto_scroll_speed",
    "DEFAULT_GRID_CONFIG", "get_responsive_grid_size", "breakpoint_for_width",
    "snap", "snap_to_grid", "calculate_canvas_size",
    "DragState", "DragResult", "DragController",
    "NoteBoardError", "BoardFileError",
]
