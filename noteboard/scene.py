from __future__ import annotations
import json, math, random
from contextlib import contextmanager
from typing import Optional, Dict, Callable, Iterator, List, Tuple

from PySide6.QtCore import Qt, QRectF, QPointF, QPoint, QTimer, Signal
from PySide6.QtGui import QPainter, QPen, QWheelEvent, QCursor
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QApplication

from .models import Mode, GridConfig, NoteProps, Point
from .grid import DEFAULT_GRID_CONFIG, DESKTOP_MAX, get_responsive_grid_size, breakpoint_for_width, snap_to_grid
from .canvas import calculate_canvas_size, MIN_CANVAS_W, MIN_CANVAS_H, CANVAS_PADDING
from .autoscroll import get_auto_scroll_speed
from .drag import DragController, DragResult
from .items import StickyNoteItem, DRAG_Z, REST_Z
from .state import BoardState, notes_from_data
from .factory import NoteFactory
from .logging import get_logger
from .utils import (BG_COLOR, MAJOR_EVERY, GRID_MAJOR, GRID_MINOR, NOTE_W, NOTE_H,
                    SCROLL_FRAME_MS, CANVAS_REFRESH_MS, Debouncer, to_point)

log = get_logger("scene")

EDITABLE_FIELDS = ("title", "content", "color")


class BoardScene(QGraphicsScene):
    noteActivated = Signal(str)          # note id; click or double-click
    notesChanged = Signal()
    dragStateChanged = Signal(bool)
    canvasResized = Signal(float, float)
    gridChanged = Signal(float)

    def __init__(self, status_cb: Optional[Callable[[str], None]] = None,
                 snapshot_cb: Optional[Callable[[str], None]] = None,
                 rng: Optional[random.Random] = None,
                 grid_config: GridConfig = DEFAULT_GRID_CONFIG, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.mode = Mode.EDIT
        self.snap_to_grid = True
        self.rng = rng if rng is not None else random.Random()
        self.grid_config = grid_config
        self.container_width = float(DESKTOP_MAX - 1)
        self.grid_size = get_responsive_grid_size(self.container_width, grid_config)
        self.setItemIndexMethod(QGraphicsScene.NoIndex)
        self.setSceneRect(0, 0, MIN_CANVAS_W, MIN_CANVAS_H)
        self._status_cb = status_cb
        self._snapshot_cb = snapshot_cb
        self._notes: Dict[str, StickyNoteItem] = {}
        self._visible_w = MIN_CANVAS_W
        self._visible_h = MIN_CANVAS_H
        self.drag = DragController()
        self._drag_item: Optional[StickyNoteItem] = None
        self._drag_origins: Dict[str, QPointF] = {}
        self.state = BoardState()
        self.factory = NoteFactory(self)
        self._canvas_refresh = Debouncer(self.update_canvas_size, CANVAS_REFRESH_MS, self)
        self._batch_depth = 0
        self._batch_dirty = False

    @property
    def breakpoint(self) -> str:
        return breakpoint_for_width(self.container_width)

    # ---- notes ----
    def notes(self) -> List[StickyNoteItem]:
        return list(self._notes.values())

    def note_by_id(self, note_id: str) -> Optional[StickyNoteItem]:
        return self._notes.get(note_id)

    def add_note(self, props: NoteProps) -> StickyNoteItem:
        old = self._notes.get(props.id)
        if old is not None:
            log.warning("note %s already on the board, replacing it", props.id)
            self.removeItem(old)
        item = StickyNoteItem(props)
        item.set_editable(self.mode == Mode.EDIT)
        self.addItem(item)
        self._notes[props.id] = item
        self._canvas_refresh.call()
        self._notes_changed()
        return item

    def create_note(self, meta: Optional[Dict] = None, scene_pos: Optional[QPointF] = None) -> StickyNoteItem:
        item = self.factory.create_note(meta, scene_pos)
        self._push_snapshot("new note")
        return item

    def remove_note(self, note_id: str) -> bool:
        item = self._notes.pop(note_id, None)
        if item is None:
            return False
        if item is self._drag_item:
            self.drag.cancel()
            self._drag_item = None
        self.removeItem(item)
        self._canvas_refresh.call()
        self._notes_changed()
        self._push_snapshot("delete")
        return True

    def update_note(self, note_id: str, **changes) -> bool:
        item = self._notes.get(note_id)
        if item is None:
            return False
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise TypeError(f"cannot update note fields: {', '.join(sorted(unknown))}")
        changed = False
        for key, value in changes.items():
            if getattr(item.props, key) != value:
                setattr(item.props, key, value); changed = True
        if not changed:
            return False
        item.props.touch()
        item.refresh()
        self._notes_changed()
        self._push_snapshot("edit")
        return True

    @property
    def rebuilding(self) -> bool:
        """True inside ``batch_changes``, e.g. while undo reloads the board."""
        return self._batch_depth > 0

    def _notes_changed(self):
        if self._batch_depth:
            self._batch_dirty = True
        else:
            self.notesChanged.emit()

    @contextmanager
    def batch_changes(self) -> Iterator[None]:
        """Hold back ``notesChanged`` until the block ends, then emit it once.

        Listeners never see the half-built board of a clear-and-reload.
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
            if not self._batch_depth and self._batch_dirty:
                self._batch_dirty = False
                self.notesChanged.emit()

    def clear_all_items(self):
        self.drag.cancel()
        self._drag_item = None
        self._drag_origins = {}
        for item in list(self._notes.values()):
            self.removeItem(item)
        self._notes.clear()
        self._notes_changed()

    # ---- drag gesture ----
    def _moved_notes(self) -> List[StickyNoteItem]:
        """Notes whose position differs from where the current gesture found them."""
        moved = []
        for note_id, origin in self._drag_origins.items():
            it = self._notes.get(note_id)
            if it is not None and it.pos() != origin:
                moved.append(it)
        return moved

    def _restore_origins(self, items: List[StickyNoteItem]):
        for it in items:
            it.setPos(self._drag_origins[it.props.id])

    def begin_note_drag(self, item: StickyNoteItem, scene_pos: QPointF):
        if self.mode != Mode.EDIT:
            return
        self.drag.start(to_point(scene_pos))
        self._drag_item = item
        # Qt moves every selected note, and selection may still change on this press
        self._drag_origins = {nid: QPointF(it.pos()) for nid, it in self._notes.items()}
        item.setZValue(DRAG_Z)
        self.dragStateChanged.emit(True)

    def move_note_drag(self, scene_pos: QPointF):
        if not self.drag.is_dragging:
            return
        self.drag.move(to_point(scene_pos))
        self._canvas_refresh.call()

    def shift_drag_item(self, dx: float, dy: float):
        """Keep the dragged notes under the cursor while the view auto-scrolls."""
        if not (self.drag.is_dragging and self._drag_item):
            return
        group = [it for it in self.selectedItems() if isinstance(it, StickyNoteItem)]
        if self._drag_item not in group:
            group.append(self._drag_item)
        for it in group:
            it.moveBy(dx, dy)
        self.drag.move(self.drag.state.current_position + Point(dx, dy))

    def finish_note_drag(self, scene_pos: QPointF) -> Optional[DragResult]:
        item = self._drag_item
        result = self.drag.end(to_point(scene_pos))
        self._drag_item = None
        if result is None or item is None:
            self._drag_origins = {}
            return None
        item.setZValue(REST_Z)
        moved = self._moved_notes()
        self.dragStateChanged.emit(False)

        if result.is_click:
            # sub-threshold jitter from Qt's own item move is undone
            self._restore_origins(moved)
            self._drag_origins = {}
            self.noteActivated.emit(item.props.id)
            return result

        self._drag_origins = {}
        for it in moved:
            if self.snap_to_grid:
                p = snap_to_grid(it.pos().x(), it.pos().y(), self.grid_size, rng=self.rng)
                it.setPos(QPointF(p.x, p.y))
            it.props.touch()
            it.refresh()
        self._canvas_refresh.cancel()
        self.update_canvas_size()
        if moved:
            self._push_snapshot("move")
        return result

    def cancel_note_drag(self) -> bool:
        item = self._drag_item
        if not self.drag.is_dragging or item is None:
            return False
        self.drag.cancel()
        self._drag_item = None
        if self.mouseGrabberItem() is item:
            item.ungrabMouse()
        self._restore_origins(self._moved_notes())
        self._drag_origins = {}
        item.setZValue(REST_Z)
        self.dragStateChanged.emit(False)
        self.update_canvas_size()
        return True

    # ---- layout ----
    def set_container_width(self, width: float):
        self.container_width = float(width)
        self._apply_grid_size()

    def set_grid_config(self, cfg: GridConfig):
        self.grid_config = cfg
        self._apply_grid_size()

    def _apply_grid_size(self):
        size = get_responsive_grid_size(self.container_width, self.grid_config)
        if size == self.grid_size:
            return
        self.grid_size = size
        log.debug("grid size %s (%s)", size, self.breakpoint)
        self.gridChanged.emit(size)
        self.update()

    def set_visible_size(self, w: float, h: float):
        self._visible_w, self._visible_h = w, h
        self.update_canvas_size()

    def update_canvas_size(self):
        b = calculate_canvas_size([it.props for it in self._notes.values()],
                                  NOTE_W, NOTE_H,
                                  max(MIN_CANVAS_W, self._visible_w),
                                  max(MIN_CANVAS_H, self._visible_h),
                                  CANVAS_PADDING)
        r = self.sceneRect()
        if r.width() == b.width and r.height() == b.height:
            return
        self.setSceneRect(0, 0, b.width, b.height)
        self.canvasResized.emit(b.width, b.height)

    def drawBackground(self, painter: QPainter, rect: QRectF):
        painter.fillRect(rect, BG_COLOR)
        step = self.grid_size
        if step <= 0:
            return
        left = math.floor(rect.left() / step) * step
        top  = math.floor(rect.top()  / step) * step
        x = left; i = int(round(x / step))
        while x < rect.right():
            is_major = (i % MAJOR_EVERY == 0)
            painter.setPen(QPen(GRID_MAJOR if is_major else GRID_MINOR, 1.5 if is_major else 1))
            painter.drawLine(QPointF(x, rect.top()), QPointF(x, rect.bottom()))
            x += step; i += 1
        y = top; j = int(round(y / step))
        while y < rect.bottom():
            is_major = (j % MAJOR_EVERY == 0)
            painter.setPen(QPen(GRID_MAJOR if is_major else GRID_MINOR, 1.5 if is_major else 1))
            painter.drawLine(QPointF(rect.left(), y), QPointF(rect.right(), y))
            y += step; j += 1

    def set_editable(self, editable: bool):
        self.mode = Mode.EDIT if editable else Mode.VIEW
        if not editable:
            self.cancel_note_drag()
            self.clearSelection()
        for it in self._notes.values():
            it.set_editable(editable)

    def ensure_visible_item(self, item: StickyNoteItem):
        for view in self.views():
            view.ensureVisible(item.sceneBoundingRect(), 40, 40)

    # ---- snapshots ----
    def serialize(self) -> Dict:
        return self.state.serialize(self)

    def deserialize(self, data: Dict):
        with self.batch_changes():
            self.state.deserialize(self, data)

    def import_from_data(self, data: Dict) -> int:
        """Merge notes from a board document; colliding ids get fresh ones."""
        added = 0
        with self.batch_changes():
            for props in notes_from_data(data):
                if props.id in self._notes:
                    props = NoteProps(title=props.title, content=props.content, color=props.color,
                                      position=props.position, created_at=props.created_at,
                                      updated_at=props.updated_at)
                self.add_note(props)
                added += 1
        self._canvas_refresh.cancel()
        self.update_canvas_size()
        if added:
            self._push_snapshot("import")
        return added

    def _push_snapshot(self, label: str = "change"):
        if self._status_cb:
            self._status_cb(f"Saved: {label}")
        if self._snapshot_cb:
            self._snapshot_cb(json.dumps(self.serialize()))


class BoardView(QGraphicsView):
    scaleChanged = Signal(float)  # current m11()

    def __init__(self, scene: BoardScene):
        super().__init__(scene)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setViewportUpdateMode(QGraphicsView.BoundingRectViewportUpdate)
        self.setDragMode(QGraphicsView.RubberBandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.AnchorViewCenter)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self._space_down = False

        self._scroll_timer = QTimer(self)
        self._scroll_timer.setInterval(SCROLL_FRAME_MS)
        self._scroll_timer.timeout.connect(self._auto_scroll_tick)
        scene.dragStateChanged.connect(self._on_drag_state)

    def board(self) -> BoardScene:
        return self.scene()

    def _sync_viewport(self):
        vp = self.viewport()
        s = self.transform().m11() or 1.0
        self.board().set_container_width(vp.width())
        self.board().set_visible_size(vp.width() / s, vp.height() / s)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._sync_viewport()

    # ---- auto-scroll ----
    def scroll_speeds(self, pos: QPoint) -> Tuple[float, float]:
        vp = self.viewport()
        return (get_auto_scroll_speed(pos.x(), 0, vp.width()),
                get_auto_scroll_speed(pos.y(), 0, vp.height()))

    def _on_drag_state(self, active: bool):
        if active:
            self._scroll_timer.start()
        else:
            self._scroll_timer.stop()

    def _auto_scroll_tick(self):
        if not self.board().drag.is_dragging:
            self._scroll_timer.stop()
            return
        vx, vy = self.scroll_speeds(self.viewport().mapFromGlobal(QCursor.pos()))
        if not vx and not vy:
            return
        hbar, vbar = self.horizontalScrollBar(), self.verticalScrollBar()
        h0, v0 = hbar.value(), vbar.value()
        hbar.setValue(h0 + int(round(vx)))
        vbar.setValue(v0 + int(round(vy)))
        s = self.transform().m11() or 1.0
        dx, dy = (hbar.value() - h0) / s, (vbar.value() - v0) / s
        if dx or dy:
            self.board().shift_drag_item(dx, dy)

    # ---- zoom / pan ----
    def wheelEvent(self, event: QWheelEvent):
        if QApplication.keyboardModifiers() & Qt.ControlModifier:
            angle = event.angleDelta().y()
            factor = 1.15 if angle > 0 else 1.0 / 1.15
            self.scale(factor, factor)
            self._sync_viewport()
            self.scaleChanged.emit(self.transform().m11())
            event.accept()
            return
        super().wheelEvent(event)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape and self.board().cancel_note_drag():
            event.accept()
            return
        if event.key() == Qt.Key_Space and not self._space_down:
            self._space_down = True
            self.setDragMode(QGraphicsView.ScrollHandDrag)
            event.accept()
            return
        super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key_Space and self._space_down:
            self._space_down = False
            self.setDragMode(QGraphicsView.RubberBandDrag)
            event.accept()
            return
        super().keyReleaseEvent(event)
