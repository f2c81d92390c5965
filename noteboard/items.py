from __future__ import annotations
from PySide6.QtCore import Qt, QRectF, QPointF
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QFont
from PySide6.QtWidgets import QGraphicsRectItem, QGraphicsItem

from .models import NoteProps
from .utils import (NOTE_W, NOTE_H, NOTE_RADIUS, NOTE_PADDING, SELECTED_BORDER,
                    note_colors, to_point, to_qpointf)

DRAG_Z = 1000.0
REST_Z = 10.0


class StickyNoteItem(QGraphicsRectItem):
    def __init__(self, props: NoteProps):
        super().__init__(0, 0, NOTE_W, NOTE_H)
        self.props: NoteProps = props
        self.setFlag(QGraphicsItem.ItemIsSelectable, True)
        self.setFlag(QGraphicsItem.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges, True)
        self.setCursor(Qt.OpenHandCursor)
        self.setZValue(REST_Z)
        self.setPos(to_qpointf(props.position))
        self.update_tooltip()

    def set_editable(self, editable: bool):
        self.setFlag(QGraphicsItem.ItemIsMovable, editable)
        self.setFlag(QGraphicsItem.ItemIsSelectable, editable)
        self.setCursor(Qt.OpenHandCursor if editable else Qt.ArrowCursor)

    def itemChange(self, change, value):
        if change == QGraphicsItem.ItemPositionChange:
            # notes never leave the positive quadrant
            p: QPointF = value
            return QPointF(max(0.0, p.x()), max(0.0, p.y()))
        if change == QGraphicsItem.ItemPositionHasChanged:
            self.props.position = to_point(self.pos())
        return super().itemChange(change, value)

    # ---- pointer ----
    def _board(self):
        from .scene import BoardScene
        sc = self.scene()
        return sc if isinstance(sc, BoardScene) else None

    def mousePressEvent(self, e):
        board = self._board()
        if e.button() == Qt.LeftButton and board and self.flags() & QGraphicsItem.ItemIsMovable:
            self.setCursor(Qt.ClosedHandCursor)
            board.begin_note_drag(self, e.scenePos())
        super().mousePressEvent(e)

    def mouseMoveEvent(self, e):
        board = self._board()
        if board:
            board.move_note_drag(e.scenePos())
        super().mouseMoveEvent(e)

    def mouseReleaseEvent(self, e):
        super().mouseReleaseEvent(e)
        board = self._board()
        if e.button() == Qt.LeftButton and board:
            self.setCursor(Qt.OpenHandCursor)
            board.finish_note_drag(e.scenePos())

    def mouseDoubleClickEvent(self, e):
        board = self._board()
        if board:
            board.noteActivated.emit(self.props.id)
        super().mouseDoubleClickEvent(e)

    # ---- painting ----
    def paint(self, painter: QPainter, option, widget=None):
        painter.setRenderHint(QPainter.Antialiasing, True)
        bg, border, text = note_colors(self.props.color)
        r = self.rect()

        # drop shadow
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(0, 0, 0, 40))
        painter.drawRoundedRect(r.translated(3, 4), NOTE_RADIUS, NOTE_RADIUS)

        if self.isSelected():
            painter.setPen(QPen(SELECTED_BORDER, 2, Qt.DashLine))
        else:
            painter.setPen(QPen(border, 2, Qt.SolidLine))
        painter.setBrush(QBrush(bg))
        painter.drawRoundedRect(r, NOTE_RADIUS, NOTE_RADIUS)

        inner = r.adjusted(NOTE_PADDING, NOTE_PADDING, -NOTE_PADDING, -NOTE_PADDING)
        painter.setPen(text)
        painter.setFont(QFont("", 11, QFont.DemiBold))
        fm = painter.fontMetrics()
        title_h = fm.height() + 6
        title = fm.elidedText(self.props.title or "(untitled)", Qt.ElideRight, int(inner.width()))
        painter.drawText(QRectF(inner.left(), inner.top(), inner.width(), title_h),
                         Qt.AlignLeft | Qt.AlignVCenter, title)

        painter.setFont(QFont("", 9))
        body = QRectF(inner.left(), inner.top() + title_h + 4,
                      inner.width(), inner.height() - title_h - 4)
        painter.drawText(body, Qt.AlignLeft | Qt.AlignTop | Qt.TextWordWrap, self.props.content)

    def update_tooltip(self):
        self.setToolTip(
            f"{self.props.title or '(untitled)'}\n"
            f"Updated: {self.props.updated_at}"
        )

    def refresh(self):
        self.update_tooltip()
        self.update()
