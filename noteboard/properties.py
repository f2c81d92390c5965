from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPixmap, QIcon
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QLineEdit, QPlainTextEdit, QComboBox,
    QListWidget, QListWidgetItem, QLabel, QPushButton, QMessageBox
)

from .items import StickyNoteItem
from .scene import BoardScene
from .utils import NOTE_COLORS, note_colors


def _swatch(color: QColor, size: int = 14) -> QIcon:
    pm = QPixmap(size, size)
    pm.fill(color)
    return QIcon(pm)


class NotePanel(QWidget):
    requestFocusItem = Signal(object)  # item

    def __init__(self, scene: BoardScene, parent=None):
        super().__init__(parent)
        self.scene = scene
        self._current: Optional[StickyNoteItem] = None
        self._current_id: Optional[str] = None
        self._loading = False

        self.setMinimumWidth(260)
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        self.lbl_title = QLabel("Nothing selected")
        self.lbl_title.setStyleSheet("font-weight: 600;")
        root.addWidget(self.lbl_title)

        # ------- Note -------
        self.frm_note = QWidget()
        fn = QFormLayout(self.frm_note)
        fn.setLabelAlignment(Qt.AlignRight)

        self.ed_title = QLineEdit()
        self.ed_content = QPlainTextEdit()
        self.ed_content.setMinimumHeight(140)
        self.cb_color = QComboBox()
        for name, (bg, _border, _text) in NOTE_COLORS.items():
            self.cb_color.addItem(_swatch(bg), name.capitalize(), name)
        self.btn_delete = QPushButton("Delete note")

        fn.addRow("Title:", self.ed_title)
        fn.addRow("Text:", self.ed_content)
        fn.addRow("Color:", self.cb_color)
        fn.addRow(self.btn_delete)

        self.ed_title.editingFinished.connect(self._apply_title)
        self.ed_content.textChanged.connect(self._apply_content)
        self.cb_color.currentIndexChanged.connect(self._apply_color)
        self.btn_delete.clicked.connect(self._delete_current)
        root.addWidget(self.frm_note)

        # ------- All notes -------
        root.addWidget(QLabel("Notes on the board:"))
        self.list_notes = QListWidget()
        self.list_notes.setStyleSheet("QListWidget{ background:#fafafa; }")
        self.list_notes.itemDoubleClicked.connect(self._go_to_note)
        root.addWidget(self.list_notes, 1)

        self.scene.notesChanged.connect(self._refresh_list)
        self._refresh_list()
        self.load_item(None)

    def load_item(self, item: Optional[StickyNoteItem]):
        self._current = item
        self._current_id = item.props.id if item is not None else None
        self._loading = True
        try:
            if item is None:
                self.lbl_title.setText("Nothing selected")
                self.frm_note.setEnabled(False)
                self.ed_title.clear(); self.ed_content.clear()
                return
            self.lbl_title.setText("Sticky note")
            self.frm_note.setEnabled(True)
            self.ed_title.setText(item.props.title)
            self.ed_content.setPlainText(item.props.content)
            idx = self.cb_color.findData(item.props.color)
            self.cb_color.setCurrentIndex(max(0, idx))
        finally:
            self._loading = False

    def _apply(self, **changes):
        if self._loading or self._current_id is None:
            return
        self.scene.update_note(self._current_id, **changes)

    def _apply_title(self):
        self._apply(title=self.ed_title.text())

    def _apply_content(self):
        self._apply(content=self.ed_content.toPlainText())

    def _apply_color(self, _index: int):
        self._apply(color=self.cb_color.currentData())

    def _delete_current(self):
        item = self._current
        if item is None:
            return
        answer = QMessageBox.question(self, "Delete note",
                                      f"Delete \"{item.props.title or '(untitled)'}\"?")
        if answer != QMessageBox.Yes:
            return
        self.load_item(None)
        self.scene.remove_note(item.props.id)

    def _refresh_list(self):
        self.list_notes.clear()
        for it in self.scene.notes():
            li = QListWidgetItem(_swatch(note_colors(it.props.color)[0]),
                                 it.props.title or "(untitled)")
            li.setData(Qt.UserRole, it.props.id)
            self.list_notes.addItem(li)
        if self._current_id is not None:
            # undo/redo rebuilds items, so rebind by id
            fresh = self.scene.note_by_id(self._current_id)
            if fresh is not self._current:
                self.load_item(fresh)

    def _go_to_note(self, li: QListWidgetItem):
        item = self.scene.note_by_id(li.data(Qt.UserRole))
        if item is None:
            return
        self.scene.clearSelection()
        item.setSelected(True)
        self.requestFocusItem.emit(item)
