#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations
import sys, json, os
from PySide6.QtCore import Qt, QSizeF
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QToolBar, QStatusBar, QFileDialog, QMessageBox,
    QDockWidget, QStyle, QMenu
)
from shiboken6 import isValid

from noteboard.scene import BoardScene, BoardView
from noteboard.properties import NotePanel
from noteboard.undo import UndoManager
from noteboard.config import BoardSettings
from noteboard.models import Mode
from noteboard.state import load_board_file, save_board_file
from noteboard.errors import BoardFileError, report_exception
from noteboard.logging import configure_root_logging, get_logger
from noteboard.utils import Debouncer

log = get_logger("app")


def _ensure_ext(path: str, ext: str) -> str:
    ext = ext.lower()
    return path if path.lower().endswith(ext) else path + ext


class MainWindow(QMainWindow):
    def __init__(self, settings: BoardSettings | None = None):
        super().__init__()
        self.setWindowTitle("NoteBoard")
        self.resize(1280, 860)
        self.settings = settings or BoardSettings()

        # 1) scene / view
        self.undo_manager = UndoManager(on_change=self._update_status,
                                        autosave_path=self.settings.autosave_path)
        self.scene = BoardScene(status_cb=self._status, snapshot_cb=self.undo_manager.push,
                                grid_config=self.settings.grid_config)
        self.scene.snap_to_grid = self.settings.snap_to_grid
        self.view = BoardView(self.scene)
        self.setCentralWidget(self.view)

        # 2) note panel
        self.props_panel = NotePanel(self.scene, self)
        self.props_dock = QDockWidget("Note", self)
        self.props_dock.setWidget(self.props_panel)
        self.props_dock.setAllowedAreas(Qt.LeftDockWidgetArea | Qt.RightDockWidgetArea)
        self.props_dock.setMinimumWidth(280)
        self.props_dock.setMaximumWidth(560)
        self.addDockWidget(Qt.RightDockWidgetArea, self.props_dock)

        # 3) toolbar / status
        self._save_settings = Debouncer(self.settings.sync, 500, self)
        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))

        self.view.scaleChanged.connect(lambda _s: self._update_status())
        self.scene.canvasResized.connect(lambda _w, _h: self._update_status())
        self.scene.gridChanged.connect(lambda _g: self._update_status())
        self.scene.selectionChanged.connect(self._on_scene_selection)
        self.scene.noteActivated.connect(self._on_note_activated)
        self.props_panel.requestFocusItem.connect(self._focus_item)

        # 4) initial state: last autosave, if any
        self._restore_autosave()
        self.undo_manager.reset(json.dumps(self.scene.serialize()))
        self._update_status()

    def _restore_autosave(self):
        path = self.settings.autosave_path
        if not os.path.exists(path):
            return
        try:
            self.scene.deserialize(load_board_file(path))
            log.info("restored %d notes from %s", len(self.scene.notes()), path)
        except BoardFileError as e:
            report_exception(e, where="restore autosave")
            self._status("Autosave could not be restored.")

    def _on_scene_selection(self):
        if not isValid(self.scene) or self.scene.rebuilding:
            return
        sel = [it for it in self.scene.selectedItems() if hasattr(it, "props")]
        self.props_panel.load_item(sel[0] if sel else None)

    def _on_note_activated(self, note_id: str):
        item = self.scene.note_by_id(note_id)
        if item is None:
            return
        self.props_panel.load_item(item)
        dock = getattr(self, "props_dock", None)
        if dock is not None and isValid(dock) and dock.isHidden():
            dock.show(); dock.raise_()
        self.props_panel.ed_content.setFocus()

    def _focus_item(self, item):
        self.scene.ensure_visible_item(item)
        self._status(f"Note: {item.props.title or '(untitled)'}")

    def _build_toolbar(self):
        tb = QToolBar("Board", self)
        tb.setMovable(False)
        tb.setIconSize(QSizeF(18, 18).toSize())
        tb.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.addToolBar(Qt.TopToolBarArea, tb)
        style = self.style()

        # ----- actions -----
        self.act_new = QAction(style.standardIcon(QStyle.SP_FileIcon), "New note", self)
        self.act_new.setShortcut(QKeySequence("Ctrl+N"))
        self.act_new.triggered.connect(self._new_note)

        self.act_delete = QAction(style.standardIcon(QStyle.SP_TrashIcon), "Delete", self)
        self.act_delete.setShortcut(QKeySequence.Delete)
        self.act_delete.triggered.connect(self._delete_selected)

        self.act_viewmode = QAction(style.standardIcon(QStyle.SP_DesktopIcon), "View only", self, checkable=True)
        self.act_viewmode.toggled.connect(self._toggle_viewmode)

        self.act_snap = QAction(style.standardIcon(QStyle.SP_DialogResetButton), "Snap to grid", self, checkable=True)
        self.act_snap.setChecked(self.scene.snap_to_grid)
        self.act_snap.toggled.connect(self._toggle_snap)

        self.act_open = QAction(style.standardIcon(QStyle.SP_DirOpenIcon), "Open board…", self)
        self.act_open.setShortcut(QKeySequence("Ctrl+O"))
        self.act_open.triggered.connect(self._open_board_dialog)

        self.act_import_into = QAction(style.standardIcon(QStyle.SP_DirOpenIcon), "Import notes…", self)
        self.act_import_into.triggered.connect(self._import_into_current_dialog)

        self.act_save = QAction(style.standardIcon(QStyle.SP_DialogSaveButton), "Save board…", self)
        self.act_save.setShortcut(QKeySequence("Ctrl+S"))
        self.act_save.triggered.connect(self._save_board_dialog)

        self.act_undo = QAction(style.standardIcon(QStyle.SP_ArrowBack), "Undo", self)
        self.act_undo.setShortcut(QKeySequence("Ctrl+Z"))
        self.act_undo.triggered.connect(self._undo)

        self.act_redo = QAction(style.standardIcon(QStyle.SP_ArrowForward), "Redo", self)
        self.act_redo.setShortcut(QKeySequence("Ctrl+Y"))
        self.act_redo.triggered.connect(self._redo)

        self.act_toggle_props = QAction(style.standardIcon(QStyle.SP_FileDialogInfoView), "Note panel", self, checkable=True)
        self.act_toggle_props.setChecked(True)
        self.act_toggle_props.toggled.connect(lambda on: (self.props_dock.show() if on else self.props_dock.hide()))
        self.props_dock.visibilityChanged.connect(lambda vis: self.act_toggle_props.setChecked(vis))

        self.recent_menu = QMenu("Recent boards", self)
        self.recent_menu.aboutToShow.connect(self._fill_recent_menu)

        for act in (self.act_new, self.act_delete):
            tb.addAction(act)
        tb.addSeparator()
        for act in (self.act_undo, self.act_redo):
            tb.addAction(act)
        tb.addSeparator()
        for act in (self.act_snap, self.act_viewmode):
            tb.addAction(act)
        tb.addSeparator()
        for act in (self.act_open, self.act_import_into, self.act_save):
            tb.addAction(act)
        tb.addSeparator()
        tb.addAction(self.act_toggle_props)

        m = self.menuBar().addMenu("Board")
        m.addAction(self.act_open)
        m.addMenu(self.recent_menu)
        m.addAction(self.act_import_into)
        m.addSeparator()
        m.addAction(self.act_save)

    def _fill_recent_menu(self):
        self.recent_menu.clear()
        files = self.settings.recent_files()
        if not files:
            act = self.recent_menu.addAction("(empty)"); act.setEnabled(False)
            return
        for path in files:
            act = self.recent_menu.addAction(os.path.basename(path))
            act.setToolTip(path)
            act.triggered.connect(lambda _=False, p=path: self._open_board(p))

    # ---- notes ----
    def _new_note(self):
        if self.scene.mode != Mode.EDIT:
            return
        item = self.scene.create_note()
        self.scene.clearSelection()
        item.setSelected(True)
        self.scene.ensure_visible_item(item)
        self._on_note_activated(item.props.id)

    def _delete_selected(self):
        if self.scene.mode != Mode.EDIT:
            return
        sel = [it for it in self.scene.selectedItems() if hasattr(it, "props")]
        for it in sel:
            self.scene.remove_note(it.props.id)

    # ---- files ----
    def _open_board(self, path: str):
        try:
            data = load_board_file(path)
            self.scene.deserialize(data)
        except BoardFileError as e:
            report_exception(e, where="open board")
            QMessageBox.critical(self, "Open failed", str(e))
            return
        self.undo_manager.push(json.dumps(self.scene.serialize()))
        self.settings.add_recent(path)
        self._save_settings.call()
        self._status(f"Opened: {os.path.basename(path)}")

    def _open_board_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open board", "", "NoteBoard (*.json);;All files (*)")
        if path:
            self._open_board(path)

    def _import_into_current_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import notes", "", "NoteBoard (*.json)")
        if not path: return
        try:
            added = self.scene.import_from_data(load_board_file(path))
        except BoardFileError as e:
            report_exception(e, where="import notes")
            QMessageBox.critical(self, "Import failed", str(e))
            return
        self._status(f"Imported {added} notes.")

    def _save_board_dialog(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save board", "board.json", "NoteBoard (*.json)")
        if not path:
            return
        path = _ensure_ext(path, ".json")
        try:
            save_board_file(path, self.scene.serialize())
        except BoardFileError as e:
            report_exception(e, where="save board")
            QMessageBox.critical(self, "Save failed", str(e))
            return
        self.settings.add_recent(path)
        self._save_settings.call()
        self._status(f"Saved: {os.path.basename(path)}")

    # ---- history ----
    def _undo(self):
        snap = self.undo_manager.undo()
        if snap is None: return
        self.scene.deserialize(json.loads(snap))
        self._update_status()

    def _redo(self):
        snap = self.undo_manager.redo()
        if snap is None: return
        self.scene.deserialize(json.loads(snap))
        self._update_status()

    # ---- modes ----
    def _toggle_viewmode(self, on: bool):
        self.scene.set_editable(not on)
        self._update_status()

    def _toggle_snap(self, on: bool):
        self.scene.snap_to_grid = on
        self.settings.snap_to_grid = on
        self._save_settings.call()
        self._update_status()

    def _status(self, text: str):
        self.statusBar().showMessage(text, 3000)

    def _update_status(self):
        if not hasattr(self, "view"):
            return
        act_undo = getattr(self, "act_undo", None)
        if act_undo is not None:
            act_undo.setEnabled(self.undo_manager.can_undo())
            self.act_redo.setEnabled(self.undo_manager.can_redo())
        r = self.scene.sceneRect()
        self.statusBar().showMessage(
            f"Mode: {'view' if self.scene.mode == Mode.VIEW else 'edit'} | "
            f"Grid: {'ON' if self.scene.snap_to_grid else 'OFF'} "
            f"{self.scene.grid_size:.0f} px ({self.scene.breakpoint}) | "
            f"Canvas: {int(r.width())}×{int(r.height())} px | "
            f"Zoom: {int(self.view.transform().m11() * 100)}%"
        )

    def closeEvent(self, event):
        self._save_settings.flush()
        super().closeEvent(event)


def main():
    configure_root_logging()
    app = QApplication(sys.argv)
    app.setOrganizationName("NoteBoard")
    app.setApplicationName("Board")
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
