# mypy: ignore-errors
from __future__ import annotations

import logging
import os

from PySide6.QtWidgets import QMainWindow, QFileDialog, QInputDialog

from models.path_model import Path
from models.selection import SelectionContext
from utils.project_io import export_csv
from utils.project_manager import ProjectManager
from ..canvas import PathCanvasView
from .menus import build_menu_bar

from ui.qt_compat import QMessageBox

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, project_manager: ProjectManager | None = None):
        super().__init__()
        self.resize(1000, 600)
        self.project_manager = project_manager or ProjectManager()
        self.selection = SelectionContext(self)
        cfg = self.project_manager.config
        self.canvas = PathCanvasView(
            self.selection,
            field_length_m=float(cfg["field_length_meters"]),
            field_width_m=float(cfg["field_width_meters"]),
            stroke_width_m=float(cfg["spline_stroke_width_meters"]),
        )
        self.setCentralWidget(self.canvas)
        self.canvas.editRejected.connect(self._show_rejected_edit)
        self.selection.waypointSelected.connect(self._on_waypoint_selected)
        build_menu_bar(self)

    @property
    def path(self) -> Path | None:
        return self.canvas.path

    def set_path(self, path: Path, filename: str | None = None):
        self.canvas.set_path(path)
        title = filename or path.name or "untitled"
        self.setWindowTitle(f"{title} - Spline Path Editor")

    def open_project(self, directory: str):
        self.project_manager.set_project_dir(directory)
        path, filename = self.project_manager.load_last_or_first_or_create()
        self.set_path(path, filename)

    # ---------------- Menu actions ----------------
    def _action_open_project(self):
        directory = QFileDialog.getExistingDirectory(self, "Open Project")
        if directory:
            self.open_project(directory)

    def _populate_recent_projects(self):
        self.menu_recent_projects.clear()
        for directory in self.project_manager.recent_projects():
            action = self.menu_recent_projects.addAction(directory)
            action.triggered.connect(lambda _=False, d=directory: self.open_project(d))

    def _populate_load_path_menu(self):
        self.menu_load_path.clear()
        for filename in self.project_manager.list_paths():
            action = self.menu_load_path.addAction(os.path.splitext(filename)[0])
            action.triggered.connect(lambda _=False, f=filename: self._load_path(f))

    def _load_path(self, filename: str):
        path = self.project_manager.load_path(filename)
        if path is None:
            QMessageBox.warning(self, "Load Path", f"Could not load {filename}")
            return
        self.set_path(path, filename)

    def _action_create_new_path(self):
        name, ok = QInputDialog.getText(self, "Create New Path", "Path name:")
        if not ok or not name:
            return
        path = self.project_manager.new_path(name)
        filename = self.project_manager.save_path(path, f"{name}.json")
        self.set_path(path, filename)

    def _action_save(self):
        if self.path is None:
            return
        if self.project_manager.save_path(self.path) is None:
            QMessageBox.warning(self, "Save Path", "Could not save path; is a project open?")

    def _action_export_csv(self):
        if self.path is None:
            return
        filename, _ = QFileDialog.getSaveFileName(self, "Export CSV", "", "CSV files (*.csv)")
        if not filename:
            return
        try:
            with open(filename, "w", encoding="utf-8", newline="") as f:
                export_csv(self.path, f)
        except OSError as exc:
            logger.warning("CSV export to %s failed: %s", filename, exc)
            QMessageBox.warning(self, "Export CSV", str(exc))

    def _action_toggle_lock(self, checked: bool):
        wp = self.selection.current_waypoint
        if wp is not None:
            wp.locked = checked
            self.canvas.refresh_waypoint_style(wp)

    def _on_waypoint_selected(self, waypoint):
        self.action_toggle_lock.setEnabled(waypoint is not None)
        self.action_toggle_lock.setChecked(bool(waypoint is not None and waypoint.locked))

    def _show_rejected_edit(self, message: str):
        self.statusBar().showMessage(message, 4000)
