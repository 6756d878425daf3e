# mypy: ignore-errors
from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMenu, QMenuBar

from ui.qt_compat import QKeySequence

if TYPE_CHECKING:
    from ui.main_window.window import MainWindow


def build_menu_bar(window: "MainWindow") -> None:
    bar: QMenuBar = window.menuBar()
    bar.setNativeMenuBar(False)

    project_menu: QMenu = bar.addMenu("Project")
    window.action_open_project = QAction("Open Project…", window)
    window.action_open_project.triggered.connect(window._action_open_project)
    project_menu.addAction(window.action_open_project)
    project_menu.addSeparator()

    window.menu_recent_projects = project_menu.addMenu("Recent Projects")
    window.menu_recent_projects.aboutToShow.connect(window._populate_recent_projects)

    path_menu: QMenu = bar.addMenu("Path")
    window.menu_load_path = path_menu.addMenu("Load Path")
    window.menu_load_path.aboutToShow.connect(window._populate_load_path_menu)

    window.action_new_path = QAction("Create New Path", window)
    window.action_new_path.triggered.connect(window._action_create_new_path)
    path_menu.addAction(window.action_new_path)

    window.action_save = QAction("Save Path", window)
    window.action_save.setShortcut(QKeySequence.Save)
    window.action_save.triggered.connect(window._action_save)
    path_menu.addAction(window.action_save)
    path_menu.addSeparator()

    window.action_export_csv = QAction("Export CSV…", window)
    window.action_export_csv.triggered.connect(window._action_export_csv)
    path_menu.addAction(window.action_export_csv)

    edit_menu: QMenu = bar.addMenu("Edit")
    window.action_reverse = QAction("Reverse Path", window)
    window.action_reverse.triggered.connect(window.canvas.reverse_path)
    edit_menu.addAction(window.action_reverse)

    window.action_delete_waypoint = QAction("Delete Waypoint", window)
    window.action_delete_waypoint.setShortcut(QKeySequence.Delete)
    window.action_delete_waypoint.triggered.connect(window.canvas.delete_selected_waypoint)
    edit_menu.addAction(window.action_delete_waypoint)

    window.action_toggle_lock = QAction("Lock Tangent", window)
    window.action_toggle_lock.setCheckable(True)
    window.action_toggle_lock.triggered.connect(window._action_toggle_lock)
    edit_menu.addAction(window.action_toggle_lock)
