from PySide6.QtCore import QSettings, Qt

from models.path_model import Path
from tests.conftest import make_waypoint
from ui.canvas.constants import WAYPOINT_FILL, WAYPOINT_LOCKED_FILL
from ui.main_window import MainWindow
from utils.project_manager import ProjectManager


def make_window(tmp_path) -> MainWindow:
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    return MainWindow(ProjectManager(settings))


def test_lock_action_restyles_selected_waypoint(qapp, tmp_path):
    window = make_window(tmp_path)
    a = make_waypoint(1.0, 1.0)
    window.set_path(Path([a, make_waypoint(5.0, 1.0)]))
    window.selection.select_waypoint(a)
    item = window.canvas.item_for(a)
    assert item.brush().color() == WAYPOINT_FILL

    window._action_toggle_lock(True)

    assert a.locked
    assert item.brush().color() == WAYPOINT_LOCKED_FILL

    window._action_toggle_lock(False)

    assert item.brush().color() == WAYPOINT_FILL


def test_refresh_waypoint_style_reflects_reversed_flag(qapp, tmp_path):
    window = make_window(tmp_path)
    a = make_waypoint(1.0, 1.0)
    window.set_path(Path([a]))
    item = window.canvas.item_for(a)

    a.reversed = True
    window.canvas.refresh_waypoint_style(a)

    assert item.pen().style() == Qt.PenStyle.DashLine
