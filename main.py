from __future__ import annotations

import argparse
import faulthandler
import logging
import sys
from typing import Sequence, cast

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QPalette, QColor
from PySide6.QtCore import Qt

from ui.main_window import MainWindow

faulthandler.enable()


def set_dark_theme(app: QApplication) -> None:
    """Apply a dark theme to the application."""
    app.setStyle("Fusion")

    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(17, 17, 17))
    palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Base, QColor(28, 28, 28))
    palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Button, QColor(43, 43, 43))
    palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
    app.setPalette(palette)


def run_app(project_dir: str | None, argv: Sequence[str] | None = None) -> int:
    """Create the QApplication and show the main window."""
    existing_app = QApplication.instance()
    app = existing_app or QApplication([sys.argv[0], *argv] if argv is not None else sys.argv)

    set_dark_theme(cast(QApplication, app))

    window = MainWindow()
    if project_dir:
        window.open_project(project_dir)
    elif window.project_manager.load_last_project():
        path, filename = window.project_manager.load_last_or_first_or_create()
        window.set_path(path, filename)
    else:
        window.set_path(window.project_manager.new_path())
    window.show()
    return app.exec()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="spline-path-editor", description="Waypoint spline path editor"
    )
    parser.add_argument("--project", help="Project directory to open")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )

    args, remaining = parser.parse_known_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return run_app(args.project, remaining if remaining else None)


if __name__ == "__main__":
    raise SystemExit(main())
