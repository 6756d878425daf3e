import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6 import QtWidgets

from models.geometry import Point2D
from models.path_model import Path
from models.waypoint import Waypoint


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


def make_waypoint(x, y, tx=1.0, ty=0.0, **kwargs) -> Waypoint:
    return Waypoint(Point2D(x, y), Point2D(tx, ty), **kwargs)


@pytest.fixture
def straight_path() -> Path:
    return Path(
        [
            make_waypoint(0.0, 0.0, 3.0, 0.0, name="A"),
            make_waypoint(10.0, 0.0, 3.0, 0.0, name="B"),
        ]
    )


@pytest.fixture
def three_point_path() -> Path:
    return Path(
        [
            make_waypoint(0.0, 0.0, 2.0, 0.0),
            make_waypoint(4.0, 2.0, 2.0, 1.0),
            make_waypoint(8.0, 0.0, 2.0, -1.0),
        ]
    )
