import io
import json

import pytest

from models.geometry import Point2D
from models.path_model import Path
from models.spline import SplineKind
from tests.conftest import make_waypoint
from utils.project_io import (
    CSV_HEADER,
    create_example_paths,
    deserialize_path,
    export_csv,
    import_csv,
    serialize_path,
)


@pytest.fixture
def named_path() -> Path:
    return Path(
        [
            make_waypoint(1.0, 2.0, 0.5, 0.0, name="Start"),
            make_waypoint(4.0, 3.0, 1.0, 1.0, locked=True),
            make_waypoint(7.0, 1.0, 0.0, -2.0, reversed=True, name="Shoot"),
        ],
        name="two ball",
        spline_kind=SplineKind.FULL,
    )


def test_serialize_layout(named_path: Path):
    data = serialize_path(named_path)

    assert data["name"] == "two ball"
    assert data["spline_kind"] == "full"
    assert data["waypoints"][0] == {
        "x_meters": 1.0,
        "y_meters": 2.0,
        "tangent_x_meters": 0.5,
        "tangent_y_meters": 0.0,
        "locked": False,
        "reversed": False,
        "name": "Start",
    }
    assert "name" not in data["waypoints"][1]
    json.dumps(data)


def test_deserialize_rebuilds_linked_path(named_path: Path):
    path = deserialize_path(json.loads(json.dumps(serialize_path(named_path))))

    assert path.name == "two ball"
    assert path.spline_kind is SplineKind.FULL
    assert [wp.position for wp in path.waypoints] == [wp.position for wp in named_path.waypoints]
    assert [wp.locked for wp in path.waypoints] == [False, True, False]
    assert [wp.reversed for wp in path.waypoints] == [False, False, True]
    assert [s.control_points() for s in path.splines] == [
        s.control_points() for s in named_path.splines
    ]
    path.check_integrity()


def test_deserialize_skips_malformed_entries():
    data = {
        "spline_kind": "nonsense",
        "waypoints": [
            {"x_meters": 1.0, "y_meters": 1.0},
            "not a dict",
            {"x_meters": "abc"},
            {"x_meters": 3.0, "y_meters": 1.0, "tangent_x_meters": 1.0},
        ],
    }

    path = deserialize_path(data, default_kind=SplineKind.SWAPPING)

    assert path.spline_kind is SplineKind.SWAPPING
    assert [wp.position for wp in path.waypoints] == [Point2D(1.0, 1.0), Point2D(3.0, 1.0)]
    assert path.waypoints[1].tangent == Point2D(1.0, 0.0)


def test_deserialize_rejects_non_object():
    with pytest.raises(ValueError):
        deserialize_path([1, 2, 3])


def test_csv_export_and_import(named_path: Path):
    buffer = io.StringIO()
    export_csv(named_path, buffer)
    text = buffer.getvalue()

    assert text.splitlines()[0] == ",".join(CSV_HEADER)
    assert text.splitlines()[3].endswith("true,Shoot")

    path = import_csv(io.StringIO(text), name="two ball")
    assert [(wp.position, wp.tangent, wp.locked, wp.reversed, wp.name) for wp in path.waypoints] == [
        (wp.position, wp.tangent, wp.locked, wp.reversed, wp.name) for wp in named_path.waypoints
    ]
    assert len(path.splines) == 2


def test_csv_import_skips_bad_rows():
    text = ",".join(CSV_HEADER) + "\n1,2,3,4,false,false,a\nx,2,3,4,false,false,b\n5,6,0,0,TRUE,0,\n"

    path = import_csv(io.StringIO(text))

    assert [wp.name for wp in path.waypoints] == ["a", ""]
    assert path.waypoints[1].locked
    assert not path.waypoints[1].reversed


def test_create_example_paths(tmp_path):
    create_example_paths(str(tmp_path), tangent_meters=1.5)

    with open(tmp_path / "example.json", encoding="utf-8") as f:
        path = deserialize_path(json.load(f))
    assert [wp.name for wp in path.waypoints] == ["Start", "End"]
    assert path.waypoints[0].tangent == Point2D(1.5, 0.0)
