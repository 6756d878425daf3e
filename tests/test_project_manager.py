import json
import os

import pytest
from PySide6.QtCore import QSettings

from models.geometry import Point2D
from models.spline import SplineKind
from utils.project_manager import DEFAULT_CONFIG, ProjectManager


@pytest.fixture
def settings(tmp_path):
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def manager(settings):
    return ProjectManager(settings)


def test_set_project_dir_creates_structure(manager, tmp_path):
    project = tmp_path / "project"

    manager.set_project_dir(str(project))

    assert manager.has_valid_project()
    assert manager.list_paths() == ["example.json"]
    with open(project / "config.json", encoding="utf-8") as f:
        assert json.load(f) == DEFAULT_CONFIG
    assert manager.recent_projects() == [str(project)]


def test_robot_repo_root_is_redirected(manager, tmp_path):
    repo = tmp_path / "robot"
    (repo / "src" / "main" / "deploy").mkdir(parents=True)

    manager.set_project_dir(str(repo))

    assert manager.project_dir == os.path.join(str(repo), "src", "main", "deploy", "paths_project")
    assert manager.has_valid_project()


def test_config_merges_onto_defaults(manager, tmp_path):
    project = tmp_path / "project"
    project.mkdir()
    (project / "paths").mkdir()
    (project / "config.json").write_text(json.dumps({"default_spline_kind": "full"}), encoding="utf-8")

    manager.set_project_dir(str(project))

    assert manager.config["default_spline_kind"] == "full"
    assert manager.config["field_length_meters"] == DEFAULT_CONFIG["field_length_meters"]
    assert manager.default_spline_kind() is SplineKind.FULL


def test_broken_config_keeps_defaults(manager, tmp_path):
    project = tmp_path / "project"
    project.mkdir()
    (project / "paths").mkdir()
    (project / "config.json").write_text("{not json", encoding="utf-8")

    manager.set_project_dir(str(project))

    assert manager.config == DEFAULT_CONFIG


def test_save_and_load_path(manager, tmp_path):
    manager.set_project_dir(str(tmp_path / "project"))
    path = manager.new_path("auto")
    path.insert_after(0, position=(6.0, 6.0))

    assert manager.save_path(path, "auto.json") == "auto.json"
    loaded = manager.load_path("auto.json")

    assert loaded is not None
    assert loaded.name == "auto"
    assert loaded.waypoints[1].position == Point2D(6.0, 6.0)
    assert len(loaded.splines) == 2
    assert manager.current_path_file == "auto.json"


def test_load_missing_or_corrupt_path(manager, tmp_path):
    manager.set_project_dir(str(tmp_path / "project"))
    (tmp_path / "project" / "paths" / "bad.json").write_text("[", encoding="utf-8")

    assert manager.load_path("missing.json") is None
    assert manager.load_path("bad.json") is None


def test_new_path_uses_config(manager):
    manager.config.update(
        {"default_tangent_meters": 1.25, "field_length_meters": 8.0, "field_width_meters": 4.0}
    )

    path = manager.new_path()

    assert [wp.position for wp in path.waypoints] == [Point2D(2.0, 2.0), Point2D(4.0, 2.0)]
    assert all(wp.tangent == Point2D(1.25, 0.0) for wp in path.waypoints)


def test_last_path_is_remembered(settings, tmp_path):
    first = ProjectManager(settings)
    first.set_project_dir(str(tmp_path / "project"))
    first.save_path(first.new_path("second"), "second.json")

    again = ProjectManager(settings)
    assert again.load_last_project()
    path, filename = again.load_last_or_first_or_create()

    assert filename == "second.json"
    assert path.name == "second"


def test_delete_path(manager, tmp_path):
    manager.set_project_dir(str(tmp_path / "project"))
    manager.save_path(manager.new_path(), "gone.json")

    assert manager.delete_path("gone.json")
    assert not manager.delete_path("gone.json")
    assert manager.current_path_file is None
    assert "gone.json" not in manager.list_paths()
