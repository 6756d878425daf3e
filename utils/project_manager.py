from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from PySide6.QtCore import QSettings

from models.geometry import Point2D
from models.path_model import Path
from models.spline import SplineKind
from models.waypoint import Waypoint
from utils.project_io import create_example_paths, deserialize_path, serialize_path

logger = logging.getLogger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "field_length_meters": 16.54,
    "field_width_meters": 8.21,
    "default_spline_kind": SplineKind.QUICK.value,
    # Magnitude of the tangent given to the waypoints of a freshly created path
    "default_tangent_meters": 2.0,
    "spline_stroke_width_meters": 0.05,
}


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


class ProjectManager:
    """Handles project directory, config.json, and path JSON load/save.

    Persists last project dir and last opened path via QSettings.
    """

    SETTINGS_ORG = "Spline-Path-Editor"
    SETTINGS_APP = "Spline-Path-Editor"
    KEY_LAST_PROJECT_DIR = "project/last_project_dir"
    KEY_LAST_PATH_FILE = "project/last_path_file"
    KEY_RECENT_PROJECTS = "project/recent_projects"

    def __init__(self, settings: Optional[QSettings] = None):
        self.settings = settings if settings is not None else QSettings(self.SETTINGS_ORG, self.SETTINGS_APP)
        self.project_dir: Optional[str] = None
        self.config: Dict[str, Any] = DEFAULT_CONFIG.copy()
        self.current_path_file: Optional[str] = None  # filename like "example.json"

    # --------------- Project directory ---------------
    def _is_frc_repo_root(self, directory: str) -> bool:
        return os.path.isdir(os.path.join(directory, "src", "main", "deploy"))

    def _get_effective_project_dir(self, selected_dir: str) -> str:
        """Robot code repos keep their paths under src/main/deploy/paths_project."""
        selected_dir = os.path.abspath(selected_dir)
        if self._is_frc_repo_root(selected_dir):
            return os.path.join(selected_dir, "src", "main", "deploy", "paths_project")
        return selected_dir

    def set_project_dir(self, directory: str) -> None:
        directory = os.path.abspath(directory)
        self.project_dir = self._get_effective_project_dir(directory)
        self.settings.setValue(self.KEY_LAST_PROJECT_DIR, directory)
        self.ensure_project_structure()
        self._add_recent_project(self.project_dir)
        self.load_config()

    def get_paths_dir(self) -> Optional[str]:
        if not self.project_dir:
            return None
        return os.path.join(self.project_dir, "paths")

    def ensure_project_structure(self) -> None:
        if not self.project_dir:
            return
        paths_dir = os.path.join(self.project_dir, "paths")
        _ensure_dir(paths_dir)
        if not os.path.exists(os.path.join(self.project_dir, "config.json")):
            self.save_config(DEFAULT_CONFIG.copy())
        if not os.listdir(paths_dir):
            try:
                create_example_paths(paths_dir, float(self.config["default_tangent_meters"]))
            except OSError as exc:
                logger.warning("Could not write example paths to %s: %s", paths_dir, exc)

    def has_valid_project(self) -> bool:
        if not self.project_dir:
            return False
        cfg = os.path.join(self.project_dir, "config.json")
        paths = os.path.join(self.project_dir, "paths")
        return os.path.isdir(self.project_dir) and os.path.isfile(cfg) and os.path.isdir(paths)

    def load_last_project(self) -> bool:
        last_dir = self.settings.value(self.KEY_LAST_PROJECT_DIR, type=str)
        if not last_dir:
            return False
        effective_dir = self._get_effective_project_dir(last_dir)
        # Only accept an already valid project; do not create files here.
        cfg = os.path.join(effective_dir, "config.json")
        paths = os.path.join(effective_dir, "paths")
        if os.path.isdir(effective_dir) and os.path.isfile(cfg) and os.path.isdir(paths):
            self.set_project_dir(last_dir)
            return True
        return False

    # --------------- Recent Projects ---------------
    def recent_projects(self) -> List[str]:
        raw = self.settings.value(self.KEY_RECENT_PROJECTS)
        if not raw:
            return []
        # QSettings may return list or str
        if isinstance(raw, list):
            items = [str(x) for x in raw]
        else:
            try:
                items = json.loads(str(raw))
            except ValueError:
                items = []
            if not isinstance(items, list):
                items = []
        uniq: List[str] = []
        for p in items:
            if isinstance(p, str) and os.path.isdir(p) and p not in uniq:
                uniq.append(p)
        return uniq[:10]

    def _add_recent_project(self, directory: str) -> None:
        items = [d for d in self.recent_projects() if d != directory]
        items.insert(0, directory)
        # Stored as a JSON string; QSettings list round-trips differ per backend
        self.settings.setValue(self.KEY_RECENT_PROJECTS, json.dumps(items[:10]))

    # --------------- Config ---------------
    def load_config(self) -> Dict[str, Any]:
        if not self.project_dir:
            return self.config
        cfg_path = os.path.join(self.project_dir, "config.json")
        if not os.path.exists(cfg_path):
            return self.config
        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Keeping previous config, could not read %s: %s", cfg_path, exc)
            return self.config
        if isinstance(data, dict):
            # Merge onto defaults so missing keys get defaults
            merged = DEFAULT_CONFIG.copy()
            merged.update(data)
            self.config = merged
        return self.config

    def save_config(self, new_config: Optional[Dict[str, Any]] = None) -> None:
        if new_config is not None:
            self.config.update(new_config)
        if not self.project_dir:
            return
        cfg_path = os.path.join(self.project_dir, "config.json")
        try:
            with open(cfg_path, "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2)
        except OSError as exc:
            logger.warning("Could not write %s: %s", cfg_path, exc)

    def default_spline_kind(self) -> SplineKind:
        try:
            return SplineKind(self.config.get("default_spline_kind", SplineKind.QUICK.value))
        except ValueError:
            return SplineKind.QUICK

    def new_path(self, name: str = "untitled") -> Path:
        """Two-waypoint path across the field, using configured defaults."""
        tangent = float(self.config.get("default_tangent_meters", 2.0))
        length = float(self.config.get("field_length_meters", 16.54))
        width = float(self.config.get("field_width_meters", 8.21))
        return Path(
            [
                Waypoint(Point2D(length * 0.25, width * 0.5), Point2D(tangent, 0.0)),
                Waypoint(Point2D(length * 0.5, width * 0.5), Point2D(tangent, 0.0)),
            ],
            name=name,
            spline_kind=self.default_spline_kind(),
        )

    # --------------- Paths listing ---------------
    def list_paths(self) -> List[str]:
        paths_dir = self.get_paths_dir()
        if not paths_dir or not os.path.isdir(paths_dir):
            return []
        return sorted(f for f in os.listdir(paths_dir) if f.lower().endswith(".json"))

    # --------------- Path IO ---------------
    def load_path(self, filename: str) -> Optional[Path]:
        """Load a path from the paths directory by filename (e.g., 'my_path.json')."""
        paths_dir = self.get_paths_dir()
        if not paths_dir:
            return None
        filepath = os.path.join(paths_dir, filename)
        if not os.path.isfile(filepath):
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            path = deserialize_path(data, self.default_spline_kind())
        except (OSError, ValueError) as exc:
            logger.warning("Could not load path %s: %s", filepath, exc)
            return None
        if not path.name:
            path.name = os.path.splitext(filename)[0]
        self.current_path_file = filename
        self.settings.setValue(self.KEY_LAST_PATH_FILE, filename)
        return path

    def save_path(self, path: Path, filename: Optional[str] = None) -> Optional[str]:
        """Save path to filename in the paths dir. If filename is None, uses current_path_file
        or creates 'untitled.json'. Returns the filename used on success.
        """
        if filename is None:
            filename = self.current_path_file or "untitled.json"
        paths_dir = self.get_paths_dir()
        if not paths_dir:
            return None
        _ensure_dir(paths_dir)
        filepath = os.path.join(paths_dir, filename)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(serialize_path(path), f, indent=2)
        except OSError as exc:
            logger.warning("Could not save path %s: %s", filepath, exc)
            return None
        self.current_path_file = filename
        self.settings.setValue(self.KEY_LAST_PATH_FILE, filename)
        return filename

    def delete_path(self, filename: str) -> bool:
        """Delete a path file from the paths directory. Returns True if successful."""
        paths_dir = self.get_paths_dir()
        if not paths_dir:
            return False
        filepath = os.path.join(paths_dir, filename)
        if not os.path.isfile(filepath):
            return False
        try:
            os.remove(filepath)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", filepath, exc)
            return False
        if self.current_path_file == filename:
            self.current_path_file = None
            self.settings.remove(self.KEY_LAST_PATH_FILE)
        return True

    def load_last_or_first_or_create(self) -> Tuple[Path, str]:
        """Attempt to load last path (from settings). If unavailable, load first available
        path in directory. If none exist, create 'untitled.json' and return it.
        Returns (Path, filename).
        """
        last_file = self.settings.value(self.KEY_LAST_PATH_FILE, type=str)
        if last_file:
            p = self.load_path(last_file)
            if p is not None:
                return p, last_file
        files = self.list_paths()
        if files:
            p = self.load_path(files[0])
            if p is not None:
                return p, files[0]
        new_path = self.new_path()
        used = self.save_path(new_path, "untitled.json") or "untitled.json"
        return new_path, used
