"""Pure serialization helpers for project paths."""

from __future__ import annotations

import csv
import json
import logging
import os
from typing import IO, Any, Dict, List, Optional

from models.geometry import Point2D
from models.path_model import Path
from models.spline import SplineKind
from models.waypoint import Waypoint

logger = logging.getLogger(__name__)

# Column layout of the CSV waypoint files exchanged with robot code.
CSV_HEADER = ["X", "Y", "Tangent X", "Tangent Y", "Fixed Theta", "Reversed", "Name"]


def serialize_path(path: Path) -> Dict[str, Any]:
    """Convert a Path model into the JSON structure stored on disk."""
    items: List[Dict[str, Any]] = []
    for wp in path.waypoints:
        entry: Dict[str, Any] = {
            "x_meters": float(wp.x),
            "y_meters": float(wp.y),
            "tangent_x_meters": float(wp.tangent.x),
            "tangent_y_meters": float(wp.tangent.y),
            "locked": bool(wp.locked),
            "reversed": bool(wp.reversed),
        }
        if wp.name:
            entry["name"] = wp.name
        items.append(entry)
    result: Dict[str, Any] = {"spline_kind": path.spline_kind.value, "waypoints": items}
    if path.name:
        result["name"] = path.name
    return result


def deserialize_path(data: Any, default_kind: SplineKind = SplineKind.QUICK) -> Path:
    """Build a Path from JSON data; malformed waypoint entries are skipped."""
    if not isinstance(data, dict):
        raise ValueError("Path data must be a JSON object")
    try:
        kind = SplineKind(data.get("spline_kind", default_kind))
    except ValueError:
        logger.warning("Unknown spline kind %r, using %s", data.get("spline_kind"), default_kind.value)
        kind = default_kind
    path = Path(name=str(data.get("name", "")), spline_kind=kind)
    items = data.get("waypoints", [])
    if not isinstance(items, list):
        items = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            waypoint = Waypoint(
                Point2D(float(item.get("x_meters", 0.0)), float(item.get("y_meters", 0.0))),
                Point2D(
                    float(item.get("tangent_x_meters", 0.0)),
                    float(item.get("tangent_y_meters", 0.0)),
                ),
                locked=bool(item.get("locked", False)),
                reversed=bool(item.get("reversed", False)),
                name=str(item.get("name", "")),
            )
        except (TypeError, ValueError):
            logger.warning("Skipping malformed waypoint entry: %r", item)
            continue
        path.append_waypoint(waypoint)
    return path


def export_csv(path: Path, stream: IO[str]) -> None:
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    for wp in path.waypoints:
        writer.writerow(
            [
                wp.x,
                wp.y,
                wp.tangent.x,
                wp.tangent.y,
                "true" if wp.locked else "false",
                "true" if wp.reversed else "false",
                wp.name,
            ]
        )


def import_csv(stream: IO[str], name: str = "", spline_kind: SplineKind = SplineKind.QUICK) -> Path:
    """Read a CSV waypoint table (see ``CSV_HEADER``) into a new Path."""
    path = Path(name=name, spline_kind=spline_kind)
    for row in csv.DictReader(stream):
        try:
            waypoint = Waypoint(
                Point2D(float(row["X"]), float(row["Y"])),
                Point2D(float(row["Tangent X"]), float(row["Tangent Y"])),
                locked=_parse_bool(row.get("Fixed Theta")),
                reversed=_parse_bool(row.get("Reversed")),
                name=row.get("Name") or "",
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed CSV row: %r", row)
            continue
        path.append_waypoint(waypoint)
    return path


def create_example_paths(paths_dir: str, tangent_meters: float = 2.0) -> None:
    """Write an example path file into an empty paths directory."""
    example = Path(
        [
            Waypoint(Point2D(2.0, 2.0), Point2D(tangent_meters, 0.0), name="Start"),
            Waypoint(Point2D(6.0, 4.0), Point2D(tangent_meters, 0.0), name="End"),
        ],
        name="example",
    )
    filepath = os.path.join(paths_dir, "example.json")
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(serialize_path(example), f, indent=2)


def _parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() in ("true", "1", "yes")
