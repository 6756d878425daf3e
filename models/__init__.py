"""Path model: waypoints, splines and the paths that chain them."""

# Re-export key types for convenience when importing the package directly.
from .errors import InvalidOperationError, OutOfRangeError, PathError
from .geometry import Point2D
from .path_model import Path, create_path, create_waypoint, edit_waypoint
from .selection import SelectionContext
from .spline import FullSpline, QuickSpline, Spline, SplineKind, SwappingSpline
from .waypoint import Waypoint

__all__ = [
    "Path",
    "Point2D",
    "Waypoint",
    "Spline",
    "FullSpline",
    "QuickSpline",
    "SwappingSpline",
    "SplineKind",
    "SelectionContext",
    "PathError",
    "InvalidOperationError",
    "OutOfRangeError",
    "create_path",
    "create_waypoint",
    "edit_waypoint",
]
