"""Bezier <-> Hermite conversion for the cubic segments joining two waypoints.

A cubic Bezier ``p0 -> c1 -> c2 -> p3`` has start heading ``3 * (c1 - p0)`` and
end heading ``3 * (p3 - c2)``. Segments are specified the Hermite way (end
positions plus tangents), so the interior control points are solved from the
waypoints every time geometry is read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from .geometry import Point2D

if TYPE_CHECKING:
    from .waypoint import Waypoint


def control_points_from_tangents(
    start_position: Point2D,
    start_tangent: Point2D,
    end_position: Point2D,
    end_tangent: Point2D,
) -> Tuple[Point2D, Point2D]:
    control1 = start_position + start_tangent / 3
    control2 = end_position - end_tangent * 2 / 3
    return control1, control2


def solve(start: "Waypoint", end: "Waypoint") -> Tuple[Point2D, Point2D]:
    """Return ``(control1, control2)`` for the segment ``start -> end``.

    Zero tangents give a control point on top of its endpoint, which is a valid
    (locally straight) curve.
    """
    return control_points_from_tangents(start.position, start.tangent, end.position, end.tangent)


def point_at(p0: Point2D, c1: Point2D, c2: Point2D, p3: Point2D, t: float) -> Point2D:
    u = 1.0 - t
    return p0 * (u * u * u) + c1 * (3 * u * u * t) + c2 * (3 * u * t * t) + p3 * (t * t * t)


def derivative_at(p0: Point2D, c1: Point2D, c2: Point2D, p3: Point2D, t: float) -> Point2D:
    u = 1.0 - t
    return (c1 - p0) * (3 * u * u) + (c2 - c1) * (6 * u * t) + (p3 - c2) * (3 * t * t)
