"""2D value type used for waypoint positions, tangents and control points (meters)."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Point2D":
        return Point2D(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Point2D":
        return Point2D(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Point2D":
        return Point2D(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def is_close(self, other: "Point2D", eps: float = 1e-9) -> bool:
        return abs(self.x - other.x) <= eps and abs(self.y - other.y) <= eps

    def as_tuple(self) -> tuple[float, float]:
        return float(self.x), float(self.y)
