from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, List, Optional

from .geometry import Point2D

if TYPE_CHECKING:
    from .path_model import Path
    from .spline import Spline


class Waypoint:
    """A path anchor: position, tangent, and the 0-2 splines that meet at it.

    Geometry edits go through :meth:`edit` (or the property setters, which call
    it) so every incident spline is recomputed before the call returns.
    """

    def __init__(
        self,
        position: Point2D = Point2D(),
        tangent: Point2D = Point2D(),
        *,
        locked: bool = False,
        reversed: bool = False,
        name: str = "",
    ):
        self._position = position
        self._tangent = tangent
        self._locked = bool(locked)
        self._reversed = bool(reversed)
        self.name = name
        self._path_ref: Optional[weakref.ReferenceType] = None
        self.previous_spline: Optional["Spline"] = None
        self.next_spline: Optional["Spline"] = None

    def __repr__(self) -> str:
        return (
            f"Waypoint(position={self._position!r}, tangent={self._tangent!r}, "
            f"locked={self._locked}, reversed={self._reversed}, name={self.name!r})"
        )

    # ---------------- Owning path ----------------
    @property
    def path(self) -> Optional["Path"]:
        if self._path_ref is None:
            return None
        return self._path_ref()

    def _attach(self, path: "Path") -> None:
        self._path_ref = weakref.ref(path)

    def _detach(self) -> None:
        self._path_ref = None
        self.previous_spline = None
        self.next_spline = None

    # ---------------- Geometry ----------------
    @property
    def position(self) -> Point2D:
        return self._position

    @position.setter
    def position(self, value: Point2D) -> None:
        self.edit(position=value)

    @property
    def tangent(self) -> Point2D:
        return self._tangent

    @tangent.setter
    def tangent(self, value: Point2D) -> None:
        self.edit(tangent=value)

    @property
    def x(self) -> float:
        return self._position.x

    @property
    def y(self) -> float:
        return self._position.y

    # ---------------- Flags ----------------
    @property
    def locked(self) -> bool:
        return self._locked

    @locked.setter
    def locked(self, value: bool) -> None:
        self._locked = bool(value)

    @property
    def reversed(self) -> bool:
        return self._reversed

    @reversed.setter
    def reversed(self, value: bool) -> None:
        self._reversed = bool(value)

    def edit(
        self,
        position: Optional[Point2D] = None,
        tangent: Optional[Point2D] = None,
        locked: Optional[bool] = None,
        reversed: Optional[bool] = None,
    ) -> None:
        """Apply any subset of edits, then propagate once if geometry changed."""
        geometry_changed = False
        if position is not None and position != self._position:
            self._position = position
            geometry_changed = True
        if tangent is not None and tangent != self._tangent:
            self._tangent = tangent
            geometry_changed = True
        if locked is not None:
            self._locked = bool(locked)
        if reversed is not None:
            self._reversed = bool(reversed)
        if geometry_changed:
            self._propagate()

    def incident_splines(self) -> List["Spline"]:
        return [s for s in (self.previous_spline, self.next_spline) if s is not None]

    def _propagate(self) -> None:
        path = self.path
        if path is not None:
            path.notify_waypoint_changed(self)
            return
        for spline in self.incident_splines():
            spline.update()

    def copy(self) -> "Waypoint":
        """Detached copy carrying geometry, flags and name only."""
        return Waypoint(
            self._position,
            self._tangent,
            locked=self._locked,
            reversed=self._reversed,
            name=self.name,
        )
