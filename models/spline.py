"""Spline variants joining two consecutive waypoints of a path.

``FullSpline`` stores its control points and lets the editor drag them;
``QuickSpline`` always derives them from its endpoints; ``SwappingSpline`` is a
composite that shows one of the two and owns a QuickSpline child whose
waypoint insertions are redirected to the composite.
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from . import hermite
from .errors import InvalidOperationError, OutOfRangeError
from .geometry import Point2D

if TYPE_CHECKING:
    from .selection import SelectionContext
    from .waypoint import Waypoint

# Number of highlight styles a spline's sub-parts can be selected into.
SUBCHILD_COUNT = 8

UpdateListener = Callable[["Spline"], None]


class SplineKind(str, Enum):
    QUICK = "quick"
    FULL = "full"
    SWAPPING = "swapping"


class Spline(ABC):
    def __init__(self, start: "Waypoint", end: "Waypoint"):
        self._start = start
        self._end = end
        self._group: Any = None
        self._scale_factor = 1.0
        self.subchild_index: Optional[int] = None
        self._listeners: List[UpdateListener] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(start={self._start.position!r}, end={self._end.position!r})"

    @property
    def start(self) -> "Waypoint":
        return self._start

    @property
    def end(self) -> "Waypoint":
        return self._end

    @property
    def group(self) -> Any:
        return self._group

    @abstractmethod
    def control_points(self) -> Tuple[Point2D, Point2D]:
        """Return ``(control1, control2)`` of the cubic Bezier for this segment."""

    def set_end(self, end: "Waypoint") -> None:
        self._end = end
        self.update()

    def update(self) -> None:
        self._recompute()
        self._notify()

    def _recompute(self) -> None:
        pass

    def point_at(self, t: float) -> Point2D:
        control1, control2 = self.control_points()
        return hermite.point_at(self._start.position, control1, control2, self._end.position, t)

    # ---------------- Render listeners ----------------
    def add_update_listener(self, listener: UpdateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_update_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ---------------- Path editing ----------------
    def reference_spline(self) -> "Spline":
        """The spline that stands for this one in its path's topology."""
        return self

    def add_path_waypoint(self, selection: Optional["SelectionContext"] = None) -> "Waypoint":
        """Split the reference spline at its midpoint and select the new waypoint."""
        spline = self.reference_spline()
        path = spline.start.path
        if path is None:
            raise InvalidOperationError("Spline does not belong to a path")
        waypoint = path.insert_waypoint_after(spline)
        if selection is None:
            selection = path.selection
        if selection is not None:
            selection.select_waypoint(waypoint)
        return waypoint

    # ---------------- Scene hooks ----------------
    def add_to_group(self, group: Any, scale_factor: float = 1.0) -> None:
        self._group = group
        self._scale_factor = scale_factor
        group.add_spline(self, scale_factor)

    def remove_from_group(self, group: Any) -> None:
        group.remove_spline(self)
        if self._group is group:
            self._group = None

    def enable_subchild_selector(self, index: int) -> None:
        if not 0 <= index < SUBCHILD_COUNT:
            raise OutOfRangeError(f"Subchild selector {index} not in [0, {SUBCHILD_COUNT})")
        self.subchild_index = index
        self._notify()


class FullSpline(Spline):
    """Cubic segment with independently settable control points.

    ``update()`` always re-solves them from the endpoints; a manual drag via
    :meth:`set_control_points` lasts until the next endpoint edit.
    """

    def __init__(self, start: "Waypoint", end: "Waypoint"):
        super().__init__(start, end)
        self._control1, self._control2 = hermite.solve(start, end)

    def control_points(self) -> Tuple[Point2D, Point2D]:
        return self._control1, self._control2

    def set_control_points(self, control1: Point2D, control2: Point2D) -> None:
        self._control1 = control1
        self._control2 = control2
        self._notify()

    def _recompute(self) -> None:
        self._control1, self._control2 = hermite.solve(self._start, self._end)


class QuickSpline(Spline):
    def __init__(self, start: "Waypoint", end: "Waypoint", parent: Optional[Spline] = None):
        super().__init__(start, end)
        self._parent_ref: Optional[weakref.ReferenceType] = (
            weakref.ref(parent) if parent is not None else None
        )

    @property
    def parent(self) -> Optional[Spline]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def control_points(self) -> Tuple[Point2D, Point2D]:
        # Never cached: always reflects the endpoints as they are now.
        return hermite.solve(self._start, self._end)

    def reference_spline(self) -> Spline:
        parent = self.parent
        return parent if parent is not None else self


class SwappingSpline(Spline):
    """Composite showing either a quick or a full child for the same endpoints."""

    def __init__(self, start: "Waypoint", end: "Waypoint", quick: bool = True):
        super().__init__(start, end)
        self.quick_spline = QuickSpline(start, end, parent=self)
        self.full_spline = FullSpline(start, end)
        self._active: Spline = self.quick_spline if quick else self.full_spline

    @property
    def active(self) -> Spline:
        return self._active

    @property
    def is_quick(self) -> bool:
        return self._active is self.quick_spline

    def control_points(self) -> Tuple[Point2D, Point2D]:
        return self._active.control_points()

    def set_end(self, end: "Waypoint") -> None:
        self._end = end
        self.quick_spline.set_end(end)
        self.full_spline.set_end(end)
        self._notify()

    def update(self) -> None:
        self.quick_spline.update()
        self.full_spline.update()
        self._notify()

    def use_quick(self) -> None:
        self._swap_to(self.quick_spline)

    def use_full(self) -> None:
        self._swap_to(self.full_spline)

    def _swap_to(self, child: Spline) -> None:
        if child is self._active:
            return
        previous = self._active
        self._active = child
        if self._group is not None:
            previous.remove_from_group(self._group)
            child.add_to_group(self._group, self._scale_factor)
        self._notify()

    def add_to_group(self, group: Any, scale_factor: float = 1.0) -> None:
        self._group = group
        self._scale_factor = scale_factor
        self._active.add_to_group(group, scale_factor)

    def remove_from_group(self, group: Any) -> None:
        self._active.remove_from_group(group)
        if self._group is group:
            self._group = None

    def enable_subchild_selector(self, index: int) -> None:
        super().enable_subchild_selector(index)
        self.quick_spline.enable_subchild_selector(index)
        self.full_spline.enable_subchild_selector(index)


def make_spline(kind: SplineKind, start: "Waypoint", end: "Waypoint") -> Spline:
    if kind is SplineKind.FULL:
        return FullSpline(start, end)
    if kind is SplineKind.SWAPPING:
        return SwappingSpline(start, end)
    return QuickSpline(start, end)
