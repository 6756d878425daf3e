from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import InvalidOperationError, OutOfRangeError
from .geometry import Point2D
from .selection import SelectionContext
from .spline import FullSpline, Spline, SplineKind, SwappingSpline, make_spline
from .waypoint import Waypoint

PointLike = Union[Point2D, Sequence[float]]


def as_point(value: PointLike) -> Point2D:
    if isinstance(value, Point2D):
        return value
    x, y = value
    return Point2D(float(x), float(y))


class Path:
    """Ordered chain of waypoints joined by splines.

    ``splines[i]`` always runs from ``waypoints[i]`` to ``waypoints[i + 1]``.
    Every structural edit validates its arguments before touching any state,
    so a raised error leaves the path exactly as it was.
    """

    def __init__(
        self,
        waypoints: Iterable[Waypoint] = (),
        *,
        name: str = "",
        spline_kind: Union[SplineKind, str] = SplineKind.QUICK,
        selection: Optional[SelectionContext] = None,
    ):
        self.name = name
        self.spline_kind = SplineKind(spline_kind)
        self.selection = selection
        self._waypoints: List[Waypoint] = []
        self._splines: List[Spline] = []
        self._group: Any = None
        self._scale_factor = 1.0
        waypoints = list(waypoints)
        seen = set()
        for waypoint in waypoints:
            if waypoint.path is not None:
                raise InvalidOperationError("Waypoint already belongs to a path")
            if id(waypoint) in seen:
                raise InvalidOperationError("Waypoint listed twice")
            seen.add(id(waypoint))
        for waypoint in waypoints:
            self.append_waypoint(waypoint)

    def __repr__(self) -> str:
        return f"Path(name={self.name!r}, waypoints={len(self._waypoints)}, kind={self.spline_kind.value})"

    def __len__(self) -> int:
        return len(self._waypoints)

    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return tuple(self._waypoints)

    @property
    def splines(self) -> Tuple[Spline, ...]:
        return tuple(self._splines)

    @property
    def start(self) -> Optional[Waypoint]:
        return self._waypoints[0] if self._waypoints else None

    @property
    def end(self) -> Optional[Waypoint]:
        return self._waypoints[-1] if self._waypoints else None

    def index_of(self, waypoint: Waypoint) -> int:
        for i, candidate in enumerate(self._waypoints):
            if candidate is waypoint:
                return i
        raise InvalidOperationError("Waypoint is not part of this path")

    def get_spline(self, index: int) -> Spline:
        if 0 <= index < len(self._splines):
            return self._splines[index]
        raise OutOfRangeError(f"Spline index {index} out of range")

    def _spline_index(self, spline: Spline) -> int:
        for i, candidate in enumerate(self._splines):
            if candidate is spline:
                return i
        raise InvalidOperationError("Spline is not part of this path")

    # ---------------- Scene hooks ----------------
    def add_to_group(self, group: Any, scale_factor: float = 1.0) -> None:
        self._group = group
        self._scale_factor = scale_factor
        for spline in self._splines:
            spline.add_to_group(group, scale_factor)

    def remove_from_group(self, group: Any) -> None:
        for spline in self._splines:
            spline.remove_from_group(group)
        if self._group is group:
            self._group = None

    def _attach_spline(self, spline: Spline) -> None:
        if self._group is not None:
            spline.add_to_group(self._group, self._scale_factor)

    def _make_spline(self, start: Waypoint, end: Waypoint, like: Optional[Spline] = None) -> Spline:
        # New swapping splines start in the same mode as the one they replace
        spline = make_spline(self.spline_kind, start, end)
        if isinstance(spline, SwappingSpline) and isinstance(like, SwappingSpline) and not like.is_quick:
            spline.use_full()
        return spline

    def _drop_spline(self, spline: Spline) -> None:
        if spline.group is not None:
            spline.remove_from_group(spline.group)
        if self.selection is not None:
            for member in (
                spline,
                getattr(spline, "quick_spline", None),
                getattr(spline, "full_spline", None),
            ):
                if member is not None:
                    self.selection.forget_spline(member)

    # ---------------- Structural edits ----------------
    def append_waypoint(self, waypoint: Waypoint) -> None:
        if waypoint.path is not None:
            raise InvalidOperationError("Waypoint already belongs to a path")
        waypoint._attach(self)
        if not self._waypoints:
            self._waypoints.append(waypoint)
            return
        last = self._waypoints[-1]
        spline = make_spline(self.spline_kind, last, waypoint)
        last.next_spline = spline
        waypoint.previous_spline = spline
        self._waypoints.append(waypoint)
        self._splines.append(spline)
        spline.update()
        self._attach_spline(spline)

    def insert_waypoint_after(
        self,
        spline: Spline,
        position: Optional[PointLike] = None,
        tangent: Optional[PointLike] = None,
    ) -> Waypoint:
        """Split ``spline`` with a new waypoint and return it.

        Without an explicit position the new waypoint sits at the curve's
        ``t = 0.5`` point; without an explicit tangent it gets the same
        Catmull-Rom tangent :meth:`recalculate_tangent` would give it.
        """
        index = self._spline_index(spline)
        before = spline.start
        after = spline.end
        position = spline.point_at(0.5) if position is None else as_point(position)
        if tangent is None:
            tangent = (after.position - before.position) / 2
        new_point = Waypoint(position, as_point(tangent))
        following = self._make_spline(new_point, after, like=spline)

        new_point._attach(self)
        self._waypoints.insert(index + 1, new_point)
        self._splines.insert(index + 1, following)
        new_point.previous_spline = spline
        new_point.next_spline = following
        after.previous_spline = following
        spline.set_end(new_point)
        following.update()
        self._attach_spline(following)
        return new_point

    def insert_after(
        self,
        spline_index: int,
        position: Optional[PointLike] = None,
        tangent: Optional[PointLike] = None,
    ) -> Waypoint:
        return self.insert_waypoint_after(self.get_spline(spline_index), position, tangent)

    def remove_waypoint(self, waypoint: Waypoint) -> None:
        index = self.index_of(waypoint)
        if len(self._waypoints) == 1:
            raise InvalidOperationError("Cannot remove the only waypoint of a path")
        previous_spline = waypoint.previous_spline
        next_spline = waypoint.next_spline
        if previous_spline is not None and next_spline is not None:
            after = next_spline.end
            del self._splines[index]
            after.previous_spline = previous_spline
            previous_spline.set_end(after)
            self._drop_spline(next_spline)
        elif next_spline is not None:
            del self._splines[0]
            next_spline.end.previous_spline = None
            self._drop_spline(next_spline)
        elif previous_spline is not None:
            del self._splines[-1]
            previous_spline.start.next_spline = None
            self._drop_spline(previous_spline)
        del self._waypoints[index]
        waypoint._detach()
        if self.selection is not None:
            self.selection.forget_waypoint(waypoint)

    def reverse(self) -> None:
        """Flip traversal direction: reversed order, negated tangents, toggled flags.

        Paths with fewer than two waypoints are left untouched.
        """
        if len(self._waypoints) < 2:
            return
        self.check_integrity()
        old_waypoints = list(self._waypoints)
        old_splines = list(self._splines)
        snapshot = [
            (wp, wp._tangent, wp._reversed, wp.previous_spline, wp.next_spline)
            for wp in old_waypoints
        ]
        new_waypoints = old_waypoints[::-1]
        new_splines = [
            self._make_spline(a, b, like=old)
            for a, b, old in zip(new_waypoints, new_waypoints[1:], reversed(old_splines))
        ]
        try:
            for i, wp in enumerate(new_waypoints):
                wp._tangent = -wp._tangent
                wp._reversed = not wp._reversed
                wp.previous_spline = new_splines[i - 1] if i > 0 else None
                wp.next_spline = new_splines[i] if i < len(new_splines) else None
            self._waypoints = new_waypoints
            self._splines = new_splines
            for spline in new_splines:
                spline.update()
        except Exception:
            for wp, tangent, was_reversed, previous_spline, next_spline in snapshot:
                wp._tangent = tangent
                wp._reversed = was_reversed
                wp.previous_spline = previous_spline
                wp.next_spline = next_spline
            self._waypoints = old_waypoints
            self._splines = old_splines
            raise
        for spline in old_splines:
            self._drop_spline(spline)
        for spline in new_splines:
            self._attach_spline(spline)

    # ---------------- Geometry propagation ----------------
    def notify_waypoint_changed(self, waypoint: Waypoint) -> None:
        if waypoint.path is not self:
            raise InvalidOperationError("Waypoint is not part of this path")
        for spline in waypoint.incident_splines():
            spline.update()

    def recalculate_tangent(self, waypoint: Waypoint) -> None:
        """Give an unlocked waypoint the Catmull-Rom tangent of its neighbours."""
        index = self.index_of(waypoint)
        if waypoint.locked or len(self._waypoints) < 2:
            return
        previous = self._waypoints[index - 1] if index > 0 else None
        following = self._waypoints[index + 1] if index + 1 < len(self._waypoints) else None
        if previous is None:
            tangent = following.position - waypoint.position
        elif following is None:
            tangent = waypoint.position - previous.position
        else:
            tangent = (following.position - previous.position) / 2
        waypoint.edit(tangent=tangent)

    # ---------------- Whole-path helpers ----------------
    def check_integrity(self) -> None:
        """Raise InvalidOperationError if any waypoint/spline link is dangling."""
        if len(self._splines) != max(0, len(self._waypoints) - 1):
            raise InvalidOperationError(
                f"{len(self._splines)} splines for {len(self._waypoints)} waypoints"
            )
        for i, spline in enumerate(self._splines):
            if spline.start is not self._waypoints[i] or spline.end is not self._waypoints[i + 1]:
                raise InvalidOperationError(f"Spline {i} does not join waypoints {i} and {i + 1}")
        for i, wp in enumerate(self._waypoints):
            if wp.path is not self:
                raise InvalidOperationError(f"Waypoint {i} does not point back to this path")
            expected_previous = self._splines[i - 1] if i > 0 else None
            expected_next = self._splines[i] if i < len(self._splines) else None
            if wp.previous_spline is not expected_previous or wp.next_spline is not expected_next:
                raise InvalidOperationError(f"Waypoint {i} has stale spline references")

    def duplicate(self, name: Optional[str] = None) -> "Path":
        """Deep copy with fresh waypoints; spline modes and manual control points carry over."""
        copy = Path(
            [wp.copy() for wp in self._waypoints],
            name=self.name if name is None else name,
            spline_kind=self.spline_kind,
        )
        for source, target in zip(self._splines, copy._splines):
            if isinstance(source, SwappingSpline) and isinstance(target, SwappingSpline):
                target.full_spline.set_control_points(*source.full_spline.control_points())
                if not source.is_quick:
                    target.use_full()
            elif isinstance(source, FullSpline) and isinstance(target, FullSpline):
                target.set_control_points(*source.control_points())
        return copy


# ---------------- Editor-facing entry points ----------------
def create_waypoint(
    position: PointLike,
    tangent: PointLike,
    *,
    locked: bool = False,
    reversed: bool = False,
    name: str = "",
) -> Waypoint:
    return Waypoint(as_point(position), as_point(tangent), locked=locked, reversed=reversed, name=name)


def edit_waypoint(
    waypoint: Waypoint,
    position: Optional[PointLike] = None,
    tangent: Optional[PointLike] = None,
    locked: Optional[bool] = None,
    reversed: Optional[bool] = None,
) -> None:
    waypoint.edit(
        position=None if position is None else as_point(position),
        tangent=None if tangent is None else as_point(tangent),
        locked=locked,
        reversed=reversed,
    )


def create_path(
    start: Waypoint,
    end: Waypoint,
    *,
    name: str = "",
    spline_kind: Union[SplineKind, str] = SplineKind.QUICK,
    selection: Optional[SelectionContext] = None,
) -> Path:
    return Path([start, end], name=name, spline_kind=spline_kind, selection=selection)
