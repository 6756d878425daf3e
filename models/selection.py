"""Explicit selection state shared by the editor and the path model."""

from __future__ import annotations

from typing import Any, Optional

from PySide6.QtCore import QObject, Signal


class SelectionContext(QObject):
    """Holds the active waypoint/spline and announces changes.

    ``waypointSelected`` is emitted with the new waypoint, or ``None`` when the
    selection is cleared.
    """

    waypointSelected = Signal(object)
    splineSelected = Signal(object)

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._current_waypoint: Any = None
        self._current_spline: Any = None

    @property
    def current_waypoint(self) -> Any:
        return self._current_waypoint

    @property
    def current_spline(self) -> Any:
        return self._current_spline

    def select_waypoint(self, waypoint: Any) -> None:
        self._current_waypoint = waypoint
        self.waypointSelected.emit(waypoint)

    def select_spline(self, spline: Any) -> None:
        self._current_spline = spline
        self.splineSelected.emit(spline)

    def clear(self) -> None:
        had_waypoint = self._current_waypoint is not None
        had_spline = self._current_spline is not None
        self._current_waypoint = None
        self._current_spline = None
        if had_waypoint:
            self.waypointSelected.emit(None)
        if had_spline:
            self.splineSelected.emit(None)

    def forget_waypoint(self, waypoint: Any) -> None:
        if self._current_waypoint is waypoint:
            self._current_waypoint = None
            self.waypointSelected.emit(None)

    def forget_spline(self, spline: Any) -> None:
        if self._current_spline is spline:
            self._current_spline = None
            self.splineSelected.emit(None)
