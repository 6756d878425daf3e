"""Scene items drawing path splines, and the group the model attaches splines to."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from PySide6.QtCore import QPointF
from PySide6.QtGui import QPainterPath, QPen
from PySide6.QtWidgets import QGraphicsPathItem, QGraphicsScene

from models.geometry import Point2D
from models.spline import Spline
from ui.qt_compat import Qt, QGraphicsItem

from ..constants import SPLINE_COLOR, SUBCHILD_COLORS

SceneMapper = Callable[[float, float], QPointF]


class SplineCurveItem(QGraphicsPathItem):
    """Cubic curve for one spline; redrawn whenever the spline updates."""

    def __init__(self, group: "SplineGroup", spline: Spline, stroke_width_m: float):
        super().__init__()
        self.group = group
        self.spline = spline
        self.stroke_width_m = stroke_width_m
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        # Curves draw underneath waypoint items
        self.setZValue(1)
        self.rebuild()

    def _to_scene(self, point: Point2D) -> QPointF:
        return self.group.to_scene(point.x, point.y)

    def rebuild(self) -> None:
        control1, control2 = self.spline.control_points()
        painter_path = QPainterPath(self._to_scene(self.spline.start.position))
        painter_path.cubicTo(
            self._to_scene(control1),
            self._to_scene(control2),
            self._to_scene(self.spline.end.position),
        )
        self.setPath(painter_path)
        index = self.spline.subchild_index
        color = SUBCHILD_COLORS[index] if index is not None else SPLINE_COLOR
        pen = QPen(color, self.stroke_width_m)
        pen.setCapStyle(Qt.RoundCap)
        self.setPen(pen)

    def on_spline_updated(self, _spline: Spline) -> None:
        self.rebuild()

    def mouseDoubleClickEvent(self, event):
        self.group.spline_activated(self.spline)
        event.accept()


class SplineGroup:
    """Owns the curve items for every spline attached to it.

    Splines call :meth:`add_spline` / :meth:`remove_spline` from their
    ``add_to_group`` / ``remove_from_group`` hooks.
    """

    def __init__(
        self,
        scene: QGraphicsScene,
        to_scene: Optional[SceneMapper] = None,
        on_activated: Optional[Callable[[Spline], None]] = None,
    ):
        self.scene = scene
        self._to_scene = to_scene
        self.on_activated = on_activated
        self._items: Dict[int, SplineCurveItem] = {}

    def to_scene(self, x_m: float, y_m: float) -> QPointF:
        if self._to_scene is None:
            return QPointF(x_m, y_m)
        return self._to_scene(x_m, y_m)

    def item_for(self, spline: Spline) -> Optional[SplineCurveItem]:
        return self._items.get(id(spline))

    def items(self):
        return list(self._items.values())

    def add_spline(self, spline: Spline, scale_factor: float) -> None:
        if id(spline) in self._items:
            return
        item = SplineCurveItem(self, spline, scale_factor)
        self._items[id(spline)] = item
        spline.add_update_listener(item.on_spline_updated)
        self.scene.addItem(item)

    def remove_spline(self, spline: Spline) -> None:
        item = self._items.pop(id(spline), None)
        if item is None:
            return
        spline.remove_update_listener(item.on_spline_updated)
        if item.scene() is not None:
            item.scene().removeItem(item)

    def spline_activated(self, spline: Spline) -> None:
        if self.on_activated is not None:
            self.on_activated(spline)
