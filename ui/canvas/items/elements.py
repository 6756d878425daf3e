# mypy: ignore-errors
"""Graphics items for waypoints (draggable circle + tangent handle)."""

from __future__ import annotations
from typing import TYPE_CHECKING

from PySide6.QtWidgets import QGraphicsEllipseItem, QGraphicsLineItem
from PySide6.QtGui import QBrush, QColor, QPen
from PySide6.QtCore import QPointF

from ui.qt_compat import Qt, QGraphicsItem

from ..constants import (
    WAYPOINT_RADIUS_M,
    OUTLINE_THIN_M,
    OUTLINE_THICK_M,
    TANGENT_HANDLE_RADIUS_M,
    TANGENT_HANDLE_SCALE,
    TANGENT_LINK_PEN,
    WAYPOINT_FILL,
    WAYPOINT_LOCKED_FILL,
    WAYPOINT_SELECTED_OUTLINE,
)
from models.waypoint import Waypoint

if TYPE_CHECKING:
    from ui.canvas.view import PathCanvasView


class WaypointItem(QGraphicsEllipseItem):
    def __init__(self, canvas_view: "PathCanvasView", waypoint: Waypoint):
        super().__init__()
        self.canvas_view = canvas_view
        self.waypoint = waypoint
        self.setRect(
            -WAYPOINT_RADIUS_M,
            -WAYPOINT_RADIUS_M,
            WAYPOINT_RADIUS_M * 2,
            WAYPOINT_RADIUS_M * 2,
        )
        self.setFlag(QGraphicsItem.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges, True)
        self.setFlag(QGraphicsItem.ItemIsSelectable, True)
        self.setZValue(10)
        self.set_highlighted(False)
        self.sync_from_model()

    def sync_from_model(self):
        self.setPos(self.canvas_view._scene_from_model(self.waypoint.x, self.waypoint.y))

    def set_highlighted(self, highlighted: bool):
        outline = WAYPOINT_SELECTED_OUTLINE if highlighted else QColor("#000")
        pen = QPen(outline, OUTLINE_THICK_M if highlighted else OUTLINE_THIN_M)
        # Reversed waypoints are driven backwards; show them dashed
        if self.waypoint.reversed:
            pen.setStyle(Qt.DashLine)
        self.setPen(pen)
        fill = WAYPOINT_LOCKED_FILL if self.waypoint.locked else WAYPOINT_FILL
        self.setBrush(QBrush(fill))

    def itemChange(self, change: QGraphicsItem.GraphicsItemChange, value):
        if change == QGraphicsItem.ItemPositionChange:
            new_pos: QPointF = value
            cx, cy = self.canvas_view._clamp_scene_coords(new_pos.x(), new_pos.y())
            return QPointF(cx, cy)
        elif change == QGraphicsItem.ItemPositionHasChanged:
            if not self.canvas_view._suppress_live_events:
                x_m, y_m = self.canvas_view._model_from_scene(self.pos().x(), self.pos().y())
                self.canvas_view._on_waypoint_live_moved(self.waypoint, x_m, y_m)
        return super().itemChange(change, value)

    def mousePressEvent(self, event):
        self.canvas_view._on_waypoint_clicked(self.waypoint)
        super().mousePressEvent(event)


class TangentHandle(QGraphicsEllipseItem):
    """Drag target at ``position + tangent * TANGENT_HANDLE_SCALE``."""

    def __init__(self, canvas_view: "PathCanvasView", waypoint_item: WaypointItem):
        super().__init__()
        self.canvas_view = canvas_view
        self.waypoint_item = waypoint_item
        self._dragging: bool = False
        self.setRect(
            -TANGENT_HANDLE_RADIUS_M,
            -TANGENT_HANDLE_RADIUS_M,
            TANGENT_HANDLE_RADIUS_M * 2,
            TANGENT_HANDLE_RADIUS_M * 2,
        )
        self.setBrush(QBrush(QColor("#ffffff")))
        self.setPen(QPen(QColor("#222222"), OUTLINE_THIN_M))
        self.setFlag(QGraphicsItem.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges, True)
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setZValue(12)
        self.link_line = QGraphicsLineItem()
        self.link_line.setPen(TANGENT_LINK_PEN)
        self.link_line.setZValue(11)
        self.sync_from_model()

    @property
    def waypoint(self) -> Waypoint:
        return self.waypoint_item.waypoint

    def scene_items(self):
        return [self, self.link_line]

    def sync_from_model(self):
        wp = self.waypoint
        tip = wp.position + wp.tangent * TANGENT_HANDLE_SCALE
        self.setPos(self.canvas_view._scene_from_model(tip.x, tip.y))
        self._sync_link()

    def _sync_link(self):
        origin = self.waypoint_item.pos()
        self.link_line.setLine(origin.x(), origin.y(), self.pos().x(), self.pos().y())

    def itemChange(self, change: QGraphicsItem.GraphicsItemChange, value):
        if change == QGraphicsItem.ItemPositionHasChanged:
            self._sync_link()
            if self._dragging and not self.canvas_view._suppress_live_events:
                x_m, y_m = self.canvas_view._model_from_scene(self.pos().x(), self.pos().y())
                wp = self.waypoint
                self.canvas_view._on_tangent_live_moved(
                    wp,
                    (x_m - wp.x) / TANGENT_HANDLE_SCALE,
                    (y_m - wp.y) / TANGENT_HANDLE_SCALE,
                )
        return super().itemChange(change, value)

    def mousePressEvent(self, event):
        self.canvas_view._on_waypoint_clicked(self.waypoint)
        self.waypoint_item.setFlag(QGraphicsItem.ItemIsMovable, False)
        self._dragging = True
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event):
        self.waypoint_item.setFlag(QGraphicsItem.ItemIsMovable, True)
        self._dragging = False
        super().mouseReleaseEvent(event)
