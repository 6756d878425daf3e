# mypy: ignore-errors
"""Canvas hosting a path: spline curves, draggable waypoints and tangent handles."""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple
from PySide6.QtWidgets import QGraphicsView, QGraphicsScene, QFrame
from PySide6.QtCore import QPointF, QTimer, Signal

from ui.qt_compat import Qt, QPainter

from models.errors import PathError
from models.path_model import Path, edit_waypoint
from models.selection import SelectionContext
from models.spline import Spline
from models.waypoint import Waypoint
from .constants import (
    FIELD_LENGTH_METERS,
    FIELD_WIDTH_METERS,
    SPLINE_STROKE_WIDTH_M,
    DEFAULT_ZOOM_FACTOR,
    MIN_ZOOM_FACTOR,
    MAX_ZOOM_FACTOR,
    ZOOM_STEP_FACTOR,
)
from .items.elements import TangentHandle, WaypointItem
from .items.splines import SplineGroup

logger = logging.getLogger(__name__)


class PathCanvasView(QGraphicsView):
    waypointMoved = Signal(object)
    pathStructureChanged = Signal()
    editRejected = Signal(str)

    def __init__(
        self,
        selection: Optional[SelectionContext] = None,
        parent=None,
        field_length_m: float = FIELD_LENGTH_METERS,
        field_width_m: float = FIELD_WIDTH_METERS,
        stroke_width_m: float = SPLINE_STROKE_WIDTH_M,
    ):
        super().__init__(parent)
        self.setRenderHint(QPainter.Antialiasing, True)
        self.setViewportUpdateMode(QGraphicsView.BoundingRectViewportUpdate)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setResizeAnchor(QGraphicsView.AnchorViewCenter)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setFrameShape(QFrame.NoFrame)
        self.field_length_m = float(field_length_m)
        self.field_width_m = float(field_width_m)
        self.stroke_width_m = float(stroke_width_m)
        self._suppress_live_events = False
        self._is_fitting = False
        self._zoom_factor = DEFAULT_ZOOM_FACTOR
        self.selection = selection if selection is not None else SelectionContext(self)
        self.selection.waypointSelected.connect(self._on_selection_changed)
        self.graphics_scene = QGraphicsScene(self)
        self.setScene(self.graphics_scene)
        self.graphics_scene.setSceneRect(0, 0, self.field_length_m, self.field_width_m)
        self.spline_group = SplineGroup(
            self.graphics_scene, self._scene_from_model, self._on_spline_activated
        )
        self._path: Optional[Path] = None
        self._waypoint_items: Dict[int, Tuple[WaypointItem, TangentHandle]] = {}

    # ------------- Path / Items -------------
    @property
    def path(self) -> Optional[Path]:
        return self._path

    def set_path(self, path: Optional[Path]):
        if self._path is not None:
            self._path.remove_from_group(self.spline_group)
            if self._path.selection is self.selection:
                self._path.selection = None
        self.selection.clear()
        self._path = path
        if path is not None:
            path.selection = self.selection
            path.add_to_group(self.spline_group, self.stroke_width_m)
        self._rebuild_items()

    def waypoint_items(self) -> List[WaypointItem]:
        return [item for item, _ in self._waypoint_items.values()]

    def item_for(self, waypoint: Waypoint) -> Optional[WaypointItem]:
        pair = self._waypoint_items.get(id(waypoint))
        return pair[0] if pair else None

    def _clear_waypoint_items(self):
        for item, handle in self._waypoint_items.values():
            self.graphics_scene.removeItem(item)
            for sub in handle.scene_items():
                self.graphics_scene.removeItem(sub)
        self._waypoint_items.clear()

    def _rebuild_items(self):
        self._suppress_live_events = True
        try:
            self._clear_waypoint_items()
            if self._path is None:
                return
            for wp in self._path.waypoints:
                item = WaypointItem(self, wp)
                self.graphics_scene.addItem(item)
                handle = TangentHandle(self, item)
                for sub in handle.scene_items():
                    self.graphics_scene.addItem(sub)
                item.set_highlighted(wp is self.selection.current_waypoint)
                self._waypoint_items[id(wp)] = (item, handle)
        finally:
            self._suppress_live_events = False

    def refresh_from_model(self):
        """Re-sync item positions after edits made outside the canvas."""
        self._suppress_live_events = True
        try:
            for item, handle in self._waypoint_items.values():
                item.sync_from_model()
                handle.sync_from_model()
        finally:
            self._suppress_live_events = False

    def refresh_waypoint_style(self, waypoint: Waypoint):
        """Restyle one waypoint after a flag change (locked / reversed)."""
        item = self.item_for(waypoint)
        if item is not None:
            item.set_highlighted(waypoint is self.selection.current_waypoint)

    # ------------- Structural edits -------------
    def reverse_path(self):
        if self._path is None:
            return
        try:
            self._path.reverse()
        except PathError as exc:
            self.editRejected.emit(str(exc))
            return
        self._rebuild_items()
        self.pathStructureChanged.emit()

    def delete_selected_waypoint(self):
        wp = self.selection.current_waypoint
        if self._path is None or wp is None:
            return
        try:
            self._path.remove_waypoint(wp)
        except PathError as exc:
            logger.info("Waypoint removal rejected: %s", exc)
            self.editRejected.emit(str(exc))
            return
        self._rebuild_items()
        self.pathStructureChanged.emit()

    def _on_spline_activated(self, spline: Spline):
        try:
            spline.add_path_waypoint(self.selection)
        except PathError as exc:
            self.editRejected.emit(str(exc))
            return
        self._rebuild_items()
        self.pathStructureChanged.emit()

    # ------------- Live edits from items -------------
    def _on_waypoint_live_moved(self, waypoint: Waypoint, x_m: float, y_m: float):
        edit_waypoint(waypoint, position=(x_m, y_m))
        pair = self._waypoint_items.get(id(waypoint))
        if pair:
            self._suppress_live_events = True
            try:
                pair[1].sync_from_model()
            finally:
                self._suppress_live_events = False
        self.waypointMoved.emit(waypoint)

    def _on_tangent_live_moved(self, waypoint: Waypoint, tx: float, ty: float):
        edit_waypoint(waypoint, tangent=(tx, ty))
        self.waypointMoved.emit(waypoint)

    def _on_waypoint_clicked(self, waypoint: Waypoint):
        self.selection.select_waypoint(waypoint)

    def _on_selection_changed(self, waypoint):
        for item, _ in self._waypoint_items.values():
            item.set_highlighted(item.waypoint is waypoint)

    # -------- Coordinate conversion --------
    def _scene_from_model(self, x_m: float, y_m: float) -> QPointF:
        return QPointF(x_m, self.field_width_m - y_m)

    def _model_from_scene(self, x_s: float, y_s: float) -> Tuple[float, float]:
        return float(x_s), float(self.field_width_m - y_s)

    def _clamp_scene_coords(self, x_s: float, y_s: float) -> Tuple[float, float]:
        return max(0.0, min(x_s, self.field_length_m)), max(0.0, min(y_s, self.field_width_m))

    # ------------- Resize / Show -------------
    def resizeEvent(self, event):
        super().resizeEvent(event)
        QTimer.singleShot(0, self._fit_to_scene)

    def showEvent(self, event):
        super().showEvent(event)
        QTimer.singleShot(0, self._fit_to_scene)

    def _fit_to_scene(self):
        if self._is_fitting:
            return
        self._is_fitting = True
        try:
            rect = self.graphics_scene.sceneRect()
            if rect.width() > 0 and rect.height() > 0:
                self.fitInView(rect, Qt.KeepAspectRatio)
                if abs(self._zoom_factor - 1.0) > 1e-6:
                    self.scale(self._zoom_factor, self._zoom_factor)
        finally:
            self._is_fitting = False

    # -------- Keyboard & mouse --------
    def keyPressEvent(self, event):
        if event.key() in (Qt.Key_Delete, Qt.Key_Backspace):
            self.delete_selected_waypoint()
            event.accept()
            return
        super().keyPressEvent(event)

    def wheelEvent(self, event):
        delta_y = int(event.angleDelta().y())
        if delta_y == 0:
            return super().wheelEvent(event)
        factor = ZOOM_STEP_FACTOR if delta_y > 0 else (1.0 / ZOOM_STEP_FACTOR)
        new_zoom = max(MIN_ZOOM_FACTOR, min(self._zoom_factor * factor, MAX_ZOOM_FACTOR))
        factor = new_zoom / self._zoom_factor
        if abs(factor - 1.0) < 1e-9:
            return
        self._zoom_factor = new_zoom
        self.scale(factor, factor)
        event.accept()
