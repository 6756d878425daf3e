"""Constants for the canvas module (field + element geometry in meters)."""

from __future__ import annotations
from PySide6.QtGui import QPen, QColor

from ui.qt_compat import Qt

FIELD_LENGTH_METERS = 16.54
FIELD_WIDTH_METERS = 8.21

# Waypoint visual constants (in meters)
WAYPOINT_RADIUS_M = 0.12
OUTLINE_THIN_M = 0.03
OUTLINE_THICK_M = 0.06
TANGENT_HANDLE_RADIUS_M = 0.08
TANGENT_LINK_THICKNESS_M = 0.02
# Handle sits at position + tangent * scale so long tangents stay on screen
TANGENT_HANDLE_SCALE = 0.5

SPLINE_STROKE_WIDTH_M = 0.05
SPLINE_COLOR = QColor("#ff8c00")
# One colour per subchild selector index (models.spline.SUBCHILD_COUNT)
SUBCHILD_COLORS = [
    QColor("#ff8c00"),
    QColor("#3aa3ff"),
    QColor("#2ecc71"),
    QColor("#e74c3c"),
    QColor("#9b59b6"),
    QColor("#f1c40f"),
    QColor("#1abc9c"),
    QColor("#ecf0f1"),
]

WAYPOINT_FILL = QColor("#3aa3ff")
WAYPOINT_LOCKED_FILL = QColor("#7f8c8d")
WAYPOINT_SELECTED_OUTLINE = QColor("#FFD400")
TANGENT_LINK_PEN = QPen(QColor("#222222"), TANGENT_LINK_THICKNESS_M)
TANGENT_LINK_PEN.setStyle(Qt.DashLine)

# UI and interaction constants
DEFAULT_ZOOM_FACTOR = 1.0
MIN_ZOOM_FACTOR = 1.0
MAX_ZOOM_FACTOR = 8.0
ZOOM_STEP_FACTOR = 1.03
