from .constants import FIELD_LENGTH_METERS, FIELD_WIDTH_METERS
from .view import PathCanvasView

__all__ = ["PathCanvasView", "FIELD_LENGTH_METERS", "FIELD_WIDTH_METERS"]
