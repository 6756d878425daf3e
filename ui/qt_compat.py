"""Typing helpers for PySide6 enums/flags unavailable in stub metadata."""

from __future__ import annotations

from typing import Any, cast

from PySide6.QtCore import Qt as _Qt
from PySide6.QtGui import QKeySequence as _QKeySequence, QPainter as _QPainter
from PySide6.QtWidgets import (
    QGraphicsItem as _QGraphicsItem,
    QMessageBox as _QMessageBox,
)

Qt = cast(Any, _Qt)
QGraphicsItem = cast(Any, _QGraphicsItem)
QMessageBox = cast(Any, _QMessageBox)
QKeySequence = cast(Any, _QKeySequence)
QPainter = cast(Any, _QPainter)

__all__ = [
    "Qt",
    "QGraphicsItem",
    "QMessageBox",
    "QKeySequence",
    "QPainter",
]
