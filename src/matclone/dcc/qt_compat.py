"""
Qt bindings used by the context menu.

PySide6 is preferred; hosts still on Qt 5 get PySide2.
"""
from __future__ import annotations

try:
    from PySide6 import QtGui, QtWidgets  # type: ignore
    PYSIDE_VERSION = 6
except ImportError:
    from PySide2 import QtGui, QtWidgets  # type: ignore
    PYSIDE_VERSION = 2

# QAction lives in QtGui from Qt 6 on.
QAction = QtGui.QAction if PYSIDE_VERSION == 6 else QtWidgets.QAction
QMenu = QtWidgets.QMenu

__all__ = ["PYSIDE_VERSION", "QAction", "QMenu"]
