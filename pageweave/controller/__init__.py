"""Keyboard and focus handling on top of the store."""

from .focus import FocusRequest, InputController, KeyEvent, KeyResult

__all__ = ["FocusRequest", "InputController", "KeyEvent", "KeyResult"]
