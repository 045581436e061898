"""Retained drawing surfaces and the pointer stream."""

from .canvas import Canvas
from .surface import POINTER_ENTER, POINTER_LEAVE, DrawElement, Surface

__all__ = ["Canvas", "Surface", "DrawElement", "POINTER_ENTER", "POINTER_LEAVE"]
