"""Line buffer, snapshot history and host-facing mirror types."""

from .buffer import Buffer
from .render import render_markup
from .state import BufferSnapshot
from .sync import BufferMirror
from .undo import UndoHistory

__all__ = [
    "Buffer",
    "BufferMirror",
    "BufferSnapshot",
    "UndoHistory",
    "render_markup",
]
