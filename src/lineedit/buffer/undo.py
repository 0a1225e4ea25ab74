"""Snapshot-based undo/redo history."""

from __future__ import annotations

from typing import List, Optional

from .state import BufferSnapshot


class UndoHistory:
    """Two bounded stacks of whole-buffer snapshots.

    ``max_history`` caps each stack (0 means unbounded); the oldest entries
    are dropped first. Pushing a snapshot equal to the current top is a
    no-op, so repeated saves of an unchanged buffer do not pile up.
    """

    def __init__(self, max_history: int = 0) -> None:
        self._undo: List[BufferSnapshot] = []
        self._redo: List[BufferSnapshot] = []
        self.max_history = max_history

    @property
    def max_history(self) -> int:
        return self._max_history

    @max_history.setter
    def max_history(self, value: int) -> None:
        if value < 0:
            raise ValueError("max_history must be >= 0")
        self._max_history = value
        self._trim(self._undo)
        self._trim(self._redo)

    def record(self, snapshot: BufferSnapshot) -> None:
        """Save ``snapshot`` as a new edit point and drop the redo stack."""

        self._push(self._undo, snapshot)
        self._redo.clear()

    def undo(self, current: BufferSnapshot) -> Optional[BufferSnapshot]:
        if not self._undo:
            return None
        restored = self._undo.pop()
        self._push(self._redo, current)
        return restored

    def redo(self, current: BufferSnapshot) -> Optional[BufferSnapshot]:
        if not self._redo:
            return None
        restored = self._redo.pop()
        self._push(self._undo, current)
        return restored

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def _push(self, stack: List[BufferSnapshot], snapshot: BufferSnapshot) -> None:
        if stack and stack[-1] == snapshot:
            return
        stack.append(snapshot)
        self._trim(stack)

    def _trim(self, stack: List[BufferSnapshot]) -> None:
        if self._max_history and len(stack) > self._max_history:
            del stack[: len(stack) - self._max_history]
