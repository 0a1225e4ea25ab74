"""Single-line text buffer with snapshot undo/redo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from lineedit.motions import next_word_start, prev_word_start, word_end
from lineedit.runtime import telemetry

from .render import render_markup
from .state import BufferSnapshot
from .sync import BufferMirror
from .undo import UndoHistory


class Buffer:
    """Text plus a cursor offset, edited only through the primitives below.

    The cursor always satisfies ``0 <= cursor <= len(text)``. Mutating
    commands call :meth:`save_state` before they mutate; :meth:`undo` and
    :meth:`redo` swap whole snapshots.
    """

    def __init__(
        self, *, max_history: int = 0, history: Optional[UndoHistory] = None
    ) -> None:
        self._chars: list[str] = []
        self._cursor = 0
        self.history = history or UndoHistory(max_history)

    @classmethod
    def from_text(
        cls, text: str, *, cursor: Optional[int] = None, max_history: int = 0
    ) -> "Buffer":
        buffer = cls(max_history=max_history)
        buffer.set(text)
        if cursor is not None:
            buffer.set_cursor(cursor)
        return buffer

    # ------------------------------------------------------------------
    # Read accessors

    @property
    def text(self) -> str:
        return "".join(self._chars)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def before_cursor(self) -> str:
        return "".join(self._chars[: self._cursor])

    @property
    def after_cursor(self) -> str:
        return "".join(self._chars[self._cursor :])

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"Buffer(text={self.text!r}, cursor={self._cursor})"

    def snapshot(self) -> BufferSnapshot:
        return BufferSnapshot(self.text, self._cursor)

    def render_markup(
        self,
        *,
        insert_mode: bool,
        normal_tag: str = "reverse",
        insert_tag: str = "underline",
        placeholder: str = " ",
    ) -> str:
        return render_markup(
            self,
            insert_mode=insert_mode,
            normal_tag=normal_tag,
            insert_tag=insert_tag,
            placeholder=placeholder,
        )

    def mirror(
        self,
        *,
        markup: str,
        mode: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            cursor=self._cursor,
            markup=markup,
            mode=mode,
            attributes=dict(attributes or {}),
        )

    # ------------------------------------------------------------------
    # Primitive edits

    def insert(self, ch: str) -> None:
        self._chars.insert(self._cursor, ch)
        self._cursor += 1

    def insert_string(self, text: str) -> None:
        for ch in text:
            self.insert(ch)

    def delete_backward(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        del self._chars[self._cursor]
        return True

    def delete_forward(self) -> bool:
        if self._cursor >= len(self._chars):
            return False
        del self._chars[self._cursor]
        return True

    def left(self) -> bool:
        if self._cursor == 0:
            return False
        self._cursor -= 1
        return True

    def right(self) -> bool:
        if self._cursor >= len(self._chars):
            return False
        self._cursor += 1
        return True

    def home(self) -> None:
        self._cursor = 0

    def end(self) -> None:
        self._cursor = len(self._chars)

    def set(self, text: str) -> None:
        """Replace the whole content and park the cursor at the end."""

        self._chars = list(text)
        self._cursor = len(self._chars)

    def set_cursor(self, position: int) -> None:
        self._cursor = max(0, min(position, len(self._chars)))

    def clear(self) -> None:
        self._chars = []
        self._cursor = 0

    def replace_range(self, start: int, end: int, replacement: str = "") -> None:
        """Splice ``replacement`` over ``[start, end)``; cursor lands on ``start``."""

        start, end = sorted((start, end))
        start = max(0, min(start, len(self._chars)))
        end = max(start, min(end, len(self._chars)))
        text = self.text
        self.set(text[:start] + replacement + text[end:])
        self.set_cursor(start)

    # ------------------------------------------------------------------
    # Word level edits

    def word_left(self, *, big: bool = False) -> None:
        self._cursor = prev_word_start(self.text, self._cursor, big=big)

    def word_right(self, *, big: bool = False) -> None:
        self._cursor = next_word_start(self.text, self._cursor, big=big)

    def word_end(self, *, big: bool = False) -> None:
        self._cursor = word_end(self.text, self._cursor, big=big)

    def delete_word_backward(self, *, big: bool = True) -> bool:
        start = prev_word_start(self.text, self._cursor, big=big)
        if start == self._cursor:
            return False
        self.replace_range(start, self._cursor)
        return True

    def delete_word_forward(self, *, big: bool = True) -> bool:
        end = next_word_start(self.text, self._cursor, big=big)
        if end == self._cursor:
            return False
        self.replace_range(self._cursor, end)
        return True

    def kill_to_end(self) -> bool:
        if self._cursor >= len(self._chars):
            return False
        del self._chars[self._cursor :]
        return True

    def kill_to_start(self) -> bool:
        if self._cursor == 0:
            return False
        del self._chars[: self._cursor]
        self._cursor = 0
        return True

    def transpose(self) -> bool:
        """Swap the characters around the cursor (the last two at the end)."""

        length = len(self._chars)
        if self._cursor == 0 or length < 2:
            return False
        at = min(self._cursor, length - 1)
        self._chars[at - 1], self._chars[at] = self._chars[at], self._chars[at - 1]
        if self._cursor < length:
            self._cursor += 1
        return True

    # ------------------------------------------------------------------
    # History

    @property
    def max_history(self) -> int:
        return self.history.max_history

    @max_history.setter
    def max_history(self, value: int) -> None:
        self.history.max_history = value

    def save_state(self) -> None:
        self.history.record(self.snapshot())

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def undo(self) -> bool:
        restored = self.history.undo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    def redo(self) -> bool:
        restored = self.history.redo(self.snapshot())
        if restored is None:
            return False
        self._restore(restored)
        return True

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo()

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo()

    def clear_history(self) -> None:
        self.history.clear()

    def _restore(self, snapshot: BufferSnapshot) -> None:
        self._chars = list(snapshot.text)
        self.set_cursor(snapshot.cursor)


class Transaction(AbstractContextManager["Transaction"]):
    """Save the pre-edit snapshot when the wrapped block changes the buffer.

    Equivalent to calling ``save_state()`` right before a mutation, minus
    the history entry (and redo wipe) when the edit turns out to be a no-op.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before: Optional[BufferSnapshot] = None

    def __enter__(self) -> "Transaction":
        self._before = self.buffer.snapshot()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None and self._before is not None:
                if self.buffer.snapshot() != self._before:
                    self.buffer.history.record(self._before)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False
