"""Snapshot value stored by the undo history."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BufferSnapshot:
    """Whole-buffer state: the text plus the cursor offset into it."""

    text: str = ""
    cursor: int = 0
