"""Adapter boundary type for syncing the buffer with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the prompt should show."""

    text: str
    cursor: int
    markup: str
    mode: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
