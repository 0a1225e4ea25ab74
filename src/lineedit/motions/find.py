"""Character-find motions (``f``, ``F``, ``t``, ``T``)."""

from __future__ import annotations

from enum import Enum

from .models import Span


class FindType(Enum):
    NONE = ""
    FORWARD = "f"
    BACKWARD = "F"
    FORWARD_BEFORE = "t"
    BACKWARD_AFTER = "T"

    @property
    def forward(self) -> bool:
        return self in (FindType.FORWARD, FindType.FORWARD_BEFORE)

    @classmethod
    def from_key(cls, key: str) -> "FindType":
        for member in cls:
            if member.value and member.value == key:
                return member
        return cls.NONE


def find_char(
    text: str, cursor: int, target: str, find_type: FindType, count: int = 1
) -> int:
    """Index of the ``count``-th ``target`` in the search direction, or -1.

    Forward searches start at ``cursor + 1``, backward ones at
    ``cursor - 1``; the cursor's own character never matches.
    """

    if find_type is FindType.NONE or count < 1:
        return -1
    if find_type.forward:
        positions = range(cursor + 1, len(text))
    else:
        positions = range(min(cursor, len(text)) - 1, -1, -1)

    seen = 0
    for pos in positions:
        if text[pos] == target:
            seen += 1
            if seen == count:
                return pos
    return -1


def find_landing(cursor: int, target_pos: int, find_type: FindType) -> int:
    """Cursor position after a plain (operator-less) find motion."""

    if find_type is FindType.FORWARD_BEFORE and target_pos > cursor:
        return target_pos - 1
    if find_type is FindType.BACKWARD_AFTER and target_pos < cursor:
        return target_pos + 1
    return target_pos


def find_operator_span(cursor: int, target_pos: int, find_type: FindType) -> Span:
    """Range an operator covers for a find motion.

    ``f``/``F`` include the target, ``t``/``T`` stop short of it.
    """

    if find_type is FindType.FORWARD:
        span = Span(cursor, target_pos + 1)
    elif find_type is FindType.FORWARD_BEFORE:
        span = Span(cursor, target_pos)
    elif find_type is FindType.BACKWARD:
        span = Span(target_pos, cursor)
    else:
        span = Span(target_pos + 1, cursor)
    return span.ordered()


def resolve_find(
    text: str, cursor: int, target: str, find_type: FindType, count: int = 1
) -> Span:
    """Operator range for a find, or a missing span when the target is absent."""

    target_pos = find_char(text, cursor, target, find_type, count)
    if target_pos < 0:
        return Span.missing()
    return find_operator_span(cursor, target_pos, find_type)


__all__ = [
    "FindType",
    "find_char",
    "find_landing",
    "find_operator_span",
    "resolve_find",
]
