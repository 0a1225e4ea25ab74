"""Value types shared by the motion and text object resolvers."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple


class Span(NamedTuple):
    """Half-open range ``[start, end)`` produced by a resolver."""

    start: int
    end: int
    found: bool = True

    @classmethod
    def missing(cls) -> "Span":
        return cls(0, 0, False)

    def ordered(self) -> "Span":
        if self.start <= self.end:
            return self
        return Span(self.end, self.start, self.found)

    @property
    def width(self) -> int:
        return abs(self.end - self.start)


class Inclusivity(Enum):
    """Whether a motion's landing position belongs to an operator range."""

    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


class CharClass(Enum):
    """Character classes used for word boundaries."""

    WHITESPACE = 0
    WORD = 1
    PUNCTUATION = 2


__all__ = ["Span", "Inclusivity", "CharClass"]
