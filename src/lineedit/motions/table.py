"""Motion table for the modal scheme."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .models import Inclusivity
from .words import is_blank, next_word_start, prev_word_start, word_end

MotionFn = Callable[[str, int], int]


@dataclass(frozen=True, slots=True)
class MotionSpec:
    key: str
    move: MotionFn
    inclusivity: Inclusivity = Inclusivity.EXCLUSIVE
    ignores_count: bool = False

    @property
    def inclusive(self) -> bool:
        return self.inclusivity is Inclusivity.INCLUSIVE

    def apply(self, text: str, cursor: int, count: int = 1) -> int:
        """Run the motion ``count`` times (once when the motion ignores counts)."""

        repeat = 1 if self.ignores_count else max(1, count)
        position = cursor
        for _ in range(repeat):
            moved = self.move(text, position)
            if moved == position:
                break
            position = moved
        return position


def _left(text: str, cursor: int) -> int:
    return max(0, cursor - 1)


def _right(text: str, cursor: int) -> int:
    return min(len(text), cursor + 1)


def _home(text: str, cursor: int) -> int:
    return 0


def _end(text: str, cursor: int) -> int:
    return len(text)


def _first_non_blank(text: str, cursor: int) -> int:
    for index, ch in enumerate(text):
        if not is_blank(ch):
            return index
    return len(text)


MOTIONS: Dict[str, MotionSpec] = {
    spec.key: spec
    for spec in (
        MotionSpec("h", _left),
        MotionSpec("l", _right),
        MotionSpec("w", lambda text, cursor: next_word_start(text, cursor)),
        MotionSpec("b", lambda text, cursor: prev_word_start(text, cursor)),
        MotionSpec(
            "e", lambda text, cursor: word_end(text, cursor), Inclusivity.INCLUSIVE
        ),
        MotionSpec("W", lambda text, cursor: next_word_start(text, cursor, big=True)),
        MotionSpec("B", lambda text, cursor: prev_word_start(text, cursor, big=True)),
        MotionSpec(
            "E",
            lambda text, cursor: word_end(text, cursor, big=True),
            Inclusivity.INCLUSIVE,
        ),
        MotionSpec("0", _home, ignores_count=True),
        MotionSpec("^", _first_non_blank, ignores_count=True),
        MotionSpec("$", _end, Inclusivity.INCLUSIVE, ignores_count=True),
    )
}


def lookup_motion(key: str) -> Optional[MotionSpec]:
    return MOTIONS.get(key)


__all__ = ["MotionFn", "MotionSpec", "MOTIONS", "lookup_motion"]
