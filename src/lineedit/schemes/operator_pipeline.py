"""Range resolution and operator execution for the modal scheme.

Plain motions, operator-pending commands and ``.`` replays all go through
:func:`resolve_range`, so a repeated ``dw`` recomputes its range against
the buffer as it is now.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from lineedit.buffer import Buffer
from lineedit.motions import (
    Span,
    find_any_quote_object,
    find_quote_object,
    find_sentence_object,
    find_word_object,
    lookup_motion,
    resolve_find,
)
from lineedit.runtime import telemetry

from .vim_state import FindChange, MotionChange, Operator, RangeChange, TextObjectChange

TEXT_OBJECT_KEYS = frozenset("wW\"'qs")


def resolve_text_object(text: str, cursor: int, obj: str, inner: bool) -> Span:
    if obj in ("w", "W"):
        return find_word_object(text, cursor, inner, big=obj == "W")
    if obj in ('"', "'"):
        return find_quote_object(text, cursor, obj, inner)
    if obj == "q":
        return find_any_quote_object(text, cursor, inner)
    if obj == "s":
        return find_sentence_object(text, cursor, inner)
    return Span.missing()


def resolve_motion(text: str, cursor: int, key: str, count: int) -> Span:
    """Operator range for a motion: apply it, widen inclusive ends, order."""

    spec = lookup_motion(key)
    if spec is None:
        return Span.missing()
    end = spec.apply(text, cursor, count)
    if spec.inclusive and end < len(text):
        end += 1
    return Span(cursor, end).ordered()


def resolve_range(text: str, cursor: int, change: RangeChange, count: int) -> Span:
    """Single dispatch over the three range-producing command shapes.

    Text objects ignore ``count``; finds use it to pick the n-th target.
    """

    if isinstance(change, MotionChange):
        return resolve_motion(text, cursor, change.motion, count)
    if isinstance(change, TextObjectChange):
        return resolve_text_object(text, cursor, change.obj, change.inner)
    if isinstance(change, FindChange):
        return resolve_find(text, cursor, change.target, change.find_type, count)
    raise TypeError(f"Unsupported change {change!r}")


@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    operator: Operator
    span: Span


class OperatorPipeline:
    """Plans and applies delete/change/yank over a resolved range."""

    def __init__(self, *, logger_name: str | None = "lineedit.schemes.vim") -> None:
        self._logger_name = logger_name

    def plan(
        self, buffer: Buffer, change: RangeChange, count: int
    ) -> Optional[ExecutionPlan]:
        span = resolve_range(buffer.text, buffer.cursor, change, count)
        if not span.found:
            return None
        return ExecutionPlan(operator=change.operator, span=span)

    def execute(
        self, buffer: Buffer, plan: ExecutionPlan, *, record_history: bool = True
    ) -> bool:
        """Apply ``plan``; returns whether the text changed.

        Mutating operators save the buffer state first unless the range is
        empty or ``record_history`` is off (a change operator leaves that to
        the insert session it opens). Yank has no register to fill, so it
        only moves the cursor to the start of the range.
        """

        with telemetry.span(
            f"operator::{plan.operator.name.lower()}",
            logger_name=self._logger_name,
            component="operator",
            metadata={"start": plan.span.start, "end": plan.span.end},
        ):
            if not plan.operator.mutates or plan.span.start == plan.span.end:
                buffer.set_cursor(plan.span.start)
                return False
            if record_history:
                buffer.save_state()
            before = len(buffer)
            buffer.replace_range(plan.span.start, plan.span.end)
            return len(buffer) != before


__all__ = [
    "ExecutionPlan",
    "OperatorPipeline",
    "TEXT_OBJECT_KEYS",
    "resolve_motion",
    "resolve_range",
    "resolve_text_object",
]
