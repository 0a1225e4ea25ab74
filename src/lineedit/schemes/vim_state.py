"""State types for the modal scheme."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from lineedit.motions import FindType


class VimMode(Enum):
    NORMAL = "normal"
    INSERT = "insert"
    OPERATOR_PENDING = "operator_pending"

    @property
    def label(self) -> str:
        return self.value.replace("_", "-").upper()


class Operator(Enum):
    NONE = ""
    DELETE = "d"
    CHANGE = "c"
    YANK = "y"

    @classmethod
    def from_key(cls, key: str) -> Optional["Operator"]:
        for member in cls:
            if member.value and member.value == key:
                return member
        return None

    @property
    def mutates(self) -> bool:
        return self in (Operator.DELETE, Operator.CHANGE)


@dataclass(frozen=True, slots=True)
class SimpleChange:
    """``x``, ``X``, ``D``, ``dd``, ``cc`` and friends."""

    command: str
    count: int = 1
    typed_text: str = ""


@dataclass(frozen=True, slots=True)
class MotionChange:
    operator: Operator
    motion: str
    count: int = 1
    typed_text: str = ""


@dataclass(frozen=True, slots=True)
class TextObjectChange:
    operator: Operator
    obj: str
    inner: bool
    count: int = 1
    typed_text: str = ""


@dataclass(frozen=True, slots=True)
class FindChange:
    operator: Operator
    find_type: FindType
    target: str
    count: int = 1
    typed_text: str = ""


@dataclass(frozen=True, slots=True)
class ReplaceChange:
    char: str
    count: int = 1


@dataclass(frozen=True, slots=True)
class InsertChange:
    """Insert session opened by ``i a I A s S C``."""

    command: str
    count: int = 1
    typed_text: str = ""


LastChange = Union[
    SimpleChange,
    MotionChange,
    TextObjectChange,
    FindChange,
    ReplaceChange,
    InsertChange,
]

RangeChange = Union[MotionChange, TextObjectChange, FindChange]


def with_typed_text(change: LastChange, text: str) -> LastChange:
    """Attach the text typed during the insert session ``change`` opened."""

    if isinstance(change, ReplaceChange):
        return change
    return replace(change, typed_text=text)


def with_count(change: LastChange, count: int) -> LastChange:
    return replace(change, count=count)


__all__ = [
    "VimMode",
    "Operator",
    "SimpleChange",
    "MotionChange",
    "TextObjectChange",
    "FindChange",
    "ReplaceChange",
    "InsertChange",
    "LastChange",
    "RangeChange",
    "with_typed_text",
    "with_count",
]
