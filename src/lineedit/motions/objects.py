"""Quote and sentence text objects."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .models import Span
from .words import is_blank

SENTENCE_TERMINATORS = frozenset(".!?")


def _quote_positions(text: str, quote: str) -> List[int]:
    return [index for index, ch in enumerate(text) if ch == quote]


def _pairs(positions: List[int]) -> List[Tuple[int, int]]:
    return [(positions[i], positions[i + 1]) for i in range(0, len(positions) - 1, 2)]


def _containing_pair(text: str, cursor: int, quote: str) -> Optional[Tuple[int, int]]:
    for open_at, close_at in _pairs(_quote_positions(text, quote)):
        if open_at <= cursor <= close_at:
            return open_at, close_at
    return None


def _quote_span(open_at: int, close_at: int, inner: bool) -> Span:
    if inner:
        return Span(open_at + 1, close_at)
    return Span(open_at, close_at + 1)


def find_quote_object(text: str, cursor: int, quote: str, inner: bool) -> Span:
    """Resolve ``i"``/``a"`` style objects for a single quote character.

    Quotes pair up left to right: (1st, 2nd), (3rd, 4th), ... The pair
    containing the cursor (delimiters included) wins, then the first pair
    after the cursor, then the last pair. An unpaired trailing quote is
    never a delimiter.
    """

    positions = _quote_positions(text, quote)
    if len(positions) < 2:
        return Span.missing()

    pairs = _pairs(positions)
    for open_at, close_at in pairs:
        if open_at <= cursor <= close_at:
            return _quote_span(open_at, close_at, inner)
    for open_at, close_at in pairs:
        if cursor < open_at:
            return _quote_span(open_at, close_at, inner)
    return _quote_span(*pairs[-1], inner)


def cursor_in_quote_pair(text: str, cursor: int, quote: str) -> bool:
    return _containing_pair(text, cursor, quote) is not None


def find_any_quote_object(text: str, cursor: int, inner: bool) -> Span:
    """Resolve ``iq``/``aq``: whichever of ``"`` or ``'`` fits best."""

    double = find_quote_object(text, cursor, '"', inner)
    single = find_quote_object(text, cursor, "'", inner)
    if not double.found:
        return single
    if not single.found:
        return double

    in_double = cursor_in_quote_pair(text, cursor, '"')
    in_single = cursor_in_quote_pair(text, cursor, "'")
    if in_double and in_single:
        return double if double.width <= single.width else single
    if in_double:
        return double
    if in_single:
        return single
    if abs(double.start - cursor) <= abs(single.start - cursor):
        return double
    return single


def is_sentence_end(text: str, index: int) -> bool:
    """A terminator counts only when followed by whitespace or buffer end."""

    if text[index] not in SENTENCE_TERMINATORS:
        return False
    return index + 1 == len(text) or is_blank(text[index + 1])


def find_sentence_object(text: str, cursor: int, inner: bool) -> Span:
    """Resolve ``is``/``as``."""

    length = len(text)
    if length == 0:
        return Span.missing()
    cursor = max(0, min(cursor, length - 1))

    start = 0
    for i in range(cursor - 1, -1, -1):
        if is_sentence_end(text, i):
            start = i + 1
            while start < length and is_blank(text[start]):
                start += 1
            break

    end = length
    for i in range(cursor, length):
        if is_sentence_end(text, i):
            end = i + 1
            break

    if not inner:
        trailing = end
        while trailing < length and is_blank(text[trailing]):
            trailing += 1
        if trailing > end:
            end = trailing
        else:
            while start > 0 and is_blank(text[start - 1]):
                start -= 1

    return Span(start, end)


__all__ = [
    "SENTENCE_TERMINATORS",
    "find_quote_object",
    "find_any_quote_object",
    "cursor_in_quote_pair",
    "find_sentence_object",
    "is_sentence_end",
]
