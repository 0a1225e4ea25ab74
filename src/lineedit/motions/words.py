"""Word and WORD boundaries.

Lower-case word motions stop wherever the character class changes
(whitespace / word characters / punctuation). Upper-case WORD motions only
distinguish whitespace from everything else.
"""

from __future__ import annotations

from .models import CharClass, Span

_WHITESPACE = frozenset(" \t\n\r\v\f")


def char_class(ch: str, *, big: bool = False) -> CharClass:
    if ch in _WHITESPACE:
        return CharClass.WHITESPACE
    if big or ch == "_" or ch.isalnum():
        return CharClass.WORD
    return CharClass.PUNCTUATION


def is_blank(ch: str) -> bool:
    return ch in _WHITESPACE


def _class_at(text: str, index: int, big: bool) -> CharClass:
    return char_class(text[index], big=big)


def next_word_start(text: str, cursor: int, *, big: bool = False) -> int:
    """Start of the next word (``w`` / ``W``), or the buffer end."""

    length = len(text)
    if cursor >= length:
        return length
    i = cursor
    current = _class_at(text, i, big)
    if current is not CharClass.WHITESPACE:
        while i < length and _class_at(text, i, big) is current:
            i += 1
    while i < length and is_blank(text[i]):
        i += 1
    return i


def prev_word_start(text: str, cursor: int, *, big: bool = False) -> int:
    """Start of the current or previous word (``b`` / ``B``)."""

    if cursor <= 0:
        return 0
    i = min(cursor, len(text)) - 1
    while i > 0 and is_blank(text[i]):
        i -= 1
    current = _class_at(text, i, big)
    while i > 0 and _class_at(text, i - 1, big) is current:
        i -= 1
    return i


def word_end(text: str, cursor: int, *, big: bool = False) -> int:
    """Last character of the current or next word (``e`` / ``E``)."""

    length = len(text)
    if length == 0:
        return 0
    if cursor >= length - 1:
        return length - 1
    i = cursor
    if not is_blank(text[i]):
        i += 1
    while i < length and is_blank(text[i]):
        i += 1
    if i >= length:
        return length - 1
    current = _class_at(text, i, big)
    while i < length - 1 and _class_at(text, i + 1, big) is current:
        i += 1
    return i


def find_word_object(text: str, cursor: int, inner: bool, *, big: bool = False) -> Span:
    """Resolve ``iw``/``aw`` (``iW``/``aW`` with ``big``).

    On whitespace the object is the whitespace run; the around form then
    takes the following non-blank run, or the preceding one at buffer end.
    On a word or punctuation run the object is that run; the around form
    adds trailing whitespace, or leading whitespace when none trails.
    """

    length = len(text)
    if length == 0:
        return Span.missing()
    cursor = max(0, min(cursor, length - 1))

    cls = _class_at(text, cursor, big)
    start = end = cursor
    while start > 0 and _class_at(text, start - 1, big) is cls:
        start -= 1
    while end < length and _class_at(text, end, big) is cls:
        end += 1

    if inner:
        return Span(start, end)

    if cls is CharClass.WHITESPACE:
        if end < length:
            following = _class_at(text, end, big)
            while end < length and _class_at(text, end, big) is following:
                end += 1
        elif start > 0:
            preceding = _class_at(text, start - 1, big)
            while start > 0 and _class_at(text, start - 1, big) is preceding:
                start -= 1
        return Span(start, end)

    if end < length and is_blank(text[end]):
        while end < length and is_blank(text[end]):
            end += 1
    elif start > 0 and is_blank(text[start - 1]):
        while start > 0 and is_blank(text[start - 1]):
            start -= 1
    return Span(start, end)


__all__ = [
    "char_class",
    "is_blank",
    "next_word_start",
    "prev_word_start",
    "word_end",
    "find_word_object",
]
