"""Pure motion and text object resolvers shared by both key schemes."""

from .find import FindType, find_char, find_landing, find_operator_span, resolve_find
from .models import CharClass, Inclusivity, Span
from .objects import (
    SENTENCE_TERMINATORS,
    cursor_in_quote_pair,
    find_any_quote_object,
    find_quote_object,
    find_sentence_object,
    is_sentence_end,
)
from .table import MOTIONS, MotionSpec, lookup_motion
from .words import (
    char_class,
    find_word_object,
    is_blank,
    next_word_start,
    prev_word_start,
    word_end,
)

__all__ = [
    "CharClass",
    "FindType",
    "Inclusivity",
    "MOTIONS",
    "MotionSpec",
    "SENTENCE_TERMINATORS",
    "Span",
    "char_class",
    "cursor_in_quote_pair",
    "find_any_quote_object",
    "find_char",
    "find_landing",
    "find_operator_span",
    "find_quote_object",
    "find_sentence_object",
    "find_word_object",
    "is_blank",
    "is_sentence_end",
    "lookup_motion",
    "next_word_start",
    "prev_word_start",
    "resolve_find",
    "word_end",
]
