"""Editing verbs reused by the key schemes."""

from .core import ActionContext, cancel_line, submit_line
from .editing import (
    delete_backward,
    delete_forward,
    delete_word_backward,
    delete_word_forward,
    insert_text,
    kill_to_end,
    kill_to_start,
    move_end,
    move_home,
    move_left,
    move_right,
    move_word_left,
    move_word_right,
    redo,
    transpose_chars,
    undo,
)

__all__ = [
    "ActionContext",
    "cancel_line",
    "submit_line",
    "delete_backward",
    "delete_forward",
    "delete_word_backward",
    "delete_word_forward",
    "insert_text",
    "kill_to_end",
    "kill_to_start",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_word_left",
    "move_word_right",
    "redo",
    "transpose_chars",
    "undo",
]
