"""Editing verbs bound through the keymap registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from lineedit.buffer import Buffer
from lineedit.events import Event

from .core import ActionContext

if TYPE_CHECKING:
    from lineedit.keymaps.resolver import ResolutionMatch

Handler = Callable[[ActionContext, "ResolutionMatch"], Event]


def _motion(move: Callable[[Buffer], object]) -> Handler:
    def handler(context: ActionContext, match: "ResolutionMatch") -> Event:
        del match
        move(context.buffer)
        return Event.handled()

    handler.__name__ = getattr(move, "__name__", "motion")
    return handler


def _mutation(label: str, mutate: Callable[[Buffer], bool]) -> Handler:
    def handler(context: ActionContext, match: "ResolutionMatch") -> Event:
        del match
        with context.edit(label):
            changed = mutate(context.buffer)
        return Event.handled(text_changed=changed)

    handler.__name__ = label
    return handler


move_home = _motion(Buffer.home)
move_end = _motion(Buffer.end)
move_left = _motion(Buffer.left)
move_right = _motion(Buffer.right)
move_word_left = _motion(lambda buffer: buffer.word_left(big=True))
move_word_right = _motion(lambda buffer: buffer.word_right(big=True))

delete_backward = _mutation("delete_backward", Buffer.delete_backward)
delete_forward = _mutation("delete_forward", Buffer.delete_forward)
delete_word_backward = _mutation("delete_word_backward", Buffer.delete_word_backward)
delete_word_forward = _mutation("delete_word_forward", Buffer.delete_word_forward)
kill_to_end = _mutation("kill_to_end", Buffer.kill_to_end)
kill_to_start = _mutation("kill_to_start", Buffer.kill_to_start)
transpose_chars = _mutation("transpose", Buffer.transpose)


def undo(context: ActionContext, match: "ResolutionMatch") -> Event:
    del match
    return Event.handled(text_changed=context.buffer.undo())


def redo(context: ActionContext, match: "ResolutionMatch") -> Event:
    del match
    return Event.handled(text_changed=context.buffer.redo())


def insert_text(context: ActionContext, text: str) -> Event:
    """Insert typed text; not keymap bound, printable keys fall through to it."""

    with context.edit("insert"):
        context.buffer.insert_string(text)
    return Event.handled(text_changed=bool(text))


__all__ = [
    "move_home",
    "move_end",
    "move_left",
    "move_right",
    "move_word_left",
    "move_word_right",
    "delete_backward",
    "delete_forward",
    "delete_word_backward",
    "delete_word_forward",
    "kill_to_end",
    "kill_to_start",
    "transpose_chars",
    "undo",
    "redo",
    "insert_text",
]
