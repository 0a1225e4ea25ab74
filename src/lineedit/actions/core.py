"""Action context plus the verbs that do not touch the text."""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ContextManager, Dict

from lineedit.buffer import Buffer
from lineedit.events import Event

if TYPE_CHECKING:
    from lineedit.keymaps.resolver import ResolutionMatch


@dataclass(slots=True)
class ActionContext:
    """What a keymap action may touch while it runs.

    ``record_history`` is False inside a Vim insert session, where the whole
    session is one undo step saved by the command that opened it.
    """

    buffer: Buffer
    record_history: bool = True
    flags: Dict[str, bool] = field(default_factory=dict)

    def edit(self, label: str) -> ContextManager[object]:
        if self.record_history:
            return self.buffer.transaction(label)
        return nullcontext()


def submit_line(context: ActionContext, match: "ResolutionMatch") -> Event:
    del context, match
    return Event(consumed=True, submit=True)


def cancel_line(context: ActionContext, match: "ResolutionMatch") -> Event:
    del context, match
    return Event(consumed=True, cancel=True)


__all__ = ["ActionContext", "submit_line", "cancel_line"]
