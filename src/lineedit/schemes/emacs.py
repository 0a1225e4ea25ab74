"""Linear, always-inserting key scheme."""

from __future__ import annotations

from typing import List, Optional

from lineedit.actions import ActionContext, insert_text
from lineedit.buffer import Buffer
from lineedit.events import Event
from lineedit.keymaps import (
    EMACS_MODE,
    KeymapRegistry,
    KeymapResolver,
    ResolutionMatch,
    load_default_keymaps,
)
from lineedit.runtime import telemetry

from .base import KeyScheme
from .keys import KeyInput


def run_binding(match: ResolutionMatch, context: ActionContext) -> Event:
    """Execute a resolved binding inside a telemetry span."""

    with telemetry.span(
        "keymaps::execute",
        logger_name="lineedit.keymaps",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, Event):
        return outcome
    return Event.handled()


def default_resolver() -> KeymapResolver:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    return KeymapResolver(registry)


class EmacsScheme(KeyScheme):
    """Every printable key inserts; control keys run keymap actions.

    Each mutating action saves the buffer state first, so every edit is
    its own undo step. Multi-key bindings (``ctrl+x ctrl+u``) are supported:
    a bound prefix is consumed and held until the sequence completes or
    misses.
    """

    name = "emacs"

    def __init__(
        self,
        *,
        resolver: Optional[KeymapResolver] = None,
        keymap_mode: str = EMACS_MODE,
    ) -> None:
        self.resolver = resolver or default_resolver()
        self.keymap_mode = keymap_mode
        self._pending: List[str] = []

    def in_insert_mode(self) -> bool:
        return True

    def reset(self) -> None:
        self._pending.clear()

    def handle_input(self, buffer: Buffer, key: KeyInput) -> Event:
        context = ActionContext(buffer, flags={"buffer_empty": len(buffer) == 0})
        self._pending.append(key.token)
        result = self.resolver.resolve(
            self.keymap_mode, tuple(self._pending), context=context.flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return run_binding(result.match, context)

        if result.status == "pending":
            return Event.handled()

        had_prefix = len(self._pending) > 1
        self._pending.clear()
        if had_prefix:
            return Event.handled()
        if key.printable and key.text is not None:
            return insert_text(context, key.text)
        return Event()


__all__ = ["EmacsScheme", "default_resolver", "run_binding"]
