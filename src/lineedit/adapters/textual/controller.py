"""Minimal Textual adapter that wires the scheme manager into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from lineedit.buffer import BufferMirror
from lineedit.events import Event
from lineedit.schemes import SchemeManager, encode_key


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    submit: Callable[[str], None] = _noop
    cancel: Callable[[], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def textual_key_bytes(key: str, character: Optional[str] = None) -> Optional[bytes]:
    """Raw keystroke bytes for a Textual key event.

    Printable characters win over the key name so ``shift+a`` arrives as
    ``A``; everything else is looked up by name (``ctrl+w``, ``left``).
    """

    if character and len(character) == 1 and 0x20 <= ord(character) <= 0x7E:
        return character.encode("ascii")
    return encode_key(key)


class TextualLineEditAdapter:
    """Bridges a :class:`SchemeManager` to a Textual-friendly surface.

    Submitting hands the line to ``hooks.submit`` and starts a fresh one;
    cancelling calls ``hooks.cancel`` and clears the line.
    """

    def __init__(self, manager: SchemeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._refresh()

    def handle_textual_key(self, key: str, character: Optional[str] = None) -> Event:
        """Translate a Textual key event into raw bytes and dispatch it."""

        data = textual_key_bytes(key, character)
        if data is None:
            self._log_state("unmapped ->", key=key)
            return Event()

        self._log_state("key ->", key=key, data=data)
        event = self.manager.handle_key(data)
        if event.submit:
            line = self.manager.buffer.text
            self.hooks.submit(line)
            self.manager.reset()
        elif event.cancel:
            self.hooks.cancel()
            self.manager.reset()
        self._refresh()
        self._log_state(
            "result <-",
            consumed=event.consumed,
            changed=event.text_changed,
            submit=event.submit,
            cancel=event.cancel,
        )
        return event

    def switch_scheme(self, name: str) -> None:
        self.manager.switch_scheme(name)
        self._refresh()

    def _refresh(self) -> None:
        self.hooks.update_buffer(self.manager.mirror())
        self.hooks.update_status(
            f"{self.manager.active_scheme.name} | {self.manager.mode_label()}"
        )

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.manager.buffer
        return {
            "scheme": self.manager.active_scheme.name,
            "mode": self.manager.mode_label(),
            "cursor": buffer.cursor,
            "length": len(buffer),
        }


__all__ = ["TextualLineEditAdapter", "TextualUIHooks", "textual_key_bytes"]
