"""The key scheme capability shared by the Emacs and Vim interpreters."""

from __future__ import annotations

from lineedit.buffer import Buffer
from lineedit.events import Event

from .keys import KeyInput, decode_key


class KeyScheme:
    """Interprets one keystroke at a time against a :class:`Buffer`.

    Subclasses implement :meth:`handle_input`; :meth:`handle_key` decodes the
    raw bytes first and returns an empty :class:`Event` for input that is
    not a single keystroke.
    """

    name: str = "scheme"

    def handle_key(self, buffer: Buffer, data: bytes) -> Event:
        key = decode_key(data)
        if key is None:
            return Event()
        return self.handle_input(buffer, key)

    def handle_input(
        self, buffer: Buffer, key: KeyInput
    ) -> Event:  # pragma: no cover - abstract override
        raise NotImplementedError

    def in_insert_mode(self) -> bool:
        return True

    def mode_label(self) -> str:
        return "INSERT" if self.in_insert_mode() else "NORMAL"

    def reset(self) -> None:  # pragma: no cover - default no-op
        """Drop any half-typed command state."""


__all__ = ["Event", "KeyScheme"]
