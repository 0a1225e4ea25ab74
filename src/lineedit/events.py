"""The value every key scheme returns for a keystroke."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Event:
    """Outcome of one keystroke.

    ``consumed`` is False when the scheme declined the key so the host can
    route it elsewhere (scroll keys, history navigation).
    """

    consumed: bool = False
    text_changed: bool = False
    submit: bool = False
    cancel: bool = False

    @classmethod
    def handled(cls, *, text_changed: bool = False) -> "Event":
        return cls(consumed=True, text_changed=text_changed)


__all__ = ["Event"]
