"""Value types for keymaps: strokes, sequences, conditions, actions, bindings.

Tokens are the strings produced by :func:`lineedit.schemes.keys.decode_key`
(``"a"``, ``"ctrl+w"``, ``"alt+backspace"``, ``"left"``). Modifiers inside a
token are kept sorted so ``"alt+ctrl+x"`` and ``"ctrl+alt+x"`` compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping, Union

if TYPE_CHECKING:
    from lineedit.actions.core import ActionContext
    from lineedit.events import Event

    from .resolver import ResolutionMatch

ActionHandler = Callable[["ActionContext", "ResolutionMatch"], "Event"]


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {m.strip().lower() for m in self.modifiers if m.strip()}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+w"`` style tokens.

        A trailing ``+`` is the plus key itself, so ``"alt++"`` is Alt-plus.
        """

        text = token.strip()
        if not text:
            raise ValueError("token cannot be empty")
        if text.endswith("++"):
            head, key = text[:-2], "+"
        elif "+" in text[:-1]:
            head, _, key = text.rpartition("+")
        else:
            return cls(text)
        return cls(key, tuple(head.split("+")))


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes typed in order (``ctrl+x ctrl+u``)."""

    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag a binding requires; ``!flag`` requires it to be unset."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        return cls(text[1:] if negated else text, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editing verb that bindings point at."""

    id: str
    handler: ActionHandler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, context: "ActionContext", match: "ResolutionMatch") -> object:
        return self.handler(context, match)


@dataclass(frozen=True, slots=True)
class Binding:
    """Key sequence bound to an action inside one keymap mode."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        clauses = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(clause)
            for clause in self.when
        )
        object.__setattr__(self, "when", clauses)

    @classmethod
    def simple(
        cls,
        mode: str,
        keys: str,
        action_id: str,
        *,
        id: str | None = None,
        description: str = "",
        when: Iterable[Union[WhenClause, str]] = (),
        priority: int = 0,
    ) -> "Binding":
        """Bind space separated ``keys`` (``"ctrl+x ctrl+u"``) to ``action_id``.

        The default id is ``<mode>.<verb>.<tokens>``, e.g.
        ``emacs.delete_word_backward.ctrl+w``.
        """

        sequence = KeySequence.from_strings(*keys.split())
        verb = action_id.rpartition(".")[2]
        return cls(
            id=id or f"{mode}.{verb}.{'_'.join(sequence.tokens)}",
            mode=mode,
            sequence=sequence,
            action_id=action_id,
            description=description,
            when=tuple(when),  # type: ignore[arg-type]
            priority=priority,
        )

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "ActionHandler",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
]
