"""Scheme manager owning the buffer, the schemes and the active choice."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

from lineedit.buffer import Buffer, BufferMirror
from lineedit.config import EditorConfig
from lineedit.events import Event
from lineedit.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from lineedit.runtime import telemetry

from .base import KeyScheme
from .emacs import EmacsScheme
from .vim import VimScheme

SchemeFactory = Callable[..., KeyScheme]

SCHEME_FACTORIES: Dict[str, SchemeFactory] = {
    EmacsScheme.name: EmacsScheme,
    VimScheme.name: VimScheme,
}


class UnknownSchemeError(ValueError):
    """Raised when a scheme name has no registered implementation."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = tuple(sorted(available))
        listed = ", ".join(self.available)
        super().__init__(f"Unknown scheme '{name}' (available: {listed})")


def create_scheme(name: str, *, resolver: Optional[KeymapResolver] = None) -> KeyScheme:
    factory = SCHEME_FACTORIES.get(name)
    if factory is None:
        raise UnknownSchemeError(name, SCHEME_FACTORIES)
    return factory(resolver=resolver)


class SchemeManager:
    """Routes keystrokes for one buffer to whichever scheme is active.

    Every registered scheme shares one keymap registry and resolver, so
    bindings changed through :attr:`keymap_registry` apply everywhere.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        active: str = VimScheme.name,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        config: Optional[EditorConfig] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = buffer or Buffer(max_history=self.config.max_history)
        self.logger = telemetry.get_logger("lineedit.schemes")
        self.keymap_registry = keymap_registry or KeymapRegistry()
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(self.keymap_registry)
        self._schemes: Dict[str, KeyScheme] = {}
        self._active: Optional[str] = None
        for name in SCHEME_FACTORIES:
            self.register_scheme(create_scheme(name, resolver=self.keymap_resolver))
        self.switch_scheme(active)

    @classmethod
    def from_config(
        cls, config: EditorConfig, *, text: str = ""
    ) -> "SchemeManager":
        buffer = Buffer.from_text(text, max_history=config.max_history)
        return cls(buffer, active=config.scheme, config=config)

    @property
    def active_scheme(self) -> KeyScheme:
        if self._active is None:
            raise RuntimeError("No active scheme registered")
        return self._schemes[self._active]

    @property
    def scheme_names(self) -> tuple[str, ...]:
        return tuple(self._schemes)

    def register_scheme(self, scheme: KeyScheme, *, replace: bool = False) -> KeyScheme:
        if scheme.name in self._schemes and not replace:
            raise ValueError(f"Scheme '{scheme.name}' already registered")
        self._schemes[scheme.name] = scheme
        return scheme

    def switch_scheme(self, name: str) -> KeyScheme:
        if name not in self._schemes:
            raise UnknownSchemeError(name, self._schemes)
        if self._active == name:
            return self._schemes[name]
        previous = self._active
        if previous is not None:
            self._schemes[previous].reset()
        self._active = name
        scheme = self._schemes[name]
        scheme.reset()
        telemetry.record_event(
            "scheme.switch",
            level="debug",
            data={"from": previous or "", "to": name},
            logger_name="lineedit.schemes",
        )
        return scheme

    def handle_key(self, data: bytes) -> Event:
        scheme = self.active_scheme
        with telemetry.span(
            name=f"scheme::{scheme.name}",
            logger_name="lineedit.schemes",
            component=True,
            metadata={"key": bytes(data), "scheme": scheme.name},
        ) as handle:
            event = scheme.handle_key(self.buffer, data)
            handle.add_metadata("consumed", event.consumed)
        return event

    def in_insert_mode(self) -> bool:
        return self.active_scheme.in_insert_mode()

    def mode_label(self) -> str:
        return self.active_scheme.mode_label()

    def render_markup(self) -> str:
        return self.buffer.render_markup(
            insert_mode=self.in_insert_mode(),
            normal_tag=self.config.normal_cursor_tag,
            insert_tag=self.config.insert_cursor_tag,
            placeholder=self.config.placeholder,
        )

    def mirror(self) -> BufferMirror:
        return self.buffer.mirror(
            markup=self.render_markup(),
            mode=self.mode_label(),
            attributes={"scheme": self.active_scheme.name},
        )

    def reset(self, text: str = "") -> None:
        """Start a fresh line: new text, empty history, clean scheme state."""

        self.buffer.set(text)
        self.buffer.clear_history()
        self.active_scheme.reset()


__all__ = [
    "SchemeManager",
    "SCHEME_FACTORIES",
    "UnknownSchemeError",
    "create_scheme",
]
