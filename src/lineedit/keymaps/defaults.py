"""Built-in keymaps for the Emacs scheme and Vim insert mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from lineedit.actions import core as core_actions
from lineedit.actions import editing as editing_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

EMACS_MODE = "emacs"
VIM_INSERT_MODE = "vim.insert"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.submit",
        handler=core_actions.submit_line,
        description="Submit the line",
    ),
    ActionRef(
        id="core.cancel",
        handler=core_actions.cancel_line,
        description="Abandon the line",
    ),
    ActionRef(id="edit.home", handler=editing_actions.move_home),
    ActionRef(id="edit.end", handler=editing_actions.move_end),
    ActionRef(id="edit.left", handler=editing_actions.move_left),
    ActionRef(id="edit.right", handler=editing_actions.move_right),
    ActionRef(id="edit.word_left", handler=editing_actions.move_word_left),
    ActionRef(id="edit.word_right", handler=editing_actions.move_word_right),
    ActionRef(
        id="edit.delete_backward",
        handler=editing_actions.delete_backward,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=editing_actions.delete_forward,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.delete_word_backward",
        handler=editing_actions.delete_word_backward,
        description="Delete the word before the cursor",
    ),
    ActionRef(
        id="edit.delete_word_forward",
        handler=editing_actions.delete_word_forward,
        description="Delete up to the start of the next word",
    ),
    ActionRef(
        id="edit.kill_to_end",
        handler=editing_actions.kill_to_end,
        description="Delete from the cursor to the end of the line",
    ),
    ActionRef(
        id="edit.kill_to_start",
        handler=editing_actions.kill_to_start,
        description="Delete from the start of the line to the cursor",
    ),
    ActionRef(
        id="edit.transpose",
        handler=editing_actions.transpose_chars,
        description="Swap the characters around the cursor",
    ),
    ActionRef(id="history.undo", handler=editing_actions.undo, description="Undo"),
    ActionRef(id="history.redo", handler=editing_actions.redo, description="Redo"),
)


def _emacs(keys: str, action_id: str, **kwargs: Any) -> Binding:
    return Binding.simple(EMACS_MODE, keys, action_id, **kwargs)


def _insert(keys: str, action_id: str, **kwargs: Any) -> Binding:
    return Binding.simple(VIM_INSERT_MODE, keys, action_id, **kwargs)


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _emacs("enter", "core.submit"),
    _emacs("escape", "core.cancel"),
    _emacs(
        "ctrl+d",
        "core.cancel",
        id="emacs.eof.ctrl+d",
        description="Ctrl-D on an empty line ends input",
        when=("buffer_empty",),
    ),
    _emacs("ctrl+a", "edit.home"),
    _emacs("home", "edit.home"),
    _emacs("ctrl+e", "edit.end"),
    _emacs("end", "edit.end"),
    _emacs("ctrl+b", "edit.left"),
    _emacs("left", "edit.left"),
    _emacs("ctrl+f", "edit.right"),
    _emacs("right", "edit.right"),
    _emacs("alt+b", "edit.word_left"),
    _emacs("alt+f", "edit.word_right"),
    _emacs("ctrl+d", "edit.delete_forward", when=("!buffer_empty",)),
    _emacs("backspace", "edit.delete_backward"),
    _emacs("ctrl+w", "edit.delete_word_backward"),
    _emacs("alt+backspace", "edit.delete_word_backward"),
    _emacs("alt+d", "edit.delete_word_forward"),
    _emacs("ctrl+k", "edit.kill_to_end"),
    _emacs("ctrl+u", "edit.kill_to_start"),
    _emacs("ctrl+t", "edit.transpose"),
    _emacs("ctrl+z", "history.undo"),
    _emacs("ctrl+_", "history.undo"),
    _emacs("ctrl+y", "history.redo"),
    _insert("backspace", "edit.delete_backward"),
    _insert("left", "edit.left"),
    _insert("right", "edit.right"),
    _insert("home", "edit.home"),
    _insert("end", "edit.end"),
    _insert("ctrl+w", "edit.delete_word_backward"),
    _insert("ctrl+u", "edit.kill_to_start"),
)


@dataclass(frozen=True, slots=True)
class _Selection:
    """Id filter: an ``include`` list narrows, ``exclude`` always wins."""

    include: Optional[frozenset[str]] = None
    exclude: frozenset[str] = frozenset()

    @classmethod
    def of(
        cls, include: Optional[Iterable[str]], exclude: Optional[Iterable[str]]
    ) -> "_Selection":
        return cls(
            frozenset(include) if include else None, frozenset(exclude or ())
        )

    def __contains__(self, item_id: object) -> bool:
        if item_id in self.exclude:
            return False
        return self.include is None or item_id in self.include


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register the built-in actions and the Emacs and Vim insert keymaps.

    Default bindings whose action was filtered out are skipped. Bindings in
    ``per_mode_overrides`` must target the mode they are listed under and
    replace any default on the same chord.
    """

    actions = _Selection.of(include_actions, exclude_actions)
    bindings = _Selection.of(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if action.id in actions:
            registry.register_action(action, replace=replace)

    defaults = [
        binding
        for binding in DEFAULT_BINDINGS
        if binding.id in bindings and registry.has_action(binding.action_id)
    ]
    for binding in (*defaults, *(extra_bindings or ())):
        registry.register_binding(binding, replace=replace)

    for mode, overrides in (per_mode_overrides or {}).items():
        for binding in overrides:
            if binding.mode != mode:
                raise ValueError(
                    f"Override '{binding.id}' targets mode '{binding.mode}', "
                    f"not '{mode}'"
                )
            registry.register_binding(binding, replace=True)


__all__ = [
    "load_default_keymaps",
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "EMACS_MODE",
    "VIM_INSERT_MODE",
]
