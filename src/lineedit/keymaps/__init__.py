"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeySequence, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import EMACS_MODE, VIM_INSERT_MODE, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "EMACS_MODE",
    "VIM_INSERT_MODE",
    "load_default_keymaps",
]
