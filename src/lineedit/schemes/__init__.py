"""Key schemes: the Emacs and Vim interpreters and their manager."""

from .base import Event, KeyScheme
from .emacs import EmacsScheme
from .keys import KeyInput, decode_key, encode_key
from .manager import SCHEME_FACTORIES, SchemeManager, UnknownSchemeError, create_scheme
from .vim import VimScheme
from .vim_state import (
    FindChange,
    InsertChange,
    LastChange,
    MotionChange,
    Operator,
    ReplaceChange,
    SimpleChange,
    TextObjectChange,
    VimMode,
)

__all__ = [
    "Event",
    "KeyScheme",
    "EmacsScheme",
    "VimScheme",
    "KeyInput",
    "decode_key",
    "encode_key",
    "SCHEME_FACTORIES",
    "SchemeManager",
    "UnknownSchemeError",
    "create_scheme",
    "VimMode",
    "Operator",
    "LastChange",
    "SimpleChange",
    "MotionChange",
    "TextObjectChange",
    "FindChange",
    "ReplaceChange",
    "InsertChange",
]
