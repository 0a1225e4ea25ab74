"""Raw keystroke bytes to normalized key tokens and back.

A keystroke arrives as 1-3 bytes: a plain ASCII byte, ``ESC`` followed by
one byte (Alt chords), or an ``ESC [ <letter>`` cursor sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

ESC = 0x1B

_SINGLE_BYTE_NAMES: Dict[int, str] = {
    0x08: "backspace",
    0x09: "tab",
    0x0A: "enter",
    0x0D: "enter",
    0x1B: "escape",
    0x7F: "backspace",
}

_CSI_NAMES: Dict[int, str] = {
    ord("A"): "up",
    ord("B"): "down",
    ord("C"): "right",
    ord("D"): "left",
    ord("H"): "home",
    ord("F"): "end",
}

_CONTROL_PUNCTUATION: Dict[int, str] = {
    0x00: "@",
    0x1C: "\\",
    0x1D: "]",
    0x1E: "^",
    0x1F: "_",
}

# Names hosts such as Textual use for punctuation keys.
_KEY_ALIASES: Dict[str, str] = {
    "space": " ",
    "underscore": "_",
    "at": "@",
    "backslash": "\\",
    "right_square_bracket": "]",
    "circumflex_accent": "^",
    "return": "enter",
    "esc": "escape",
    "ctrl+h": "backspace",
    "ctrl+i": "tab",
    "ctrl+m": "enter",
    "ctrl+j": "enter",
    "ctrl+left_square_bracket": "escape",
}


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized keystroke.

    ``text`` is set for printable keys only, so schemes can tell typed
    characters from named keys without another lookup.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None
    raw: bytes = b""

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(sorted(self.modifiers))
            return f"{modifier}+{self.key}"
        return self.key

    @property
    def printable(self) -> bool:
        return self.text is not None and not self.modifiers


def _printable(byte: int) -> bool:
    return 0x20 <= byte <= 0x7E


def _key_name(byte: int) -> str:
    return "space" if byte == 0x20 else chr(byte)


def decode_key(data: bytes) -> Optional[KeyInput]:
    """Decode one keystroke; ``None`` for empty, oversized or unknown input."""

    raw = bytes(data)
    if not 1 <= len(raw) <= 3:
        return None

    first = raw[0]
    if len(raw) == 1:
        if _printable(first):
            return KeyInput(_key_name(first), text=chr(first), raw=raw)
        if first in _SINGLE_BYTE_NAMES:
            return KeyInput(_SINGLE_BYTE_NAMES[first], raw=raw)
        if 0x01 <= first <= 0x1A:
            return KeyInput(chr(first + 0x60), ("ctrl",), raw=raw)
        if first in _CONTROL_PUNCTUATION:
            return KeyInput(_CONTROL_PUNCTUATION[first], ("ctrl",), raw=raw)
        return None

    if first != ESC:
        return None

    if len(raw) == 2:
        second = raw[1]
        if _printable(second):
            return KeyInput(_key_name(second), ("alt",), raw=raw)
        if second in (0x7F, 0x08):
            return KeyInput("backspace", ("alt",), raw=raw)
        return None

    if raw[1] in (ord("["), ord("O")) and raw[2] in _CSI_NAMES:
        return KeyInput(_CSI_NAMES[raw[2]], raw=raw)
    return None


_NAMED_BYTES: Dict[str, bytes] = {
    "enter": b"\r",
    "escape": b"\x1b",
    "backspace": b"\x7f",
    "tab": b"\t",
    "up": b"\x1b[A",
    "down": b"\x1b[B",
    "right": b"\x1b[C",
    "left": b"\x1b[D",
    "home": b"\x1b[H",
    "end": b"\x1b[F",
}


def _char_byte(key: str) -> Optional[bytes]:
    key = _KEY_ALIASES.get(key, key)
    if len(key) == 1 and _printable(ord(key)):
        return key.encode("ascii")
    return None


def encode_key(name: str) -> Optional[bytes]:
    """Raw bytes for a key name such as ``"ctrl+w"``, ``"alt+b"`` or ``"left"``.

    Returns ``None`` when the name has no single-keystroke encoding.
    """

    if not name:
        return None
    name = _KEY_ALIASES.get(name, name)
    if name in _NAMED_BYTES:
        return _NAMED_BYTES[name]

    single = _char_byte(name)
    if single is not None:
        return single

    modifier, sep, key = name.rpartition("+")
    if not sep or not modifier:
        return None
    if key == "" and name.endswith("++"):
        modifier, key = name[:-2], "+"

    if modifier == "ctrl":
        key = _KEY_ALIASES.get(key, key)
        if len(key) == 1 and key.isalpha():
            return bytes([ord(key.lower()) - 0x60])
        for byte, punct in _CONTROL_PUNCTUATION.items():
            if key == punct:
                return bytes([byte])
        return None

    if modifier == "alt":
        if key == "backspace":
            return b"\x1b\x7f"
        char = _char_byte(key)
        if char is not None:
            return b"\x1b" + char
    return None


__all__ = ["KeyInput", "decode_key", "encode_key"]
