"""Cursor-highlighted markup for the rendering boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

if TYPE_CHECKING:
    from .buffer import Buffer


def _wrap(tag: str, text: str) -> str:
    return f"[{tag}]{escape(text)}[/{tag}]"


def render_markup(
    buffer: "Buffer",
    *,
    insert_mode: bool,
    normal_tag: str,
    insert_tag: str,
    placeholder: str = " ",
) -> str:
    """Render ``buffer`` as Rich console markup with the cursor highlighted.

    Normal mode draws a block cursor: the tag wraps the character under the
    cursor. Insert mode draws a bar cursor in front of the character after
    the insertion point, so the same character is wrapped with the insert
    tag. At the end of the buffer, and for an empty buffer, a wrapped
    ``placeholder`` stands in for the missing character.
    """

    tag = insert_tag if insert_mode else normal_tag
    text = buffer.text
    if not text:
        return _wrap(tag, placeholder)

    cursor = buffer.cursor
    before = escape(text[:cursor])
    if cursor >= len(text):
        return before + _wrap(tag, placeholder)
    return before + _wrap(tag, text[cursor]) + escape(text[cursor + 1 :])
