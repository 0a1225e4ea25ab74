"""Textual host for the line editor.

The adapter has no Textual import of its own; only :mod:`.app` needs the
``textual`` package at import time.
"""

from .controller import TextualLineEditAdapter, TextualUIHooks

__all__ = ["TextualLineEditAdapter", "TextualUIHooks"]
