"""Single-line editing engine with Emacs and Vim key schemes."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "events",
    "keymaps",
    "motions",
    "runtime",
    "schemes",
]

__version__ = "0.1.0"
