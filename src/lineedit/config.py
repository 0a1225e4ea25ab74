"""Editor configuration passed explicitly to the scheme manager."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "LINEEDIT_"
SCHEME_NAMES = ("vim", "emacs")


def _env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Settings for one editing session.

    ``max_history`` bounds the undo and redo stacks (0 keeps everything).
    The cursor tags are Rich style names used by the markup renderer.
    """

    scheme: str = "vim"
    max_history: int = 100
    normal_cursor_tag: str = "reverse"
    insert_cursor_tag: str = "underline"
    placeholder: str = " "

    def __post_init__(self) -> None:
        if self.scheme not in SCHEME_NAMES:
            raise ValueError(
                f"Unknown scheme '{self.scheme}', expected one of {SCHEME_NAMES}"
            )
        if self.max_history < 0:
            raise ValueError("max_history must be >= 0")
        if not self.normal_cursor_tag or not self.insert_cursor_tag:
            raise ValueError("cursor tags cannot be empty")
        if len(self.placeholder) != 1:
            raise ValueError("placeholder must be a single character")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            scheme=env.get(f"{ENV_PREFIX}SCHEME", defaults.scheme).strip().lower(),
            max_history=_env_int(env, f"{ENV_PREFIX}MAX_HISTORY", defaults.max_history),
            normal_cursor_tag=env.get(
                f"{ENV_PREFIX}CURSOR_TAG", defaults.normal_cursor_tag
            ),
            insert_cursor_tag=env.get(
                f"{ENV_PREFIX}INSERT_CURSOR_TAG", defaults.insert_cursor_tag
            ),
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Copy with the non-None ``changes`` applied (CLI flags over env)."""

        return replace(self, **{k: v for k, v in changes.items() if v is not None})


__all__ = ["EditorConfig", "ENV_PREFIX", "SCHEME_NAMES"]
