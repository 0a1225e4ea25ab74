from __future__ import annotations

import pytest

from lineedit.config import EditorConfig


def test_defaults() -> None:
    config = EditorConfig()

    assert config.scheme == "vim"
    assert config.max_history == 100
    assert config.normal_cursor_tag == "reverse"
    assert config.insert_cursor_tag == "underline"


@pytest.mark.parametrize(
    "changes",
    [
        {"scheme": "nano"},
        {"max_history": -1},
        {"normal_cursor_tag": ""},
        {"placeholder": ""},
        {"placeholder": "ab"},
    ],
)
def test_invalid_values_raise(changes: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        EditorConfig(**changes)  # type: ignore[arg-type]


def test_from_env_mapping() -> None:
    config = EditorConfig.from_env(
        {
            "LINEEDIT_SCHEME": " Emacs ",
            "LINEEDIT_MAX_HISTORY": "5",
            "LINEEDIT_CURSOR_TAG": "bold",
        }
    )

    assert config.scheme == "emacs"
    assert config.max_history == 5
    assert config.normal_cursor_tag == "bold"
    assert config.insert_cursor_tag == "underline"


def test_from_env_ignores_bad_integers() -> None:
    config = EditorConfig.from_env({"LINEEDIT_MAX_HISTORY": "lots"})

    assert config.max_history == 100


def test_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LINEEDIT_SCHEME", "emacs")
    monkeypatch.delenv("LINEEDIT_MAX_HISTORY", raising=False)

    config = EditorConfig.from_env()

    assert config.scheme == "emacs"
    assert config.max_history == 100


def test_with_overrides_skips_none() -> None:
    config = EditorConfig().with_overrides(scheme="emacs", max_history=None)

    assert config.scheme == "emacs"
    assert config.max_history == 100
