from __future__ import annotations

from lineedit.buffer import Buffer
from lineedit.schemes import (
    InsertChange,
    MotionChange,
    Operator,
    SimpleChange,
    VimScheme,
)

ESC = "\x1b"


def make_editor(
    text: str = "", cursor: int | None = None
) -> tuple[VimScheme, Buffer]:
    return VimScheme(), Buffer.from_text(text, cursor=cursor)


def press(scheme: VimScheme, buffer: Buffer, keys: str) -> None:
    for ch in keys:
        scheme.handle_key(buffer, ch.encode())


def test_repeat_delete_word() -> None:
    scheme, buffer = make_editor("one two three four", cursor=0)

    press(scheme, buffer, "dw")
    assert scheme.last_change == MotionChange(Operator.DELETE, "w", 1)

    press(scheme, buffer, ".")
    assert buffer.text == "three four"

    press(scheme, buffer, ".")
    assert buffer.text == "four"


def test_repeat_recomputes_range_against_current_text() -> None:
    scheme, buffer = make_editor("ab cdefg hi", cursor=0)

    press(scheme, buffer, "dw")
    press(scheme, buffer, ".")

    assert buffer.text == "hi"


def test_new_count_replaces_recorded_count() -> None:
    scheme, buffer = make_editor("a b c d e f g", cursor=0)

    press(scheme, buffer, "dw")
    assert buffer.text == "b c d e f g"

    press(scheme, buffer, "3.")
    assert buffer.text == "e f g"

    press(scheme, buffer, ".")
    assert buffer.text == ""


def test_repeat_simple_changes() -> None:
    scheme, buffer = make_editor("abcdef", cursor=0)

    press(scheme, buffer, "2x")
    assert scheme.last_change == SimpleChange("x", 2)
    press(scheme, buffer, ".")

    assert buffer.text == "ef"


def test_repeat_replace() -> None:
    scheme, buffer = make_editor("abcd", cursor=0)

    press(scheme, buffer, "rz")
    press(scheme, buffer, "l.")

    assert buffer.text == "zzcd"


def test_repeat_insert_session() -> None:
    scheme, buffer = make_editor()

    press(scheme, buffer, "iab" + ESC)
    assert buffer.text == "ab"
    assert buffer.cursor == 1
    assert scheme.last_change == InsertChange("i", 1, "ab")

    press(scheme, buffer, ".")
    assert buffer.text == "aabb"
    assert buffer.cursor == 2
    assert scheme.in_insert_mode() is False


def test_repeat_append_at_end() -> None:
    scheme, buffer = make_editor("hi", cursor=0)

    press(scheme, buffer, "A!" + ESC)
    press(scheme, buffer, ".")

    assert buffer.text == "hi!!"


def test_repeat_change_word() -> None:
    scheme, buffer = make_editor("one two three", cursor=0)

    press(scheme, buffer, "ciwX" + ESC)
    assert buffer.text == "X two three"

    press(scheme, buffer, "w.")
    assert buffer.text == "X X three"
    assert scheme.in_insert_mode() is False


def test_repeat_uses_text_left_after_insert_backspace() -> None:
    scheme, buffer = make_editor()

    press(scheme, buffer, "iabc")
    scheme.handle_key(buffer, b"\x7f")
    press(scheme, buffer, ESC)
    press(scheme, buffer, "$.")

    assert buffer.text == "abab"


def test_repeat_change_line() -> None:
    scheme, buffer = make_editor("first")

    press(scheme, buffer, "ccnew" + ESC)
    assert buffer.text == "new"

    press(scheme, buffer, ".")
    assert buffer.text == "new"
    assert scheme.in_insert_mode() is False


def test_repeat_find_delete() -> None:
    scheme, buffer = make_editor("a-b-c-d", cursor=0)

    press(scheme, buffer, "dt-")
    assert buffer.text == "-b-c-d"

    press(scheme, buffer, "l.")
    assert buffer.text == "--c-d"


def test_yank_is_not_repeatable() -> None:
    scheme, buffer = make_editor("hello world", cursor=0)

    press(scheme, buffer, "x")
    press(scheme, buffer, "w")
    press(scheme, buffer, "yw")
    press(scheme, buffer, ".")

    assert scheme.last_change == SimpleChange("x", 1)
    assert buffer.text == "ello orld"


def test_repeat_without_history_does_nothing() -> None:
    scheme, buffer = make_editor("abc", cursor=0)

    press(scheme, buffer, ".")

    assert buffer.text == "abc"
    assert scheme.last_change is None


def test_repeat_is_one_undo_step() -> None:
    scheme, buffer = make_editor("one two three", cursor=0)

    press(scheme, buffer, "dw.")
    press(scheme, buffer, "u")

    assert buffer.text == "two three"
