from __future__ import annotations

import pytest

from lineedit.buffer import Buffer, BufferSnapshot, UndoHistory


def make_buffer(text: str = "", cursor: int | None = None, **kwargs: int) -> Buffer:
    return Buffer.from_text(text, cursor=cursor, **kwargs)


def test_insert_and_delete_primitives() -> None:
    buffer = Buffer()
    buffer.insert_string("helo")
    buffer.left()
    buffer.insert("l")

    assert buffer.text == "hello"
    assert buffer.cursor == 4

    assert buffer.delete_backward() is True
    assert buffer.text == "helo"
    assert buffer.delete_forward() is True
    assert buffer.text == "hel"
    assert buffer.delete_forward() is False


def test_boundaries_are_clamped() -> None:
    buffer = make_buffer("ab", cursor=0)

    assert buffer.left() is False
    assert buffer.delete_backward() is False
    buffer.end()
    assert buffer.right() is False
    buffer.set_cursor(99)
    assert buffer.cursor == 2
    buffer.set_cursor(-3)
    assert buffer.cursor == 0


def test_set_moves_cursor_to_end() -> None:
    buffer = make_buffer("abc", cursor=1)

    buffer.set("hello world")

    assert buffer.cursor == len("hello world")
    assert buffer.before_cursor == "hello world"
    assert buffer.after_cursor == ""


def test_replace_range_puts_cursor_at_start() -> None:
    buffer = make_buffer("hello world")

    buffer.replace_range(8, 2)

    assert buffer.text == "herld"
    assert buffer.cursor == 2


def test_kill_and_transpose() -> None:
    buffer = make_buffer("hello world", cursor=5)
    assert buffer.kill_to_end() is True
    assert buffer.text == "hello"

    buffer.set_cursor(2)
    assert buffer.kill_to_start() is True
    assert (buffer.text, buffer.cursor) == ("llo", 0)

    buffer = make_buffer("abc", cursor=1)
    assert buffer.transpose() is True
    assert (buffer.text, buffer.cursor) == ("bac", 2)

    buffer.end()
    assert buffer.transpose() is True
    assert (buffer.text, buffer.cursor) == ("bca", 3)

    assert make_buffer("a").transpose() is False


def test_word_edits_treat_spaces_as_separators() -> None:
    buffer = make_buffer("foo.bar baz")

    assert buffer.delete_word_backward() is True
    assert buffer.text == "foo.bar "
    assert buffer.delete_word_backward() is True
    assert buffer.text == ""

    buffer = make_buffer("one two", cursor=0)
    assert buffer.delete_word_forward() is True
    assert buffer.text == "two"


def test_word_motions_use_character_classes() -> None:
    buffer = make_buffer("foo.bar baz", cursor=0)

    buffer.word_right()
    assert buffer.cursor == 3
    buffer.word_right(big=True)
    assert buffer.cursor == 8
    buffer.word_left()
    assert buffer.cursor == 4
    buffer.word_end()
    assert buffer.cursor == 6


def test_undo_restores_saved_state_and_redo_reapplies() -> None:
    buffer = make_buffer("hello", cursor=2)

    buffer.save_state()
    buffer.insert("X")
    assert buffer.text == "heXllo"

    assert buffer.undo() is True
    assert (buffer.text, buffer.cursor) == ("hello", 2)

    assert buffer.redo() is True
    assert (buffer.text, buffer.cursor) == ("heXllo", 3)


def test_new_edit_after_undo_clears_redo() -> None:
    buffer = make_buffer("a")
    buffer.save_state()
    buffer.insert("b")
    buffer.undo()

    buffer.save_state()
    buffer.insert("c")

    assert buffer.can_redo is False
    assert buffer.redo() is False
    assert buffer.text == "ac"


def test_undo_on_empty_history_is_noop() -> None:
    buffer = make_buffer("abc")

    assert buffer.undo() is False
    assert buffer.text == "abc"


def test_duplicate_snapshots_are_not_stacked() -> None:
    buffer = make_buffer("abc")

    buffer.save_state()
    buffer.save_state()

    assert buffer.history.undo_depth == 1


def test_max_history_drops_oldest_entries() -> None:
    buffer = Buffer(max_history=2)
    for ch in "abc":
        buffer.save_state()
        buffer.insert(ch)

    assert buffer.history.undo_depth == 2
    assert buffer.undo() and buffer.undo()
    assert buffer.text == "a"
    assert buffer.undo() is False


def test_shrinking_max_history_trims_existing_entries() -> None:
    buffer = Buffer()
    for ch in "abcd":
        buffer.save_state()
        buffer.insert(ch)

    buffer.max_history = 1

    assert buffer.history.undo_depth == 1
    with pytest.raises(ValueError):
        buffer.max_history = -1


def test_transaction_records_only_real_changes() -> None:
    buffer = make_buffer("abc", cursor=0)

    with buffer.transaction("noop"):
        buffer.delete_backward()
    assert buffer.can_undo is False

    with buffer.transaction("delete"):
        buffer.delete_forward()
    assert buffer.text == "bc"
    assert buffer.undo() is True
    assert (buffer.text, buffer.cursor) == ("abc", 0)


def test_undo_history_redo_pushes_without_clearing() -> None:
    history = UndoHistory()
    first = BufferSnapshot("a", 1)
    second = BufferSnapshot("ab", 2)
    third = BufferSnapshot("abc", 3)

    history.record(first)
    history.record(second)
    assert history.undo(third) == second
    assert history.undo(second) == first
    assert history.redo(first) == second

    assert history.can_redo()
    assert history.undo_depth == 1


def test_render_markup_through_buffer() -> None:
    buffer = make_buffer("ab", cursor=0)

    assert buffer.render_markup(insert_mode=False) == "[reverse]a[/reverse]b"
