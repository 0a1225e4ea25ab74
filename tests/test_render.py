from __future__ import annotations

from lineedit.buffer import Buffer, render_markup


def render(text: str, cursor: int | None = None, *, insert: bool = False) -> str:
    buffer = Buffer.from_text(text, cursor=cursor)
    return render_markup(
        buffer, insert_mode=insert, normal_tag="reverse", insert_tag="underline"
    )


def test_empty_buffer_renders_placeholder() -> None:
    assert render("") == "[reverse] [/reverse]"
    assert render("", insert=True) == "[underline] [/underline]"


def test_cursor_inside_text_wraps_one_character() -> None:
    assert render("hello", 1) == "h[reverse]e[/reverse]llo"
    assert render("hello", 0, insert=True) == "[underline]h[/underline]ello"


def test_cursor_at_end_appends_placeholder() -> None:
    assert render("hi") == "hi[reverse] [/reverse]"


def test_custom_placeholder() -> None:
    buffer = Buffer.from_text("ab")

    markup = buffer.render_markup(insert_mode=True, placeholder="_")

    assert markup == "ab[underline]_[/underline]"


def test_markup_in_text_is_escaped() -> None:
    assert render("[bold]x") == "\\[bold]x[reverse] [/reverse]"
