from __future__ import annotations

from lineedit.motions import (
    MOTIONS,
    CharClass,
    FindType,
    Span,
    char_class,
    find_any_quote_object,
    find_char,
    find_landing,
    find_operator_span,
    find_quote_object,
    find_sentence_object,
    find_word_object,
    next_word_start,
    prev_word_start,
    resolve_find,
    word_end,
)


def test_char_classes() -> None:
    assert char_class(" ") is CharClass.WHITESPACE
    assert char_class("_") is CharClass.WORD
    assert char_class("9") is CharClass.WORD
    assert char_class(".") is CharClass.PUNCTUATION
    assert char_class(".", big=True) is CharClass.WORD


def test_word_motions_respect_classes() -> None:
    text = "foo.bar(baz) qux"

    assert next_word_start(text, 0) == 3
    assert next_word_start(text, 0, big=True) == 13
    assert prev_word_start(text, 13) == 11
    assert prev_word_start(text, 13, big=True) == 0
    assert word_end(text, 0) == 2
    assert word_end(text, 0, big=True) == 11


def test_word_motion_counts_and_ends() -> None:
    text = "one two three four five"

    assert MOTIONS["w"].apply(text, 0, 3) == 14
    assert MOTIONS["e"].apply("hello world test", 0) == 4
    assert MOTIONS["e"].apply("hello world test", 4) == 10
    assert MOTIONS["$"].apply(text, 0, 5) == len(text)
    assert MOTIONS["^"].apply("   indented", 8) == 3


def test_word_motions_at_edges() -> None:
    assert next_word_start("abc", 3) == 3
    assert prev_word_start("abc", 0) == 0
    assert word_end("", 0) == 0
    assert word_end("abc", 2) == 2


def test_word_object_inner_and_around() -> None:
    text = "hello world test"

    assert find_word_object(text, 7, inner=True) == Span(6, 11)
    assert find_word_object(text, 7, inner=False) == Span(6, 12)


def test_word_object_around_takes_leading_space_at_end() -> None:
    text = "hello world"

    assert find_word_object(text, 8, inner=False) == Span(5, 11)


def test_word_object_on_whitespace() -> None:
    text = "one   two"

    assert find_word_object(text, 4, inner=True) == Span(3, 6)
    assert find_word_object(text, 4, inner=False) == Span(3, 9)
    assert find_word_object("one   ", 4, inner=False) == Span(0, 6)


def test_big_word_object_spans_punctuation() -> None:
    text = "call foo.bar() now"

    assert find_word_object(text, 6, inner=True) == Span(5, 8)
    assert find_word_object(text, 6, inner=True, big=True) == Span(5, 14)


def test_quote_object_inside_pair() -> None:
    text = 'say "hello world" please'

    assert find_quote_object(text, 8, '"', inner=True) == Span(5, 16)
    assert find_quote_object(text, 8, '"', inner=False) == Span(4, 17)


def test_quote_object_on_delimiters() -> None:
    text = "it 'is' here"

    assert find_quote_object(text, 3, "'", inner=True) == Span(4, 6)
    assert find_quote_object(text, 6, "'", inner=True) == Span(4, 6)


def test_quote_object_prefers_next_pair_then_last_pair() -> None:
    text = 'a "b" c "d" e'

    assert find_quote_object(text, 6, '"', inner=True) == Span(9, 10)
    assert find_quote_object(text, 12, '"', inner=True) == Span(9, 10)


def test_quote_object_ignores_unpaired_trailing_quote() -> None:
    text = 'a "b" c "d'

    assert find_quote_object(text, 9, '"', inner=True) == Span(3, 4)
    assert find_quote_object(text, 9, '"', inner=False) == Span(2, 5)


def test_quote_object_requires_two_quotes() -> None:
    assert find_quote_object('only "one', 2, '"', inner=True).found is False


def test_any_quote_prefers_tightest_containing_pair() -> None:
    text = "outer \"inner 'nested' here\" end"

    span = find_any_quote_object(text, 15, inner=True)

    assert span == Span(14, 20)
    assert text[span.start : span.end] == "nested"


def test_any_quote_uses_containing_pair() -> None:
    text = "'a' then \"quoted text\""

    assert find_any_quote_object(text, 12, inner=True) == Span(10, 21)


def test_any_quote_falls_back_to_nearest_start() -> None:
    text = "x  'single'   \"double\""

    assert find_any_quote_object(text, 0, inner=False) == Span(3, 11)


def test_sentence_object() -> None:
    text = "Hello! How are you?"

    assert find_sentence_object(text, 2, inner=True) == Span(0, 6)
    assert find_sentence_object(text, 2, inner=False) == Span(0, 7)

    text = "What is this? I wonder."
    assert find_sentence_object(text, 17, inner=True) == Span(14, 23)
    assert find_sentence_object(text, 17, inner=False) == Span(13, 23)


def test_sentence_terminator_needs_following_space() -> None:
    text = "Version 1.2 is out. Next"

    assert find_sentence_object(text, 3, inner=True) == Span(0, 19)


def test_find_char_counts_occurrences() -> None:
    text = "hello world"

    assert find_char(text, 0, "o", FindType.FORWARD, 2) == 7
    assert find_char(text, 0, "o", FindType.FORWARD, 3) == -1
    assert find_char(text, 10, "l", FindType.BACKWARD, 1) == 9
    assert find_char(text, 2, "l", FindType.FORWARD, 1) == 3


def test_find_landing_positions() -> None:
    assert find_landing(0, 4, FindType.FORWARD) == 4
    assert find_landing(0, 4, FindType.FORWARD_BEFORE) == 3
    assert find_landing(8, 4, FindType.BACKWARD) == 4
    assert find_landing(8, 4, FindType.BACKWARD_AFTER) == 5


def test_find_operator_spans() -> None:
    assert find_operator_span(0, 4, FindType.FORWARD) == Span(0, 5)
    assert find_operator_span(0, 4, FindType.FORWARD_BEFORE) == Span(0, 4)
    assert find_operator_span(8, 4, FindType.BACKWARD) == Span(4, 8)
    assert find_operator_span(8, 4, FindType.BACKWARD_AFTER) == Span(5, 8)
    assert resolve_find("abc", 0, "z", FindType.FORWARD).found is False
