from dataclasses import dataclass
from operator import itemgetter

import pytest

from combinate.core import (
    END_OF_INPUT,
    ErrorItem,
    ErrorKind,
    ParseError,
    Stream,
    any_token,
    attempt,
    eof,
    optional,
    position,
    satisfy,
    sequence,
    token,
    value,
)


def unexpected(info):
    return ErrorItem(ErrorKind.UNEXPECTED, info)


def expected(info):
    return ErrorItem(ErrorKind.EXPECTED, info)


def message(info):
    return ErrorItem(ErrorKind.MESSAGE, info)


def digit():
    return satisfy(str.isdigit).expected("digit")


def letter():
    return satisfy(str.isalpha).expected("letter")


def fail(parser, text):
    with pytest.raises(ParseError) as info:
        parser.parse(text)
    return info.value


def test_tuple():
    parser = sequence(digit(), token(","), digit(), token(","), letter())
    assert parser.parse("1,2,z") == (("1", ",", "2", ",", "z"), "")


def test_sequence_single_parser():
    assert sequence(any_token()).parse("a") == (("a",), "")


def test_sequence_needs_parsers():
    with pytest.raises(ValueError):
        sequence()


def test_issue_99():
    assert any_token().map(lambda _: None).or_(eof()).parse("") == (None, "")


@dataclass(frozen=True)
class CloneOnly:
    s: str


def test_token_on_list_of_objects():
    items = [CloneOnly("x"), CloneOnly("y")]
    assert token(CloneOnly("x")).parse(items) == (CloneOnly("x"), [CloneOnly("y")])


def test_token_on_bytes():
    assert token(ord("a")).parse(b"ab") == (97, b"b")


def test_value_consumes_nothing():
    assert value(5).parse("x") == (5, "x")


def test_position():
    assert sequence(token("a"), position()).parse("ab") == (("a", 1), "b")


def test_expected_retain_errors():
    parser = digit().message("message").expected("N/A").expected("my expected digit")
    err = fail(parser, "a")
    assert err.position == 0
    assert err.errors == [
        unexpected("a"),
        message("message"),
        expected("my expected digit"),
    ]


def test_tuple_parse_error():
    err = fail(sequence(digit(), digit()), "a")
    assert err.position == 0
    assert err.errors == [unexpected("a"), expected("digit")]


def _with_o():
    return sequence(token("h"), token("o")).map(itemgetter(1))


def test_message_ok():
    assert token("h").message("not expected").parse("hi") == ("h", "i")


@pytest.mark.parametrize(
    "parser",
    [
        token("o").message("expected message"),
        token("o").message("expected message").map(lambda x: x),
        token("o").map(lambda x: x).message("expected message"),
    ],
)
def test_message_on_empty_error(parser):
    err = fail(parser, "hi")
    assert err.position == 0
    assert err.errors == [unexpected("h"), expected("o"), message("expected message")]


@pytest.mark.parametrize(
    "parser",
    [
        _with_o().message("expected message"),
        _with_o().message("expected message").map(lambda x: x),
        _with_o().map(lambda x: x).message("expected message"),
    ],
)
def test_message_on_committed_error(parser):
    err = fail(parser, "hi")
    assert err.position == 1
    assert err.errors == [unexpected("i"), expected("o"), message("expected message")]


def test_expected_ok():
    assert token("h").expected("not expected").parse("hi") == ("h", "i")


@pytest.mark.parametrize(
    "parser",
    [
        token("o").expected("expected message"),
        token("o").expected("expected message").map(lambda x: x),
        token("o").map(lambda x: x).expected("expected message"),
    ],
)
def test_expected_on_empty_error(parser):
    err = fail(parser, "hi")
    assert err.position == 0
    assert err.errors == [unexpected("h"), expected("expected message")]


@pytest.mark.parametrize(
    "parser",
    [
        _with_o().expected("expected message"),
        _with_o().expected("expected message").map(lambda x: x),
        _with_o().map(lambda x: x).expected("expected message"),
    ],
)
def test_expected_leaves_committed_error(parser):
    err = fail(parser, "hi")
    assert err.position == 1
    assert err.errors == [unexpected("i"), expected("o")]


def test_attempt_allows_alternative():
    parser = attempt(sequence(token("h"), token("o"))).or_(token("h"))
    assert parser.parse("hi") == ("h", "i")


def test_committed_failure_blocks_alternative():
    err = fail(sequence(token("h"), token("o")).or_(token("h")), "hi")
    assert err.position == 1
    assert err.errors == [unexpected("i"), expected("o")]


def test_attempt_error_further_ahead_wins():
    err = fail(attempt(sequence(token("h"), token("o"))).or_(token("x")), "hi")
    assert err.position == 1
    assert err.errors == [unexpected("i"), expected("o")]


def test_sequence_error():
    parser = sequence(token("a"), token("b"), token("c"))
    err = fail(parser, "c")
    assert err.position == 0
    assert err.errors == [unexpected("c"), expected("a")]
    err = fail(parser, "ac")
    assert err.position == 1
    assert err.errors == [unexpected("c"), expected("b")]


def test_optional_empty_ok_then_error():
    err = fail(sequence(optional(token("a")), token("b")), "c")
    assert err.position == 0
    assert err.errors == [unexpected("c"), expected("a"), expected("b")]


def test_nested_optional_empty_ok_then_error():
    parser = sequence(sequence(optional(token("a")), token("b")), token("c"))
    err = fail(parser, "c")
    assert err.position == 0
    assert err.errors == [unexpected("c"), expected("a"), expected("b")]


def test_committed_then_optional_empty_ok_then_error():
    parser = sequence(token("b"), optional(token("a")), token("b"))
    err = fail(parser, "bc")
    assert err.position == 1
    assert err.errors == [unexpected("c"), expected("a"), expected("b")]


def test_sequence_in_alternative_empty_err():
    parser = sequence(optional(token("a")), token("1")).or_(
        sequence(optional(token("b")), token("2"))
    )
    err = fail(parser, "c")
    assert err.position == 0
    assert set(err.errors) == {
        expected("a"),
        expected("1"),
        expected("b"),
        expected("2"),
        unexpected("c"),
    }


def test_sequence_in_optional_report_delayed_error():
    parser = sequence(optional(sequence(position(), token("a"))), token("}"))
    err = fail(parser, "b")
    assert err.errors == [unexpected("b"), expected("a"), expected("}")]


def test_sequence_in_optional_nested_report_delayed_error():
    parser = sequence(
        optional(sequence(position(), token("a"))),
        optional(sequence(position(), token("c"))),
        token("}"),
    )
    err = fail(parser, "b")
    assert err.errors == [unexpected("b"), expected("a"), expected("c"), expected("}")]


def test_sequence_in_optional_nested_2_report_delayed_error():
    parser = sequence(
        token("{"),
        sequence(
            optional(sequence(position(), token("a"))),
            optional(sequence(position(), token("c"))),
            token("}"),
        ),
    )
    err = fail(parser, "{b")
    assert err.position == 1
    assert err.errors == [unexpected("b"), expected("a"), expected("c"), expected("}")]


def test_digit_then_letter():
    err = fail(sequence(digit(), letter()), "11")
    assert err.position == 1
    assert err.errors == [unexpected("1"), expected("letter")]


def test_token_at_end_of_input():
    err = fail(token("a"), "")
    assert err.errors == [unexpected(END_OF_INPUT), expected("a")]


def test_eof_with_input_left():
    err = fail(eof(), "a")
    assert err.position == 0
    assert err.errors == [unexpected("a"), expected(END_OF_INPUT)]


def test_stream_checkpoint_and_reset():
    stream = Stream("ab")
    start = stream.checkpoint()
    assert stream.uncons() == "a"
    assert stream.position == 1
    stream.reset(start)
    assert stream.position == 0
    assert [stream.uncons(), stream.uncons()] == ["a", "b"]
    with pytest.raises(ParseError) as info:
        stream.uncons()
    assert info.value.position == 2
    assert info.value.errors == [unexpected(END_OF_INPUT)]


def test_parse_error_text():
    err = fail(token("o").message("m"), "hi")
    assert str(err) == "Parse error at 0\nUnexpected `h`\nExpected `o`\nm"


def test_map_transforms_value():
    assert digit().map(int).parse("7x") == (7, "x")