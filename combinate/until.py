"""Combinators that repeat until an end parser matches, and related forms.

The end parser is only looked at: when it succeeds, the input it read is
given back, so the remaining input starts at the match. When it fails after
consuming input, that failure is raised. Wrap it in
:func:`combinate.core.attempt` to keep scanning instead.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from combinate.core import ErrorItem, ErrorKind, ParseError, Parser, Stream, _FnParser


def _end_matches(stream: Stream, end: Parser) -> bool:
    """Try ``end`` and give back its input.

    Returns whether ``end`` matched. Raises if ``end`` failed after
    consuming input.
    """
    before = stream.checkpoint()
    try:
        end._parse(stream)
    except ParseError:
        if stream.position != before.position:
            raise
        stream.reset(before)
        return False
    stream.reset(before)
    return True


def take_until(end: Parser) -> Parser:
    """Take tokens until ``end`` would match.

    Produces the tokens taken, of the same type as the input: a str for
    str input, bytes for bytes, a slice of the list or tuple otherwise.
    Reaching the end of input before ``end`` matches is an error.
    """

    def parse_take_until(stream: Stream) -> Any:
        start = stream.position
        source = stream.remaining
        while not _end_matches(stream, end):
            stream.uncons()
        return source[: stream.position - start]

    return _FnParser(parse_take_until)


def skip_until(end: Parser) -> Parser:
    """Skip tokens until ``end`` would match, producing None."""
    return take_until(end).map(lambda _: None)


def repeat_until(parser: Parser, end: Parser) -> Parser:
    """Parse ``parser`` repeatedly until ``end`` would match.

    ``end`` is tried before each use of ``parser``. Produces a list of the
    values of ``parser``; any failure of ``parser`` is raised.
    """

    def parse_repeat_until(stream: Stream) -> list[Any]:
        items: list[Any] = []
        while not _end_matches(stream, end):
            items.append(parser._parse(stream))
        return items

    return _FnParser(parse_repeat_until)


def repeat_skip_until(parser: Parser, end: Parser) -> Parser:
    """Like :func:`repeat_until`, but produce None."""
    return repeat_until(parser, end).map(lambda _: None)


def escaped(parser: Parser, escape: Any, escape_parser: Parser) -> Parser:
    """Parse text in which some tokens are escaped.

    ``parser`` reads the ordinary text. When it cannot go on, the next
    token is checked: if it is ``escape``, ``escape_parser`` reads the
    escaped part and ordinary parsing resumes; otherwise parsing stops
    successfully before that token. Produces None.

    ``parser`` must consume input whenever it succeeds, or this never ends.
    """

    def parse_escaped(stream: Stream) -> None:
        while True:
            start = stream.position
            try:
                parser._parse(stream)
                continue
            except ParseError as err:
                if stream.position != start:
                    raise
                failure = err
            checkpoint = stream.checkpoint()
            if not stream.at_end and stream.uncons() == escape:
                escape_parser._parse(stream)
                continue
            stream.reset(checkpoint)
            stream._record(failure._adding(ErrorItem(ErrorKind.EXPECTED, escape)))
            return None

    return _FnParser(parse_escaped)


def iterate(iterable: Iterable[Any], parser: Callable[[Any], Parser]) -> Parser:
    """For each item of ``iterable``, parse with the parser ``parser(item)`` builds.

    Produces a list of the values, one per item. The iterable is walked
    afresh on every parse, so a one-shot iterator yields nothing the
    second time.
    """

    def parse_iterate(stream: Stream) -> list[Any]:
        results: list[Any] = []
        for item in iter(iterable):
            step = parser(item)
            before = stream.checkpoint()
            try:
                results.append(step._parse(stream))
            except ParseError:
                if stream.position == before.position:
                    stream.reset(before)
                raise
        return results

    return _FnParser(parse_iterate)