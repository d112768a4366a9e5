"""Combinators that apply a parser repeatedly.

A repetition stops at the first failure that did not consume input; that
failure is kept as a hint so that the next error at the same position
also reports what the repeated parser expected. A failure that consumed
input is raised as it is.

A parser that succeeds without consuming input makes :func:`many` and
:func:`many1` repeat forever, since each attempt starts at the same place.
"""

from __future__ import annotations

from typing import Any

from combinate.core import ErrorItem, ErrorKind, ParseError, Parser, Stream, _FnParser


def _collect(stream: Stream, parser: Parser, limit: int | None = None) -> list[Any]:
    """Run ``parser`` until it fails without consuming or ``limit`` is reached."""
    items: list[Any] = []
    while limit is None or len(items) < limit:
        before = stream.checkpoint()
        try:
            item = parser._parse(stream)
        except ParseError as err:
            if stream.position != before.position:
                raise
            stream.reset(before)
            stream._record(err)
            break
        items.append(item)
    return items


def count_min_max(min_count: int, max_count: int, parser: Parser) -> Parser:
    """Parse ``parser`` from ``min_count`` to ``max_count`` times, both included.

    Produces a list of the values. Raises ValueError if ``min_count`` is
    greater than ``max_count`` or either is negative.
    """
    if min_count < 0 or max_count < 0:
        raise ValueError("counts must not be negative")
    if min_count > max_count:
        raise ValueError(
            f"min_count ({min_count}) must not exceed max_count ({max_count})"
        )

    def parse_count(stream: Stream) -> list[Any]:
        items = _collect(stream, parser, max_count)
        if len(items) < min_count:
            missing = min_count - len(items)
            raise stream._error(
                ErrorItem(ErrorKind.MESSAGE, f"expected {missing} more elements")
            )
        return items

    return _FnParser(parse_count)


def count(n: int, parser: Parser) -> Parser:
    """Parse ``parser`` from zero up to ``n`` times, producing a list."""
    return count_min_max(0, n, parser)


def skip_count(n: int, parser: Parser) -> Parser:
    """Parse ``parser`` from zero up to ``n`` times, producing None."""
    return count(n, parser).map(lambda _: None)


def skip_count_min_max(min_count: int, max_count: int, parser: Parser) -> Parser:
    """Like :func:`count_min_max`, but produce None."""
    return count_min_max(min_count, max_count, parser).map(lambda _: None)


def many(parser: Parser) -> Parser:
    """Parse ``parser`` zero or more times, producing a list of the values."""
    return _FnParser(lambda stream: _collect(stream, parser))


def many1(parser: Parser) -> Parser:
    """Parse ``parser`` one or more times, producing a list of the values."""

    def parse_many1(stream: Stream) -> list[Any]:
        first = parser._parse(stream)
        return [first, *_collect(stream, parser)]

    return _FnParser(parse_many1)


def skip_many(parser: Parser) -> Parser:
    """Parse ``parser`` zero or more times, producing None."""
    return many(parser).map(lambda _: None)


def skip_many1(parser: Parser) -> Parser:
    """Parse ``parser`` one or more times, producing None."""
    return many1(parser).map(lambda _: None)