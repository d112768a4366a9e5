"""Combinators for values separated by a separator or joined by an operator.

The separated forms produce a list of the values of ``parser``. The chain
forms fold the values with the function that the operator parser produces.
A failure that consumed input is raised as it is. A failure that did not
consume input ends the repetition and is kept as a hint for the next error.
"""

from __future__ import annotations

from typing import Any, Callable

from combinate.core import ParseError, Parser, Stream, _FnParser, value
from combinate.repeat import _collect
from combinate.sequence import with_


def sep_by1(parser: Parser, separator: Parser) -> Parser:
    """Parse ``parser`` one or more times separated by ``separator``.

    A separator that is not followed by ``parser`` is an error, since the
    separator has consumed input.
    """
    rest = with_(separator, parser)

    def parse_sep_by1(stream: Stream) -> list[Any]:
        first = parser._parse(stream)
        return [first, *_collect(stream, rest)]

    return _FnParser(parse_sep_by1)


def sep_by(parser: Parser, separator: Parser) -> Parser:
    """Parse ``parser`` zero or more times separated by ``separator``."""
    return sep_by1(parser, separator).or_(value([]))


def sep_end_by1(parser: Parser, separator: Parser) -> Parser:
    """Parse ``parser`` one or more times separated and optionally ended by ``separator``."""

    def parse_sep_end_by1(stream: Stream) -> list[Any]:
        items = [parser._parse(stream)]
        while True:
            before = stream.checkpoint()
            try:
                separator._parse(stream)
            except ParseError as err:
                if stream.position != before.position:
                    raise
                stream.reset(before)
                stream._record(err)
                return items
            after_separator = stream.checkpoint()
            try:
                items.append(parser._parse(stream))
            except ParseError as err:
                if stream.position != after_separator.position:
                    raise
                stream.reset(after_separator)
                stream._record(err)
                return items

    return _FnParser(parse_sep_end_by1)


def sep_end_by(parser: Parser, separator: Parser) -> Parser:
    """Parse ``parser`` zero or more times separated and optionally ended by ``separator``."""
    return sep_end_by1(parser, separator).or_(value([]))


def chainl1(parser: Parser, op: Parser) -> Parser:
    """Parse ``parser`` one or more times separated by ``op``, folding to the left.

    ``op`` produces a function of two arguments that combines the value so
    far with the next value.
    """

    def parse_chainl1(stream: Stream) -> Any:
        left = parser._parse(stream)
        while True:
            before = stream.checkpoint()
            try:
                combine: Callable[[Any, Any], Any] = op._parse(stream)
                right = parser._parse(stream)
            except ParseError as err:
                if stream.position != before.position:
                    raise
                stream.reset(before)
                stream._record(err)
                return left
            left = combine(left, right)

    return _FnParser(parse_chainl1)


def chainr1(parser: Parser, op: Parser) -> Parser:
    """Parse ``parser`` one or more times separated by ``op``, folding to the right.

    An operator that is not followed by an operand ends the chain; the
    operator stays consumed.
    """

    def parse_chainr1(stream: Stream) -> Any:
        left = parser._parse(stream)
        while True:
            before = stream.checkpoint()
            try:
                combine: Callable[[Any, Any], Any] = op._parse(stream)
            except ParseError as err:
                if stream.position != before.position:
                    raise
                stream.reset(before)
                stream._record(err)
                return left
            before = stream.checkpoint()
            try:
                right = parse_chainr1(stream)
            except ParseError as err:
                if stream.position != before.position:
                    raise
                stream.reset(before)
                stream._record(err)
                return left
            left = combine(left, right)

    return _FnParser(parse_chainr1)