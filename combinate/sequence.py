"""Combinators that run parsers one after another.

Each combinator here builds on :func:`combinate.core.sequence`. A failure
counts as committed when the input position has moved. So once the first
parser has consumed input, a later failure can no longer be recovered
from by an enclosing alternative.
"""

from __future__ import annotations

from typing import Any, Callable

from combinate.core import Parser, Stream, _FnParser, sequence

_IGNORED_NAMES = (None, "_")


def with_(p1: Parser, p2: Parser) -> Parser:
    """Parse ``p1`` then ``p2``, producing only the value of ``p2``."""
    return sequence(p1, p2).map(lambda pair: pair[1])


def skip(p1: Parser, p2: Parser) -> Parser:
    """Parse ``p1`` then ``p2``, producing only the value of ``p1``."""
    return sequence(p1, p2).map(lambda pair: pair[0])


def between(open: Parser, close: Parser, parser: Parser) -> Parser:
    """Parse ``open``, ``parser`` and ``close``, producing the value of ``parser``."""
    return sequence(open, parser, close).map(lambda triple: triple[1])


def then(p: Parser, f: Callable[[Any], Parser]) -> Parser:
    """Parse ``p``, then the parser that ``f`` builds from its value."""

    def parse_then(stream: Stream) -> Any:
        result = p._parse(stream)
        return f(result)._parse(stream)

    return _FnParser(parse_then)


def then_partial(p: Parser, f: Callable[[Any], Parser]) -> Parser:
    """Like :func:`then`; ``f`` may inspect the first value in place.

    The value of the second parser is produced.
    """

    def parse_then_partial(stream: Stream) -> Any:
        first = p._parse(stream)
        follow = f(first)
        return follow._parse(stream)

    return _FnParser(parse_then_partial)


def then_ref(p: Parser, f: Callable[[Any], Parser]) -> Parser:
    """Like :func:`then`, but produce ``(first_value, second_value)``."""

    def parse_then_ref(stream: Stream) -> tuple[Any, Any]:
        first = p._parse(stream)
        second = f(first)._parse(stream)
        return first, second

    return _FnParser(parse_then_ref)


def struct_parser(build: Callable[..., Any], *args: Any) -> Parser:
    """Run parsers in order and build a value from their results.

    Each argument is either a parser, whose value is passed to ``build``
    positionally, or a ``(name, parser)`` pair, whose value is passed as
    the keyword ``name``. A pair named ``"_"`` or ``None`` is parsed but
    its value is dropped.
    """
    if not args:
        raise ValueError("struct_parser() needs at least one parser")

    # Each field is (kind, name): kind is "pos", "kw" or "skip".
    fields: list[tuple[str, str | None]] = []
    parsers: list[Parser] = []
    for arg in args:
        if isinstance(arg, Parser):
            fields.append(("pos", None))
            parsers.append(arg)
            continue
        if (
            isinstance(arg, tuple)
            and len(arg) == 2
            and isinstance(arg[1], Parser)
            and (arg[0] is None or isinstance(arg[0], str))
        ):
            name, parser = arg
            fields.append(("skip", None) if name in _IGNORED_NAMES else ("kw", name))
            parsers.append(parser)
            continue
        raise TypeError(f"struct_parser() got an invalid field: {arg!r}")

    def assemble(values: tuple[Any, ...]) -> Any:
        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        for (kind, name), result in zip(fields, values):
            if kind == "pos":
                positional.append(result)
            elif kind == "kw":
                keywords[name] = result  # type: ignore[index]
        return build(*positional, **keywords)

    return sequence(*parsers).map(assemble)