"""Streams, parse errors, the parser base class and the primitive parsers.

Parsers consume tokens from a :class:`Stream`. A parser that fails raises
:class:`ParseError`; whether the failure *committed* is decided by whether
the stream position moved. A combinator may only recover from a failure
that left the position unchanged.

Errors from alternatives that failed without consuming input are kept on
the stream as a *hint*. They are merged into the next error raised at the
same position, so ``sequence(optional(a), b)`` on ``"c"`` reports that
both ``a`` and ``b`` were expected.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, NamedTuple, Sequence

END_OF_INPUT = "end of input"


class ErrorKind(enum.Enum):
    """The kind of a single entry in a parse error."""

    UNEXPECTED = "unexpected"
    EXPECTED = "expected"
    MESSAGE = "message"


@dataclass(frozen=True)
class ErrorItem:
    """One entry of a parse error: what was found, wanted or said."""

    kind: ErrorKind
    info: Any

    def __str__(self) -> str:
        if self.kind is ErrorKind.MESSAGE:
            return str(self.info)
        return f"{self.kind.value.capitalize()} `{self.info}`"


class ParseError(Exception):
    """Raised when a parser fails; holds the position and what went wrong."""

    def __init__(self, position: int, errors: Iterable[ErrorItem] = ()):
        self.position = position
        self.errors: list[ErrorItem] = []
        for item in errors:
            if item not in self.errors:
                self.errors.append(item)
        super().__init__(position, list(self.errors))

    def __repr__(self) -> str:
        return f"ParseError(position={self.position!r}, errors={self.errors!r})"

    def __str__(self) -> str:
        lines = [f"Parse error at {self.position}"]
        lines.extend(
            str(item) for item in self.errors if item.kind is ErrorKind.UNEXPECTED
        )
        expected = [
            f"`{item.info}`" for item in self.errors if item.kind is ErrorKind.EXPECTED
        ]
        if expected:
            listed = expected[0] if len(expected) == 1 else (
                ", ".join(expected[:-1]) + " or " + expected[-1]
            )
            lines.append(f"Expected {listed}")
        lines.extend(str(item) for item in self.errors if item.kind is ErrorKind.MESSAGE)
        return "\n".join(lines)

    def _merge(self, other: ParseError) -> ParseError:
        """Combine two errors: the one further ahead wins, equal ones join."""
        if other.position > self.position:
            return other
        if other.position < self.position:
            return self
        return ParseError(self.position, [*self.errors, *other.errors])

    def _absorbing(self, hint: ParseError | None) -> ParseError:
        """Put the items of a hint at the same position in front of this error."""
        if hint is None or hint is self or hint.position != self.position:
            return self
        return hint._merge(self)

    def _adding(self, *items: ErrorItem) -> ParseError:
        return ParseError(self.position, [*self.errors, *items])

    def _expecting(self, label: Any) -> ParseError:
        kept = [item for item in self.errors if item.kind is not ErrorKind.EXPECTED]
        return ParseError(self.position, [*kept, ErrorItem(ErrorKind.EXPECTED, label)])


class _Checkpoint(NamedTuple):
    position: int
    hint: ParseError | None


class Stream:
    """A read position over a str, bytes, list or tuple of tokens."""

    def __init__(self, data: Sequence[Any]):
        self._data = data
        self._position = 0
        self._hint: ParseError | None = None

    @property
    def position(self) -> int:
        return self._position

    @property
    def remaining(self) -> Sequence[Any]:
        return self._data[self._position:]

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def uncons(self) -> Any:
        """Take the next token, raising ParseError at the end of input."""
        if self.at_end:
            raise self._error(ErrorItem(ErrorKind.UNEXPECTED, END_OF_INPUT))
        token_ = self._data[self._position]
        self._position += 1
        self._hint = None
        return token_

    def checkpoint(self) -> _Checkpoint:
        """Capture the current state so that it can be restored with reset()."""
        return _Checkpoint(self._position, self._hint)

    def reset(self, checkpoint: _Checkpoint) -> None:
        position, hint = checkpoint
        if not 0 <= position <= len(self._data):
            raise ValueError(f"checkpoint position {position} is outside the input")
        self._position = position
        self._hint = hint

    def _error(self, *items: ErrorItem) -> ParseError:
        """An error at the current position, merged with any pending hint."""
        return ParseError(self._position, items)._absorbing(self._hint)

    def _record(self, error: ParseError) -> None:
        """Keep an error that was recovered from without consuming input."""
        if error.position == self._position:
            self._hint = error._absorbing(self._hint)


class Parser(ABC):
    """Base class of all parsers. Subclasses implement ``_parse(stream)``."""

    @abstractmethod
    def _parse(self, stream: Stream) -> Any:
        """Parse from the stream, returning the value or raising ParseError."""

    def parse(self, text: Sequence[Any] | Stream) -> tuple[Any, Sequence[Any]]:
        """Parse the input and return ``(value, remaining_input)``."""
        stream = text if isinstance(text, Stream) else Stream(text)
        result = self._parse(stream)
        return result, stream.remaining

    def map(self, fn: Callable[[Any], Any]) -> Parser:
        """Apply ``fn`` to the value this parser produces."""
        inner = self
        return _FnParser(lambda stream: fn(inner._parse(stream)))

    def or_(self, other: Parser) -> Parser:
        """Try this parser, then ``other`` if this one failed without consuming."""
        return _Or(self, other)

    def expected(self, label: Any) -> Parser:
        """Replace the expected items of an error raised without consuming input."""
        return _Expected(self, label)

    def message(self, text: Any) -> Parser:
        """Add a message to any error this parser raises."""
        return _Message(self, text)


class _FnParser(Parser):
    def __init__(self, fn: Callable[[Stream], Any]):
        self._fn = fn

    def _parse(self, stream: Stream) -> Any:
        return self._fn(stream)


class _Or(Parser):
    def __init__(self, first: Parser, second: Parser):
        self._first = first
        self._second = second

    def _parse(self, stream: Stream) -> Any:
        start = stream.position
        try:
            return self._first._parse(stream)
        except ParseError as err:
            if stream.position != start:
                raise
            first_error = err
        stream._record(first_error)
        try:
            return self._second._parse(stream)
        except ParseError as err:
            if stream.position != start:
                raise
            raise first_error._merge(err) from None


class _Expected(Parser):
    def __init__(self, inner: Parser, label: Any):
        self._inner = inner
        self._label = label

    def _parse(self, stream: Stream) -> Any:
        start = stream.position
        saved = stream._hint
        stream._hint = None
        try:
            result = self._inner._parse(stream)
        except ParseError as err:
            if stream.position != start:
                raise
            stream._hint = saved
            raise err._expecting(self._label)._absorbing(saved) from None
        if stream.position == start:
            own = stream._hint
            if own is not None and own.position == start:
                stream._hint = own._expecting(self._label)._absorbing(saved)
            else:
                stream._hint = saved
        return result


class _Message(Parser):
    def __init__(self, inner: Parser, text: Any):
        self._inner = inner
        self._text = text

    def _parse(self, stream: Stream) -> Any:
        try:
            return self._inner._parse(stream)
        except ParseError as err:
            raise err._adding(ErrorItem(ErrorKind.MESSAGE, self._text)) from None


def token(expected: Any) -> Parser:
    """Parse one token equal to ``expected``."""

    def parse_token(stream: Stream) -> Any:
        start = stream.checkpoint()
        try:
            found = stream.uncons()
        except ParseError as err:
            raise err._adding(ErrorItem(ErrorKind.EXPECTED, expected)) from None
        if found == expected:
            return found
        stream.reset(start)
        raise stream._error(
            ErrorItem(ErrorKind.UNEXPECTED, found),
            ErrorItem(ErrorKind.EXPECTED, expected),
        )

    return _FnParser(parse_token)


def any_token() -> Parser:
    """Parse any single token."""
    return _FnParser(lambda stream: stream.uncons())


def satisfy(predicate: Callable[[Any], bool]) -> Parser:
    """Parse one token for which ``predicate`` is true."""

    def parse_satisfy(stream: Stream) -> Any:
        start = stream.checkpoint()
        found = stream.uncons()
        if predicate(found):
            return found
        stream.reset(start)
        raise stream._error(ErrorItem(ErrorKind.UNEXPECTED, found))

    return _FnParser(parse_satisfy)


def value(result: Any) -> Parser:
    """Succeed without consuming input, producing ``result``."""
    return _FnParser(lambda stream: result)


def eof() -> Parser:
    """Succeed only at the end of input."""

    def parse_eof(stream: Stream) -> None:
        if stream.at_end:
            return None
        start = stream.checkpoint()
        found = stream.uncons()
        stream.reset(start)
        raise stream._error(
            ErrorItem(ErrorKind.UNEXPECTED, found),
            ErrorItem(ErrorKind.EXPECTED, END_OF_INPUT),
        )

    return _FnParser(parse_eof)


def attempt(parser: Parser) -> Parser:
    """Run ``parser``; on failure rewind so that no input counts as consumed."""

    def parse_attempt(stream: Stream) -> Any:
        start = stream.checkpoint()
        try:
            return parser._parse(stream)
        except ParseError:
            stream.reset(start)
            raise

    return _FnParser(parse_attempt)


def optional(parser: Parser) -> Parser:
    """Run ``parser``, producing None if it fails without consuming input."""

    def parse_optional(stream: Stream) -> Any:
        start = stream.position
        try:
            return parser._parse(stream)
        except ParseError as err:
            if stream.position != start:
                raise
            stream._record(err)
            return None

    return _FnParser(parse_optional)


def position() -> Parser:
    """Produce the current position without consuming input."""
    return _FnParser(lambda stream: stream.position)


def sequence(*args: Parser) -> Parser:
    """Run the parsers one after another and produce a tuple of their values."""
    if not args:
        raise ValueError("sequence() needs at least one parser")
    parsers = tuple(args)
    return _FnParser(lambda stream: tuple(p._parse(stream) for p in parsers))