# combinate

A small parser-combinator library. You build parsers from small pieces and
combine them: in sequence, repeated, separated, or scanned up to a terminator.
A failure counts as *committed* when the parser had already consumed input.
Only a failure that consumed nothing can be recovered from by an alternative.
Errors list what was expected and what was found at that spot.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Basics

Parsers live in `combinate.core`. `Parser.parse(text)` takes a `str`, `bytes`,
list or tuple, or a `Stream` over one. It returns a pair: the value that was
parsed and the input that is left over. If the parse fails it raises
`ParseError`. That error has a `position`, an integer offset into the input,
and `errors`, a list of `ErrorItem(kind, info)` entries. The `kind` is one of
`ErrorKind.UNEXPECTED`, `ErrorKind.EXPECTED` and `ErrorKind.MESSAGE`.

```python
from combinate.core import token, satisfy, sequence, ParseError

digit = satisfy(str.isdigit).expected("digit")
letter = satisfy(str.isalpha).expected("letter")

parser = sequence(digit, token(","), digit, token(","), letter)
assert parser.parse("1,2,z") == (("1", ",", "2", ",", "z"), "")

try:
    sequence(digit, letter).parse("11")
except ParseError as err:
    print(err)   # the position, the unexpected token and what was expected
```

`combinate.core` has these other building blocks:

- `any_token` reads any one token.
- `value` produces a value without reading any input.
- `eof` succeeds only at the end of the input.
- `attempt` rewinds after a failure, so that the failure counts as not committed.
- `optional` produces `None` when its parser fails without consuming input.
- `position` produces the current offset.

Every parser also has these methods:

- `map` transforms the value that was parsed.
- `or_` tries a second parser when the first failed without consuming input.
- `expected` replaces the "expected" entries of an error that consumed no input.
- `message` adds a message entry to an error.

When an alternative fails without consuming input, its error is kept. It is
added to the next error raised at the same spot. For example,
`sequence(optional(token("a")), token("b"))` on `"c"` reports that both `a`
and `b` were expected.

## Sequencing

`combinate.sequence` has these combinators:

- `with_(p1, p2)` produces only the value of `p2`.
- `skip(p1, p2)` produces only the value of `p1`.
- `between(open, close, parser)` produces only the value of `parser`.
- `then(p, f)` runs `p`, then runs the parser that `f` builds from the value of `p`.
- `then_partial(p, f)` works the same way as `then`.
- `then_ref(p, f)` works like `then`, but produces the pair of both values.
- `struct_parser(build, *fields)` builds a value from the parsed fields.

Each field of `struct_parser` is one of these:

- A parser, whose value is passed to `build` as a positional argument.
- A `(name, parser)` pair, whose value is passed as a keyword argument.
- A pair named `"_"` or `None`, which is parsed and its value dropped.

```python
from combinate.core import satisfy, token
from combinate.sequence import between, struct_parser

assert between(token("["), token("]"), token("x")).parse("[x]") == ("x", "")

digit = satisfy(str.isdigit).map(int)
point = struct_parser(lambda x, y: (x, y), digit, ("_", token(",")), digit)
assert point.parse("3,4") == ((3, 4), "")
```

## Repetition

`combinate.repeat` holds `count`, `skip_count`, `count_min_max`,
`skip_count_min_max`, `many`, `many1`, `skip_many` and `skip_many1`. The
collecting forms produce lists. The `skip_` forms produce `None`.
`count_min_max` raises `ValueError` if the minimum is greater than the maximum
or if either is negative.

```python
from combinate.core import satisfy, token
from combinate.repeat import many, count_min_max

digit = satisfy(str.isdigit)
assert many(digit).parse("123A") == (["1", "2", "3"], "A")
assert count_min_max(2, 2, token("a")).parse("aaab") == (["a", "a"], "ab")
```

A parser that can succeed without consuming input never stops when you give it
to `many`, `many1`, `skip_many` or `skip_many1`, because it matches the same
spot again and again. Give those combinators parsers that consume input.

## Separated lists and operator chains

`combinate.separated` holds `sep_by`, `sep_by1`, `sep_end_by`, `sep_end_by1`,
`chainl1` and `chainr1`. The operator parser given to a chain produces a
function of two arguments. `chainl1` folds the values to the left and
`chainr1` folds them to the right.

```python
from combinate.core import satisfy, token
from combinate.separated import sep_by, sep_end_by1, chainl1, chainr1

digit = satisfy(str.isdigit)
assert sep_by(digit, token(",")).parse("1,2,3") == (["1", "2", "3"], "")
assert sep_end_by1(digit, token(";")).parse("1;;") == (["1"], ";")

number = digit.map(int)
sub = token("-").map(lambda _: lambda l, r: l - r)
assert chainl1(number, sub).parse("9-3-5") == (1, "")
power = token("^").map(lambda _: lambda l, r: l ** r)
assert chainr1(number, power).parse("2^3^2") == (512, "")
```

## Scanning up to a terminator

`combinate.until` has these combinators:

- `take_until(end)` takes tokens until `end` would match. It produces them as
  the same type as the input: a `str` for a `str`, `bytes` for `bytes`, or a
  slice of a list or tuple.
- `skip_until(end)` does the same, but produces `None`.
- `repeat_until(parser, end)` and `repeat_skip_until(parser, end)` run
  `parser` until `end` would match.
- `escaped(parser, escape, escape_parser)` reads text in which tokens after
  `escape` are handled by `escape_parser`.
- `iterate(iterable, f)` parses once with `f(item)` for each item.

The end parser is never consumed. If it fails after consuming input, that
failure is raised. Wrap the end parser in `attempt` to keep scanning instead.

```python
from combinate.core import attempt, sequence, token
from combinate.until import take_until

end = attempt(sequence(token("a"), token("b")))
assert take_until(end).parse("aaab") == ("aa", "ab")
```

## What it does not do

Parsing works over one complete input held in memory. There is no support for
input that arrives in pieces, and no resuming of a parse that ran out of data.
Positions are plain offsets, not lines and columns. The package has no command
line tool.