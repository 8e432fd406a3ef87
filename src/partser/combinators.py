"""Combinators that build new parsers out of existing ones.

Every combinator checks its arguments when it is built and raises
GrammarError for anything that is not a parser or a function. Children are
always invoked through `Parser.run`, so they only have to match a prefix and
any later `replace` of a child is picked up.
"""

from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable

from partser.errors import GrammarError, check_type, format_expected
from partser.parser import Parser, check_callable, check_parser
from partser.primitives import index, line_column_index
from partser.result import ParseResult, failure, merge_over, success
from partser.source import Mark


def sequence(*parsers: Parser) -> Parser:
    """Match each parser in turn; the value is the list of their values."""
    for p in parsers:
        check_parser("sequence", p)

    def _sequence(text: Any, i: int, environment: Any) -> ParseResult:
        result: ParseResult | None = None
        values = []
        for p in parsers:
            result = merge_over(p.run(text, i, environment), result)
            if not result.status:
                return result
            values.append(result.value)
            i = result.index
        return merge_over(success(i, values), result)

    return Parser(_sequence, f"sequence(*{len(parsers)})")


def alternative(*parsers: Parser) -> Parser:
    """Return the first success among `parsers`, all tried at the same offset."""
    if not parsers:
        raise GrammarError("partser.alternative: zero alternatives")
    for p in parsers:
        check_parser("alternative", p)

    def _alternative(text: Any, i: int, environment: Any) -> ParseResult:
        result: ParseResult | None = None
        for p in parsers:
            result = merge_over(p.run(text, i, environment), result)
            if result.status:
                return result
        assert result is not None
        return result

    return Parser(_alternative, f"alternative(*{len(parsers)})")


def repetition(parser: Parser, min_times: float, max_times: float | None = None) -> Parser:
    """Match `parser` at least `min_times` and at most `max_times` times, greedily.

    `max_times` defaults to `min_times` and may be `math.inf`.
    """
    if max_times is None:
        max_times = min_times
    check_parser("repetition", parser)
    check_type("repetition", "number", min_times, _is_count(min_times))
    check_type("repetition", "number", max_times, _is_count(max_times))

    def _repetition(text: Any, i: int, environment: Any) -> ParseResult:
        values = []
        count = 0
        previous: ParseResult | None = None

        # Mismatching before `min_times` is a failure.
        while count < min_times:
            result = parser.run(text, i, environment)
            merged = merge_over(result, previous)
            if not result.status:
                return merged
            previous = merged
            i = result.index
            values.append(result.value)
            count += 1

        # After that, a mismatch just ends the repetition.
        while count < max_times:
            result = parser.run(text, i, environment)
            if not result.status:
                break
            i = result.index
            values.append(result.value)
            count += 1

        return success(i, values)

    return Parser(_repetition, f"repetition({min_times}, {max_times})")


def _is_count(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or value == math.inf


def transform(parser: Parser, fn: Callable[[Any, Any], Any]) -> Parser:
    """On success, replace the value with `fn(value, environment)`."""
    check_parser("transform", parser)
    check_callable("transform", fn)

    def _transform(text: Any, i: int, environment: Any) -> ParseResult:
        result = parser.run(text, i, environment)
        if not result.status:
            return result
        return success(result.index, fn(result.value, environment))

    return Parser(_transform, f"transform({getattr(fn, '__name__', 'fn')})")


def exclude(allowed: Parser, forbidden: Parser) -> Parser:
    """Match `allowed`, but only where `forbidden` does not match."""
    check_parser("exclude", allowed)
    check_parser("exclude", forbidden)

    def _exclude(text: Any, i: int, environment: Any) -> ParseResult:
        forbidden_result = forbidden.run(text, i, environment)
        if forbidden_result.status:
            # Names what was rejected, not what `allowed` wanted.
            return failure(i, f"something that is not '{forbidden_result.value}'")
        allowed_result = allowed.run(text, i, environment)
        if allowed_result.status:
            return allowed_result
        return failure(
            i,
            f"{format_expected(allowed_result.value)} "
            f"(except {format_expected(forbidden_result.value)})",
        )

    return Parser(_exclude, f"exclude({allowed.display_name}, {forbidden.display_name})")


def describe(parser: Parser, description: str) -> Parser:
    """On failure, report `description` as the only expected item."""
    check_parser("describe", parser)
    check_type("describe", "string", description, isinstance(description, str))

    def _describe(text: Any, i: int, environment: Any) -> ParseResult:
        result = parser.run(text, i, environment)
        if result.status:
            return result
        # A copy: custom behaviours may keep hold of the results they return.
        return dataclasses.replace(result, value=[description])

    return Parser(_describe, f"describe({description!r})")


def _to_mark(values: list[Any], environment: Any) -> Mark:
    start, value, end = values
    return Mark(start, value, end)


def mark(parser: Parser) -> Parser:
    """Wrap the value of `parser` in a Mark with its start and end offsets."""
    check_parser("mark", parser)
    marked = transform(sequence(index, parser, index), _to_mark)
    marked.display_name = f"mark({parser.display_name})"
    return marked


def mark_line_column(parser: Parser) -> Parser:
    """Like `mark`, with LineColumn positions instead of offsets."""
    check_parser("mark_line_column", parser)
    marked = transform(sequence(line_column_index, parser, line_column_index), _to_mark)
    marked.display_name = f"mark_line_column({parser.display_name})"
    return marked


def chain(parser: Parser, decide: Callable[[Any, Any], Parser]) -> Parser:
    """Run `parser`, then whichever parser `decide(value, environment)` returns."""
    check_parser("chain", parser)
    check_callable("chain", decide)

    def _chain(text: Any, i: int, environment: Any) -> ParseResult:
        result = parser.run(text, i, environment)
        if not result.status:
            return result
        next_parser = decide(result.value, environment)
        check_parser(f"chain({getattr(decide, '__name__', decide)!s})", next_parser)
        return merge_over(next_parser.run(text, result.index, environment), result)

    return Parser(_chain, f"chain({parser.display_name})")
