"""Primitive parsers, built directly on Parser and the result constructors."""

from __future__ import annotations

import re
from typing import Any, Callable

from partser.errors import check_type
from partser.parser import Behaviour, Parser, check_callable
from partser.result import ParseResult, failure, success
from partser.source import line_column

_FLAG_LETTERS = (
    (re.IGNORECASE, "i"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def _any_char(text: str, index: int, environment: Any) -> ParseResult:
    if index >= len(text):
        return failure(index, "any character")
    return success(index + 1, text[index])


def _rest(text: str, index: int, environment: Any) -> ParseResult:
    return success(len(text), text[index:])


def _eof(text: str, index: int, environment: Any) -> ParseResult:
    if index < len(text):
        return failure(index, "EOF")
    return success(index, None)


def _index(text: str, index: int, environment: Any) -> ParseResult:
    return success(index, index)


def _line_column_index(text: str, index: int, environment: Any) -> ParseResult:
    return success(index, line_column(text, index))


any_char = Parser(_any_char, "any_char")
rest = Parser(_rest, "rest")
eof = Parser(_eof, "eof")
index = Parser(_index, "index")
line_column_index = Parser(_line_column_index, "line_column_index")


def succeed(value: Any) -> Parser:
    """Consume nothing and succeed with `value`."""
    return Parser(lambda text, i, env: success(i, value), f"succeed({value!r})")


def fail(description: str) -> Parser:
    """Consume nothing and fail, expecting `description`."""
    check_type("fail", "string", description, isinstance(description, str))
    return Parser(lambda text, i, env: failure(i, description), f"fail({description!r})")


def string(literal: str) -> Parser:
    """Match `literal` exactly."""
    check_type("string", "string", literal, isinstance(literal, str))
    end = len(literal)
    expected = f"'{literal}'"

    def _string(text: str, i: int, environment: Any) -> ParseResult:
        if text.startswith(literal, i):
            return success(i + end, literal)
        return failure(i, expected)

    return Parser(_string, f"string({literal!r})")


def describe_pattern(pattern: re.Pattern) -> str:
    """Show a compiled pattern the way regex literals are written: /source/flags."""
    flags = "".join(letter for flag, letter in _FLAG_LETTERS if pattern.flags & flag)
    return f"/{pattern.pattern}/{flags}"


def regex(pattern: str | re.Pattern, group: int | str = 0) -> Parser:
    """Match `pattern` at the current offset only, returning capture `group`."""
    check_type("regex", "regex", pattern, isinstance(pattern, (str, re.Pattern)))
    check_type("regex", "group", group, isinstance(group, (int, str)))
    compiled = re.compile(pattern)
    if isinstance(group, str):
        check_type("regex", "group", group, group in compiled.groupindex)
    else:
        check_type("regex", "group", group, 0 <= group <= compiled.groups)
    expected = describe_pattern(compiled)

    def _regex(text: str, i: int, environment: Any) -> ParseResult:
        # Matched against the remaining input so that `^` means the current offset.
        match = compiled.match(text[i:])
        if match is None:
            return failure(i, expected)
        return success(i + match.end(), match.group(group))

    return Parser(_regex, f"regex({compiled.pattern!r}, {group!r})")


def test_char(predicate: Callable[[str, Any], bool], description: str | None = None) -> Parser:
    """Match one character for which `predicate(char, environment)` holds."""
    check_callable("test_char", predicate)
    if description is None:
        description = getattr(predicate, "__name__", repr(predicate))
    expected = f"a character matching {description}"

    def _test_char(text: str, i: int, environment: Any) -> ParseResult:
        if i < len(text) and predicate(text[i], environment):
            return success(i + 1, text[i])
        return failure(i, expected)

    return Parser(_test_char, f"test_char({description})")


# Keep pytest from collecting the test_char constructor when it is imported into test modules.
test_char.__test__ = False  # type: ignore[attr-defined]


def custom(behaviour: Behaviour) -> Parser:
    """Wrap a raw `(text, index, environment) -> ParseResult` function as a parser."""
    check_callable("custom", behaviour)
    return Parser(behaviour, f"custom({getattr(behaviour, '__name__', 'behaviour')})")
