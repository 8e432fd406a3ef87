"""The parser object: a stable identity around a replaceable behaviour.

A parser's behaviour is a function `(text, index, environment) -> ParseResult`
that matches a prefix of `text` starting at `index`. Combinators hold on to
the parser objects they are built from and go through `Parser.run` each time,
so swapping a parser's behaviour with `replace` is seen everywhere the parser
is used.

Calling a parser directly additionally requires the whole input to be
consumed; combinators never do that for their children.
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, Protocol

from partser.errors import ParseError, check_type
from partser.result import ParseResult, failure, merge_over

Behaviour = Callable[[Any, int, Any], ParseResult]


class Tracer(Protocol):
    def trace(self, parser: Parser, text: Any, index: int, environment: Any) -> ParseResult:
        ...


# Every parser ever built, held weakly; backs `is_parser`.
_registry: weakref.WeakSet[Parser] = weakref.WeakSet()

# Active debug tracers, innermost last. See partser.debug.
_tracers: list[Tracer] = []


class Parser:
    """A callable parser with a replaceable behaviour."""

    def __init__(self, behaviour: Behaviour, display_name: str | None = None) -> None:
        self.behaviour = behaviour
        self.display_name = display_name or getattr(behaviour, "__name__", "custom")
        _registry.add(self)

    def __repr__(self) -> str:
        return f"<Parser {self.display_name}>"

    def __call__(self, text: Any, environment: Any = None, index: int = 0) -> ParseResult:
        """Parse `text` from `index`, requiring that all of it is consumed."""
        result = self.run(text, index, environment)
        if not result.status:
            return result
        if result.index < len(text):
            return merge_over(failure(result.index, "EOF"), result)
        return result

    def run(self, text: Any, index: int = 0, environment: Any = None) -> ParseResult:
        """Match a prefix of `text[index:]` with the current behaviour."""
        if _tracers:
            return _tracers[-1].trace(self, text, index, environment)
        return self.behaviour(text, index, environment)

    def parse(self, text: str, environment: Any = None, *, name: str = "<input>") -> Any:
        """Parse all of `text` and return the value, or raise ParseError."""
        result = self(text, environment)
        if not result.status:
            raise ParseError(text, result, name)
        return result.value


def is_parser(value: Any) -> bool:
    """Whether `value` was built as a Parser."""
    try:
        return value in _registry
    except TypeError:  # unhashable
        return False


def check_parser(function: str, value: Any) -> None:
    check_type(function, "parser", value, is_parser(value))


def check_callable(function: str, value: Any) -> None:
    check_type(function, "function", value, callable(value))
