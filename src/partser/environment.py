"""Combinators that read or replace the environment threaded through a parse."""

from __future__ import annotations

from typing import Any, Callable

from partser.parser import Parser, check_callable, check_parser
from partser.result import ParseResult


def sub_environment(parser: Parser, derive: Callable[[Any], Any]) -> Parser:
    """Run `parser` with the environment `derive(environment)`.

    The derived environment is only seen by `parser` and what it contains;
    parsers around it keep the original.
    """
    check_parser("sub_environment", parser)
    check_callable("sub_environment", derive)

    def _sub_environment(text: Any, i: int, environment: Any) -> ParseResult:
        return parser.run(text, i, derive(environment))

    return Parser(_sub_environment, f"sub_environment({parser.display_name})")


def deferred_lookup(resolve: Callable[[Any], Parser]) -> Parser:
    """Delegate to the parser `resolve(environment)` returns, chosen at parse time.

    This is the preferred way to write recursive grammars: `resolve` can name
    parsers that are defined later in the module, or pick one out of the
    environment.
    """
    check_callable("deferred_lookup", resolve)
    name = getattr(resolve, "__name__", repr(resolve))

    def _deferred_lookup(text: Any, i: int, environment: Any) -> ParseResult:
        found = resolve(environment)
        check_parser(f"deferred_lookup({name})", found)
        return found.run(text, i, environment)

    return Parser(_deferred_lookup, f"deferred_lookup({name})")
