"""Redefining parsers in place."""

from __future__ import annotations

from partser.parser import Parser, check_parser


def replace(target: Parser, source: Parser) -> None:
    """Give `target` the behaviour `source` has right now.

    `target` keeps its identity, so every parser built from it changes too.
    The copy is by value: replacing `source` later leaves `target` alone.
    """
    check_parser("replace", target)
    check_parser("replace", source)
    target.behaviour = source.behaviour
    target.display_name = source.display_name


def clone(parser: Parser) -> Parser:
    """A new parser with the behaviour `parser` has right now.

    Use it to refer to a parser as it was before replacing it, e.g.
    `replace(a, alternative(clone(a), b))`.
    """
    check_parser("clone", parser)
    return Parser(parser.behaviour, parser.display_name)
