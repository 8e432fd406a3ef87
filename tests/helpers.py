"""Shared test helpers for the partser test suite."""

from __future__ import annotations

from typing import Any

from partser import ParseResult, Parser


def parse_ok(parser: Parser, text: str, value: Any) -> None:
    """Assert a direct call consumes all of `text` and yields `value`."""
    assert parser(text) == ParseResult(True, len(text), value)


def parse_fail(parser: Parser, text: str, index: int, expected: list[str]) -> None:
    """Assert a direct call fails at `index` expecting exactly `expected`."""
    assert parser(text) == ParseResult(False, index, expected)


def upper(value: str, environment: Any) -> str:
    return value.upper()


def apply_env(value: Any, environment: Any) -> Any:
    """Transform function for tests where the environment is itself a function."""
    return environment(value)
