"""Grammar errors, parse errors and Rust-style failure rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from partser.source import SourceText

if TYPE_CHECKING:
    from partser.result import ParseResult


# ANSI color codes
_RED = "\033[1;31m"
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"

DEFAULT_CONTEXT = 10


class GrammarError(TypeError):
    """A malformed grammar: bad combinator arguments or a lookup that produced no parser."""


def check_type(function: str, kind: str, value: Any, ok: bool) -> None:
    """Raise a GrammarError naming `function` unless `ok`."""
    if not ok:
        raise GrammarError(f"partser.{function}: not a {kind}: {value!r}")


def format_expected(expected: list[str]) -> str:
    if len(expected) == 1:
        return expected[0]
    return f"one of {', '.join(expected)}"


def format_got(text: str, index: int, context: int = DEFAULT_CONTEXT) -> str:
    """Describe what the input holds at `index`."""
    if index >= len(text):
        return "end of input"
    snippet = text[index : index + context]
    if len(text) - index > context:
        snippet += "..."
    return f"'{snippet}'"


def format_error(text: str, result: ParseResult, context: int = DEFAULT_CONTEXT) -> str:
    """One-line description of a failed parse of `text`."""
    return (
        f"expected {format_expected(result.value)} at character {result.index}, "
        f"got {format_got(text, result.index, context)}"
    )


class ParseError(Exception):
    """Input did not match a grammar; raised by `Parser.parse`."""

    def __init__(self, text: str, result: ParseResult, name: str = "<input>") -> None:
        self.text = text
        self.result = result
        self.name = name
        super().__init__(format_error(text, result))

    @property
    def index(self) -> int:
        return self.result.index

    @property
    def expected(self) -> list[str]:
        return self.result.value


class FailureRenderer:
    """Renders parse failures in Rust-style format with colors."""

    def __init__(self, *, color: bool = True, context: int = DEFAULT_CONTEXT) -> None:
        self.color = color
        self.context = context

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, text: str, result: ParseResult, name: str = "<input>") -> str:
        source = SourceText(text, name)
        pos = source.position(result.index)
        lines: list[str] = []

        # Header: error: expected ...
        lines.append(
            f"{self._c(_RED)}error{self._c(_RESET)}"
            f"{self._c(_BOLD)}: expected {format_expected(result.value)}{self._c(_RESET)}"
        )
        lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {name}:{pos}")

        gutter = f"{pos.line:>4}"
        lines.append(f"  {self._c(_BLUE)}     |{self._c(_RESET)}")
        lines.append(
            f"  {self._c(_BLUE)}{gutter} |{self._c(_RESET)} {source.line_at(pos.line)}"
        )
        padding = " " * (pos.column - 1)
        lines.append(
            f"  {self._c(_BLUE)}     |{self._c(_RESET)} "
            f"{padding}{self._c(_RED)}^{self._c(_RESET)}"
        )

        got = format_got(text, result.index, self.context)
        lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: got {got}")
        return "\n".join(lines)

    def render_error(self, error: ParseError) -> str:
        return self.render(error.text, error.result, error.name)
