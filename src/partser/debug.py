"""Tracing of parser evaluation.

`debug(parser)` returns a parser with the same results as `parser` that
reports every nested parser evaluation to a handler while it runs. The
default handler, built by `make_handler`, prints one line when a parser is
entered and one when it exits:

    abc · 1,2 alternative(*2) ?
    abc · 1,2 alternative(*2) OKAY "b" (len 1)

Each line starts with a window onto the input near the current offset,
followed by one `·` per nesting level, the line and column, and the parser's
display name.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Protocol

import click

from partser.parser import Parser, _tracers, check_parser
from partser.result import ParseResult
from partser.source import line_column

# ANSI codes
_INVERSE = "\033[7m"
_DIM = "\033[2m"
_BG_GREEN = "\033[42m"
_BG_RED = "\033[41m"
_BLUE = "\033[34m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_VISIBLE = {" ": "␣", "\n": "⏎", "\t": "↹"}

EnterCallback = Callable[[Parser, Any, int, Any], Any]
ExitCallback = Callable[[Parser, Any, int, Any, ParseResult], Any]


class TraceHandler(Protocol):
    def enter(self, parser: Parser, text: Any, offset: int, environment: Any) -> Any:
        ...

    def exit(
        self, parser: Parser, text: Any, offset: int, environment: Any, result: ParseResult
    ) -> Any:
        ...


class _Tracer:
    def __init__(self, handler: TraceHandler) -> None:
        self.handler = handler

    def trace(self, parser: Parser, text: Any, index: int, environment: Any) -> ParseResult:
        self.handler.enter(parser, text, index, environment)
        try:
            result = parser.behaviour(text, index, environment)
        except Exception as e:
            # `abort` is optional for handlers; EchoHandler uses it to unwind its depth.
            abort = getattr(self.handler, "abort", None)
            if abort is not None:
                abort(parser, text, index, environment, e)
            raise
        self.handler.exit(parser, text, index, environment, result)
        return result


def _style(code: str, s: str) -> str:
    return f"{code}{s}{_RESET}" if s else s


def visible(ch: str) -> str:
    """Replace whitespace and control characters with printable symbols."""
    if ch in _VISIBLE:
        return _VISIBLE[ch]
    if ord(ch) < 0x20:
        return chr(0x2400 + ord(ch))  # Unicode control pictures.
    return ch


class EchoHandler:
    """Prints each trace event with `click.echo`."""

    def __init__(
        self,
        *,
        context: int = 10,
        pad_if_short: bool = False,
        enter: EnterCallback | None = None,
        exit: ExitCallback | None = None,
        color: bool | None = None,
    ) -> None:
        self.context = context
        self.pad_if_short = pad_if_short
        self.on_enter = enter
        self.on_exit = exit
        self.color = color
        self.depth = 0

    def enter(self, parser: Parser, text: Any, offset: int, environment: Any) -> None:
        extra = self.on_enter(parser, text, offset, environment) if self.on_enter else True
        if extra:
            prefix = self._prefix(text, offset, "enter")
            self._echo(f"{prefix}{self._where(text, offset)} {_style(_BLUE, parser.display_name)} ?")
            self._echo_extra(prefix, extra)
        self.depth += 1

    def exit(
        self, parser: Parser, text: Any, offset: int, environment: Any, result: ParseResult
    ) -> None:
        self.depth -= 1
        extra = self.on_exit(parser, text, offset, environment, result) if self.on_exit else True
        if not extra:
            return
        name = _style(_BLUE, parser.display_name)
        if result.status:
            prefix = self._prefix(text, offset, "okay", result.index)
            consumed = text[offset : result.index]
            outcome = (
                f"{_style(_GREEN, 'OKAY')} "
                f"{_style(_YELLOW, json.dumps(consumed, ensure_ascii=False))} (len {len(consumed)})"
            )
        else:
            prefix = self._prefix(text, offset, "fail")
            outcome = f"FAIL {json.dumps(result.value, ensure_ascii=False, separators=(',', ':'))}"
        self._echo(f"{prefix}{self._where(text, offset)} {name} {outcome}")
        self._echo_extra(prefix, extra)

    def abort(
        self, parser: Parser, text: Any, offset: int, environment: Any, error: Exception
    ) -> None:
        self.depth -= 1
        prefix = self._prefix(text, offset, "fail")
        self._echo(
            f"{prefix}{self._where(text, offset)} {_style(_BLUE, parser.display_name)} "
            f"RAISE {type(error).__name__}"
        )

    def _where(self, text: str, offset: int) -> str:
        pos = line_column(text, offset)
        return f"{pos.line},{pos.column}"

    def _prefix(self, text: str, offset: int, event: str, end: int | None = None) -> str:
        """The input window, end-of-input marker and indentation."""
        start = max(0, min(offset, len(text) - self.context))
        shown = text[start : start + self.context]
        pieces = []
        for i, ch in enumerate(shown, start):
            if i == offset and event == "enter":
                code = _INVERSE
            elif i == offset and event == "fail":
                code = _BG_RED
            elif event == "okay" and end is not None and offset <= i < end:
                code = _BG_GREEN
            elif i < offset:
                code = _DIM
            else:
                code = ""
            pieces.append(_style(code, visible(ch)) if code else visible(ch))
        if self.pad_if_short:
            pieces.append(" " * (self.context - len(shown)))

        marker = " "
        if offset >= len(text) and event == "enter":
            marker = _style(_INVERSE, " ")
        elif offset >= len(text) and event == "fail":
            marker = _style(_BG_RED, " ")
        indent = _style(_DIM, "· " * self.depth)
        return f"{''.join(pieces)}{marker}{indent}"

    def _echo_extra(self, prefix: str, extra: Any) -> None:
        if isinstance(extra, str):
            for line in extra.split("\n"):
                self._echo(f"{prefix}{line}")

    def _echo(self, line: str) -> None:
        click.echo(line, color=self.color)


def make_handler(
    *,
    context: int = 10,
    pad_if_short: bool = False,
    enter: EnterCallback | None = None,
    exit: ExitCallback | None = None,
    color: bool | None = None,
) -> EchoHandler:
    """Build the default printing handler.

    `enter` and `exit` are called with the same arguments as the handler's own
    methods. A falsy return skips the line for that event; a string return is
    printed as extra lines beneath it.
    """
    return EchoHandler(
        context=context, pad_if_short=pad_if_short, enter=enter, exit=exit, color=color
    )


def debug(parser: Parser, handler: TraceHandler | None = None) -> Parser:
    """Trace every parser evaluated while `parser` runs."""
    check_parser("debug", parser)
    tracer = _Tracer(handler if handler is not None else make_handler())

    def _debug(text: Any, i: int, environment: Any) -> ParseResult:
        _tracers.append(tracer)
        try:
            return parser.run(text, i, environment)
        finally:
            _tracers.pop()

    return Parser(_debug, f"debug({parser.display_name})")
