"""Parser combinators with replaceable parsers and an environment threaded through every parse."""

from partser.combinators import (
    alternative,
    chain,
    describe,
    exclude,
    mark,
    mark_line_column,
    repetition,
    sequence,
    transform,
)
from partser.debug import debug, make_handler
from partser.environment import deferred_lookup, sub_environment
from partser.errors import (
    FailureRenderer,
    GrammarError,
    ParseError,
    format_error,
    format_expected,
)
from partser.parser import Parser, is_parser
from partser.primitives import (
    any_char,
    custom,
    eof,
    fail,
    index,
    line_column_index,
    regex,
    rest,
    string,
    succeed,
    test_char,
)
from partser.replace import clone, replace
from partser.result import ParseResult, failure, merge_over, success
from partser.source import LineColumn, Mark

__version__ = "0.1.0"

__all__ = [
    "FailureRenderer",
    "GrammarError",
    "LineColumn",
    "Mark",
    "ParseError",
    "ParseResult",
    "Parser",
    "alternative",
    "any_char",
    "chain",
    "clone",
    "custom",
    "debug",
    "deferred_lookup",
    "describe",
    "eof",
    "exclude",
    "fail",
    "failure",
    "format_error",
    "format_expected",
    "index",
    "is_parser",
    "line_column_index",
    "make_handler",
    "mark",
    "mark_line_column",
    "merge_over",
    "regex",
    "repetition",
    "replace",
    "rest",
    "sequence",
    "string",
    "sub_environment",
    "succeed",
    "success",
    "test_char",
    "transform",
]
