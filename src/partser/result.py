"""Parse results and the furthest-failure merge rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParseResult:
    """Outcome of running a parser.

    On success, `index` is the offset just past the consumed input and `value`
    is the semantic result. On failure, `index` is the furthest offset reached
    and `value` is the list of descriptions of what was expected there.
    """

    status: bool
    index: int
    value: Any

    @property
    def expected(self) -> list[str]:
        if self.status:
            return []
        return self.value


def success(index: int, value: Any) -> ParseResult:
    return ParseResult(True, index, value)


def failure(index: int, expected: str) -> ParseResult:
    return ParseResult(False, index, [expected])


def _furthest(result: ParseResult) -> int:
    return -1 if result.status else result.index


def merge_over(candidate: ParseResult, previous: ParseResult | None) -> ParseResult:
    """Combine `candidate` with the failure context accumulated before it.

    A success or a failure that got further wins outright. A failure that got
    less far loses to `previous`. Failures at the same offset have their
    expected lists joined, candidate first.
    """
    if previous is None or candidate.status:
        return candidate
    if candidate.index > _furthest(previous):
        return candidate
    if candidate.index < previous.index:
        return previous
    return ParseResult(False, candidate.index, candidate.value + previous.value)
