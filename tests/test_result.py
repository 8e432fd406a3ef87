"""Tests for parse results and the furthest-failure merge rule."""

from __future__ import annotations

from partser.result import ParseResult, failure, merge_over, success


class TestConstructors:
    def test_success(self):
        assert success(3, "abc") == ParseResult(True, 3, "abc")

    def test_failure_wraps_expected(self):
        assert failure(2, "'a'") == ParseResult(False, 2, ["'a'"])

    def test_expected_of_success_is_empty(self):
        assert success(0, None).expected == []
        assert failure(0, "EOF").expected == ["EOF"]


class TestMergeOver:
    def test_no_previous(self):
        candidate = failure(1, "'a'")
        assert merge_over(candidate, None) is candidate

    def test_success_wins(self):
        candidate = success(1, "a")
        assert merge_over(candidate, failure(5, "'b'")) is candidate

    def test_further_failure_wins(self):
        candidate = failure(4, "'a'")
        assert merge_over(candidate, failure(2, "'b'")) is candidate

    def test_closer_failure_loses(self):
        previous = failure(4, "'b'")
        assert merge_over(failure(2, "'a'"), previous) is previous

    def test_equal_failures_join_candidate_first(self):
        merged = merge_over(failure(3, "'a'"), failure(3, "'b'"))
        assert merged == ParseResult(False, 3, ["'a'", "'b'"])

    def test_failure_after_success_wins(self):
        candidate = failure(0, "'a'")
        assert merge_over(candidate, success(0, "x")) is candidate

    def test_merge_does_not_mutate_inputs(self):
        a = failure(0, "'a'")
        b = failure(0, "'b'")
        merge_over(a, b)
        assert a.value == ["'a'"]
        assert b.value == ["'b'"]
