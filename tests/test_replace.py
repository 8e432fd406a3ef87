"""Tests for replace and clone."""

from __future__ import annotations

import math

import pytest

import partser as p
from partser import GrammarError
from tests.helpers import parse_fail, parse_ok


class TestReplace:
    def test_changes_behaviour(self):
        a = p.string("a")
        p.replace(a, p.string("b"))
        parse_ok(a, "b", "b")
        parse_fail(a, "a", 0, ["'b'"])

    def test_keeps_identity(self):
        a = p.string("a")
        many = p.repetition(a, 1, math.inf)
        p.replace(a, p.string("b"))
        parse_ok(many, "bb", ["b", "b"])

    def test_is_by_value(self):
        a = p.string("a")
        b = p.string("b")
        p.replace(a, b)
        p.replace(b, p.string("c"))
        parse_ok(a, "b", "b")
        parse_ok(b, "c", "c")

    def test_with_chain(self):
        a = p.string("a")
        b = p.string("b")
        acbd = p.chain(p.alternative(a, b),
                       lambda result, env: p.string("c") if result.startswith("a") else p.string("d"))
        parse_ok(acbd, "ac", "c")
        parse_ok(acbd, "bd", "d")
        p.replace(a, p.regex(r"a+"))
        parse_ok(acbd, "aaac", "c")
        parse_fail(acbd, "aaad", 3, ["'c'"])

    def test_with_exclude(self):
        a = p.string("a")
        any_but_a = p.exclude(p.any_char, a)
        p.replace(a, p.string("b"))
        parse_ok(any_but_a, "a", "a")
        parse_fail(any_but_a, "b", 0, ["something that is not 'b'"])

    def test_forward_declaration_in_alternative(self):
        later = p.fail("defined later")
        later_or_b = p.alternative(later, p.string("b"))
        p.replace(later, p.transform(p.string("c"), lambda value, env: "hi"))
        parse_ok(later_or_b, "b", "b")
        parse_ok(later_or_b, "c", "hi")
        parse_fail(later_or_b, "a", 0, ["'b'", "'c'"])

    def test_recursive_list(self):
        list_later = p.fail("implemented later")
        expression = p.alternative(list_later, p.string("a"))
        content = p.describe(p.repetition(expression, 0, math.inf), "list content")
        nested = p.transform(p.sequence(p.string("("), content, p.string(")")),
                             lambda parts, env: parts[1])
        p.replace(list_later, nested)
        parse_ok(expression, "a", "a")
        parse_ok(expression, "()", [])
        parse_ok(expression, "(a(a))", ["a", ["a"]])

    def test_self_reference(self):
        lst = p.fail("defined later")
        p.replace(lst, p.repetition(
            p.transform(p.sequence(p.string("("), lst, p.string(")")),
                        lambda parts, env: {"v": parts[1]}),
            0, math.inf))
        parse_ok(lst, "()", [{"v": []}])
        parse_ok(lst, "()()", [{"v": []}, {"v": []}])
        parse_ok(lst, "(())", [{"v": [{"v": []}]}])

    def test_copies_display_name(self):
        a = p.fail("defined later")
        p.replace(a, p.string("b"))
        assert a.display_name == "string('b')"

    def test_rejects_non_parsers(self):
        with pytest.raises(GrammarError):
            p.replace(p.string("a"), "b")
        with pytest.raises(GrammarError):
            p.replace("a", p.string("b"))


class TestClone:
    def test_new_identity_same_behaviour(self):
        a = p.string("a")
        b = p.clone(a)
        assert a is not b
        assert p.is_parser(b)
        assert a.display_name == b.display_name
        parse_ok(b, "a", "a")

    def test_replacing_clone_leaves_original(self):
        a = p.string("a")
        b = p.clone(a)
        p.replace(b, p.string("b"))
        parse_ok(b, "b", "b")
        parse_ok(a, "a", "a")

    def test_replacing_original_leaves_clone(self):
        a = p.string("a")
        b = p.clone(a)
        p.replace(a, p.string("c"))
        parse_ok(b, "a", "a")

    def test_breaks_self_reference(self):
        a = p.string("a")
        p.replace(a, p.alternative(p.clone(a), p.string("b")))
        parse_ok(a, "a", "a")
        parse_ok(a, "b", "b")
        parse_fail(a, "c", 0, ["'b'", "'a'"])

    def test_rejects_non_parser(self):
        with pytest.raises(GrammarError):
            p.clone("a")
