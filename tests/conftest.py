"""Shared pytest fixtures for the partser test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

_GRAMMAR_SOURCE = '''\
import partser as p

number = p.transform(p.regex(r"\\d+"), lambda s, env: int(s))
numbers = p.repetition(
    p.transform(p.sequence(number, p.regex(r"\\s*")), lambda v, env: v[0]), 0, float("inf")
)
marked = p.mark(p.regex(r"[a-z]+"))
scaled = p.transform(number, lambda n, env: n * env["scale"])
not_a_parser = 42
'''


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def grammar_file(tmp_path):
    """A grammar module on disk, for the CLI to load by path."""
    path = tmp_path / "grammar.py"
    path.write_text(_GRAMMAR_SOURCE)
    return path
