"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from rex.scanner import tokenize
from rex.tokens import Token, TokenType


@pytest.fixture
def scan():
    """Return a helper that scans source and returns every token, EOF included."""

    def _scan(source: str, filename: str = "test.rx") -> list[Token]:
        return tokenize(source, filename)

    return _scan


@pytest.fixture
def lex():
    """Return a helper that scans source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source, "test.rx")
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def positions(tokens: list[Token]) -> list[tuple[int, int]]:
    """Return (line, column) pairs for tokens."""
    return [(t.position.line, t.position.column) for t in tokens]
