"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from hlslex.lexer import tokenize
from hlslex.lexicon import CompiledLexicon, default_lexicon
from hlslex.tokens import Category, Token


@pytest.fixture
def lexicon() -> CompiledLexicon:
    return default_lexicon()


@pytest.fixture
def lex(lexicon):
    """Return a helper that tokenizes source and returns tokens (excluding whitespace)."""

    def _lex(source: str) -> list[Token]:
        return tokenize(lexicon, source).tokens(include_whitespace=False)

    return _lex


def assert_categories(tokens: list[Token], expected: list[Category]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], category: Category) -> list[Token]:
    """Return all tokens of the given category."""
    return [t for t in tokens if t.category == category]
