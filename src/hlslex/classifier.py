"""Lexeme classification against a compiled lexicon."""

from __future__ import annotations

from hlslex.lexicon import CompiledLexicon
from hlslex.tokens import Category

# Only consulted for lexemes on a preprocessor line
PREPROCESSOR_PRECEDENCE: tuple[Category, ...] = (
    Category.PREPROCESSOR_DIRECTIVE,
    Category.PREPROCESSOR_OPERATOR,
)

# First match wins
PRECEDENCE: tuple[Category, ...] = (
    Category.TYPE,
    Category.DEPRECATED_QUALIFIER,
    Category.RESERVED_KEYWORD,
    Category.QUALIFIER,
    Category.DEPRECATED_KEYWORD,
    Category.KEYWORD,
    Category.PREPROCESSOR_BUILTIN,
    Category.DEPRECATED_BUILTIN,
    Category.BUILTIN,
    Category.DEPRECATED_VARIABLE,
)


def classify(lexicon: CompiledLexicon, lexeme: str, *, preprocessor: bool = False) -> Category:
    """Return the category of an isolated identifier-like lexeme.

    Never fails: anything the lexicon does not recognize is an IDENTIFIER.
    Directive words (``define``, ``if``) only win when *preprocessor* is set.
    """
    if preprocessor:
        for category in PREPROCESSOR_PRECEDENCE:
            if lexicon.matches(category, lexeme):
                return category
    for category in PRECEDENCE:
        if lexicon.matches(category, lexeme):
            return category
    return Category.IDENTIFIER
