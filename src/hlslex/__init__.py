"""HLSL token classifier and lexer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hlslex.lexicon import LexiconOptions
    from hlslex.tokens import Token

__version__ = "0.1.0"


def highlight(source: str, options: LexiconOptions | None = None) -> list[Token]:
    """Tokenize HLSL source with the (optionally extended) lexicon, dropping whitespace."""
    from hlslex.lexer import tokenize
    from hlslex.lexicon import build_lexicon

    return tokenize(build_lexicon(options), source).tokens(include_whitespace=False)
