"""--debug lexicon dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from hlslex.classifier import PRECEDENCE, PREPROCESSOR_PRECEDENCE
from hlslex.lexicon import CompiledLexicon
from hlslex.tokens import Category

_PREVIEW = 6


def dump_lexicon(lexicon: CompiledLexicon, *, file: TextIO = sys.stderr) -> None:
    """Print each lexicon category in classification order to *file*."""
    file.write("Lexicon\n")
    for category in PREPROCESSOR_PRECEDENCE + PRECEDENCE:
        if category not in lexicon.categories:
            continue
        _dump_category(lexicon, category, file)


def _dump_category(lexicon: CompiledLexicon, category: Category, f: TextIO) -> None:
    words = lexicon.words(category)
    f.write(f"  {category.value} ({len(words)})\n")
    if not words:
        return
    preview = " ".join(words[:_PREVIEW])
    if len(words) > _PREVIEW:
        preview += " ..."
    f.write(f"    {preview}\n")
