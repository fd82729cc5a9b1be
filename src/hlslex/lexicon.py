"""Lexicon compilation: word tables to boundary-anchored matchers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cache
from types import MappingProxyType

from hlslex.errors import EmptyCategoryError, InvalidPatternError
from hlslex.tables import BASE_WORDS
from hlslex.tokens import Category

logger = logging.getLogger(__name__)

# Matches nothing; stands in for empty tables
_NEVER = re.compile(r"(?!)")


@dataclass(frozen=True, slots=True)
class LexemeEntry:
    """A literal word or regex fragment and the category it selects."""

    pattern: str
    category: Category


@dataclass(frozen=True, slots=True)
class LexiconOptions:
    """User extension lists appended to the base tables."""

    additional_types: tuple[str, ...] = ()
    additional_qualifiers: tuple[str, ...] = ()
    additional_keywords: tuple[str, ...] = ()
    additional_builtins: tuple[str, ...] = ()

    def extensions(self) -> dict[Category, tuple[str, ...]]:
        return {
            Category.TYPE: self.additional_types,
            Category.QUALIFIER: self.additional_qualifiers,
            Category.KEYWORD: self.additional_keywords,
            Category.BUILTIN: self.additional_builtins,
        }


@dataclass(frozen=True, slots=True)
class CompiledLexicon:
    """Immutable result of build_tables, ready for repeated classification."""

    entries: tuple[LexemeEntry, ...]
    _matchers: Mapping[Category, re.Pattern[str]] = field(repr=False, compare=False)

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._matchers)

    def words(self, category: Category) -> tuple[str, ...]:
        """Return the patterns of one category, in table order."""
        return tuple(e.pattern for e in self.entries if e.category is category)

    def matcher(self, category: Category) -> re.Pattern[str]:
        try:
            return self._matchers[category]
        except KeyError:
            raise EmptyCategoryError(category) from None

    def matches(self, category: Category, lexeme: str) -> bool:
        """Return True if lexeme is, in full, a word of category."""
        pattern = self._matchers.get(category)
        return pattern is not None and pattern.fullmatch(lexeme) is not None


def _compile_fragment(pattern: str, category: Category) -> None:
    if not pattern:
        raise InvalidPatternError(pattern, category, "empty pattern")
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise InvalidPatternError(pattern, category, str(exc)) from exc
    # Group numbers shift once fragments are joined into one alternation
    if compiled.groups:
        raise InvalidPatternError(
            pattern, category, "capture groups are not supported; use (?:...)"
        )


def _compile_alternation(patterns: Iterable[str], category: Category) -> re.Pattern[str]:
    # Longest first so the leftmost alternative is also the longest literal
    ordered = sorted(set(patterns), key=lambda p: (-len(p), p))
    if not ordered:
        return _NEVER
    source = r"\b(?:" + "|".join(f"(?:{p})" for p in ordered) + r")\b"
    try:
        return re.compile(source)
    except re.error as exc:
        raise InvalidPatternError(source, category, str(exc)) from exc


def build_tables(
    base_words: Mapping[Category, Iterable[str]] | None = None,
    extensions: Mapping[Category, Iterable[str]] | None = None,
) -> CompiledLexicon:
    """Compile base and extension word lists into a CompiledLexicon.

    Each word is a literal identifier or a regex fragment such as
    ``SV_Target[0-7]``; word-boundary anchoring is added here. Extensions
    are appended verbatim after the base words of their category.

    Raises InvalidPatternError for a fragment that does not compile and
    EmptyCategoryError for an extension aimed at a category missing from
    base_words.
    """
    if base_words is None:
        base_words = BASE_WORDS
    tables: dict[Category, list[str]] = {cat: list(words) for cat, words in base_words.items()}

    for category, words in (extensions or {}).items():
        words = list(words)
        if not words:
            continue
        if category not in tables:
            raise EmptyCategoryError(category)
        tables[category].extend(words)

    entries: list[LexemeEntry] = []
    matchers: dict[Category, re.Pattern[str]] = {}
    for category, words in tables.items():
        for word in words:
            _compile_fragment(word, category)
            entries.append(LexemeEntry(word, category))
        matchers[category] = _compile_alternation(words, category)
        logger.debug("compiled %d %s patterns", len(words), category.value)

    return CompiledLexicon(tuple(entries), MappingProxyType(matchers))


def build_lexicon(options: LexiconOptions | None = None) -> CompiledLexicon:
    """Build the HLSL lexicon with optional user extensions."""
    if options is None:
        return default_lexicon()
    return build_tables(BASE_WORDS, options.extensions())


@cache
def default_lexicon() -> CompiledLexicon:
    """Return the process-wide lexicon built from the base tables alone."""
    return build_tables(BASE_WORDS)
