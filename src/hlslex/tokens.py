"""Token categories, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    # Lexicon-backed (identifier-like lexemes)
    TYPE = "type"
    QUALIFIER = "qualifier"
    KEYWORD = "keyword"
    RESERVED_KEYWORD = "reserved-keyword"
    BUILTIN = "builtin"
    DEPRECATED_QUALIFIER = "deprecated-qualifier"
    DEPRECATED_KEYWORD = "deprecated-keyword"
    DEPRECATED_BUILTIN = "deprecated-builtin"
    DEPRECATED_VARIABLE = "deprecated-variable"
    PREPROCESSOR_DIRECTIVE = "preprocessor-directive"
    PREPROCESSOR_BUILTIN = "preprocessor-builtin"
    PREPROCESSOR_OPERATOR = "preprocessor-operator"

    # Fallback for unrecognized lexemes
    IDENTIFIER = "identifier"

    # Produced by the tokenizer only
    COMMENT = "comment"
    STRING_LITERAL = "string-literal"
    NUMBER_LITERAL = "number-literal"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"

    @property
    def deprecated(self) -> bool:
        return self.name.startswith("DEPRECATED_")


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A classified slice of source text.

    ``line`` and ``column`` locate the first character of ``text``;
    ``end_offset`` is exclusive.
    """

    text: str
    category: Category
    start_offset: int
    end_offset: int
    line: int
    column: int

    @property
    def start(self) -> Position:
        return Position(self.line, self.column, self.start_offset)

    @property
    def span(self) -> Span:
        line = self.line + self.text.count("\n")
        last_nl = self.text.rfind("\n")
        if last_nl == -1:
            column = self.column + len(self.text)
        else:
            column = len(self.text) - last_nl
        return Span(self.start, Position(line, column, self.end_offset))


def is_ident_start(ch: str) -> bool:
    """Return True if ch may begin an identifier."""
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def is_ident_char(ch: str) -> bool:
    """Return True if ch may continue an identifier."""
    return is_ident_start(ch) or ("0" <= ch <= "9")
