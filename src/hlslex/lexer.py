"""HLSL lexer — converts shader source into a lazy stream of classified tokens."""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum, auto

from hlslex.classifier import classify
from hlslex.errors import UnterminatedConstructWarning
from hlslex.lexicon import CompiledLexicon, default_lexicon
from hlslex.tokens import Category, Position, Span, Token, is_ident_char, is_ident_start

_NUMBER = re.compile(
    r"""
    0[xX][0-9a-fA-F]+[uUlL]*
    | (?:[0-9]+\.[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFhHlL]?
    | [0-9]+[eE][+-]?[0-9]+[fFhHlL]?
    | [0-9]+(?:[uUlL]+|[fFhH])?
    """,
    re.VERBOSE,
)

_WHITESPACE = " \t\r\n\f\v"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class _State(Enum):
    DEFAULT = auto()
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()
    IN_STRING = auto()
    IN_PREPROCESSOR_LINE = auto()


class Lexer:
    """Tokenize HLSL source text into Token objects.

    A Lexer is single-use: it owns the cursor for one pass over the source.
    Unterminated constructs are recorded in ``diagnostics`` rather than raised.
    """

    def __init__(
        self,
        lexicon: CompiledLexicon,
        source: str,
        filename: str = "input.hlsl",
    ) -> None:
        self._lexicon = lexicon
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._state = _State.DEFAULT
        self._state_stack: list[_State] = []
        self._line_start = True  # only whitespace or comments seen on this line
        self._directive_pending = False  # next identifier names the directive
        self.diagnostics: list[UnterminatedConstructWarning] = []

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens until the cursor reaches end of input."""
        while self._pos < len(self._source):
            if self._state in (_State.DEFAULT, _State.IN_PREPROCESSOR_LINE):
                tok = self._lex_default()
            elif self._state == _State.IN_LINE_COMMENT:
                tok = self._lex_line_comment()
            elif self._state == _State.IN_BLOCK_COMMENT:
                tok = self._lex_block_comment()
            else:
                tok = self._lex_string()
            if tok is not None:
                yield tok

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _make(self, category: Category, start: Position) -> Token:
        text = self._source[start.offset : self._pos]
        return Token(text, category, start.offset, self._pos, start.line, start.column)

    def _warn(self, message: str, start: Position) -> None:
        span = Span(start, self._current_pos())
        self.diagnostics.append(
            UnterminatedConstructWarning(message, span, self._source, self._filename)
        )

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def _push_state(self, state: _State) -> None:
        self._state_stack.append(self._state)
        self._state = state

    def _pop_state(self) -> None:
        self._state = self._state_stack.pop()

    def _end_of_line(self) -> None:
        self._line_start = True
        self._directive_pending = False
        if self._state == _State.IN_PREPROCESSOR_LINE:
            self._pop_state()

    # ------------------------------------------------------------------
    # Default and preprocessor-line scanning
    # ------------------------------------------------------------------

    def _lex_default(self) -> Token | None:
        ch = self._peek()

        if ch in _WHITESPACE:
            return self._lex_whitespace()

        if ch == "/" and self._peek(1) == "/":
            self._push_state(_State.IN_LINE_COMMENT)
            return None

        if ch == "/" and self._peek(1) == "*":
            self._push_state(_State.IN_BLOCK_COMMENT)
            return None

        if ch == '"':
            self._directive_pending = False
            self._push_state(_State.IN_STRING)
            return None

        if ch == "#":
            return self._lex_hash()

        self._line_start = False

        if is_ident_start(ch):
            return self._lex_identifier()

        self._directive_pending = False
        if _is_digit(ch) or (ch == "." and _is_digit(self._peek(1))):
            return self._lex_number()

        start = self._current_pos()
        self._advance()
        return self._make(Category.PUNCTUATION, start)

    def _lex_whitespace(self) -> Token:
        start = self._current_pos()
        saw_newline = False
        while self._pos < len(self._source) and self._peek() in _WHITESPACE:
            if self._advance() == "\n":
                saw_newline = True
        if saw_newline:
            self._end_of_line()
        return self._make(Category.WHITESPACE, start)

    def _lex_hash(self) -> Token:
        start = self._current_pos()
        self._advance()

        if self._line_start and self._state == _State.DEFAULT:
            self._line_start = False
            self._push_state(_State.IN_PREPROCESSOR_LINE)
            self._directive_pending = True
            return self._make(Category.PUNCTUATION, start)

        self._line_start = False
        self._directive_pending = False
        if self._state == _State.IN_PREPROCESSOR_LINE:
            # Stringize (#) and token-paste (##)
            if self._peek() == "#":
                self._advance()
            return self._make(Category.PREPROCESSOR_OPERATOR, start)
        return self._make(Category.PUNCTUATION, start)

    def _lex_identifier(self) -> Token:
        start = self._current_pos()
        while self._pos < len(self._source) and is_ident_char(self._peek()):
            self._advance()
        text = self._source[start.offset : self._pos]
        if self._directive_pending:
            self._directive_pending = False
            category = classify(self._lexicon, text, preprocessor=True)
        elif self._state == _State.IN_PREPROCESSOR_LINE and self._lexicon.matches(
            Category.PREPROCESSOR_OPERATOR, text
        ):
            category = Category.PREPROCESSOR_OPERATOR
        else:
            category = classify(self._lexicon, text)
        return self._make(category, start)

    def _lex_number(self) -> Token:
        start = self._current_pos()
        m = _NUMBER.match(self._source, self._pos)
        # The dispatch guarantees at least one digit, so the match is never empty
        assert m is not None
        for _ in range(m.end() - m.start()):
            self._advance()
        return self._make(Category.NUMBER_LITERAL, start)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _lex_line_comment(self) -> Token:
        start = self._current_pos()
        while self._pos < len(self._source) and self._peek() != "\n":
            # Leave a CRLF pair to the whitespace scanner
            if self._peek() == "\r" and self._peek(1) == "\n":
                break
            self._advance()
        self._pop_state()
        return self._make(Category.COMMENT, start)

    def _lex_block_comment(self) -> Token:
        start = self._current_pos()
        self._advance()  # consume /
        self._advance()  # consume *
        while True:
            if self._pos >= len(self._source):
                self._warn("unterminated block comment", start)
                break
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                break
            self._advance()
        self._pop_state()
        tok = self._make(Category.COMMENT, start)
        if "\n" in tok.text:
            self._end_of_line()
        return tok

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string(self) -> Token:
        start = self._current_pos()
        self._line_start = False
        self._advance()  # consume opening quote
        while True:
            if self._pos >= len(self._source):
                self._warn("unterminated string literal", start)
                break
            ch = self._advance()
            if ch == "\\" and self._pos < len(self._source):
                self._advance()
            elif ch == '"':
                break
        self._pop_state()
        return self._make(Category.STRING_LITERAL, start)


class TokenStream:
    """Lazy, restartable token sequence for one source buffer.

    Every iteration runs a fresh Lexer, so the stream can be consumed any
    number of times and always yields the same tokens. Diagnostics from
    the most recent complete pass are available via ``diagnostics``.
    """

    def __init__(self, lexicon: CompiledLexicon, source: str, filename: str = "input.hlsl") -> None:
        self.lexicon = lexicon
        self.source = source
        self.filename = filename
        self._diagnostics: tuple[UnterminatedConstructWarning, ...] | None = None

    def __iter__(self) -> Iterator[Token]:
        lexer = Lexer(self.lexicon, self.source, self.filename)
        yield from lexer.tokenize()
        self._diagnostics = tuple(lexer.diagnostics)

    @property
    def diagnostics(self) -> list[UnterminatedConstructWarning]:
        """Warnings for the whole buffer, running a full pass if needed."""
        if self._diagnostics is None:
            for _ in self:
                pass
        assert self._diagnostics is not None
        return list(self._diagnostics)

    def tokens(self, *, include_whitespace: bool = True) -> list[Token]:
        """Tokenize the full buffer and return the token list."""
        return [t for t in self if include_whitespace or t.category != Category.WHITESPACE]


def tokenize(
    lexicon: CompiledLexicon | None,
    source: str,
    filename: str = "input.hlsl",
) -> TokenStream:
    """Convenience function: return the token stream for source text.

    Passing ``None`` for lexicon uses the default HLSL tables.
    """
    if lexicon is None:
        lexicon = default_lexicon()
    return TokenStream(lexicon, source, filename)
