"""Error and diagnostic types."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hlslex.tokens import Position, Span

if TYPE_CHECKING:
    from hlslex.tokens import Category


class InvalidPatternError(ValueError):
    """Raised at table-build time when a lexicon pattern does not compile."""

    def __init__(self, pattern: str, category: Category, reason: str) -> None:
        self.pattern = pattern
        self.category = category
        self.reason = reason
        super().__init__(f"invalid {category.value} pattern {pattern!r}: {reason}")


class EmptyCategoryError(KeyError):
    """Raised when extending a category that has no base table."""

    def __init__(self, category: Category) -> None:
        self.category = category
        super().__init__(category)

    def __str__(self) -> str:
        return f"cannot extend {self.category.value}: category has no base table"


class UnterminatedConstructWarning(UserWarning):
    """A block comment or string literal reached end of input unclosed.

    Never raised by the tokenizer: instances are collected beside the token
    stream so a partially malformed file is still fully classified.
    """

    def __init__(
        self, message: str, span: Span, source: str, filename: str = "input.hlsl"
    ) -> None:
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        super().__init__(message)

    @property
    def position(self) -> Position:
        return self.span.start

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename
        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the opening delimiter through the end of its line
        underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"warning: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )
