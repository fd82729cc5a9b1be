"""Minimal LSP server for HLSL — diagnostics and semantic tokens."""

from __future__ import annotations

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from hlslex import __version__
from hlslex.cli import ConfigError, lexicon_options, load_config
from hlslex.errors import InvalidPatternError
from hlslex.lexer import tokenize
from hlslex.lexicon import CompiledLexicon, LexiconOptions, build_lexicon, default_lexicon
from hlslex.tokens import Category, Token

TOKEN_TYPES = [
    "type",
    "modifier",
    "keyword",
    "function",
    "variable",
    "macro",
    "operator",
    "comment",
    "string",
    "number",
]
TOKEN_MODIFIERS = ["deprecated"]

LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=TOKEN_MODIFIERS)

# Categories without an entry (whitespace, punctuation) are not reported
_CATEGORY_TYPES: dict[Category, str] = {
    Category.TYPE: "type",
    Category.QUALIFIER: "modifier",
    Category.DEPRECATED_QUALIFIER: "modifier",
    Category.KEYWORD: "keyword",
    Category.RESERVED_KEYWORD: "keyword",
    Category.DEPRECATED_KEYWORD: "keyword",
    Category.BUILTIN: "function",
    Category.DEPRECATED_BUILTIN: "function",
    Category.DEPRECATED_VARIABLE: "variable",
    Category.IDENTIFIER: "variable",
    Category.PREPROCESSOR_DIRECTIVE: "macro",
    Category.PREPROCESSOR_BUILTIN: "macro",
    Category.PREPROCESSOR_OPERATOR: "operator",
    Category.COMMENT: "comment",
    Category.STRING_LITERAL: "string",
    Category.NUMBER_LITERAL: "number",
}

server = LanguageServer("hlslex-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def encode_semantic_tokens(tokens: Iterable[Token]) -> list[int]:
    """Encode tokens as LSP relative semantic-token data.

    Each reported token becomes five integers: line delta, start delta,
    length, type index, modifier bitset. Tokens spanning lines are split
    into one entry per line.
    """
    data: list[int] = []
    prev_line = 0
    prev_char = 0
    for token in tokens:
        token_type = _CATEGORY_TYPES.get(token.category)
        if token_type is None:
            continue
        type_index = TOKEN_TYPES.index(token_type)
        modifiers = 1 if token.category.deprecated else 0

        line = token.line - 1
        char = token.column - 1
        for piece in token.text.split("\n"):
            piece = piece.rstrip("\r")
            if piece:
                delta_line = line - prev_line
                delta_char = char - prev_char if delta_line == 0 else char
                data.extend([delta_line, delta_char, len(piece), type_index, modifiers])
                prev_line = line
                prev_char = char
            line += 1
            char = 0
    return data


@lru_cache(maxsize=16)
def _build(options: LexiconOptions) -> CompiledLexicon:
    return build_lexicon(options)


def document_lexicon(path: str | None) -> tuple[CompiledLexicon, str | None]:
    """Return the lexicon configured by hlslex.toml beside *path*, and any config error.

    Falls back to the default lexicon when there is no config or it is invalid.
    """
    if not path:
        return default_lexicon(), None
    try:
        options = lexicon_options(load_config(None, Path(path).parent))
    except ConfigError as exc:
        return default_lexicon(), str(exc)
    if options == LexiconOptions():
        return default_lexicon(), None
    try:
        return _build(options), None
    except InvalidPatternError as exc:
        return default_lexicon(), str(exc)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish config errors and unterminated-construct warnings."""
    doc = ls.workspace.get_text_document(uri)
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    lexicon, config_error = document_lexicon(doc.path)
    stream = tokenize(lexicon, doc.source, filename)

    diagnostics: list[Diagnostic] = []
    if config_error is not None:
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=0, character=0),
                    end=Position(line=0, character=0),
                ),
                message=config_error,
                severity=DiagnosticSeverity.Error,
                source="hlslex",
            )
        )
    for warning in stream.diagnostics:
        start = warning.span.start
        end = warning.span.end
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=start.line - 1, character=start.column - 1),
                    end=Position(line=end.line - 1, character=end.column - 1),
                ),
                message=warning.message,
                severity=DiagnosticSeverity.Warning,
                source="hlslex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    lexicon, _ = document_lexicon(doc.path)
    stream = tokenize(lexicon, doc.source)
    return SemanticTokens(data=encode_semantic_tokens(stream))


def main() -> None:
    server.start_io()
