"""Command-line interface for hlslex."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from hlslex.errors import EmptyCategoryError, InvalidPatternError
from hlslex.lexicon import LexiconOptions, build_tables
from hlslex.tables import BASE_WORDS, is_shader_file
from hlslex.tokens import Category, Token

CONFIG_NAME = "hlslex.toml"

_OPTION_KEYS = (
    "additional_types",
    "additional_qualifiers",
    "additional_keywords",
    "additional_builtins",
)


class ConfigError(Exception):
    """Raised for malformed or unreadable configuration."""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    lexicon: LexiconOptions
    classify_words: list[str]
    json: bool
    whitespace: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="hlslex",
        description="Classify and tokenize HLSL shader source",
    )
    p.add_argument("input", nargs="?", help="Input shader file ('-' for stdin)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "-t",
        "--type",
        action="append",
        default=[],
        metavar="WORD",
        help="Additional type name (repeatable)",
    )
    p.add_argument(
        "-q",
        "--qualifier",
        action="append",
        default=[],
        metavar="WORD",
        help="Additional qualifier (repeatable)",
    )
    p.add_argument(
        "-k",
        "--keyword",
        action="append",
        default=[],
        metavar="WORD",
        help="Additional keyword (repeatable)",
    )
    p.add_argument(
        "-b",
        "--builtin",
        action="append",
        default=[],
        metavar="WORD",
        help="Additional builtin (repeatable)",
    )
    p.add_argument(
        "--classify",
        action="append",
        default=[],
        metavar="WORD",
        help="Print the category of WORD instead of tokenizing (repeatable)",
    )
    p.add_argument("--json", action="store_true", help="Emit tokens as JSON lines")
    p.add_argument("--whitespace", action="store_true", help="Include whitespace tokens")
    p.add_argument("--debug", action="store_true", help="Dump the compiled lexicon to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def _config_words(section: dict[str, Any], key: str) -> list[str]:
    value = section.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(f"[lexicon] {key} must be a list of strings")
    return [str(v) for v in value]


def lexicon_options(
    config: dict[str, Any], extra: dict[str, list[str]] | None = None
) -> LexiconOptions:
    """Build LexiconOptions from the [lexicon] table, appending *extra* words per key."""
    section = config.get("lexicon", {})
    if not isinstance(section, dict):
        raise ConfigError("[lexicon] must be a table")
    extra = extra or {}
    merged = {key: tuple(_config_words(section, key) + extra.get(key, [])) for key in _OPTION_KEYS}
    return LexiconOptions(**merged)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags. CLI words are appended after
    configured ones.
    """
    input_file = Path(args.input) if args.input and args.input != "-" else None
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cli_words = {
        "additional_types": args.type,
        "additional_qualifiers": args.qualifier,
        "additional_keywords": args.keyword,
        "additional_builtins": args.builtin,
    }

    return CliOptions(
        input_file=input_file,
        lexicon=lexicon_options(config, cli_words),
        classify_words=list(args.classify),
        json=args.json,
        whitespace=args.whitespace,
        debug=args.debug,
    )


def format_token(token: Token, *, as_json: bool = False) -> str:
    """Render one token as a text line or a JSON object."""
    if as_json:
        return json.dumps(
            {
                "text": token.text,
                "category": token.category.value,
                "start": token.start_offset,
                "end": token.end_offset,
                "line": token.line,
                "column": token.column,
            }
        )
    return f"{token.line}:{token.column}\t{token.category.value}\t{token.text!r}"


def run(options: CliOptions, source: str, filename: str, out: TextIO, err: TextIO) -> int:
    """Classify words or tokenize source, writing results to *out*.

    Returns 1 when diagnostics were reported, otherwise 0.
    """
    from hlslex.classifier import classify
    from hlslex.debug import dump_lexicon
    from hlslex.lexer import tokenize

    lexicon = build_tables(BASE_WORDS, options.lexicon.extensions())
    if options.debug:
        dump_lexicon(lexicon, file=err)

    if options.classify_words:
        for word in options.classify_words:
            out.write(f"{word}\t{classify(lexicon, word).value}\n")
        return 0

    stream = tokenize(lexicon, source, filename)
    for token in stream:
        if token.category == Category.WHITESPACE and not options.whitespace:
            continue
        out.write(format_token(token, as_json=options.json) + "\n")

    diagnostics = stream.diagnostics
    for diag in diagnostics:
        print(diag.format(), file=err)
    return 1 if diagnostics else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if not options.classify_words and args.input is None:
        print("error: an input file (or '-') is required without --classify", file=sys.stderr)
        return 2

    source = ""
    filename = "<stdin>"
    if not options.classify_words:
        if options.input_file is None:
            source = sys.stdin.read()
        else:
            filename = str(options.input_file)
            if not is_shader_file(options.input_file):
                print(f"note: {filename} does not have a shader file extension", file=sys.stderr)
            try:
                source = options.input_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"error: cannot read {filename}: {exc}", file=sys.stderr)
                return 2

    try:
        return run(options, source, filename, sys.stdout, sys.stderr)
    except (InvalidPatternError, EmptyCategoryError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
