"""Tests for the CLI module: arg parsing, exit codes, output formats."""

from __future__ import annotations

import io
import json
from pathlib import Path

from hlslex.cli import CliOptions, build_parser, format_token, main, run
from hlslex.debug import dump_lexicon
from hlslex.lexicon import LexiconOptions, default_lexicon
from hlslex.tokens import Category, Token

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_input_only(self) -> None:
        ns = build_parser().parse_args(["a.hlsl"])
        assert ns.input == "a.hlsl"
        assert ns.type == []
        assert ns.json is False

    def test_extension_flags(self) -> None:
        ns = build_parser().parse_args(
            ["a.hlsl", "-t", "Foo", "-t", "Bar", "-q", "myq", "-k", "MYKW", "-b", "myfn"]
        )
        assert ns.type == ["Foo", "Bar"]
        assert ns.qualifier == ["myq"]
        assert ns.keyword == ["MYKW"]
        assert ns.builtin == ["myfn"]

    def test_output_flags(self) -> None:
        ns = build_parser().parse_args(["a.hlsl", "--json", "--whitespace", "--debug"])
        assert ns.json is True
        assert ns.whitespace is True
        assert ns.debug is True

    def test_classify_without_input(self) -> None:
        ns = build_parser().parse_args(["--classify", "float4"])
        assert ns.input is None
        assert ns.classify == ["float4"]


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


class TestFormatToken:
    def test_text_line(self) -> None:
        tok = Token("float", Category.TYPE, 0, 5, 3, 7)
        assert format_token(tok) == "3:7\ttype\t'float'"

    def test_json_line(self) -> None:
        tok = Token("x", Category.IDENTIFIER, 4, 5, 1, 5)
        data = json.loads(format_token(tok, as_json=True))
        assert data == {
            "text": "x",
            "category": "identifier",
            "start": 4,
            "end": 5,
            "line": 1,
            "column": 5,
        }


# ---------------------------------------------------------------------------
# Exit codes and end-to-end output
# ---------------------------------------------------------------------------


class TestMain:
    def test_success(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "ok.hlsl"
        src.write_text("float4 c;\n")
        assert main([str(src)]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["1:1\ttype\t'float4'", "1:8\tidentifier\t'c'", "1:9\tpunctuation\t';'"]

    def test_whitespace_flag(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "ws.hlsl"
        src.write_text("a b")
        assert main([str(src), "--whitespace"]) == 0
        assert "whitespace" in capsys.readouterr().out

    def test_json_output(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "j.hlsl"
        src.write_text("uint n")
        assert main([str(src), "--json"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert [json.loads(line)["category"] for line in lines] == ["type", "identifier"]

    def test_unterminated_returns_1(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "bad.hlsl"
        src.write_text("float x; /* open")
        assert main([str(src)]) == 1
        captured = capsys.readouterr()
        assert "comment" in captured.out
        assert "unterminated block comment" in captured.err
        assert "bad.hlsl:1:10" in captured.err

    def test_missing_file_returns_2(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "nope.hlsl")]) == 2
        assert "cannot read" in capsys.readouterr().err

    def test_no_input_returns_2(self, capsys) -> None:
        assert main([]) == 2
        assert "input file" in capsys.readouterr().err

    def test_invalid_pattern_returns_2(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.hlsl"
        src.write_text("x")
        assert main([str(src), "-k", "BAD[0-"]) == 2
        assert "invalid keyword pattern" in capsys.readouterr().err

    def test_unknown_extension_note(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "a.txt"
        src.write_text("int")
        assert main([str(src)]) == 0
        captured = capsys.readouterr()
        assert "does not have a shader file extension" in captured.err
        assert "type" in captured.out

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("half3 v"))
        assert main(["-"]) == 0
        assert "'half3'" in capsys.readouterr().out

    def test_classify_words(self, capsys) -> None:
        assert main(["--classify", "float3x3", "--classify", "SV_Target9", "-t", "Foo",
                     "--classify", "Foo"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["float3x3\ttype", "SV_Target9\tidentifier", "Foo\ttype"]

    def test_extension_flag_applies(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "ext.hlsl"
        src.write_text("myfn(1)")
        assert main([str(src), "-b", "myfn"]) == 0
        assert "1:1\tbuiltin\t'myfn'" in capsys.readouterr().out

    def test_debug_dumps_lexicon(self, tmp_path: Path, capsys) -> None:
        src = tmp_path / "d.hlsl"
        src.write_text("x")
        assert main([str(src), "--debug"]) == 0
        assert "Lexicon" in capsys.readouterr().err


class TestRun:
    def test_run_writes_to_streams(self) -> None:
        opts = CliOptions(
            input_file=None,
            lexicon=LexiconOptions(),
            classify_words=[],
            json=False,
            whitespace=False,
            debug=False,
        )
        out = io.StringIO()
        err = io.StringIO()
        assert run(opts, '"open', "s.fx", out, err) == 1
        assert "string-literal" in out.getvalue()
        assert "s.fx:1:1" in err.getvalue()


class TestDumpLexicon:
    def test_lists_categories_in_order(self) -> None:
        buf = io.StringIO()
        dump_lexicon(default_lexicon(), file=buf)
        text = buf.getvalue()
        assert text.startswith("Lexicon\n")
        assert text.index("preprocessor-directive") < text.index("  type (")
        assert text.index("  type (") < text.index("  builtin (")
        assert "deprecated-builtin (0)" in text
        assert "..." in text
