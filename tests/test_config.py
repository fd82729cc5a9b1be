"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from hlslex.cli import ConfigError, build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[lexicon]\nadditional_types = ["Foo"]\n')
        result = load_config(cfg, tmp_path)
        assert result["lexicon"] == {"additional_types": ["Foo"]}

    def test_auto_discover_hlslex_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text('[lexicon]\nadditional_builtins = ["myfn"]\n')
        result = load_config(None, tmp_path)
        assert result["lexicon"] == {"additional_builtins": ["myfn"]}

    def test_malformed_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text("[lexicon\n")
        with pytest.raises(ConfigError):
            load_config(None, tmp_path)


class TestConfigMerge:
    def test_config_words_loaded(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text(
            "[lexicon]\n"
            'additional_types = ["Foo"]\n'
            'additional_qualifiers = ["myq"]\n'
            'additional_keywords = ["MYSEM"]\n'
            'additional_builtins = ["myfn"]\n'
        )
        src = tmp_path / "a.hlsl"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src)]))
        assert opts.lexicon.additional_types == ("Foo",)
        assert opts.lexicon.additional_qualifiers == ("myq",)
        assert opts.lexicon.additional_keywords == ("MYSEM",)
        assert opts.lexicon.additional_builtins == ("myfn",)

    def test_cli_words_appended_after_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text('[lexicon]\nadditional_types = ["Foo"]\n')
        src = tmp_path / "a.hlsl"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src), "-t", "Bar"]))
        assert opts.lexicon.additional_types == ("Foo", "Bar")

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text('[lexicon]\nadditional_keywords = ["K"]\n')
        src = tmp_path / "a.hlsl"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src), "--config", str(cfg)]))
        assert opts.lexicon.additional_keywords == ("K",)

    def test_no_lexicon_section(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text('title = "x"\n')
        src = tmp_path / "a.hlsl"
        src.write_text("")
        opts = resolve_options(build_parser().parse_args([str(src)]))
        assert opts.lexicon.additional_types == ()

    def test_non_list_value_rejected(self, tmp_path: Path) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text('[lexicon]\nadditional_types = "Foo"\n')
        src = tmp_path / "a.hlsl"
        src.write_text("")
        with pytest.raises(ConfigError, match="additional_types"):
            resolve_options(build_parser().parse_args([str(src)]))


class TestConfigEndToEnd:
    def test_configured_type_classified(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text('[lexicon]\nadditional_types = ["Light"]\n')
        src = tmp_path / "a.hlsl"
        src.write_text("Light l;")
        assert main([str(src)]) == 0
        assert "1:1\ttype\t'Light'" in capsys.readouterr().out

    def test_bad_config_returns_2(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "hlslex.toml"
        cfg.write_text("lexicon = 3\n")
        src = tmp_path / "a.hlsl"
        src.write_text("x")
        assert main([str(src)]) == 2
        assert "error:" in capsys.readouterr().err
