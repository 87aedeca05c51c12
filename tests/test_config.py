"""Tests for Settings parsing and validators."""

from __future__ import annotations

import logging

import pytest

from demagic.config import EXTENSION_MAP, Settings
from demagic.constants import Lexer, Variant


class TestDefaults:
    def test_rewriting_defaults(self) -> None:
        s = Settings()
        assert s.variant == Variant.TYPED
        assert s.lexer == Lexer.HEURISTIC
        assert s.constant_prefix == "MAGIC_NUMBER_"
        assert s.indent == "\t"

    def test_api_defaults(self) -> None:
        s = Settings()
        assert s.host == "127.0.0.1"
        assert s.port == 8002
        assert s.api_key == ""


class TestEnvironment:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEMAGIC_VARIANT", "basic")
        monkeypatch.setenv("DEMAGIC_CONSTANT_PREFIX", "K_")
        s = Settings()
        assert s.variant == Variant.BASIC
        assert s.constant_prefix == "K_"

    def test_comma_separated_env_list(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEMAGIC_EXTENSIONS", "java, kt")
        monkeypatch.setenv("DEMAGIC_SKIP_DIRECTORIES", "gen,third_party")
        s = Settings()
        assert s.extensions == [".java", ".kt"]
        assert s.skip_directories == ["gen", "third_party"]

    def test_invalid_variant_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEMAGIC_VARIANT", "fancy")
        with pytest.raises(ValueError):
            Settings()


class TestExtensions:
    def test_normalized(self) -> None:
        s = Settings(extensions=["JAVA", ".Kt"])
        assert s.extensions == [".java", ".kt"]

    def test_list_passthrough(self) -> None:
        s = Settings(extensions=[".java"])
        assert s.source_extensions == {".java"}

    def test_unset_means_all_known(self) -> None:
        assert Settings().source_extensions == set(EXTENSION_MAP)

    def test_unknown_extension_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="demagic.config"):
            s = Settings(extensions=["py"])
        assert "no known brace-scoped language" in caplog.text
        assert s.extensions == [".py"]


class TestValidators:
    @pytest.mark.parametrize("prefix", ["", "1ABC", "MAGIC-"])
    def test_invalid_prefix(self, prefix: str) -> None:
        with pytest.raises(ValueError, match="valid identifier"):
            Settings(constant_prefix=prefix)

    def test_valid_prefix(self) -> None:
        assert Settings(constant_prefix="NUM_").constant_prefix == "NUM_"

    def test_indent_must_be_whitespace(self) -> None:
        with pytest.raises(ValueError, match="only whitespace"):
            Settings(indent="  x")

    def test_space_indent(self) -> None:
        assert Settings(indent="    ").indent == "    "


class TestFields:
    def test_only_used_fields(self) -> None:
        assert "debug_mode" not in Settings.model_fields
