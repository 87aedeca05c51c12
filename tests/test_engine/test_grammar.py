"""Tests for per-variant literal and declaration grammars."""

from __future__ import annotations

import pytest

from demagic.constants import Variant
from demagic.engine.grammar import grammar_for


def _literals(variant: Variant, text: str) -> list[str]:
    return grammar_for(variant).literal.findall(text)


class TestLiteralGrammar:
    def test_basic_is_bare_digits(self) -> None:
        assert _literals(Variant.BASIC, "f(12, 3.5f)") == [
            "12", "3", "5",
        ]

    def test_intermediate_takes_one_suffix(self) -> None:
        assert _literals(Variant.INTERMEDIATE, "f(12l, 3.5f)") == [
            "12l", "3", "5f",
        ]

    def test_typed_takes_decimals_and_suffix(self) -> None:
        assert _literals(Variant.TYPED, "f(12l, 3.5f, 2.0)") == [
            "12l", "3.5f", "2.0",
        ]

    def test_suffixes_are_case_sensitive(self) -> None:
        assert _literals(Variant.TYPED, "10L") == ["10"]


class TestDeclarationGrammar:
    def test_typed_accepts_boxed_types(self) -> None:
        pattern = grammar_for(Variant.TYPED).declaration
        m = pattern.search("Double ratio = 0.75;")
        assert m is not None
        assert m.group("type") == "Double"
        assert m.group("name") == "ratio"
        assert m.group("value") == "0.75"

    def test_typed_rejects_other_types(self) -> None:
        pattern = grammar_for(Variant.TYPED).declaration
        assert pattern.search("short s = 4;") is None

    def test_basic_only_int(self) -> None:
        pattern = grammar_for(Variant.BASIC).declaration
        assert pattern.search("int x = 4;") is not None
        assert pattern.search("long x = 4;") is None

    def test_intermediate_needs_no_type(self) -> None:
        pattern = grammar_for(Variant.INTERMEDIATE).declaration
        m = pattern.search("    x = 4;")
        assert m is not None
        assert m.group("name") == "x"

    def test_only_typed_infers_types(self) -> None:
        assert grammar_for(Variant.TYPED).infers_types
        assert not grammar_for(Variant.BASIC).infers_types

    def test_accepts_plain_string(self) -> None:
        assert grammar_for("basic").variant == Variant.BASIC

    def test_unknown_variant_raises(self) -> None:
        with pytest.raises(ValueError):
            grammar_for("fancy")
