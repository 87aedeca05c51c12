"""Tests for comment and declaration region indexing."""

from __future__ import annotations

import logging

import pytest

from demagic.constants import Lexer, Variant
from demagic.engine.grammar import grammar_for
from demagic.engine.regions import (
    RegionIndex,
    SpanLookup,
    build_region_index,
    find_comments,
    find_declarations,
)
from demagic.engine.schemas import Comment


class TestFindComments:
    def test_line_comment_stops_at_newline(self) -> None:
        text = "x = 1; // note 42\ny = 2;"
        (comment,) = find_comments(text)
        assert text[comment.start : comment.end] == "// note 42"

    def test_block_comment(self) -> None:
        text = "a /* block 42\n still */ b"
        (comment,) = find_comments(text)
        assert text[comment.start : comment.end] == "/* block 42\n still */"

    def test_block_comment_with_slash_not_matched(self) -> None:
        """A '/' inside the body defeats the block comment pattern."""
        assert find_comments("/* see a/b 42 */") == []

    def test_line_comment_stops_before_carriage_return(self) -> None:
        text = "x = 1; // note 42\r\ny = 2;"
        (comment,) = find_comments(text)
        assert text[comment.start : comment.end] == "// note 42"

    def test_slashes_inside_string_start_a_comment(self) -> None:
        text = 'String url = "http://host:8080";'
        (comment,) = find_comments(text)
        assert text[comment.start :] == '//host:8080";'


class TestFindDeclarations:
    def test_typed_declarations(self) -> None:
        text = "int a = 1;\nfloat b = 2.5f;\nString c = 3;"
        decls = find_declarations(text, grammar_for(Variant.TYPED))
        assert [(d.type, d.name, d.value) for d in decls] == [
            ("int", "a", "1"),
            ("float", "b", "2.5f"),
        ]
        assert decls[0].text == "int a = 1;"
        assert text[decls[1].start : decls[1].end] == "float b = 2.5f;"

    def test_intermediate_declaration_has_no_type(self) -> None:
        decls = find_declarations(
            "count = 10;", grammar_for(Variant.INTERMEDIATE)
        )
        assert len(decls) == 1
        assert decls[0].name == "count"
        assert decls[0].type is None

    def test_basic_ignores_doubles(self) -> None:
        decls = find_declarations(
            "double d = 2;", grammar_for(Variant.BASIC)
        )
        assert decls == []


class TestRegionIndex:
    def test_queries(self) -> None:
        text = "class C { int x = 7; // 42 here\n }"
        index = build_region_index(text, grammar_for(Variant.TYPED))
        seven = text.index("7")
        forty_two = text.index("42")
        assert index.declaration_surrounds(seven, seven + 1)
        assert index.comment_surrounds(forty_two, forty_two + 2)
        assert not index.comment_surrounds(seven, seven + 1)
        assert index.declaration_names == {"x"}
        decl = index.find_declaration("x")
        assert decl is not None
        assert decl.value == "7"
        assert index.find_declaration("y") is None

    def test_heuristic_has_no_string_regions(self) -> None:
        index = build_region_index('s = "42";', grammar_for("typed"))
        assert index.strings == []

    def test_tree_sitter_falls_back_without_grammar(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(
            "demagic.engine.lexer._get_parser", lambda language: None
        )
        text = "class C { // 42 x\n }"
        with caplog.at_level(logging.WARNING, logger="demagic.engine"):
            index = build_region_index(
                text, grammar_for("typed"), Lexer.TREE_SITTER
            )
        assert "event=lexer_unavailable" in caplog.text
        assert len(index.comments) == 1

    def test_tree_sitter_language_without_grammar(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        text = "class C { // 42 x\n }"
        with caplog.at_level(logging.WARNING, logger="demagic.engine"):
            index = build_region_index(
                text, grammar_for("typed"), Lexer.TREE_SITTER, "kotlin"
            )
        assert "language=kotlin" in caplog.text
        assert len(index.comments) == 1


class TestSpanLookup:
    def test_strict_interior(self) -> None:
        lookup = SpanLookup([Comment(start=10, end=20)])
        assert lookup.surrounds(11, 19)
        assert not lookup.surrounds(10, 12)
        assert not lookup.surrounds(15, 20)
        assert not lookup.surrounds(2, 4)
        assert not lookup.surrounds(25, 26)

    def test_nested_and_overlapping(self) -> None:
        """A short span after a long one must not hide the long one."""
        lookup = SpanLookup(
            [
                Comment(start=30, end=35),
                Comment(start=0, end=100),
                Comment(start=5, end=8),
            ]
        )
        assert lookup.surrounds(50, 60)
        assert lookup.surrounds(6, 7)
        assert not lookup.surrounds(0, 1)

    def test_empty(self) -> None:
        lookup = SpanLookup([])
        assert len(lookup) == 0
        assert not lookup.surrounds(1, 2)

    def test_index_matches_linear_check(self) -> None:
        text = (
            "/* a 1 */ class C { // 2\n"
            "  int x = 3; /* 4\n 5 */ f(6); // 7 /* 8 */\n}"
        )
        index = build_region_index(text, grammar_for(Variant.TYPED))
        for start in range(len(text)):
            for end in range(start + 1, min(start + 4, len(text))):
                assert index.comment_surrounds(start, end) == any(
                    c.surrounds(start, end) for c in index.comments
                )
                assert index.declaration_surrounds(start, end) == any(
                    d.surrounds(start, end) for d in index.declarations
                )

    def test_constructed_index(self) -> None:
        index = RegionIndex(comments=[Comment(start=0, end=9)])
        assert index.comment_surrounds(3, 4)
        assert not index.string_surrounds(3, 4)
