"""Index the comment, string and declaration regions of a snapshot.

The default (heuristic) index is pattern based, not a lexer:

* ``//`` starts a line comment even inside a string literal.
* A block comment body may not contain ``/``; ``/* a/b 42 */`` is
  not recognized as a comment.

Both gaps are preserved. ``Lexer.TREE_SITTER`` replaces the comment
patterns with a real Java lexer (see :mod:`demagic.engine.lexer`).
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_left
from collections.abc import Iterable
from itertools import accumulate
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from demagic.constants import Lexer
from demagic.engine.grammar import Grammar
from demagic.engine.schemas import (
    Comment,
    Declaration,
    Span,
    StringRegion,
)

logger = logging.getLogger(__name__)

_LINE_COMMENT = re.compile(r"//[^\r\n]*")
_BLOCK_COMMENT = re.compile(r"/\*[^/]*\*/")


class SpanLookup:
    """Strict-interior containment queries over a fixed set of spans.

    Spans are sorted by start and paired with the running maximum of
    their ends, so a query is one bisection instead of a linear scan.
    Overlapping and nested spans are handled.
    """

    def __init__(self, spans: Iterable[Span]) -> None:
        ordered = sorted(spans, key=lambda s: s.start)
        self._starts = [s.start for s in ordered]
        self._reach = list(accumulate((s.end for s in ordered), max))

    def __len__(self) -> int:
        return len(self._starts)

    def surrounds(self, start: int, end: int) -> bool:
        # spans starting strictly before ``start``
        i = bisect_left(self._starts, start)
        return i > 0 and self._reach[i - 1] > end


class RegionIndex(BaseModel):
    """All excluded regions of one text snapshot.

    Treat as immutable once built: the lookups are computed from the
    lists at construction time.
    """

    comments: list[Comment] = Field(
        default_factory=lambda: list[Comment]()
    )
    strings: list[StringRegion] = Field(
        default_factory=lambda: list[StringRegion]()
    )
    declarations: list[Declaration] = Field(
        default_factory=lambda: list[Declaration]()
    )

    _comment_lookup: SpanLookup = PrivateAttr()
    _string_lookup: SpanLookup = PrivateAttr()
    _declaration_lookup: SpanLookup = PrivateAttr()

    def model_post_init(self, context: Any, /) -> None:
        self._comment_lookup = SpanLookup(self.comments)
        self._string_lookup = SpanLookup(self.strings)
        self._declaration_lookup = SpanLookup(self.declarations)

    def comment_surrounds(self, start: int, end: int) -> bool:
        return self._comment_lookup.surrounds(start, end)

    def string_surrounds(self, start: int, end: int) -> bool:
        return self._string_lookup.surrounds(start, end)

    def declaration_surrounds(self, start: int, end: int) -> bool:
        return self._declaration_lookup.surrounds(start, end)

    @property
    def declaration_names(self) -> set[str]:
        return {d.name for d in self.declarations}

    def find_declaration(self, name: str) -> Declaration | None:
        """First declaration of ``name`` in document order."""
        for decl in self.declarations:
            if decl.name == name:
                return decl
        return None


def build_region_index(
    text: str,
    grammar: Grammar,
    lexer: Lexer | str = Lexer.HEURISTIC,
    language: str = "java",
) -> RegionIndex:
    """Scan ``text`` for comments, strings and declarations.

    ``language`` selects the tree-sitter grammar; languages without one
    fall back to the heuristic patterns.
    """
    comments: list[Comment] | None = None
    strings: list[StringRegion] = []

    if Lexer(lexer) == Lexer.TREE_SITTER:
        from demagic.engine.lexer import lex_regions

        lexed = lex_regions(text, language)
        if lexed is None:
            logger.warning(
                "event=lexer_unavailable lexer=%s language=%s fallback=%s",
                Lexer.TREE_SITTER,
                language,
                Lexer.HEURISTIC,
            )
        else:
            comments, strings = lexed

    if comments is None:
        comments = find_comments(text)

    return RegionIndex(
        comments=comments,
        strings=strings,
        declarations=find_declarations(text, grammar),
    )


def find_comments(text: str) -> list[Comment]:
    """Line comments first, then block comments."""
    comments = [
        Comment(start=m.start(), end=m.end())
        for m in _LINE_COMMENT.finditer(text)
    ]
    comments.extend(
        Comment(start=m.start(), end=m.end())
        for m in _BLOCK_COMMENT.finditer(text)
    )
    return comments


def find_declarations(text: str, grammar: Grammar) -> list[Declaration]:
    """Every declaration the variant's grammar recognizes."""
    declarations: list[Declaration] = []
    for m in grammar.declaration.finditer(text):
        groups = m.groupdict()
        declarations.append(
            Declaration(
                name=groups["name"].strip(),
                value=groups["value"],
                type=groups.get("type"),
                text=m.group(0),
                start=m.start(),
                end=m.end(),
            )
        )
    return declarations
