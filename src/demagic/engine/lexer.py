"""Comment and string regions from a tree-sitter Java parse."""

from __future__ import annotations

import importlib
from collections.abc import Callable

import tree_sitter

from demagic.config import GRAMMAR_MODULES
from demagic.engine.schemas import Comment, StringRegion

_COMMENT_NODE_TYPES = frozenset({"line_comment", "block_comment", "comment"})
_STRING_NODE_TYPES = frozenset({
    "string_literal",
    "character_literal",
    "text_block",
})


def lex_regions(
    text: str, language: str = "java"
) -> tuple[list[Comment], list[StringRegion]] | None:
    """Return ``(comments, strings)`` for ``text``.

    Offsets are character offsets into ``text``. Returns None when no
    grammar is available for ``language``.
    """
    parser = _get_parser(language)
    if parser is None:
        return None

    data = text.encode("utf-8")
    tree = parser.parse(data)
    to_char = _byte_to_char_offsets(text, data)

    comments: list[Comment] = []
    strings: list[StringRegion] = []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type in _COMMENT_NODE_TYPES:
            comments.append(
                Comment(
                    start=to_char(node.start_byte),
                    end=to_char(node.end_byte),
                )
            )
            continue
        if node.type in _STRING_NODE_TYPES:
            strings.append(
                StringRegion(
                    start=to_char(node.start_byte),
                    end=to_char(node.end_byte),
                )
            )
            continue
        stack.extend(reversed(node.children))

    comments.sort(key=lambda c: c.start)
    strings.sort(key=lambda s: s.start)
    return comments, strings


def _byte_to_char_offsets(
    text: str, data: bytes
) -> Callable[[int], int]:
    """Build a byte offset → character offset mapping function."""
    if len(data) == len(text):
        return lambda offset: offset

    table: list[int] = []
    for index, char in enumerate(text):
        table.extend([index] * len(char.encode("utf-8")))
    table.append(len(text))
    return lambda offset: table[offset]


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

_parser_cache: dict[str, tree_sitter.Parser] = {}


def _get_parser(language: str) -> tree_sitter.Parser | None:
    """Get or create a cached tree-sitter parser."""
    if language in _parser_cache:
        return _parser_cache[language]

    module_name = GRAMMAR_MODULES.get(language)
    if module_name is None:
        return None

    try:
        mod = importlib.import_module(module_name)
        capsule: object = mod.language()
        lang = tree_sitter.Language(capsule)
        parser = tree_sitter.Parser(lang)
        _parser_cache[language] = parser
        return parser
    except (ImportError, AttributeError):
        return None
