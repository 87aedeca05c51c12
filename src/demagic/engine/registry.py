"""Deduplicate literal values into named constants and track them."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from demagic.constants import (
    DECLARATION_TEMPLATE,
    DEFAULT_CONSTANT_PREFIX,
    SUFFIX_TYPES,
    NumericType,
)
from demagic.engine.errors import DeclarationRelocationFailed
from demagic.engine.grammar import Grammar
from demagic.engine.regions import RegionIndex
from demagic.engine.schemas import Declaration, Edit

logger = logging.getLogger(__name__)


def constant_name(value: str, prefix: str = DEFAULT_CONSTANT_PREFIX) -> str:
    """``3.14`` → ``MAGIC_NUMBER_3_14``."""
    return prefix + value.replace(".", "_")


def infer_type(value: str) -> NumericType:
    """Declared type from the literal's suffix or decimal point."""
    suffix_type = SUFFIX_TYPES.get(value[-1:])
    if suffix_type is not None:
        return suffix_type
    if "." in value:
        return NumericType.DOUBLE
    return NumericType.INT


def declaration_text(
    name: str, value: str, type_: str = NumericType.INT
) -> str:
    return DECLARATION_TEMPLATE.format(type=type_, name=name, value=value)


class ConstantRegistry:
    """Constants generated during one session, keyed by name.

    Spans are kept current by feeding every :class:`Edit` the rewriter
    performs through :meth:`apply_edits`; :meth:`verify` then checks
    that each declaration still reads back its own text.
    """

    def __init__(
        self,
        grammar: Grammar,
        prefix: str = DEFAULT_CONSTANT_PREFIX,
    ) -> None:
        self._grammar = grammar
        self._prefix = prefix
        self._declarations: dict[str, Declaration] = {}

    def __len__(self) -> int:
        return len(self._declarations)

    def __contains__(self, name: object) -> bool:
        return name in self._declarations

    @property
    def declarations(self) -> list[Declaration]:
        """Generated declarations in the order they were created."""
        return list(self._declarations.values())

    def name_for(self, value: str) -> str:
        return constant_name(value, self._prefix)

    def type_for(self, value: str) -> NumericType:
        """Suffixes always pick the type; a bare decimal point only
        means ``double`` for grammars that infer types.
        """
        if self._grammar.infers_types:
            return infer_type(value)
        return SUFFIX_TYPES.get(value[-1:], NumericType.INT)

    def text_for(self, value: str) -> str:
        return declaration_text(
            self.name_for(value), value, self.type_for(value)
        )

    def is_declared(self, name: str, index: RegionIndex | None = None) -> bool:
        """Declared in this session, or already present in the text.

        A constant left behind by an earlier run is reused rather
        than declared a second time.
        """
        if name in self._declarations:
            return True
        return index is not None and name in index.declaration_names

    def register(self, value: str, start: int) -> Declaration:
        """Record the declaration for ``value`` inserted at ``start``."""
        name = self.name_for(value)
        if name in self._declarations:
            msg = f"Constant {name} is already declared"
            raise ValueError(msg)
        text = self.text_for(value)
        decl = Declaration(
            name=name,
            value=value,
            type=self.type_for(value),
            text=text,
            start=start,
            end=start + len(text),
        )
        self._declarations[name] = decl
        logger.debug(
            "event=constant_registered name=%s start=%d", name, start
        )
        return decl

    def surrounds(self, start: int, end: int) -> bool:
        return any(
            d.surrounds(start, end) for d in self._declarations.values()
        )

    def apply_edits(self, edits: Iterable[Edit]) -> None:
        """Shift every tracked declaration past the given edits."""
        for edit in edits:
            for decl in self._declarations.values():
                moved = edit.translate(decl.start, decl.end)
                if moved is None:
                    msg = (
                        f"Edit at offset {edit.position} overlaps "
                        f"declaration {decl.name} "
                        f"[{decl.start}, {decl.end})"
                    )
                    raise DeclarationRelocationFailed(decl.name, msg)
                decl.start, decl.end = moved

    def verify(self, text: str) -> None:
        """Raise if any declaration lost track of its text."""
        for decl in self._declarations.values():
            if text[decl.start : decl.end] != decl.text:
                msg = (
                    f"Declaration {decl.name} not found at "
                    f"[{decl.start}, {decl.end})"
                )
                raise DeclarationRelocationFailed(decl.name, msg)
