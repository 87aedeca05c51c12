"""Decide whether a literal candidate is a magic number."""

from __future__ import annotations

from demagic.constants import Rejection
from demagic.engine.regions import RegionIndex
from demagic.engine.registry import ConstantRegistry
from demagic.engine.schemas import LiteralCandidate


def admit(
    candidate: LiteralCandidate,
    text: str,
    index: RegionIndex,
    registry: ConstantRegistry | None = None,
) -> bool:
    """Return True if ``candidate`` should become a named constant."""
    return rejection_reason(candidate, text, index, registry) is None


def rejection_reason(
    candidate: LiteralCandidate,
    text: str,
    index: RegionIndex,
    registry: ConstantRegistry | None = None,
) -> Rejection | None:
    """First reason ``candidate`` is not a magic number, or None.

    Only the single character on each side of the token is inspected;
    the quote checks are a boundary heuristic, not string scanning.
    """
    start, end = candidate.start, candidate.end
    before = text[start - 1] if start > 0 else ""
    after = text[end] if end < len(text) else ""

    if before.isalpha() or before == "_":
        return Rejection.IDENTIFIER_SUFFIX
    if after.isalpha():
        return Rejection.IDENTIFIER_PREFIX
    if before == '"' and after == '"':
        return Rejection.STRING_LITERAL
    if before == "'" and after == "'":
        return Rejection.CHAR_LITERAL
    if index.comment_surrounds(start, end):
        return Rejection.COMMENT
    if index.string_surrounds(start, end):
        return Rejection.STRING_LITERAL
    if index.declaration_surrounds(start, end):
        return Rejection.DECLARATION
    if registry is not None and registry.surrounds(start, end):
        return Rejection.DECLARATION
    return None
