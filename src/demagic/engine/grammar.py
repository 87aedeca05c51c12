"""Literal and declaration grammars, one per :class:`Variant`.

Each grammar is an immutable value handed explicitly to the scanner
and the region index, so nothing depends on compiled patterns cached
at module level between sessions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from demagic.constants import DECLARATION_TYPES, Variant


@dataclass(frozen=True)
class Grammar:
    """Token patterns for one variant.

    ``declaration`` must define the ``name`` and ``value`` groups and
    may define ``type``.
    """

    variant: Variant
    literal: re.Pattern[str]
    declaration: re.Pattern[str]
    infers_types: bool = False


def grammar_for(variant: Variant | str) -> Grammar:
    """Build the grammar for ``variant``."""
    variant = Variant(variant)
    if variant == Variant.BASIC:
        return Grammar(
            variant=variant,
            literal=re.compile(r"\d+"),
            declaration=re.compile(
                r"\bint\s+(?P<name>\w+)\s*=\s*(?P<value>\d+)\s*;"
            ),
        )
    if variant == Variant.INTERMEDIATE:
        return Grammar(
            variant=variant,
            literal=re.compile(r"\d+[dfl]?"),
            declaration=re.compile(
                r"(?P<name>\w+)\s*=\s*(?P<value>\d+\.?\d*[dfl]?);"
            ),
        )
    types = "|".join(DECLARATION_TYPES)
    return Grammar(
        variant=variant,
        literal=re.compile(r"\d+(?:\.\d+)?[dfl]?"),
        declaration=re.compile(
            rf"\b(?P<type>{types})\s+(?P<name>\w+)\s*=\s*"
            r"(?P<value>\d+(?:\.\d+)?[dfl]?)\s*;"
        ),
        infers_types=True,
    )
