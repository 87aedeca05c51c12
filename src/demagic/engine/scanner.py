"""Find numeric literal candidates in a text snapshot."""

from __future__ import annotations

from collections.abc import Iterator

from demagic.engine.grammar import Grammar
from demagic.engine.schemas import LiteralCandidate


def scan_literals(
    text: str,
    grammar: Grammar,
    start: int = 0,
) -> Iterator[LiteralCandidate]:
    """Lazily yield every literal token of ``grammar`` in ``text``.

    The sequence is only valid for this exact snapshot. After any
    mutation callers must start a new scan over the new text.
    """
    for match in grammar.literal.finditer(text, start):
        yield LiteralCandidate(
            text=match.group(0),
            start=match.start(),
            end=match.end(),
        )
