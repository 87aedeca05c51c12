"""Apply the two text mutations of one extracted literal."""

from __future__ import annotations

from pydantic import BaseModel, Field

from demagic.constants import DEFAULT_INDENT
from demagic.engine.errors import ExtractionError, NoInsertionAnchor
from demagic.engine.schemas import Edit, LiteralCandidate


class RewriteResult(BaseModel):
    """New text plus the edits that produced it, in order.

    ``declaration_start`` is the offset of the inserted declaration
    in the new text, or None when nothing was inserted.
    """

    text: str
    edits: list[Edit] = Field(default_factory=lambda: list[Edit]())
    declaration_start: int | None = None
    replacement_start: int


class Rewriter:
    """Insert declarations after the anchor and replace occurrences."""

    def __init__(self, indent: str = DEFAULT_INDENT) -> None:
        self._indent = indent

    def apply(
        self,
        text: str,
        candidate: LiteralCandidate,
        constant_name: str,
        declaration: str | None,
        anchor: int | None,
    ) -> RewriteResult:
        """Rewrite one occurrence of ``candidate``.

        With a ``declaration`` (first occurrence of a value) the
        declaration goes on its own indented line right after the
        ``{`` at ``anchor``; the occurrence is then replaced by
        ``constant_name``. Without one only the replacement happens.
        """
        if text[candidate.start : candidate.end] != candidate.text:
            msg = (
                f"Literal {candidate.text!r} not found at "
                f"[{candidate.start}, {candidate.end})"
            )
            raise ExtractionError(msg)

        edits: list[Edit] = []
        start, end = candidate.start, candidate.end
        decl_span: tuple[int, int] | None = None

        if declaration is not None:
            if anchor is None:
                msg = (
                    f"Cannot declare {constant_name}: "
                    "no '{' found to insert it after"
                )
                raise NoInsertionAnchor(msg)
            inserted = "\n" + self._indent + declaration
            position = anchor + 1
            text = text[:position] + inserted + text[position:]
            insert = Edit(position=position, inserted=len(inserted))
            edits.append(insert)
            start, end = _moved(insert, start, end)
            decl_start = position + 1 + len(self._indent)
            decl_span = (decl_start, decl_start + len(declaration))

        text = text[:start] + constant_name + text[end:]
        replace = Edit(
            position=start,
            removed=end - start,
            inserted=len(constant_name),
        )
        edits.append(replace)
        if decl_span is not None:
            decl_span = _moved(replace, *decl_span)

        return RewriteResult(
            text=text,
            edits=edits,
            declaration_start=decl_span[0] if decl_span else None,
            replacement_start=start,
        )


def _moved(edit: Edit, start: int, end: int) -> tuple[int, int]:
    moved = edit.translate(start, end)
    if moved is None:
        msg = f"Edit at offset {edit.position} overlaps [{start}, {end})"
        raise ExtractionError(msg)
    return moved
