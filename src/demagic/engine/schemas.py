"""Pydantic models for the extraction data flow."""

from pydantic import BaseModel, Field

from demagic.constants import Variant, render_report


class Span(BaseModel):
    """A half-open ``[start, end)`` range into one text snapshot."""

    start: int
    end: int

    def surrounds(self, start: int, end: int) -> bool:
        """Strict interior containment.

        A range touching either boundary is NOT surrounded, so a
        literal that ends exactly where a line comment ends is still
        considered outside it.
        """
        return start > self.start and end < self.end


class Comment(Span):
    """A line or block comment."""


class StringRegion(Span):
    """A string, char or text-block literal found by a real lexer."""


class Declaration(Span):
    """A numeric constant declaration ``[type] name = value;``.

    ``text`` is the exact source text of the declaration; tracked
    declarations must read back this text at ``[start, end)``.
    """

    name: str
    value: str
    type: str | None = None
    text: str = ""


class LiteralCandidate(BaseModel):
    """A numeric token found by the scanner in the current snapshot."""

    text: str
    start: int
    end: int


class Edit(BaseModel):
    """One in-place text mutation, expressed as an offset delta.

    ``removed`` characters at ``position`` were replaced by
    ``inserted`` characters.
    """

    position: int
    removed: int = 0
    inserted: int = 0

    @property
    def delta(self) -> int:
        return self.inserted - self.removed

    def translate(self, start: int, end: int) -> tuple[int, int] | None:
        """Map a span of the old text onto the new text.

        Returns None when the span overlaps the replaced range and
        therefore has no position in the new text.
        """
        if end <= self.position:
            return start, end
        if start >= self.position + self.removed:
            return start + self.delta, end + self.delta
        return None


class ExtractionResult(BaseModel):
    """Output of one extraction session."""

    rewritten_text: str
    extracted_values: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    declarations: list[Declaration] = Field(
        default_factory=lambda: list[Declaration]()
    )
    replacement_count: int = 0
    variant: Variant = Variant.TYPED

    @property
    def summary(self) -> str:
        return render_report(self.extracted_values)

    @property
    def changed(self) -> bool:
        return self.replacement_count > 0
