"""Terminal failures of an extraction session.

None of these are recoverable mid-session: the session stops and the
caller gets the reason, never a half-rewritten buffer.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for structural invariant violations."""

    kind = "extraction_error"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class EmptyInput(ExtractionError):
    """There is no document text to work on."""

    kind = "empty_input"


class NoInsertionAnchor(ExtractionError):
    """A constant must be declared but the text has no ``{``."""

    kind = "no_insertion_anchor"


class DeclarationRelocationFailed(ExtractionError):
    """A tracked declaration no longer reads back its own text."""

    kind = "declaration_relocation_failed"

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(reason)
        self.name = name
