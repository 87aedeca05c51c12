"""Drive one extraction session over one text buffer."""

from __future__ import annotations

import logging

from demagic.config import GRAMMAR_MODULES, Settings
from demagic.constants import SCOPE_OPEN, Lexer, SessionState, Variant
from demagic.engine.classifier import admit
from demagic.engine.errors import EmptyInput, ExtractionError
from demagic.engine.grammar import grammar_for
from demagic.engine.regions import RegionIndex, build_region_index
from demagic.engine.registry import ConstantRegistry
from demagic.engine.rewriter import Rewriter
from demagic.engine.scanner import scan_literals
from demagic.engine.schemas import Edit, ExtractionResult, LiteralCandidate

logger = logging.getLogger(__name__)


class ExtractionSession:
    """Scan → classify → rewrite until no magic number is left.

    Every accepted literal mutates the buffer, so each pass scans a
    fresh snapshot with a region index built for that snapshot.
    Generated declarations and the insertion anchor follow the buffer
    through the edit deltas the rewriter reports.

    A pass resumes right after the previous replacement: edits only
    ever add exclusions for the text before it, so every candidate
    rejected there stays rejected. The one exception is a declaration
    inserted into a comment or string (the first ``{`` sits inside
    one), which may split that region; the pass then resumes at the
    insertion point.
    """

    def __init__(
        self,
        source: str | None,
        settings: Settings | None = None,
        *,
        variant: Variant | str | None = None,
        lexer: Lexer | str | None = None,
        language: str = "java",
    ) -> None:
        if not source:
            msg = "No document text to extract magic numbers from"
            raise EmptyInput(msg)
        if settings is None:
            settings = Settings()

        self._grammar = grammar_for(variant or settings.variant)
        self._language = language
        self._lexer = Lexer(lexer or settings.lexer)
        if (
            self._lexer == Lexer.TREE_SITTER
            and language not in GRAMMAR_MODULES
        ):
            logger.warning(
                "event=lexer_unavailable lexer=%s language=%s fallback=%s",
                self._lexer,
                language,
                Lexer.HEURISTIC,
            )
            self._lexer = Lexer.HEURISTIC
        self._registry = ConstantRegistry(
            self._grammar, settings.constant_prefix
        )
        self._rewriter = Rewriter(settings.indent)
        self._text = source
        self._state = SessionState.SCANNING
        self._extracted: list[str] = []
        self._replacements = 0
        self._resume = 0

        # Located once; afterwards it follows the same brace
        anchor = source.find(SCOPE_OPEN)
        self._anchor: int | None = anchor if anchor >= 0 else None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def text(self) -> str:
        return self._text

    @property
    def anchor(self) -> int | None:
        return self._anchor

    @property
    def resume_offset(self) -> int:
        """Offset the next pass starts scanning from."""
        return self._resume

    @property
    def registry(self) -> ConstantRegistry:
        return self._registry

    def run(self) -> ExtractionResult:
        """Run to completion and return the rewritten text and report."""
        while self._state != SessionState.DONE:
            self.step()

        logger.info(
            "event=session_done variant=%s extracted=%d replacements=%d",
            self._grammar.variant,
            len(self._extracted),
            self._replacements,
        )
        return ExtractionResult(
            rewritten_text=self._text,
            extracted_values=list(self._extracted),
            declarations=[
                d.model_copy() for d in self._registry.declarations
            ],
            replacement_count=self._replacements,
            variant=self._grammar.variant,
        )

    def step(self) -> bool:
        """Make one pass over the current text.

        Returns True after rewriting the first admitted literal, or
        False (and moves to DONE) when the pass admits nothing.
        """
        if self._state == SessionState.DONE:
            return False

        index = build_region_index(
            self._text, self._grammar, self._lexer, self._language
        )
        for candidate in scan_literals(
            self._text, self._grammar, self._resume
        ):
            self._state = SessionState.CLASSIFYING
            if admit(candidate, self._text, index, self._registry):
                self._state = SessionState.MUTATING
                self._extract(candidate, index)
                self._state = SessionState.SCANNING
                return True
            self._state = SessionState.SCANNING

        self._state = SessionState.DONE
        return False

    def _extract(
        self, candidate: LiteralCandidate, index: RegionIndex
    ) -> None:
        value = candidate.text
        name = self._registry.name_for(value)
        declaration = (
            None
            if self._registry.is_declared(name, index)
            else self._registry.text_for(value)
        )

        result = self._rewriter.apply(
            self._text, candidate, name, declaration, self._anchor
        )

        split = self._anchor is not None and (
            index.comment_surrounds(self._anchor, self._anchor + 1)
            or index.string_surrounds(self._anchor, self._anchor + 1)
        )

        self._registry.apply_edits(result.edits)
        if result.declaration_start is not None:
            self._registry.register(value, result.declaration_start)
        if self._anchor is not None:
            self._anchor = _follow(self._anchor, result.edits)

        self._resume = result.replacement_start + len(name)
        if split and declaration is not None and self._anchor is not None:
            self._resume = min(self._resume, self._anchor + 1)

        self._text = result.text
        self._registry.verify(self._text)

        self._replacements += 1
        if value not in self._extracted:
            self._extracted.append(value)
        logger.debug(
            "event=literal_extracted value=%s name=%s declared=%s",
            value,
            name,
            declaration is not None,
        )


def _follow(offset: int, edits: list[Edit]) -> int:
    """Translate a single-character position through ``edits``."""
    for edit in edits:
        moved = edit.translate(offset, offset + 1)
        if moved is None:
            msg = f"Edit at offset {edit.position} removed the anchor"
            raise ExtractionError(msg)
        offset = moved[0]
    return offset


def extract_magic_numbers(
    source_text: str | None,
    settings: Settings | None = None,
    *,
    variant: Variant | str | None = None,
    lexer: Lexer | str | None = None,
    language: str = "java",
) -> ExtractionResult:
    """Replace every magic number in ``source_text`` with a constant.

    Raises :class:`~demagic.engine.errors.ExtractionError` subclasses
    on empty input, a missing ``{`` when a constant must be declared,
    or a tracked declaration losing its position.
    """
    session = ExtractionSession(
        source_text,
        settings,
        variant=variant,
        lexer=lexer,
        language=language,
    )
    return session.run()
