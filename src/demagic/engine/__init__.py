"""Magic-number extraction engine: scan, classify and rewrite."""

from demagic.engine.classifier import admit, rejection_reason
from demagic.engine.errors import (
    DeclarationRelocationFailed,
    EmptyInput,
    ExtractionError,
    NoInsertionAnchor,
)
from demagic.engine.grammar import Grammar, grammar_for
from demagic.engine.regions import RegionIndex, build_region_index
from demagic.engine.registry import (
    ConstantRegistry,
    constant_name,
    declaration_text,
    infer_type,
)
from demagic.engine.rewriter import Rewriter, RewriteResult
from demagic.engine.scanner import scan_literals
from demagic.engine.schemas import (
    Comment,
    Declaration,
    Edit,
    ExtractionResult,
    LiteralCandidate,
    Span,
    StringRegion,
)
from demagic.engine.session import ExtractionSession, extract_magic_numbers

__all__ = [
    "Comment",
    "ConstantRegistry",
    "Declaration",
    "DeclarationRelocationFailed",
    "Edit",
    "EmptyInput",
    "ExtractionError",
    "ExtractionResult",
    "ExtractionSession",
    "Grammar",
    "LiteralCandidate",
    "NoInsertionAnchor",
    "RegionIndex",
    "RewriteResult",
    "Rewriter",
    "Span",
    "StringRegion",
    "admit",
    "build_region_index",
    "constant_name",
    "declaration_text",
    "extract_magic_numbers",
    "grammar_for",
    "infer_type",
    "rejection_reason",
    "scan_literals",
]
