"""Shared constants used across modules.

StrEnum members are str-compatible, so settings, JSON payloads and
CLI choices work with the plain string values.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Variant(StrEnum):
    """Literal and declaration grammar used for one session.

    Ordered by increasing sophistication: ``basic`` only knows bare
    digits and ``int`` declarations, ``typed`` knows decimals,
    suffixes and the full set of numeric declaration types.
    """

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    TYPED = "typed"


class Lexer(StrEnum):
    """How comment and string regions are located."""

    HEURISTIC = "heuristic"
    TREE_SITTER = "tree_sitter"


class NumericType(StrEnum):
    """Declared type of a generated constant."""

    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


class SessionState(StrEnum):
    """States of one extraction session."""

    SCANNING = "scanning"
    CLASSIFYING = "classifying"
    MUTATING = "mutating"
    DONE = "done"


class Rejection(StrEnum):
    """Why the classifier turned a literal candidate down."""

    IDENTIFIER_SUFFIX = "identifier_suffix"
    IDENTIFIER_PREFIX = "identifier_prefix"
    STRING_LITERAL = "string_literal"
    CHAR_LITERAL = "char_literal"
    COMMENT = "comment"
    DECLARATION = "declaration"


# ── Declaration Types ────────────────────────────────────

# Type keywords the typed grammar accepts in front of a declaration
DECLARATION_TYPES: tuple[str, ...] = (
    "int",
    "long",
    "float",
    "double",
    "Integer",
    "Long",
    "Float",
    "Double",
)

# Literal suffix character → declared type
SUFFIX_TYPES: dict[str, NumericType] = {
    "d": NumericType.DOUBLE,
    "f": NumericType.FLOAT,
    "l": NumericType.LONG,
}

# ── Rewriting ────────────────────────────────────────────

DEFAULT_CONSTANT_PREFIX = "MAGIC_NUMBER_"
DEFAULT_INDENT = "\t"
DECLARATION_TEMPLATE = "private static final {type} {name} = {value};"
SCOPE_OPEN = "{"

# ── Report ───────────────────────────────────────────────

REPORT_PREFIX = "Extracted: "
REPORT_SEPARATOR = ";"
NOT_FOUND_MESSAGE = "No magic number found!"

# ── Misc ─────────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
ERROR_TRUNCATION_CHARS = 200

# ── Auth Exempt Paths ────────────────────────────────────

AUTH_EXEMPT_PATHS = frozenset({
    "/api/health",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
})


def render_report(values: list[str]) -> str:
    """Render the end-of-session summary for the extracted values.

    Every value is followed by the separator, so ``["5", "7"]``
    renders as ``Extracted: 5;7;``.
    """
    if not values:
        return NOT_FOUND_MESSAGE
    return REPORT_PREFIX + "".join(
        f"{v}{REPORT_SEPARATOR}" for v in values
    )
