"""Request/response schemas for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field

from demagic.constants import Lexer, Variant


class APIResponse(BaseModel):
    """Standard response envelope for all API endpoints."""

    success: bool
    data: Any | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class ExtractRequest(BaseModel):
    """Request body for POST /api/extract."""

    source: str
    variant: Variant | None = None
    lexer: Lexer | None = None
    language: str = "java"


class ExtractResponseData(BaseModel):
    """Payload of a successful extraction."""

    rewritten_text: str
    extracted_values: list[str]
    summary: str
    replacement_count: int
    changed: bool
