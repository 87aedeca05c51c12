"""Magic-number extraction over a full text buffer."""

from __future__ import annotations

import asyncio
import logging
import time

from fastapi import APIRouter, Request

from demagic.api.schemas import (
    APIResponse,
    ExtractRequest,
    ExtractResponseData,
)
from demagic.engine import ExtractionError, extract_magic_numbers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["extract"])


@router.post("/extract")
async def extract(
    request: Request, body: ExtractRequest
) -> APIResponse:
    """Rewrite ``body.source`` and return the whole new buffer.

    Structural failures (empty input, no ``{`` to declare constants
    after) come back as ``success=false`` with the reason.
    """
    settings = request.app.state.settings
    session_logger = request.app.state.logger

    size = len(body.source.encode("utf-8"))
    if size > settings.max_file_size_bytes:
        return APIResponse(
            success=False,
            error=(
                f"Source is {size} bytes; the limit is "
                f"{settings.max_file_size_bytes}"
            ),
            metadata={"kind": "too_large"},
        )

    started = time.monotonic()
    try:
        result = await asyncio.to_thread(
            extract_magic_numbers,
            body.source,
            settings,
            variant=body.variant,
            lexer=body.lexer,
            language=body.language,
        )
    except ExtractionError as exc:
        session_logger.log_error("api", exc.kind, exc.reason)
        return APIResponse(
            success=False,
            error=exc.reason,
            metadata={"kind": exc.kind},
        )

    duration_ms = (time.monotonic() - started) * 1000
    session_logger.log_session(
        source="api",
        variant=result.variant,
        extracted_values=result.extracted_values,
        replacement_count=result.replacement_count,
        duration_ms=duration_ms,
    )
    return APIResponse(
        success=True,
        data=ExtractResponseData(
            rewritten_text=result.rewritten_text,
            extracted_values=result.extracted_values,
            summary=result.summary,
            replacement_count=result.replacement_count,
            changed=result.changed,
        ),
        metadata={
            "variant": result.variant,
            "duration_ms": round(duration_ms, 2),
        },
    )
