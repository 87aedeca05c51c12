"""Optional API key authentication middleware."""

from __future__ import annotations

import hmac

from fastapi import Request, Response
from starlette.middleware.base import (
    BaseHTTPMiddleware,
    RequestResponseEndpoint,
)
from starlette.responses import JSONResponse

from demagic.constants import AUTH_EXEMPT_PATHS


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Check X-API-Key header if api_key is configured.

    If ``Settings.api_key`` is empty, all requests pass through.
    Health and docs endpoints are always exempt.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path in AUTH_EXEMPT_PATHS:
            return await call_next(request)

        settings = request.app.state.settings
        if not settings.api_key:
            return await call_next(request)

        provided = request.headers.get("X-API-Key", "")
        if not hmac.compare_digest(provided, settings.api_key):
            return JSONResponse(
                status_code=401,
                content={
                    "success": False,
                    "error": "Invalid or missing API key",
                    "data": None,
                    "metadata": {},
                },
            )

        return await call_next(request)
