"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from demagic.logging_config import setup_logging

setup_logging()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from demagic import __version__  # noqa: E402
from demagic.api.middleware.auth import ApiKeyMiddleware  # noqa: E402
from demagic.api.routes import extract, health  # noqa: E402
from demagic.config import Settings  # noqa: E402
from demagic.logger import ExtractionLogger  # noqa: E402

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = _settings

    app.state.settings = settings
    app.state.logger = ExtractionLogger(
        log_dir=settings.log_dir, level=settings.log_level
    )

    if not settings.api_key:
        _logger.warning(
            "event=no_api_key action=all_endpoints_public"
        )

    yield


app = FastAPI(
    title="demagic",
    description="Replace magic numbers with named constants",
    version=__version__,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

# Middleware stack (Starlette LIFO: last added = outermost = runs first)
# CORS must be outermost so OPTIONS preflight is answered before
# ApiKeyMiddleware rejects for missing X-API-Key.
_settings = Settings()
_cors_origins = [
    o.strip()
    for o in _settings.cors_origins.split(",")
    if o.strip()
]

app.add_middleware(ApiKeyMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-API-Key"],
    allow_credentials=False,
)

app.include_router(health.router)
app.include_router(extract.router)
