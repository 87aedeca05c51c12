"""Singleton logging configuration.

setup_logging() configures the root logger once per process and
quiets noisy third-party loggers. Entry points (CLI, API app) call it
before doing any work; library code only ever uses
``logging.getLogger(__name__)``.

Idempotent (guarded by a module-level flag).
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "multipart",
)

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger and suppress third-party chatter.

    Idempotent: a second call is a no-op.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(logging.WARNING)
