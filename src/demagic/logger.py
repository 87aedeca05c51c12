"""Structured JSON logger for extraction sessions and failures."""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from demagic.constants import ERROR_TRUNCATION_CHARS
from demagic.logging_config import LOG_DATEFMT, LOG_FORMAT

__all__ = ["ExtractionLogger", "LOG_FORMAT", "LOG_DATEFMT"]


class ExtractionLogger:
    """Structured JSON logger with per-source correlation."""

    def __init__(self, log_dir: Path, level: str = "INFO") -> None:
        self._log_dir = log_dir
        self._log_dir.mkdir(parents=True, exist_ok=True)
        self._logger = logging.getLogger("demagic.sessions")
        self._logger.setLevel(getattr(logging, level.upper()))

        if not self._logger.handlers:
            handler = logging.FileHandler(log_dir / "extraction.log")
            handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(handler)

    def log_session(
        self,
        source: str,
        variant: str,
        extracted_values: list[str],
        replacement_count: int,
        duration_ms: float,
    ) -> None:
        self._logger.info(
            json.dumps({
                "type": "session",
                "timestamp": datetime.now(UTC).isoformat(),
                "source": source,
                "variant": variant,
                "extracted": extracted_values,
                "replacements": replacement_count,
                "duration_ms": duration_ms,
            })
        )

    def log_error(
        self,
        source: str,
        kind: str,
        error: str,
    ) -> None:
        self._logger.error(
            json.dumps({
                "type": "error",
                "timestamp": datetime.now(UTC).isoformat(),
                "source": source,
                "kind": kind,
                "error": error[:ERROR_TRUNCATION_CHARS],
            })
        )
