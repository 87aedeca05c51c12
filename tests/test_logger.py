"""Tests for the structured session logger."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from demagic.logger import ExtractionLogger


@pytest.fixture
def session_logger(tmp_path: Path):
    lg = logging.getLogger("demagic.sessions")
    saved = list(lg.handlers)
    for h in saved:
        lg.removeHandler(h)
    yield ExtractionLogger(log_dir=tmp_path / "logs")
    for h in list(lg.handlers):
        h.close()
        lg.removeHandler(h)
    for h in saved:
        lg.addHandler(h)


def _records(tmp_path: Path) -> list[dict]:
    text = (tmp_path / "logs" / "extraction.log").read_text()
    return [json.loads(line) for line in text.splitlines() if line]


class TestExtractionLogger:
    def test_creates_log_dir(
        self, tmp_path: Path, session_logger: ExtractionLogger
    ) -> None:
        assert (tmp_path / "logs").is_dir()

    def test_session_record(
        self, tmp_path: Path, session_logger: ExtractionLogger
    ) -> None:
        session_logger.log_session(
            source="Foo.java",
            variant="typed",
            extracted_values=["5", "7"],
            replacement_count=3,
            duration_ms=1.5,
        )
        [record] = _records(tmp_path)
        assert record["type"] == "session"
        assert record["source"] == "Foo.java"
        assert record["extracted"] == ["5", "7"]
        assert record["replacements"] == 3
        assert "timestamp" in record

    def test_error_truncated(
        self, tmp_path: Path, session_logger: ExtractionLogger
    ) -> None:
        session_logger.log_error("api", "empty_input", "x" * 500)
        [record] = _records(tmp_path)
        assert record["type"] == "error"
        assert record["kind"] == "empty_input"
        assert len(record["error"]) == 200
