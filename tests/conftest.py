"""Shared test fixtures: isolated settings, app state and Java sources."""

import os
import tempfile

# Keep session logs out of the working tree. Set at import time so
# every Settings() created by the code under test picks it up.
os.environ["DEMAGIC_LOG_DIR"] = tempfile.mkdtemp(prefix="demagic-logs-")

from pathlib import Path

import pytest

from demagic.config import Settings
from demagic.logger import ExtractionLogger
from demagic.main import app

FIXTURE_DIR = Path(__file__).resolve().parent / "fixtures" / "sample_repo"


def setup_test_app(
    tmp_path: Path, settings: Settings | None = None
) -> Settings:
    """Populate ``app.state`` the way the lifespan does.

    ASGITransport does not run the lifespan, so API tests call this
    before creating a client.
    """
    settings = settings or Settings(log_dir=tmp_path / "logs")
    app.state.settings = settings
    app.state.logger = ExtractionLogger(
        log_dir=settings.log_dir, level="WARNING"
    )
    return settings


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(log_dir=tmp_path / "logs")


@pytest.fixture
def java_source() -> str:
    """A small class with comments, strings and repeated literals."""
    return (
        "public class Timer {\n"
        "    // retry 3 times at most\n"
        "    /* default timeout 30 */\n"
        "    private int retries = 3;\n"
        "    private String label = \"2024\";\n"
        "\n"
        "    long wait(int attempt) {\n"
        "        return attempt * 250 + 250;\n"
        "    }\n"
        "\n"
        "    double scale(double x) {\n"
        "        return x * 1.5;\n"
        "    }\n"
        "}\n"
    )
