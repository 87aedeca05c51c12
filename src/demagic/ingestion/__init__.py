"""Source collection: resolve files and directories into source files."""

from pathlib import Path

from demagic.constants import BINARY_DETECTION_BUFFER
from demagic.ingestion.schemas import SourceFile

__all__ = [
    "SourceFile",
    "collect_sources",
    "is_binary",
    "read_source",
]


def is_binary(path: Path) -> bool:
    """Return True if the file appears to be binary (null byte in first N bytes)."""
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_DETECTION_BUFFER)
        return b"\x00" in chunk
    except OSError:
        return True


def collect_sources(
    paths: list[Path], settings: object | None = None
) -> list[SourceFile]:
    """Expand files and directories into the source files to rewrite."""
    from demagic.ingestion.sources import collect_sources as _impl

    return _impl(paths, settings)


def read_source(path: Path) -> str | None:
    """Read a source file as UTF-8 text, returning None on failure."""
    from demagic.ingestion.sources import read_source as _impl

    return _impl(path)
