"""Pydantic models for source collection."""

from pathlib import Path

from pydantic import BaseModel


class SourceFile(BaseModel):
    """A file selected for extraction."""

    path: Path
    language: str
    size_bytes: int = 0
