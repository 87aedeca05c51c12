"""Environment-based configuration and application constants."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from demagic.constants import (
    DEFAULT_CONSTANT_PREFIX,
    DEFAULT_INDENT,
    Lexer,
    Variant,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and ``DEMAGIC_``-prefixed environment variables."""

    # Rewriting
    variant: Variant = Variant.TYPED
    lexer: Lexer = Lexer.HEURISTIC
    constant_prefix: str = DEFAULT_CONSTANT_PREFIX
    indent: str = DEFAULT_INDENT

    # Logging
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    # Batch processing
    max_file_size_bytes: int = 5_242_880  # 5MB
    extensions: Annotated[list[str], NoDecode] = []
    skip_directories: Annotated[list[str], NoDecode] = [
        "node_modules",
        "vendor",
        ".venv",
        "__pycache__",
        "build",
        "dist",
        "target",
        "out",
        ".git",
        ".svn",
        ".hg",
        ".gradle",
        ".idea",
    ]

    # API
    api_key: str = ""
    cors_origins: str = "http://localhost:3000"
    host: str = "127.0.0.1"
    port: int = 8002

    @field_validator("extensions", "skip_directories", mode="before")
    @classmethod
    def _parse_list(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, v: list[str]) -> list[str]:
        normalized: list[str] = []
        for ext in v:
            ext = ext.lower()
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in EXTENSION_MAP:
                logger.warning(
                    "Extension %s has no known brace-scoped language",
                    ext,
                )
            normalized.append(ext)
        return normalized

    @field_validator("constant_prefix")
    @classmethod
    def _validate_prefix(cls, v: str) -> str:
        if not v or not v.isidentifier():
            msg = f"constant_prefix must be a valid identifier: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("indent")
    @classmethod
    def _validate_indent(cls, v: str) -> str:
        if v.strip():
            msg = "indent must contain only whitespace"
            raise ValueError(msg)
        return v

    @property
    def source_extensions(self) -> set[str]:
        """Extensions processed in batch mode (all known when unset)."""
        return set(self.extensions) if self.extensions else set(
            EXTENSION_MAP
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DEMAGIC_",
        "extra": "ignore",
    }


# File extension → language name mapping (brace-scoped languages only:
# constants are inserted right after the first "{")
EXTENSION_MAP: dict[str, str] = {
    # Java
    ".java": "java",
    # Kotlin
    ".kt": "kotlin",
    ".kts": "kotlin",
    # Scala
    ".scala": "scala",
    # Groovy
    ".groovy": "groovy",
    # C#
    ".cs": "c_sharp",
    # C
    ".c": "c",
    ".h": "c",
    # C++
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    # JavaScript
    ".js": "javascript",
    ".mjs": "javascript",
    # TypeScript
    ".ts": "typescript",
    # Dart
    ".dart": "dart",
}

# Grammar module name → import path for tree-sitter grammars
GRAMMAR_MODULES: dict[str, str] = {
    "java": "tree_sitter_java",
}
