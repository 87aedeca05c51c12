"""Resolve CLI paths into the list of source files to rewrite."""

from __future__ import annotations

import logging
from pathlib import Path

import pathspec

from demagic.config import EXTENSION_MAP, Settings
from demagic.ingestion import is_binary
from demagic.ingestion.schemas import SourceFile

logger = logging.getLogger(__name__)


def collect_sources(
    paths: list[Path],
    settings: Settings | object | None = None,
) -> list[SourceFile]:
    """Expand ``paths`` into :class:`SourceFile` entries.

    * Files named explicitly are always taken, whatever their extension.
    * Directories are walked, skipping hidden directories, directories
      in ``settings.skip_directories`` and ``.gitignore`` matches; only
      files with a brace-scoped language extension are taken.
    * Binary files and files above ``max_file_size_bytes`` are skipped.
    """
    if settings is None:
        settings = Settings()
    cfg = settings if isinstance(settings, Settings) else Settings()
    skip_dirs = set(cfg.skip_directories)
    extensions = cfg.source_extensions

    seen: set[Path] = set()
    sources: list[SourceFile] = []

    for raw in paths:
        path = Path(raw)
        if not path.exists():
            msg = f"Path does not exist: {path}"
            raise FileNotFoundError(msg)

        if path.is_dir():
            gitignore_spec = _load_gitignore(path)
            candidates = [
                f
                for f in _walk_source_files(path, skip_dirs, gitignore_spec)
                if f.suffix.lower() in extensions
            ]
        else:
            candidates = [path]

        for file_path in candidates:
            resolved = file_path.resolve()
            if resolved in seen:
                continue
            seen.add(resolved)

            size = file_path.stat().st_size
            if size > cfg.max_file_size_bytes:
                logger.warning(
                    "event=file_skipped reason=too_large path=%s size=%d",
                    file_path,
                    size,
                )
                continue
            if is_binary(file_path):
                logger.warning(
                    "event=file_skipped reason=binary path=%s", file_path
                )
                continue

            sources.append(
                SourceFile(
                    path=file_path,
                    language=EXTENSION_MAP.get(
                        file_path.suffix.lower(), "unknown"
                    ),
                    size_bytes=size,
                )
            )

    return sources


def read_source(path: Path) -> str | None:
    """Read a file as UTF-8 text, returning None on failure."""
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        return None


def _walk_source_files(
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
) -> list[Path]:
    """Walk the file tree, respecting skip dirs and gitignore patterns.

    Symlinks that resolve outside the root are skipped.
    """
    resolved_root = root.resolve()
    return _walk_source_files_inner(
        root, root, skip_dirs, gitignore_spec, resolved_root
    )


def _walk_source_files_inner(
    current: Path,
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
    resolved_root: Path,
) -> list[Path]:
    """Recursive walk helper with symlink protection."""
    files: list[Path] = []
    for item in sorted(current.iterdir()):
        if item.is_symlink():
            resolved = item.resolve()
            if not resolved.is_relative_to(resolved_root):
                continue
        rel = str(item.relative_to(root))
        if item.is_dir():
            if item.name.startswith(".") or item.name in skip_dirs:
                continue
            if gitignore_spec.match_file(rel + "/"):
                continue
            files.extend(
                _walk_source_files_inner(
                    item, root, skip_dirs, gitignore_spec,
                    resolved_root,
                )
            )
        elif item.is_file():
            if not gitignore_spec.match_file(rel):
                files.append(item)
    return files


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitignore", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        return pathspec.PathSpec.from_lines("gitignore", [])
