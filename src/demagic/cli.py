"""CLI entry point: ``demagic extract`` and ``demagic serve``."""

from __future__ import annotations

from demagic.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import sys  # noqa: E402
import time  # noqa: E402
from pathlib import Path  # noqa: E402

from demagic import __version__  # noqa: E402
from demagic.config import Settings  # noqa: E402
from demagic.constants import Lexer, Variant  # noqa: E402
from demagic.engine import (  # noqa: E402
    ExtractionError,
    extract_magic_numbers,
)
from demagic.ingestion import collect_sources, read_source  # noqa: E402
from demagic.logger import ExtractionLogger  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"demagic {__version__}")
        return

    if args.command == "extract":
        code = _run_extract(args)
        if code:
            sys.exit(code)
    elif args.command == "serve":
        _run_serve(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="demagic",
        description=(
            "Replace magic numbers in brace-scoped source files "
            "with named constants."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    extract = sub.add_parser(
        "extract",
        help="Extract magic numbers from files or directories",
    )
    extract.add_argument(
        "paths",
        nargs="+",
        type=str,
        help="Source files or directories",
    )
    mode = extract.add_mutually_exclusive_group()
    mode.add_argument(
        "--in-place",
        "-i",
        action="store_true",
        help="Rewrite files in place",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help=(
            "Only report; exit 1 if any file "
            "contains magic numbers"
        ),
    )
    extract.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=None,
        help="Literal grammar (default: from settings, typed)",
    )
    extract.add_argument(
        "--lexer",
        choices=[lx.value for lx in Lexer],
        default=None,
        help=(
            "Comment/string detection "
            "(default: from settings, heuristic)"
        ),
    )
    extract.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    serve = sub.add_parser(
        "serve",
        help="Start the HTTP API",
    )
    serve.add_argument(
        "--host",
        default=None,
        help="Bind address (default: from settings, 127.0.0.1)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port (default: from settings, 8002)",
    )

    return parser


def _run_extract(args: argparse.Namespace) -> int:
    """Execute the extract command and return the exit code.

    Without ``--in-place`` or ``--check`` a single file's rewritten
    text goes to stdout and the summary to stderr.
    """
    settings = Settings()
    session_logger = ExtractionLogger(
        log_dir=settings.log_dir, level=settings.log_level
    )

    try:
        sources = collect_sources(
            [Path(p) for p in args.paths], settings
        )
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    to_stdout = not (args.in_place or args.check)
    if to_stdout and len(sources) != 1:
        print(
            "Error: writing to stdout needs exactly one source file "
            f"(got {len(sources)}); use --in-place or --check",
            file=sys.stderr,
        )
        return 1

    failed = 0
    dirty = 0
    for source in sources:
        text = read_source(source.path)
        if text is None:
            print(
                f"Error: cannot read {source.path}", file=sys.stderr
            )
            failed += 1
            continue

        started = time.monotonic()
        try:
            result = extract_magic_numbers(
                text,
                settings,
                variant=args.variant,
                lexer=args.lexer,
                language=source.language,
            )
        except ExtractionError as exc:
            session_logger.log_error(
                str(source.path), exc.kind, exc.reason
            )
            print(
                f"Error: {source.path}: {exc.reason}", file=sys.stderr
            )
            failed += 1
            continue

        duration_ms = (time.monotonic() - started) * 1000
        session_logger.log_session(
            source=str(source.path),
            variant=result.variant,
            extracted_values=result.extracted_values,
            replacement_count=result.replacement_count,
            duration_ms=duration_ms,
        )

        if result.changed:
            dirty += 1

        if to_stdout:
            sys.stdout.write(result.rewritten_text)
            print(result.summary, file=sys.stderr)
            continue

        if args.in_place and result.changed:
            with open(source.path, "w", encoding="utf-8", newline="") as f:
                f.write(result.rewritten_text)

        if args.verbose or result.changed:
            print(f"{source.path}: {result.summary}")

    if args.in_place or args.check:
        print(
            f"\nDone! {len(sources)} files, {dirty} with magic numbers"
            f", {failed} failed"
        )

    if failed or (args.check and dirty):
        return 1
    return 0


def _run_serve(args: argparse.Namespace) -> None:
    """Start the HTTP API with uvicorn."""
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "demagic.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
