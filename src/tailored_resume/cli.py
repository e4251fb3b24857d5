"""Command-line entry point: render a tailored resume payload to a file."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from tailored_resume.config import get_settings
from tailored_resume.renderers import get_renderer, list_renderers
from tailored_resume.renderers.text import TextRenderer
from tailored_resume.services.payload import load_payload
from tailored_resume.services.resume_generator import (
    build_blocks,
    generate_resume_file,
    resume_file_name,
)


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="tailored-resume",
        description="Render a generate_tailored_resume JSON payload as a document.",
    )
    parser.add_argument("payload", help="Path to the JSON payload ('-' reads stdin)")
    parser.add_argument(
        "-f",
        "--format",
        default=settings.default_format,
        choices=list_renderers(),
        help="Output format (default: %(default)s)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=settings.output_dir,
        help="Directory for the generated file (default: %(default)s)",
    )
    parser.add_argument("--name", help="Output file name (default derived from job/company)")
    parser.add_argument("--job-title", help="Target job title, used in the file name")
    parser.add_argument("--company", help="Target company, used in the file name")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print a plain-text preview instead of writing a file",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def _read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, render the payload and report the result.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        payload = load_payload(_read_payload(args.payload))
        if args.preview:
            print(TextRenderer().render_text(build_blocks(payload)), end="")
            return 0

        renderer = get_renderer(args.format)
        file_name = args.name or resume_file_name(args.job_title, args.company, renderer.extension)
        path = generate_resume_file(payload, args.output_dir, args.format, file_name=file_name)
    except OSError as exc:
        print(f"❌ Could not read or write file: {exc}")
        return 1
    except ValueError as exc:
        print(f"❌ Error: {exc}")
        return 1

    print(f"✅ Resume written to {path}")
    return 0


def main() -> int:
    """Entry point for the CLI application."""
    try:
        return run_cli()
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user. Exiting.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
