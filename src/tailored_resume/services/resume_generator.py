"""Resume generation service.

Turns an upstream LLM payload into document blocks and renders them
with a pluggable renderer. Batch generation runs independent jobs on a
bounded thread pool.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tailored_resume.config import get_settings
from tailored_resume.models.blocks import DocumentBlock
from tailored_resume.renderers import get_renderer
from tailored_resume.renderers.latex import LatexRenderer
from tailored_resume.services.assembler import assemble
from tailored_resume.services.payload import record_from_payload

logger = logging.getLogger(__name__)

__all__ = [
    "BatchItemResult",
    "BatchJob",
    "build_blocks",
    "generate_batch",
    "generate_resume_bytes",
    "generate_resume_file",
    "generate_resume_pdf_latex",
    "resume_file_name",
]

DEFAULT_STEM = "tailored_resume"


@dataclass(frozen=True, slots=True)
class BatchJob:
    """One resume to generate as part of a batch."""

    payload: Mapping[str, Any]
    job_title: str | None = None
    company: str | None = None


@dataclass(slots=True)
class BatchItemResult:
    """Outcome of one batch job, in the same position as its job.

    Exactly one of ``content`` and ``error`` is set.
    """

    index: int
    file_name: str
    content: bytes | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# -----------------------------------------------------------------------
# Internal helpers


def _sanitize_filename(name: str) -> str:
    """Remove or replace characters that are invalid in filenames."""
    sanitized = re.sub(r'[<>:"/\\|?*]', "_", name)
    sanitized = re.sub(r"\s+", "_", sanitized)
    return sanitized.strip("._ ")


def _resolve_format(fmt: str | None) -> str:
    return (fmt or get_settings().default_format).lower()


# -----------------------------------------------------------------------
# Public API


def resume_file_name(
    job_title: str | None,
    company: str | None,
    extension: str,
) -> str:
    """Return a download name like ``Data_Analyst_Acme_Resume.docx``.

    Falls back to ``tailored_resume.<ext>`` when neither part is usable.
    """
    parts = [_sanitize_filename(part) for part in (job_title, company) if part]
    parts = [part for part in parts if part]
    if not parts:
        return f"{DEFAULT_STEM}.{extension}"
    return f"{'_'.join(parts)}_Resume.{extension}"


def build_blocks(payload: Mapping[str, Any]) -> tuple[DocumentBlock, ...]:
    """Parse *payload* and assemble its document blocks.

    Raises:
        PayloadError: If *payload* is not a mapping.
        InvalidRecordError: If the payload has no full name.
    """
    return assemble(record_from_payload(payload))


def generate_resume_bytes(payload: Mapping[str, Any], fmt: str | None = None) -> bytes:
    """Render *payload* in format *fmt* (default from settings).

    Raises:
        ValueError: If *fmt* is not a registered renderer.
        InvalidRecordError: If the payload has no full name.
    """
    renderer = get_renderer(_resolve_format(fmt))
    return renderer.render(build_blocks(payload))


def generate_resume_file(
    payload: Mapping[str, Any],
    output_dir: Path | None = None,
    fmt: str | None = None,
    *,
    file_name: str | None = None,
) -> Path:
    """Render *payload* and write it into *output_dir*.

    Args:
        payload: Upstream LLM payload.
        output_dir: Target directory, created if missing. Defaults to the
            configured output directory.
        fmt: Registered renderer name.
        file_name: Output file name; defaults to ``tailored_resume.<ext>``.

    Returns:
        Path of the written file.
    """
    renderer = get_renderer(_resolve_format(fmt))
    content = renderer.render(build_blocks(payload))

    output_dir = Path(output_dir) if output_dir is not None else get_settings().output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / (file_name or f"{DEFAULT_STEM}.{renderer.extension}")
    path.write_bytes(content)
    logger.info("Wrote %s resume to %s", renderer.name, path)
    return path


def generate_resume_pdf_latex(
    payload: Mapping[str, Any],
    output_path: Path,
    *,
    compiler: str = "pdflatex",
) -> Path:
    """Generate a PDF resume via LaTeX compilation.

    Requires *compiler* (``pdflatex`` or ``latexmk``) to be installed
    on the system.

    Args:
        payload: Upstream LLM payload.
        output_path: Desired output file path **without** extension.
        compiler: LaTeX compiler to invoke.

    Returns:
        The ``Path`` of the generated ``.pdf``.
    """
    doc = LatexRenderer().build(build_blocks(payload))

    # PyLaTeX appends .pdf/.tex automatically
    doc.generate_pdf(
        str(output_path),
        clean_tex=False,
        compiler=compiler,
    )
    return Path(f"{output_path}.pdf")


def _run_job(index: int, job: BatchJob, fmt: str) -> BatchItemResult:
    renderer = get_renderer(fmt)
    result = BatchItemResult(
        index=index,
        file_name=resume_file_name(job.job_title, job.company, renderer.extension),
    )
    try:
        result.content = renderer.render(build_blocks(job.payload))
    except ValueError as exc:
        logger.warning("Batch job %d (%s) failed: %s", index, result.file_name, exc)
        result.error = str(exc)
    except Exception as exc:
        logger.exception("Failed to render batch job %d (%s)", index, result.file_name)
        result.error = f"Rendering failed: {exc}"
    return result


def generate_batch(
    jobs: Sequence[BatchJob],
    fmt: str | None = None,
    *,
    max_workers: int | None = None,
) -> list[BatchItemResult]:
    """Render several resumes concurrently.

    Jobs share no state, so they run on a thread pool limited to
    *max_workers* (default ``TAILORED_RESUME_BATCH_CONCURRENCY``).
    A job whose payload is invalid is reported in its result and does
    not affect the others.

    Returns:
        One result per job, in input order.
    """
    fmt = _resolve_format(fmt)
    get_renderer(fmt)  # fail fast on an unknown format
    if not jobs:
        return []

    workers = max(1, max_workers or get_settings().batch_concurrency)
    logger.info("Generating %d resumes (%s) with %d workers", len(jobs), fmt, workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_run_job, i, job, fmt) for i, job in enumerate(jobs)]
        results = [future.result() for future in futures]

    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning("%d of %d batch jobs failed", failed, len(results))
    return results
