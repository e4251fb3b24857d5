"""Resume routes for the API."""

from __future__ import annotations

import base64
import unicodedata
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from tailored_resume.api.schemas.resumes import (
    BatchItemResponse,
    DocumentBlockResponse,
    RendererResponse,
    ResumeBatchRequest,
    ResumeBatchResponse,
    ResumeDownloadRequest,
    ResumePreviewRequest,
    ResumePreviewResponse,
)
from tailored_resume.models import DocumentBlock, InvalidRecordError, block_to_dict
from tailored_resume.renderers import get_renderer, list_renderers
from tailored_resume.renderers.base import DocumentRenderer
from tailored_resume.services.payload import PayloadError
from tailored_resume.services.resume_generator import (
    DEFAULT_STEM,
    BatchJob,
    build_blocks,
    generate_batch,
    resume_file_name,
)

router = APIRouter(prefix="/resumes", tags=["resumes"])


def _content_disposition(file_name: str) -> str:
    """Build an attachment header that survives non-ASCII file names.

    Header values go out as latin-1, so a non-ASCII name is sent as an
    ASCII ``filename`` fallback plus an RFC 5987 ``filename*`` value.
    """
    if file_name.isascii():
        return f'attachment; filename="{file_name}"'

    stem, _, extension = file_name.rpartition(".")
    folded = unicodedata.normalize("NFKD", stem).encode("ascii", "ignore").decode("ascii")
    folded = folded.strip("._ ") or DEFAULT_STEM
    return (
        f'attachment; filename="{folded}.{extension}"; '
        f"filename*=UTF-8''{quote(file_name, safe='')}"
    )


def _resolve_renderer(name: str) -> DocumentRenderer:
    """Return the renderer for *name*.

    Raises:
        HTTPException: 400 if the format is unknown.
    """
    try:
        return get_renderer(name)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from None


def _assemble_or_422(payload: dict) -> tuple[DocumentBlock, ...]:
    try:
        return build_blocks(payload)
    except (InvalidRecordError, PayloadError) as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from None


@router.get("/formats", response_model=list[RendererResponse])
def list_formats() -> list[RendererResponse]:
    """List the output formats a resume can be downloaded in."""
    results = []
    for name in list_renderers():
        renderer = get_renderer(name)
        results.append(
            RendererResponse(
                name=renderer.name,
                extension=renderer.extension,
                media_type=renderer.media_type,
            )
        )
    return results


@router.post("/preview", response_model=ResumePreviewResponse)
def preview_resume(data: ResumePreviewRequest) -> ResumePreviewResponse:
    """Assemble a resume and return its blocks for on-screen preview."""
    blocks = _assemble_or_422(data.resume)
    return ResumePreviewResponse(
        blocks=[DocumentBlockResponse(**block_to_dict(block)) for block in blocks]
    )


@router.post(
    "/download",
    responses={
        200: {
            "content": {
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document": {},
                "application/pdf": {},
                "text/plain": {},
            }
        }
    },
)
def download_resume(data: ResumeDownloadRequest) -> Response:
    """Render a resume and return it as a file download."""
    renderer = _resolve_renderer(data.format)
    blocks = _assemble_or_422(data.resume)

    file_name = resume_file_name(data.job_title, data.company, renderer.extension)
    return Response(
        content=renderer.render(blocks),
        media_type=renderer.media_type,
        headers={"Content-Disposition": _content_disposition(file_name)},
    )


@router.post("/batch", response_model=ResumeBatchResponse)
def batch_resumes(data: ResumeBatchRequest) -> ResumeBatchResponse:
    """Render one resume per job posting.

    Jobs run concurrently and fail independently: an invalid payload is
    reported on its own item while the other items are still rendered.
    """
    renderer = _resolve_renderer(data.format)
    jobs = [BatchJob(job.resume, job.job_title, job.company) for job in data.jobs]
    results = generate_batch(jobs, renderer.name)

    items = [
        BatchItemResponse(
            index=result.index,
            file_name=result.file_name,
            ok=result.ok,
            error=result.error,
            content_base64=(
                base64.b64encode(result.content).decode("ascii")
                if result.content is not None
                else None
            ),
        )
        for result in results
    ]
    return ResumeBatchResponse(
        format=renderer.name,
        media_type=renderer.media_type,
        failed=sum(1 for item in items if not item.ok),
        results=items,
    )
