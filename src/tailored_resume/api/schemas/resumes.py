"""Pydantic schemas for resume API endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TextRunResponse(BaseModel):
    """A styled span inside a document block."""

    model_config = ConfigDict(from_attributes=True)

    text: str
    bold: bool = False
    italic: bool = False
    color: str
    size: str
    link: str | None = None


class DocumentBlockResponse(BaseModel):
    """Response schema for one assembled document block."""

    kind: str = Field(..., description="header, paragraph, bulletItem or spacer")
    text: str
    runs: list[TextRunResponse] = []
    alignment: str
    indent: int = 0
    spacing_before: int = 0
    spacing_after: int = 0
    level: int = 1


class ResumePreviewRequest(BaseModel):
    """Request schema for previewing an assembled resume."""

    resume: dict[str, Any] = Field(
        ..., description="generate_tailored_resume payload including source_content_analysis"
    )


class ResumePreviewResponse(BaseModel):
    """Assembled blocks in display order."""

    blocks: list[DocumentBlockResponse]


class ResumeDownloadRequest(BaseModel):
    """Request schema for rendering a resume file."""

    resume: dict[str, Any] = Field(
        ..., description="generate_tailored_resume payload including source_content_analysis"
    )
    format: str = Field("docx", description="Renderer identifier (docx, pdf, tex, txt)")
    job_title: str | None = Field(None, description="Target job title, used in the file name")
    company: str | None = Field(None, description="Target company, used in the file name")


class RendererResponse(BaseModel):
    """Response schema for an available output format."""

    name: str
    extension: str
    media_type: str


class BatchJobRequest(BaseModel):
    """One job posting in a batch request."""

    resume: dict[str, Any] = Field(..., description="Tailored resume payload for this posting")
    job_title: str | None = Field(None, description="Target job title, used in the file name")
    company: str | None = Field(None, description="Target company, used in the file name")


class ResumeBatchRequest(BaseModel):
    """Request schema for rendering several tailored resumes at once."""

    jobs: list[BatchJobRequest] = Field(..., min_length=1)
    format: str = Field("docx", description="Renderer identifier shared by every job")


class BatchItemResponse(BaseModel):
    """Outcome of one batch job, in request order."""

    index: int
    file_name: str
    ok: bool
    error: str | None = None
    content_base64: str | None = Field(None, description="Rendered file, base64-encoded")


class ResumeBatchResponse(BaseModel):
    """Per-job results of a batch request."""

    format: str
    media_type: str
    failed: int
    results: list[BatchItemResponse]
