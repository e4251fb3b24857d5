"""Liveness route."""

from __future__ import annotations

from fastapi import APIRouter

from tailored_resume.renderers import list_renderers

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str | list[str]]:
    """Report that the service is up and which output formats it can render."""
    return {"status": "healthy", "formats": list_renderers()}
