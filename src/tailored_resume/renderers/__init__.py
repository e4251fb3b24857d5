"""Renderer registry for resume documents."""

from __future__ import annotations

from tailored_resume.renderers.base import DocumentRenderer
from tailored_resume.renderers.latex import LatexRenderer
from tailored_resume.renderers.pdf import PdfRenderer
from tailored_resume.renderers.text import TextRenderer
from tailored_resume.renderers.word import WordRenderer

__all__ = [
    "DocumentRenderer",
    "get_renderer",
    "list_renderers",
]

_REGISTRY: dict[str, DocumentRenderer] = {
    "docx": WordRenderer(),
    "pdf": PdfRenderer(),
    "tex": LatexRenderer(),
    "txt": TextRenderer(),
}


def get_renderer(name: str) -> DocumentRenderer:
    """Return the renderer registered under *name* (case-insensitive).

    Raises:
        ValueError: If no renderer with that name exists.
    """
    try:
        return _REGISTRY[name.lower()]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown format {name!r}. Available: {available}"
        raise ValueError(msg) from None


def list_renderers() -> list[str]:
    """Return sorted names of all registered renderers."""
    return sorted(_REGISTRY)
