"""Abstract base class for pluggable document renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tailored_resume.models.blocks import ColorIntent, TextSize

if TYPE_CHECKING:
    from tailored_resume.models.blocks import DocumentBlock

__all__ = ["COLORS", "FONT_SIZES", "INDENT_INCHES", "DocumentRenderer"]

# Hex colours for each colour intent.
COLORS: dict[ColorIntent, str] = {
    ColorIntent.PRIMARY: "2563EB",
    ColorIntent.SECONDARY: "64748B",
    ColorIntent.ACCENT: "0F172A",
    ColorIntent.TEXT: "334155",
}

# Point sizes for each size intent.
FONT_SIZES: dict[TextSize, int] = {
    TextSize.NAME: 16,
    TextSize.HEADER: 12,
    TextSize.SUBHEADER: 11,
    TextSize.BODY: 10,
    TextSize.SMALL: 9,
}

# Left indent per block indent level.
INDENT_INCHES: dict[int, float] = {0: 0.0, 1: 0.1, 2: 0.3}

BULLET = "• "


class DocumentRenderer(ABC):
    """Interface that every renderer must implement."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry identifier, e.g. ``docx``."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension without the dot."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the rendered bytes."""

    @abstractmethod
    def render(self, blocks: Sequence[DocumentBlock]) -> bytes:
        """Serialise *blocks* into the renderer's file format."""

    # ------------------------------------------------------------------
    # Shared helpers available to all renderers
    # ------------------------------------------------------------------

    @staticmethod
    def rgb(color: ColorIntent) -> tuple[int, int, int]:
        """Return the ``(r, g, b)`` triple for a colour intent."""
        value = COLORS[color]
        return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)

    @staticmethod
    def indent_inches(level: int) -> float:
        return INDENT_INCHES.get(level, INDENT_INCHES[2])
