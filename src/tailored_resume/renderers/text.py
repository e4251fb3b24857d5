"""Plain-text renderer used for previews and ``.txt`` downloads."""

from __future__ import annotations

from collections.abc import Sequence

from tailored_resume.models.blocks import BlockKind, DocumentBlock
from tailored_resume.renderers.base import BULLET, DocumentRenderer

__all__ = ["TextRenderer"]


class TextRenderer(DocumentRenderer):
    """Underlined headers, ``•`` bullets and blank lines between sections."""

    @property
    def name(self) -> str:
        return "txt"

    @property
    def extension(self) -> str:
        return "txt"

    @property
    def media_type(self) -> str:
        return "text/plain; charset=utf-8"

    def render(self, blocks: Sequence[DocumentBlock]) -> bytes:
        return self.render_text(blocks).encode("utf-8")

    def render_text(self, blocks: Sequence[DocumentBlock]) -> str:
        lines: list[str] = []
        for block in blocks:
            text = block.text
            if block.kind is BlockKind.SPACER:
                lines.append("")
            elif block.kind is BlockKind.HEADER:
                if block.level >= 1 and lines and lines[-1]:
                    lines.append("")
                lines.append(text)
                lines.append(("=" if block.level == 0 else "-") * len(text))
            elif block.kind is BlockKind.BULLET_ITEM:
                lines.append(f"{BULLET}{text}")
            else:
                lines.append(text)
        return "\n".join(lines).strip() + "\n"
