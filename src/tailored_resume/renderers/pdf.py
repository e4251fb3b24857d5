"""PDF renderer using fpdf2 core fonts.

Core fonts only cover latin-1, so text is normalised before it is written.
"""

from __future__ import annotations

from collections.abc import Sequence

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from tailored_resume.models.blocks import (
    Alignment,
    BlockKind,
    ColorIntent,
    DocumentBlock,
    TextRun,
    TextSize,
)
from tailored_resume.renderers.base import BULLET, FONT_SIZES, DocumentRenderer

__all__ = ["PdfRenderer"]

FONT = "Helvetica"
MARGIN_PT = 54  # 0.75in
HANGING_PT = 14.4  # 0.2in
LINE_FACTOR = 1.35

_ALIGN = {Alignment.CENTER: "C", Alignment.JUSTIFIED: "J", Alignment.LEFT: "L"}

# Replacements for characters the core fonts cannot encode.
_LATIN1_FALLBACKS = {
    "•": "·",
    "–": "-",
    "—": "-",
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
}


def _latin1(text: str) -> str:
    for char, replacement in _LATIN1_FALLBACKS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", errors="replace").decode("latin-1")


class PdfRenderer(DocumentRenderer):
    """Plain single-column PDF, no LaTeX toolchain required."""

    @property
    def name(self) -> str:
        return "pdf"

    @property
    def extension(self) -> str:
        return "pdf"

    @property
    def media_type(self) -> str:
        return "application/pdf"

    def render(self, blocks: Sequence[DocumentBlock]) -> bytes:
        pdf = FPDF(unit="pt", format="letter")
        pdf.set_margins(MARGIN_PT, MARGIN_PT, MARGIN_PT)
        pdf.set_auto_page_break(auto=True, margin=MARGIN_PT)
        pdf.add_page()
        for block in blocks:
            self._add_block(pdf, block)
        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _set_style(self, pdf: FPDF, run: TextRun) -> None:
        style = ("B" if run.bold else "") + ("I" if run.italic else "")
        pdf.set_font(FONT, style=style, size=FONT_SIZES[run.size])
        pdf.set_text_color(*self.rgb(run.color))

    @staticmethod
    def _line_height(block: DocumentBlock) -> float:
        size = max(
            (FONT_SIZES[run.size] for run in block.runs),
            default=FONT_SIZES[TextSize.BODY],
        )
        return size * LINE_FACTOR

    def _add_block(self, pdf: FPDF, block: DocumentBlock) -> None:
        if block.spacing_before:
            pdf.ln(block.spacing_before)
        if block.kind is BlockKind.SPACER or not block.runs:
            pdf.ln(block.spacing_after)
            return

        height = self._line_height(block)
        left = pdf.l_margin + self.indent_inches(block.indent) * 72

        if block.alignment is not Alignment.LEFT:
            # multi_cell keeps one style for the whole paragraph.
            self._set_style(pdf, block.runs[0])
            pdf.set_x(left)
            pdf.multi_cell(
                w=0,
                h=height,
                text=_latin1(block.text),
                align=_ALIGN[block.alignment],
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )
        else:
            saved_margin = pdf.l_margin
            pdf.set_left_margin(left)
            if block.kind is BlockKind.BULLET_ITEM:
                pdf.set_x(left - HANGING_PT)
                self._set_style(pdf, TextRun(BULLET, bold=True, color=ColorIntent.PRIMARY))
                pdf.write(h=height, text=_latin1(BULLET))
                pdf.set_x(left)
            else:
                pdf.set_x(left)
            for run in block.runs:
                self._set_style(pdf, run)
                pdf.write(h=height, text=_latin1(run.text), link=run.link or "")
            pdf.ln(height)
            pdf.set_left_margin(saved_margin)

        if block.kind is BlockKind.HEADER and block.level >= 1:
            y = pdf.get_y() + 1
            pdf.set_draw_color(*self.rgb(block.runs[0].color))
            pdf.set_line_width(0.75)
            pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
            pdf.ln(2)

        pdf.ln(block.spacing_after)
