"""Word (``.docx``) renderer.

Produces the downloadable resume with python-docx: Calibri throughout,
0.75in margins, coloured section headers with a bottom rule and bullets
with a hanging indent.
"""

from __future__ import annotations

from collections.abc import Sequence
from io import BytesIO
from typing import TYPE_CHECKING

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from tailored_resume.models.blocks import (
    Alignment,
    BlockKind,
    ColorIntent,
    DocumentBlock,
    TextRun,
    TextSize,
)
from tailored_resume.renderers.base import BULLET, COLORS, FONT_SIZES, DocumentRenderer

if TYPE_CHECKING:
    from docx.document import Document as DocxDocument
    from docx.text.paragraph import Paragraph

__all__ = ["WordRenderer"]

FONT = "Calibri"
MARGIN_INCHES = 0.75
HANGING_INCHES = 0.2

_ALIGNMENTS = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.JUSTIFIED: WD_ALIGN_PARAGRAPH.JUSTIFY,
}


class WordRenderer(DocumentRenderer):
    """Modern single-column Word resume."""

    @property
    def name(self) -> str:
        return "docx"

    @property
    def extension(self) -> str:
        return "docx"

    @property
    def media_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, blocks: Sequence[DocumentBlock]) -> DocxDocument:
        doc = self._create_document()
        for block in blocks:
            self._add_block(doc, block)
        return doc

    def render(self, blocks: Sequence[DocumentBlock]) -> bytes:
        buffer = BytesIO()
        self.build(blocks).save(buffer)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _create_document(self) -> DocxDocument:
        doc = Document()
        normal = doc.styles["Normal"]
        normal.font.name = FONT
        normal.font.size = Pt(FONT_SIZES[TextSize.BODY])
        for section in doc.sections:
            section.top_margin = Inches(MARGIN_INCHES)
            section.bottom_margin = Inches(MARGIN_INCHES)
            section.left_margin = Inches(MARGIN_INCHES)
            section.right_margin = Inches(MARGIN_INCHES)
        return doc

    def _add_block(self, doc: DocxDocument, block: DocumentBlock) -> None:
        paragraph = doc.add_paragraph()

        # The border must precede spacing/indent in <w:pPr>.
        if block.kind is BlockKind.HEADER and block.level >= 1:
            self._add_bottom_border(paragraph)

        fmt = paragraph.paragraph_format
        fmt.alignment = _ALIGNMENTS[block.alignment]
        fmt.space_before = Pt(block.spacing_before)
        fmt.space_after = Pt(block.spacing_after)
        if block.indent:
            fmt.left_indent = Inches(self.indent_inches(block.indent))

        if block.kind is BlockKind.SPACER:
            paragraph.add_run("").font.size = Pt(1)
            return

        if block.kind is BlockKind.BULLET_ITEM:
            fmt.first_line_indent = Inches(-HANGING_INCHES)
            self._add_run(paragraph, TextRun(BULLET, bold=True, color=ColorIntent.PRIMARY))

        for run in block.runs:
            if run.link:
                self._add_hyperlink(paragraph, run)
            else:
                self._add_run(paragraph, run)

    @staticmethod
    def _add_run(paragraph: Paragraph, run: TextRun) -> None:
        docx_run = paragraph.add_run(run.text)
        docx_run.bold = run.bold
        docx_run.italic = run.italic
        docx_run.font.name = FONT
        docx_run.font.size = Pt(FONT_SIZES[run.size])
        docx_run.font.color.rgb = RGBColor.from_string(COLORS[run.color])

    @staticmethod
    def _add_hyperlink(paragraph: Paragraph, run: TextRun) -> None:
        """Append *run* as an external hyperlink to ``run.link``."""
        r_id = paragraph.part.relate_to(run.link, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)
        hyperlink = OxmlElement("w:hyperlink")
        hyperlink.set(qn("r:id"), r_id)

        # Child order follows the <w:rPr> schema.
        props = OxmlElement("w:rPr")
        fonts = OxmlElement("w:rFonts")
        fonts.set(qn("w:ascii"), FONT)
        fonts.set(qn("w:hAnsi"), FONT)
        props.append(fonts)
        if run.bold:
            props.append(OxmlElement("w:b"))
        if run.italic:
            props.append(OxmlElement("w:i"))
        color = OxmlElement("w:color")
        color.set(qn("w:val"), COLORS[run.color])
        props.append(color)
        size = OxmlElement("w:sz")
        size.set(qn("w:val"), str(FONT_SIZES[run.size] * 2))
        props.append(size)
        underline = OxmlElement("w:u")
        underline.set(qn("w:val"), "single")
        props.append(underline)

        text = OxmlElement("w:t")
        text.text = run.text
        text.set(qn("xml:space"), "preserve")

        element = OxmlElement("w:r")
        element.append(props)
        element.append(text)
        hyperlink.append(element)
        paragraph._p.append(hyperlink)

    @staticmethod
    def _add_bottom_border(paragraph: Paragraph) -> None:
        borders = OxmlElement("w:pBdr")
        bottom = OxmlElement("w:bottom")
        bottom.set(qn("w:val"), "single")
        bottom.set(qn("w:sz"), "6")
        bottom.set(qn("w:space"), "2")
        bottom.set(qn("w:color"), COLORS[ColorIntent.PRIMARY])
        borders.append(bottom)
        paragraph._p.get_or_add_pPr().append(borders)
