"""LaTeX renderer.

Builds a PyLaTeX ``Document`` from document blocks. ``render()`` returns
the ``.tex`` source; the generation service compiles the same document to
PDF when a LaTeX compiler is available.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from urllib.parse import quote

from pylatex import Document, NoEscape, Package

from tailored_resume.models.blocks import (
    Alignment,
    BlockKind,
    DocumentBlock,
    TextRun,
    TextSize,
)
from tailored_resume.renderers.base import COLORS, DocumentRenderer

__all__ = ["LatexRenderer"]

# Characters that have special meaning in LaTeX.
_LATEX_REPLACEMENTS = {
    "\\": r"\textbackslash{}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
    "•": r"\textbullet{}",
    **{char: "\\" + char for char in "&%$#_{}"},
}
_LATEX_SPECIAL = re.compile("|".join(re.escape(char) for char in _LATEX_REPLACEMENTS))

# URL characters passed through unchanged inside \href.
_URL_SAFE = "/:?=&@+,;!*'()-._~%#[]"

_PACKAGES: list[Package] = [
    Package("fullpage", options=NoEscape("empty")),
    Package("titlesec"),
    Package("enumitem"),
    Package("xcolor"),
    Package("hyperref", options=NoEscape("hidelinks")),
    Package("fontenc", options=NoEscape("T1")),
    Package("textcomp"),
]

_PREAMBLE_SETUP = r"""
\pagestyle{empty}
\renewcommand{\familydefault}{\sfdefault}
\setlength{\parindent}{0pt}
\urlstyle{same}
\titleformat{\section}{
  \color{primary}\large\bfseries\raggedright
}{}{0em}{}[\color{primary}\titlerule \vspace{-2pt}]
"""

_SIZE_COMMANDS = {
    TextSize.NAME: r"\LARGE",
    TextSize.HEADER: r"\large",
    TextSize.SUBHEADER: r"\normalsize",
    TextSize.BODY: "",
    TextSize.SMALL: r"\small",
}


class LatexRenderer(DocumentRenderer):
    """Single-column sans-serif LaTeX resume."""

    @property
    def name(self) -> str:
        return "tex"

    @property
    def extension(self) -> str:
        return "tex"

    @property
    def media_type(self) -> str:
        return "application/x-tex"

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def build(self, blocks: Sequence[DocumentBlock]) -> Document:
        doc = self._create_document()
        for chunk in self._chunks(blocks):
            doc.append(NoEscape(chunk))
        return doc

    def render(self, blocks: Sequence[DocumentBlock]) -> bytes:
        return self.build(blocks).dumps().encode("utf-8")

    @staticmethod
    def escape_latex(text: str) -> str:
        r"""Escape LaTeX special characters in *text*.

        Handles: ``& % $ # _ { } ~ ^ \`` and the bullet separator.
        """
        # Single pass, so inserted commands are never escaped again.
        return _LATEX_SPECIAL.sub(lambda match: _LATEX_REPLACEMENTS[match.group(0)], text)

    @staticmethod
    def escape_url(url: str) -> str:
        r"""Make *url* safe as the first argument of ``\href``.

        Braces, backslashes, carets, spaces and non-ASCII characters are
        percent-encoded, then ``%`` and ``#`` are escaped for LaTeX.
        """
        encoded = quote(url, safe=_URL_SAFE)
        return encoded.replace("%", r"\%").replace("#", r"\#")

    # ------------------------------------------------------------------
    # internal helpers
    # ------------------------------------------------------------------

    def _create_document(self) -> Document:
        doc = Document(
            documentclass="article",
            document_options=["letterpaper", "10pt"],
            page_numbers=False,
            indent=False,
            lmodern=False,
            textcomp=False,
            microtype=False,
            fontenc=None,
            inputenc=None,
        )
        for pkg in _PACKAGES:
            doc.packages.append(pkg)
        colors = "\n".join(
            rf"\definecolor{{{intent.value}}}{{HTML}}{{{value}}}" for intent, value in COLORS.items()
        )
        doc.preamble.append(NoEscape(colors))
        doc.preamble.append(NoEscape(_PREAMBLE_SETUP))
        return doc

    def _chunks(self, blocks: Sequence[DocumentBlock]) -> Iterator[str]:
        """Yield LaTeX for each block, wrapping bullet runs in ``itemize``."""
        in_list = False
        for block in blocks:
            is_bullet = block.kind is BlockKind.BULLET_ITEM
            if in_list and not is_bullet:
                yield r"\end{itemize}"
                in_list = False
            if is_bullet and not in_list:
                yield r"\begin{itemize}[leftmargin=0.3in, itemsep=1pt, topsep=2pt]"
                in_list = True

            if block.kind is BlockKind.SPACER:
                yield rf"\vspace{{{block.spacing_after}pt}}"
            elif block.kind is BlockKind.HEADER and block.level == 0:
                yield rf"\begin{{center}}{self._runs(block.runs)}\end{{center}}"
            elif block.kind is BlockKind.HEADER:
                yield rf"\section*{{{self.escape_latex(block.text)}}}"
            elif is_bullet:
                yield rf"\item {self._runs(block.runs)}"
            else:
                yield self._paragraph(block)

        if in_list:
            yield r"\end{itemize}"

    def _paragraph(self, block: DocumentBlock) -> str:
        body = self._runs(block.runs)
        if block.alignment is Alignment.CENTER:
            return rf"\begin{{center}}{body}\end{{center}}"
        indent = self.indent_inches(block.indent)
        ragged = "" if block.alignment is Alignment.JUSTIFIED else r"\raggedright "
        return rf"{{{ragged}\leftskip={indent}in {body}\par}}\vspace{{{block.spacing_after}pt}}"

    def _runs(self, runs: Sequence[TextRun]) -> str:
        return "".join(self._run(run) for run in runs)

    def _run(self, run: TextRun) -> str:
        text = self.escape_latex(run.text)
        if run.bold:
            text = rf"\textbf{{{text}}}"
        if run.italic:
            text = rf"\textit{{{text}}}"
        text = rf"\textcolor{{{run.color.value}}}{{{text}}}"
        size = _SIZE_COMMANDS[run.size]
        if size:
            text = rf"{{{size} {text}}}"
        if run.link:
            text = rf"\href{{{self.escape_url(run.link)}}}{{{text}}}"
        return text
