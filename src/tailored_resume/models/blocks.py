"""Format-agnostic document blocks produced by the assembler.

Blocks describe *what* goes on the page and carry styling intent only.
Renderers decide how an intent maps onto a concrete file format.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "Alignment",
    "BlockKind",
    "ColorIntent",
    "DocumentBlock",
    "TextRun",
    "TextSize",
    "block_to_dict",
]


class BlockKind(str, Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    BULLET_ITEM = "bulletItem"
    SPACER = "spacer"


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    JUSTIFIED = "justified"


class ColorIntent(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCENT = "accent"
    TEXT = "text"


class TextSize(str, Enum):
    NAME = "name"
    HEADER = "header"
    SUBHEADER = "subheader"
    BODY = "body"
    SMALL = "small"


@dataclass(frozen=True, slots=True)
class TextRun:
    """A span of text sharing one style.

    Attributes:
        text: Display text.
        bold: Bold emphasis.
        italic: Italic emphasis.
        color: Colour intent resolved by the renderer.
        size: Size intent resolved by the renderer.
        link: Optional hyperlink target for renderers that support links.
    """

    text: str
    bold: bool = False
    italic: bool = False
    color: ColorIntent = ColorIntent.TEXT
    size: TextSize = TextSize.BODY
    link: str | None = None


@dataclass(frozen=True, slots=True)
class DocumentBlock:
    """One output unit: a header, paragraph, bullet item or spacer.

    ``indent`` is a level (0 none, 1 body, 2 bullet) and spacing values are
    in points. ``level`` only matters for headers: 0 is the document name,
    1 a section header.
    """

    kind: BlockKind
    runs: tuple[TextRun, ...] = ()
    alignment: Alignment = Alignment.LEFT
    indent: int = 0
    spacing_before: int = 0
    spacing_after: int = 0
    level: int = 1

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def block_to_dict(block: DocumentBlock) -> dict[str, Any]:
    """Return a JSON-ready representation of *block* for previewers."""
    return {
        "kind": block.kind.value,
        "text": block.text,
        "runs": [
            {
                "text": run.text,
                "bold": run.bold,
                "italic": run.italic,
                "color": run.color.value,
                "size": run.size.value,
                "link": run.link,
            }
            for run in block.runs
        ],
        "alignment": block.alignment.value,
        "indent": block.indent,
        "spacing_before": block.spacing_before,
        "spacing_after": block.spacing_after,
        "level": block.level,
    }
