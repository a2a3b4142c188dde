"""Fonts and width oracles used to wrap console lines.

A width oracle answers one question: how wide is this string in this
font. The console only needs the answer to be deterministic and to grow
with the string, so the same wrapping code serves a character-cell
terminal and a proportional PDF font alike.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import blessed
from reportlab.pdfbase import pdfmetrics

from .errors import MeasurementFailure


@dataclass(frozen=True)
class FontSpec:
    """A font as seen by the width oracles.

    Attributes:
        name: Font name (a reportlab font name for PdfFontOracle)
        point_size: Size in points
        cell_width: Width of one character cell for fixed-pitch oracles
    """
    name: str
    point_size: float = 12
    cell_width: float = 1


FONTS: Dict[str, FontSpec] = {
    # One column per character: widths come out in terminal columns
    "terminal": FontSpec(name="terminal", point_size=1, cell_width=1),
    # 10-pitch pica at 12pt is 7.2 points per character
    "Courier": FontSpec(name="Courier", point_size=12, cell_width=7.2),
    "Helvetica": FontSpec(name="Helvetica", point_size=12, cell_width=7.2),
    "Times-Roman": FontSpec(name="Times-Roman", point_size=12, cell_width=7.2),
}


def get_font(font_name: str) -> Optional[FontSpec]:
    """Get a font by name, or None if it is not registered."""
    return FONTS.get(font_name)


class MonospaceOracle:
    """Every character is one cell of font.cell_width."""

    def measure(self, text: str, font: FontSpec) -> float:
        return len(text) * font.cell_width


class TerminalCellOracle:
    """Columns a string occupies on a blessed terminal, times the cell width.

    Wide characters count as two columns and escape sequences as none.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        self.term = terminal or blessed.Terminal()

    def measure(self, text: str, font: FontSpec) -> float:
        return self.term.length(text) * font.cell_width


class PdfFontOracle:
    """Width in points of text set in a reportlab font."""

    def measure(self, text: str, font: FontSpec) -> float:
        try:
            return pdfmetrics.stringWidth(text, font.name, font.point_size)
        except KeyError as e:
            raise MeasurementFailure(text, e) from e
