"""Unit tests for fonts and width oracles."""

import unittest

import blessed

from scrollterm.errors import MeasurementFailure
from scrollterm.font_metrics import (
    FONTS,
    FontSpec,
    MonospaceOracle,
    PdfFontOracle,
    TerminalCellOracle,
    get_font,
)
from scrollterm.reflow import ReflowEngine


class TestFonts(unittest.TestCase):
    """Test the font table."""

    def test_terminal_font_measures_in_columns(self):
        font = get_font("terminal")
        self.assertIsNotNone(font)
        self.assertEqual(font.cell_width, 1)

    def test_unknown_font(self):
        self.assertIsNone(get_font("Unknown Font"))

    def test_courier_is_ten_pitch(self):
        # 72 points per inch / 10 characters per inch
        self.assertAlmostEqual(FONTS["Courier"].cell_width, 7.2)


class TestOracles(unittest.TestCase):
    """Test width measurement."""

    def test_monospace(self):
        oracle = MonospaceOracle()
        self.assertEqual(oracle.measure("", FONTS["Courier"]), 0)
        self.assertAlmostEqual(oracle.measure("abc", FONTS["Courier"]), 21.6)

    def test_pdf_courier_matches_pitch(self):
        oracle = PdfFontOracle()
        self.assertAlmostEqual(oracle.measure("hello", FONTS["Courier"]), 36.0)

    def test_pdf_helvetica_is_proportional(self):
        oracle = PdfFontOracle()
        font = FONTS["Helvetica"]
        self.assertLess(oracle.measure("iiii", font), oracle.measure("WWWW", font))

    def test_pdf_unknown_font_fails_measurement(self):
        engine = ReflowEngine(PdfFontOracle(), FontSpec(name="No Such Font"))
        with self.assertRaises(MeasurementFailure):
            engine.measure("x")

    def test_terminal_cells(self):
        oracle = TerminalCellOracle(blessed.Terminal())
        font = FONTS["terminal"]
        self.assertEqual(oracle.measure("abc", font), 3)
        # East Asian wide characters take two columns
        self.assertEqual(oracle.measure("日本", font), 4)

    def test_proportional_wrap(self):
        engine = ReflowEngine(PdfFontOracle(), FONTS["Helvetica"])
        pieces = engine.wrap("iiiiiiiiiiWWWWWWWWWW", 40)
        self.assertEqual("".join(pieces), "iiiiiiiiiiWWWWWWWWWW")
        for piece in pieces:
            self.assertLessEqual(engine.measure(piece), 40)
        self.assertGreater(len(pieces[0]), len(pieces[-1]))


if __name__ == '__main__':
    unittest.main()
