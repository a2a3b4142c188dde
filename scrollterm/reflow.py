"""Width-driven wrapping of console lines."""

import logging
from typing import Any, Optional, Protocol

from .errors import MeasurementFailure
from .model import Line, LineBuffer

logger = logging.getLogger(__name__)


class WidthOracle(Protocol):
    """Measures rendered text width.

    Must be deterministic and non-decreasing in string length for a fixed
    font, otherwise the prefix search in wrap_text is not valid.
    """

    def measure(self, text: str, font: Any) -> float:
        ...


def measure(oracle: WidthOracle, text: str, font: Any) -> float:
    """Measure text, turning any oracle error into MeasurementFailure."""
    try:
        return oracle.measure(text, font)
    except MeasurementFailure:
        raise
    except Exception as e:
        raise MeasurementFailure(text, e) from e


def max_prefix(text: str, oracle: WidthOracle, font: Any, width: float) -> int:
    """Longest prefix length of text whose measured width is <= width."""
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if measure(oracle, text[:mid], font) <= width:
            lo = mid
        else:
            hi = mid - 1
    return lo


def wrap_text(text: str, oracle: WidthOracle, font: Any, width: float,
              max_length: Optional[int] = None) -> list[str]:
    """Break text into pieces that each measure <= width.

    A single character wider than width still gets a piece of its own so
    that wrapping always makes progress and never drops content. When
    max_length is given no piece is longer than that many characters.
    """
    if not text:
        return [""]
    pieces: list[str] = []
    start = 0
    while start < len(text):
        rest = text[start:]
        window = rest[:max_length] if max_length else rest
        if measure(oracle, window, font) <= width:
            k = len(window)
        else:
            k = max(1, max_prefix(window, oracle, font, width))
        pieces.append(rest[:k])
        start += k
    return pieces


def _runs(lines: list[Line]) -> list[list[Line]]:
    """Group lines into runs joined by soft breaks."""
    runs: list[list[Line]] = []
    current: list[Line] = []
    for line in lines:
        current.append(line)
        if not line.wrapped:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def reflow_lines(lines: list[Line], oracle: WidthOracle, font: Any, width: float,
                 max_length: Optional[int] = None) -> list[Line]:
    """Re-wrap lines against width, returning a new line list.

    Soft-wrapped runs are joined before wrapping so widening the viewport
    un-wraps them. Blank lines survive as blank lines. Only the last piece
    of a wrapped line can stay editable.
    """
    result: list[Line] = []
    for run in _runs(lines):
        text = "".join(line.text for line in run)
        editable = all(line.editable for line in run)
        pieces = wrap_text(text, oracle, font, width, max_length)
        last = len(pieces) - 1
        for i, piece in enumerate(pieces):
            result.append(Line(piece, editable=editable and i == last, wrapped=i < last))
    return result


class ReflowEngine:
    """Wraps console lines against a target width using a WidthOracle."""

    def __init__(self, oracle: WidthOracle, font: Any = None):
        self.oracle = oracle
        self.font = font

    def measure(self, text: str) -> float:
        return measure(self.oracle, text, self.font)

    def fits(self, text: str, width: float) -> bool:
        return self.measure(text) <= width

    def wrap(self, text: str, width: float, max_length: Optional[int] = None) -> list[str]:
        return wrap_text(text, self.oracle, self.font, width, max_length)

    def reflow(self, buffer: LineBuffer, width: float):
        """Rebuild every line of buffer against width.

        The new sequence is computed in full before the buffer is touched,
        so a measurement failure or capacity error leaves it as it was.
        """
        old_count = len(buffer.lines)
        new_lines = reflow_lines(buffer.lines, self.oracle, self.font, width,
                                 buffer.max_line_length - 1)
        buffer.replace_lines(new_lines)
        logger.debug("Reflowed %d lines into %d at width %s", old_count, len(new_lines), width)
