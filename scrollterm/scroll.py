"""Scrollback window arithmetic."""

from .constants import ConsoleConstants


class ScrollWindow:
    """Which slice of the buffer is on screen.

    `top` is the index of the first visible line and `viewport_height` the
    number of rows the presentation layer can show.
    """

    def __init__(self, viewport_height: int = ConsoleConstants.VIEWPORT_HEIGHT, top: int = 0):
        self.viewport_height = max(ConsoleConstants.MIN_VIEWPORT_HEIGHT, viewport_height)
        self.top = max(0, top)

    def max_top(self, active_index: int) -> int:
        """Furthest the window may scroll forward with active_index at the bottom."""
        return max(0, active_index - self.viewport_height + 1)

    def ensure_visible(self, active_index: int):
        if active_index < self.top:
            self.top = active_index
        elif active_index >= self.top + self.viewport_height:
            self.top = active_index - self.viewport_height + 1
        if self.top < 0:
            self.top = 0

    def scroll_by(self, delta_lines: int, active_index: int):
        """Move the window by delta_lines (positive = towards newer lines)."""
        self.top = min(max(0, self.top + delta_lines), self.max_top(active_index))

    def resize(self, viewport_height: int, active_index: int):
        self.viewport_height = max(ConsoleConstants.MIN_VIEWPORT_HEIGHT, viewport_height)
        self.ensure_visible(active_index)

    def reset(self):
        self.top = 0

    def visible_range(self, line_count: int) -> range:
        return range(self.top, min(line_count, self.top + self.viewport_height))

    def contains(self, index: int) -> bool:
        return self.top <= index < self.top + self.viewport_height
