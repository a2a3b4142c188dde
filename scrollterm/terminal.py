"""Full-screen terminal the console is drawn on.

Blessed positions and styles output; curtsies decodes key presses into
key names such as <LEFT> or <Ctrl-j>.
"""

import blessed
from typing import Optional
import sys
import select


class TerminalInterface:
    """Screen rows for console lines plus one status row at the bottom."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Wrap terminal, or a new blessed.Terminal when none is given."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        # Last frame drawn, for minimal updates
        self._last_lines: Optional[list[str]] = None
        self._last_status: Optional[str] = None

    def setup(self):
        """Enter fullscreen mode and start reading keys."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            from curtsies import Input
            self._curtsies_input = Input(keynames='curtsies')
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Stop reading keys and leave fullscreen mode."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next draw repaints everything."""
        self._last_lines = None
        self._last_status = None

    def draw(self, lines: list[str], cursor_row: int, cursor_col: int,
             caret_visible: bool = True, status: Optional[str] = None) -> None:
        """Draw the visible lines, the status row and the caret.

        Only rows that changed since the previous frame are rewritten.

        Args:
            lines: Text of the visible lines, top to bottom
            cursor_row: Caret row (0-based), may be outside the text rows
            cursor_col: Caret column (0-based)
            caret_visible: Whether the caret is shown in this blink phase
            status: Message for the bottom row
        """
        width = self.width
        rows = self.height
        padded = [line[:width].ljust(width) for line in lines[:rows]]
        padded += [" " * width] * (rows - len(padded))

        if self._last_lines is None or len(self._last_lines) != len(padded):
            print(self.term.home + self.term.clear, end='')
            self._last_lines = [None] * len(padded)
            self._last_status = None

        for y, line in enumerate(padded):
            if self._last_lines[y] != line:
                print(self.term.move(y, 0) + line, end='')
                self._last_lines[y] = line

        status_text = (status or "")[:width].ljust(width)
        if status_text != self._last_status:
            print(self.term.move(rows, 0) + self.term.reverse + status_text + self.term.normal, end='')
            self._last_status = status_text

        if caret_visible and 0 <= cursor_row < rows:
            col = min(cursor_col, width - 1)
            print(self.term.move(cursor_row, col) + self.term.normal_cursor, end='', flush=True)
        else:
            print(self.term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single key token from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._curtsies_input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Rows available for console lines (the status row excluded)."""
        return self.term.height - 1  # Reserve one line for status
