"""Interactive console running in a full-screen terminal."""

import logging
import os
import select
import signal
from typing import Optional

from .console import Console
from .constants import ConsoleConstants
from .font_metrics import FONTS, TerminalCellOracle, get_font
from .keyboard import InputEvent, KeyboardHandler
from .settings import ConsoleSettings
from .terminal import TerminalInterface

logger = logging.getLogger(__name__)


def echo_executor(line: str) -> list[str]:
    """Default executor: print the line back."""
    return [line]


class Shell:
    """Event loop wiring a terminal to a Console."""

    def __init__(self, settings: Optional[ConsoleSettings] = None,
                 terminal: Optional[TerminalInterface] = None):
        self.settings = settings or ConsoleSettings()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal, page_size=max(1, self.terminal.height - 1))
        font = get_font(self.settings.font_name)
        if font is None:
            logger.warning("Unknown font %r, using terminal cells", self.settings.font_name)
            font = FONTS["terminal"]
        self.console = Console(
            oracle=TerminalCellOracle(self.terminal.term),
            font=font,
            width=self.terminal.width * font.cell_width,
            settings=self.settings,
            executor=echo_executor,
        )
        self.console.resize(rows=self.terminal.height)
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, ConsoleConstants.RESIZE_PIPE_MARKER)

    def _resize_event(self) -> InputEvent:
        font = self.console.engine.font
        return InputEvent.resize(width=self.terminal.width * font.cell_width, rows=self.terminal.height)

    def _draw(self):
        console = self.console
        lines = [text for text, _ in console.visible_lines()]
        row, offset = console.cursor_screen_offset()
        col = self.terminal.term.length(console.buffer.active_line.text[:offset])
        self.terminal.draw(lines, row, col, caret_visible=console.caret_visible(),
                           status=console.status_message)

    def run(self):
        """Run the main loop until the console stops."""
        self.terminal.setup()
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        caret_shown = None
        try:
            self.console.write("scrollterm: type 'help' for commands")
            need_draw = True
            while self.console.running:
                caret = self.console.caret_visible()
                if need_draw or caret != caret_shown:
                    self._draw()
                    caret_shown = caret
                    need_draw = False

                # Poll with a timeout so the caret keeps blinking
                ready, _, _ = select.select([0, self._resize_pipe_r], [], [],
                                            ConsoleConstants.POLL_TIMEOUT)
                if self._resize_pipe_r in ready:
                    os.read(self._resize_pipe_r, 1024)
                    self.terminal.invalidate_frame()
                    self.console.handle(self._resize_event())
                    need_draw = True
                elif 0 in ready:
                    event = self.keyboard.get_input_event(timeout=0)
                    if event is not None:
                        need_draw = self.console.handle(event) or need_draw
        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()
