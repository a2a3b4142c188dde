"""The console: one explicit context owning all editing state."""

import logging
from typing import Any, Callable, Iterable, Optional

from .bindings import ActionRegistry
from .blink import CursorBlink
from .commands import CommandDispatcher, CommandTable, DispatchResult
from .constants import ConsoleConstants
from .errors import BufferFull, LineOverflow, MeasurementFailure, ReadOnlyLine, ScrolltermError
from .history import HistoryStore
from .keyboard import InputEvent
from .model import BackspacePolicy, LineBuffer
from .reflow import ReflowEngine, WidthOracle
from .scroll import ScrollWindow
from .settings import ConsoleSettings

logger = logging.getLogger(__name__)

Executor = Callable[[str], Optional[Iterable[str]]]


class Console:
    """Line buffer, cursor, scroll window and history of one console.

    Command handlers and event actions receive the console itself and
    mutate state only through it. Operations raise the typed errors from
    scrollterm.errors; handle() is the boundary that absorbs them.
    """

    def __init__(self, oracle: Optional[WidthOracle] = None, font: Any = None,
                 width: Optional[float] = None, settings: Optional[ConsoleSettings] = None,
                 commands: Optional[CommandTable] = None, executor: Optional[Executor] = None):
        """Initialize the console.

        Args:
            oracle: Width oracle; without one lines are never wrapped
            font: Font handed to the oracle
            width: Target width in the oracle's units
            settings: Capacities and behaviour switches
            commands: Command table (default: clear, exit, help, history)
            executor: Receives non-command lines, returns output lines
        """
        self.settings = settings or ConsoleSettings()
        self.buffer = LineBuffer(self.settings.max_lines, self.settings.max_line_length)
        self.scroll = ScrollWindow(self.settings.viewport_height)
        self.history = HistoryStore(self.settings.history_size)
        self.engine = ReflowEngine(oracle, font) if oracle is not None else None
        self.width = width
        self.dispatcher = CommandDispatcher(commands)
        self.executor = executor
        self.backspace_policy = self.settings.backspace_policy
        self.blink = CursorBlink(self.settings.blink_interval)
        self.actions = ActionRegistry()
        self.running = True
        self.status_message: Optional[str] = None
        self.last_error: Optional[ScrolltermError] = None
        self._pending_output: list[str] = []

    # --- Event entry point ---

    def handle(self, event: InputEvent) -> bool:
        """Apply one input event.

        Returns:
            True if the console changed and should be redrawn
        """
        self.status_message = None
        try:
            changed = self.actions.execute(self, event)
        except (LineOverflow, ReadOnlyLine) as e:
            logger.debug("Edit rejected: %s", e)
            return False
        except BufferFull as e:
            self._report_full(e)
            return True
        except MeasurementFailure as e:
            self._report_measurement(e)
            return True
        if changed:
            self.blink.reset()
        return changed

    def _report_full(self, error: BufferFull):
        logger.warning("Buffer full, input truncated: %s", error)
        self.last_error = error
        self.status_message = ConsoleConstants.BUFFER_FULL_MESSAGE.format(error.capacity)

    def _report_measurement(self, error: MeasurementFailure):
        logger.error("Width measurement failed: %s", error)
        self.last_error = error
        self.status_message = ConsoleConstants.MEASUREMENT_FAILED_MESSAGE.format(error.cause)

    # --- Editing ---

    def _wraps(self) -> bool:
        return self.engine is not None and self.width is not None

    def _pieces(self, text: str) -> list[str]:
        """Split text into line-sized pieces for the current width."""
        limit = self.buffer.max_line_length - 1
        if self._wraps():
            return self.engine.wrap(text, self.width, limit)
        if not text or limit < 1:
            return [text]
        return [text[i:i + limit] for i in range(0, len(text), limit)]

    def insert_text(self, text: str) -> bool:
        """Insert text at the cursor, soft-wrapping when it would not fit."""
        text = "".join(ch for ch in text if ch.isprintable())
        if not text:
            return False
        line = self.buffer.active_line
        offset = self.buffer.cursor.offset
        head, tail = line.text[:offset], line.text[offset:]
        pieces = None
        if self._wraps() and not self.engine.fits(head + text + tail, self.width):
            pieces = self._pieces(text + tail)
        if pieces is not None and (head or len(pieces) > 1):
            self.buffer.soft_wrap(text, pieces)
        else:
            self.buffer.insert(text)
        self.history.reset_recall()
        self.reveal_active_line()
        return True

    def backspace(self) -> bool:
        buffer = self.buffer
        if buffer.delete_before_cursor():
            changed = True
        elif buffer.active_index > 0 and buffer.lines[-2].wrapped:
            # Soft break inside the input: step back over it and delete
            changed = buffer.join_previous() and buffer.delete_before_cursor()
        elif self.backspace_policy == BackspacePolicy.JOIN:
            changed = buffer.join_previous()
        else:
            changed = False
        if changed:
            self.history.reset_recall()
            self.reveal_active_line()
        return changed

    def delete(self) -> bool:
        changed = self.buffer.delete_at_cursor()
        if changed:
            self.history.reset_recall()
            self.reveal_active_line()
        return changed

    def _set_input(self, text: str):
        self.buffer.replace_input(self._pieces(text))
        self.reveal_active_line()

    def _recall(self, step: Callable[[], Optional[str]]) -> bool:
        """Show the entry step() moves to, undoing the move if it cannot be shown."""
        saved = self.history.recall_cursor
        text = step()
        if text is None:
            return False
        try:
            self._set_input(text)
        except ScrolltermError:
            self.history.recall_cursor = saved
            raise
        return True

    def recall_previous(self) -> bool:
        return self._recall(self.history.recall_previous)

    def recall_next(self) -> bool:
        return self._recall(self.history.recall_next)

    # --- Commit and output ---

    def enter(self) -> DispatchResult:
        """Commit the input, then run it as a command or hand it on."""
        text = self.buffer.input_text()
        self.history.reset_recall()
        self._pending_output = []
        result = self.dispatcher.try_dispatch(self, text)
        if result.advance:
            self._advance()
        if not result.dispatched and text and self.executor is not None:
            self._pending_output.extend(self.executor(text) or [])
        self._flush_output()
        self.reveal_active_line()
        return result

    def _advance(self):
        try:
            self.buffer.commit_active_line()
        except BufferFull as e:
            self._report_full(e)

    def print(self, text: str):
        """Queue a line of output; it appears below the committed line."""
        self._pending_output.append(text)

    def _flush_output(self):
        pending, self._pending_output = self._pending_output, []
        for text in pending:
            try:
                self.buffer.append_pieces(self._pieces(text))
            except BufferFull as e:
                self._report_full(e)
                break
            except MeasurementFailure as e:
                self._report_measurement(e)
                break

    def write(self, text: str):
        """Print output lines directly, outside of any command."""
        self._pending_output.extend(text.split("\n"))
        self._flush_output()
        self.reveal_active_line()

    def clear(self):
        self.buffer.clear()
        self.scroll.reset()
        self.history.reset_recall()

    def exit(self):
        self.running = False

    # --- View ---

    def reveal_active_line(self):
        self.scroll.ensure_visible(self.buffer.active_index)

    def resize(self, width: Optional[float] = None, rows: Optional[int] = None):
        """Apply a new viewport size, reflowing when the width changed.

        A failed reflow leaves the buffer and the old width in place; the
        new row count is applied either way.
        """
        try:
            if width is not None and width != self.width:
                if self.engine is not None:
                    self.engine.reflow(self.buffer, width)
                    self.history.reset_recall()
                self.width = width
        finally:
            if rows is not None:
                self.scroll.resize(rows, self.buffer.active_index)
            self.reveal_active_line()

    def scroll_by(self, delta_lines: int):
        self.scroll.scroll_by(delta_lines, self.buffer.active_index)

    def visible_lines(self) -> list[tuple[str, bool]]:
        """(text, editable) for each line inside the scroll window."""
        lines = self.buffer.lines
        return [(lines[i].text, lines[i].editable) for i in self.scroll.visible_range(len(lines))]

    def cursor_screen_offset(self) -> tuple[int, int]:
        """(row within the window, offset within the line) of the cursor.

        The row is outside [0, viewport_height) while the user has scrolled
        the active line out of view.
        """
        return (self.buffer.active_index - self.scroll.top, self.buffer.cursor.offset)

    def caret_visible(self) -> bool:
        return self.scroll.contains(self.buffer.active_index) and self.blink.visible()
