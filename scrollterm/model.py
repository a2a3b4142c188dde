from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import ConsoleConstants
from .errors import BufferFull, LineOverflow, ReadOnlyLine


@dataclass
class Line:
    text: str = ""
    editable: bool = True
    wrapped: bool = False  # Content continues on the next line (soft break)


class BackspacePolicy(Enum):
    """What backspace does at the start of the active line."""
    STOP = "stop"
    JOIN = "join"


@dataclass
class Cursor:
    offset: int = 0

    def clamp(self, length: int):
        if self.offset < 0:
            self.offset = 0
        elif self.offset > length:
            self.offset = length

    def move_left(self):
        if self.offset > 0:
            self.offset -= 1

    def move_right(self, length: int):
        if self.offset < length:
            self.offset += 1

    def move_home(self):
        self.offset = 0

    def move_end(self, length: int):
        self.offset = length


class LineBuffer:
    """Ordered lines of a console with a single editable line at the end.

    The active line is always the last one. Everything above it has been
    committed, printed or soft-wrapped and is not edited in place.
    """

    lines: list[Line]
    cursor: Cursor

    def __init__(self, max_lines: int = ConsoleConstants.MAX_LINES,
                 max_line_length: int = ConsoleConstants.MAX_LINE_LENGTH):
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        if max_line_length < 1:
            raise ValueError("max_line_length must be at least 1")
        self.max_lines = max_lines
        self.max_line_length = max_line_length
        self.lines = [Line()]
        self.cursor = Cursor()

    @property
    def active_index(self) -> int:
        return len(self.lines) - 1

    @property
    def active_line(self) -> Line:
        return self.lines[-1]

    @property
    def is_full(self) -> bool:
        return len(self.lines) >= self.max_lines

    def _check_length(self, length: int):
        if length >= self.max_line_length:
            raise LineOverflow(length, self.max_line_length)

    def _check_editable(self):
        if not self.active_line.editable:
            raise ReadOnlyLine("active line is not editable")

    def _check_room(self, extra: int = 1):
        if len(self.lines) + extra > self.max_lines:
            raise BufferFull(self.max_lines)

    def input_run_start(self) -> int:
        """Index of the first line of the input run ending at the active line."""
        start = self.active_index
        while start > 0 and self.lines[start - 1].wrapped:
            start -= 1
        return start

    def input_text(self) -> str:
        """Logical text of the input run (soft-wrapped pieces joined)."""
        return "".join(line.text for line in self.lines[self.input_run_start():])

    # --- Editing the active line ---

    def insert(self, text: str):
        self._check_editable()
        line = self.active_line
        self._check_length(len(line.text) + len(text))
        offset = self.cursor.offset
        line.text = line.text[:offset] + text + line.text[offset:]
        self.cursor.offset = offset + len(text)

    def delete_before_cursor(self) -> bool:
        line = self.active_line
        offset = self.cursor.offset
        if offset == 0 or not line.editable:
            return False
        line.text = line.text[:offset - 1] + line.text[offset:]
        self.cursor.offset = offset - 1
        return True

    def delete_at_cursor(self) -> bool:
        line = self.active_line
        offset = self.cursor.offset
        if offset >= len(line.text) or not line.editable:
            return False
        line.text = line.text[:offset] + line.text[offset + 1:]
        return True

    def join_previous(self) -> bool:
        """Join the active line onto the previous one.

        The previous line becomes the active line and is made editable,
        even if it held printed output. The cursor lands on the join point.
        """
        if self.active_index == 0 or self.cursor.offset != 0:
            return False
        self._check_editable()
        previous = self.lines[-2]
        self._check_length(len(previous.text) + len(self.active_line.text))
        join_at = len(previous.text)
        previous.text += self.active_line.text
        previous.editable = True
        previous.wrapped = False
        self.lines.pop()
        self.cursor.offset = join_at
        return True

    def soft_wrap(self, typed: str, pieces: Optional[list[str]] = None):
        """Move the typed text and everything after the cursor onto a new line.

        The text before the cursor stays behind as a frozen line marked as
        continuing onto the new one. pieces, when given, is the moved text
        already split to width; all but the last become frozen wrapped lines.
        The cursor lands after the typed text, or at the start of the last
        piece if the typed text ends before it.
        """
        self._check_editable()
        line = self.active_line
        offset = self.cursor.offset
        head = line.text[:offset]
        moved = typed + line.text[offset:]
        if not pieces:
            pieces = [moved]
        for piece in pieces:
            self._check_length(len(piece))
        self._check_room(len(pieces) if head else len(pieces) - 1)
        self.lines.pop()
        if head:
            self.lines.append(Line(head, editable=False, wrapped=True))
        for piece in pieces[:-1]:
            self.lines.append(Line(piece, editable=False, wrapped=True))
        self.lines.append(Line(pieces[-1]))
        last_start = len(moved) - len(pieces[-1])
        self.cursor.offset = max(0, len(typed) - last_start)

    def replace_input(self, pieces: list[str]):
        """Replace the whole input run with new pieces, last one active."""
        if not pieces:
            pieces = [""]
        for piece in pieces:
            self._check_length(len(piece))
        start = self.input_run_start()
        if start + len(pieces) > self.max_lines:
            raise BufferFull(self.max_lines)
        new_lines = [Line(piece, editable=False, wrapped=True) for piece in pieces[:-1]]
        new_lines.append(Line(pieces[-1]))
        self.lines[start:] = new_lines
        self.cursor.offset = len(pieces[-1])

    # --- Growing the buffer ---

    def commit_active_line(self) -> str:
        """Freeze the active line and open a new empty editable line.

        Returns:
            The logical text of the committed input run
        """
        self._check_room()
        committed = self.input_text()
        line = self.active_line
        line.editable = False
        line.wrapped = False
        self.lines.append(Line())
        self.cursor.offset = 0
        return committed

    def append_output(self, text: str, editable: bool = False):
        """Print a line and open a fresh editable line below it.

        Output lands in the active line when that line is empty; otherwise
        the active line is committed first so nothing typed is overwritten.
        """
        self.append_pieces([text], editable)

    def append_pieces(self, pieces: list[str], editable: bool = False):
        """Print one logical line already broken into soft-wrapped pieces."""
        if not pieces:
            pieces = [""]
        for piece in pieces:
            self._check_length(len(piece))
        fresh = self.active_line.text == "" and self.input_run_start() == self.active_index
        self._check_room(len(pieces) if fresh else len(pieces) + 1)
        if not fresh:
            self.commit_active_line()
        self.lines.pop()
        for i, piece in enumerate(pieces):
            self.lines.append(Line(piece, editable=editable, wrapped=i < len(pieces) - 1))
        self.lines.append(Line())
        self.cursor.offset = 0

    def clear(self):
        self.lines = [Line()]
        self.cursor.offset = 0

    def replace_lines(self, lines: list[Line]):
        """Swap in a rebuilt line sequence, last line becoming active."""
        if not lines:
            lines = [Line()]
        if len(lines) > self.max_lines:
            raise BufferFull(self.max_lines)
        for line in lines:
            self._check_length(len(line.text))
        lines[-1].editable = True
        lines[-1].wrapped = False
        self.lines = lines
        self.cursor.offset = len(lines[-1].text)

    def text_lines(self) -> list[str]:
        return [line.text for line in self.lines]

    def get_line(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None
