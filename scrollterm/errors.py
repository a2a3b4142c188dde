"""Typed failures raised by console operations."""


class ScrolltermError(Exception):
    """Base class for all console errors."""


class LineOverflow(ScrolltermError):
    """An edit would make the active line reach the line length limit."""

    def __init__(self, length: int, limit: int):
        super().__init__(f"line length {length} would reach limit {limit}")
        self.length = length
        self.limit = limit


class ReadOnlyLine(ScrolltermError):
    """An edit targeted a line that is not editable."""


class BufferFull(ScrolltermError):
    """No room for another line in the buffer."""

    def __init__(self, capacity: int):
        super().__init__(f"buffer holds at most {capacity} lines")
        self.capacity = capacity


class MeasurementFailure(ScrolltermError):
    """The width oracle could not measure a string."""

    def __init__(self, text: str, cause: Exception):
        super().__init__(f"cannot measure {text!r}: {cause}")
        self.text = text
        self.cause = cause
