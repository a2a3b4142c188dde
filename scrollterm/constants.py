"""Constants and configuration for the scrollterm console."""


class ConsoleConstants:
    """Central configuration constants for the console."""

    # Buffer capacities
    MAX_LINES = 1000  # Lines held in the scrollback buffer
    MAX_LINE_LENGTH = 256  # A line holds at most MAX_LINE_LENGTH - 1 characters
    HISTORY_SIZE = 100  # Committed lines remembered for recall

    # Viewport
    VIEWPORT_HEIGHT = 30  # Rows shown when the presentation layer does not say
    MIN_VIEWPORT_HEIGHT = 1

    # Cursor blink
    BLINK_INTERVAL = 0.5  # Seconds per caret phase

    # Terminal front-end
    POLL_TIMEOUT = 0.1  # Select timeout so the caret keeps blinking (seconds)
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status messages
    BUFFER_FULL_MESSAGE = "Buffer full: {} lines"
    MEASUREMENT_FAILED_MESSAGE = "Cannot measure text: {}"
