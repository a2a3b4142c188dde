"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class InputKind(Enum):
    """The closed set of events the console understands."""
    TEXT_INSERT = "text_insert"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    RESIZE = "resize"
    SCROLL = "scroll"
    QUIT = "quit"


@dataclass
class InputEvent:
    """One input event for the console."""
    kind: InputKind
    text: str = ""  # Inserted text for TEXT_INSERT
    width: Optional[float] = None  # New viewport width for RESIZE
    rows: Optional[int] = None  # New viewport height for RESIZE
    delta: int = 0  # Lines to scroll for SCROLL, positive towards newer lines
    raw: str = ""  # The raw key string the event came from

    @classmethod
    def insert(cls, text: str) -> "InputEvent":
        return cls(InputKind.TEXT_INSERT, text=text, raw=text)

    @classmethod
    def resize(cls, width: Optional[float] = None, rows: Optional[int] = None) -> "InputEvent":
        return cls(InputKind.RESIZE, width=width, rows=rows)

    @classmethod
    def scroll(cls, delta: int) -> "InputEvent":
        return cls(InputKind.SCROLL, delta=delta)


# Curtsies key names that map straight onto an input kind
_SPECIALS = {
    'left': InputKind.LEFT,
    'right': InputKind.RIGHT,
    'up': InputKind.UP,
    'down': InputKind.DOWN,
    'home': InputKind.HOME,
    'end': InputKind.END,
    'backspace': InputKind.BACKSPACE,
    'delete': InputKind.DELETE,
    'enter': InputKind.ENTER,
    'return': InputKind.ENTER,
}

# Emacs-style control keys
_CTRL_KEYS = {
    'a': InputKind.HOME,
    'e': InputKind.END,
    'b': InputKind.LEFT,
    'f': InputKind.RIGHT,
    'p': InputKind.UP,
    'n': InputKind.DOWN,
    'h': InputKind.BACKSPACE,
    'j': InputKind.ENTER,
    'm': InputKind.ENTER,
    'd': InputKind.QUIT,
}


class KeyboardHandler:
    """Turns curtsies key names into console input events."""

    def __init__(self, terminal_interface, page_size: int = 10):
        """Initialize with a terminal interface.

        Args:
            terminal_interface: Object with a get_key(timeout) method
            page_size: Lines scrolled by PageUp/PageDown
        """
        self.terminal = terminal_interface
        self.page_size = page_size

    def get_input_event(self, timeout: Optional[float] = None) -> Optional[InputEvent]:
        """Get the next key and map it to an InputEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> Optional[InputEvent]:
        """Parse a key token into an InputEvent.

        Args:
            key: Key string such as '<LEFT>', '<Ctrl-j>' or 'a'

        Returns:
            Parsed InputEvent, or None for keys the console ignores
        """
        key_str = str(key)

        if key_str.startswith('<') and key_str.endswith('>') and len(key_str) > 2:
            name = key_str[1:-1]
            lower = name.lower().replace('+', '-')
            parts = lower.split('-') if '-' in lower else [lower]
            base = parts[-1]
            mods = set(parts[:-1])
            if 'meta' in mods or 'esc' in mods:
                mods.add('alt')

            if base in ('pageup', 'page_up'):
                return InputEvent(InputKind.SCROLL, delta=-self.page_size, raw=key_str)
            if base in ('pagedown', 'page_down'):
                return InputEvent(InputKind.SCROLL, delta=self.page_size, raw=key_str)
            if base in ('space', 'spacebar', 'spc') and not mods:
                return InputEvent(InputKind.TEXT_INSERT, text=' ', raw=key_str)
            if 'ctrl' in mods and len(base) == 1:
                kind = _CTRL_KEYS.get(base)
                return InputEvent(kind, raw=key_str) if kind else None
            if 'alt' in mods:
                return None
            if base in _SPECIALS:
                return InputEvent(_SPECIALS[base], raw=key_str)
            return None

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if o in (8, 127):
                return InputEvent(InputKind.BACKSPACE, raw=key_str)
            if 1 <= o <= 26:
                kind = _CTRL_KEYS.get(chr(ord('a') + o - 1))
                return InputEvent(kind, raw=key_str) if kind else None
            if o < 32:
                return None

        if not key_str.isprintable():
            return None
        return InputEvent.insert(key_str)
