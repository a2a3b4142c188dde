from collections import deque
from typing import Optional

from .constants import ConsoleConstants


class HistoryStore:
    """Ring of committed input lines with up/down recall.

    The recall cursor counts back from the newest entry; -1 means the
    active line is the user's own text rather than a recalled entry.
    """

    def __init__(self, capacity: int = ConsoleConstants.HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self._entries: deque[str] = deque(maxlen=capacity)
        self.recall_cursor = -1

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_recalling(self) -> bool:
        return self.recall_cursor >= 0

    def push(self, text: str):
        if not text:
            return
        # Oldest entry drops off the left when full
        self._entries.append(text)
        self.recall_cursor = -1

    def recall_previous(self) -> Optional[str]:
        if not self._entries:
            return None
        if self.recall_cursor < len(self._entries) - 1:
            self.recall_cursor += 1
        return self._entries[len(self._entries) - 1 - self.recall_cursor]

    def recall_next(self) -> Optional[str]:
        if self.recall_cursor < 0:
            return None
        if self.recall_cursor == 0:
            self.recall_cursor = -1
            return ""
        self.recall_cursor -= 1
        return self._entries[len(self._entries) - 1 - self.recall_cursor]

    def reset_recall(self):
        self.recall_cursor = -1

    def clear(self):
        self._entries.clear()
        self.recall_cursor = -1
