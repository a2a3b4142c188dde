import time
from typing import Callable

from .constants import ConsoleConstants


class CursorBlink:
    """Caret visibility as a pure function of elapsed time.

    Nothing is scheduled: the presentation layer polls visible() when it
    draws. reset() makes the caret solid again, e.g. after a keystroke.
    """

    def __init__(self, interval: float = ConsoleConstants.BLINK_INTERVAL,
                 clock: Callable[[], float] = time.monotonic):
        if interval <= 0:
            raise ValueError("blink interval must be positive")
        self.interval = interval
        self._clock = clock
        self._start = clock()

    def reset(self):
        self._start = self._clock()

    def visible(self) -> bool:
        phase = int((self._clock() - self._start) / self.interval)
        return phase % 2 == 0

    def time_to_toggle(self) -> float:
        """Seconds until visible() next changes."""
        elapsed = self._clock() - self._start
        return self.interval - (elapsed % self.interval)
