"""User settings for the console.

Settings are read from a JSON file in the OS-appropriate per-user config
directory. Anything missing or invalid falls back to the defaults in
ConsoleConstants.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import ConsoleConstants
from .model import BackspacePolicy

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


@dataclass(frozen=True)
class ConsoleSettings:
    """Capacities and behaviour switches for a Console.

    Attributes:
        max_lines: Lines the buffer can hold
        max_line_length: Line length limit (lines hold one fewer character)
        history_size: Entries kept for recall
        viewport_height: Visible rows before the presentation layer resizes
        backspace_policy: What backspace does at the start of the active line
        blink_interval: Seconds per caret blink phase
        font_name: Name of the font handed to the width oracle
    """
    max_lines: int = ConsoleConstants.MAX_LINES
    max_line_length: int = ConsoleConstants.MAX_LINE_LENGTH
    history_size: int = ConsoleConstants.HISTORY_SIZE
    viewport_height: int = ConsoleConstants.VIEWPORT_HEIGHT
    backspace_policy: BackspacePolicy = BackspacePolicy.STOP
    blink_interval: float = ConsoleConstants.BLINK_INTERVAL
    font_name: str = "terminal"


_POSITIVE_INTS = ('max_lines', 'max_line_length', 'history_size', 'viewport_height')


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir("scrollterm")) / SETTINGS_FILENAME


def _coerce(key: str, value: Any) -> Any:
    """Validate one setting, raising ValueError if it is unusable."""
    if key in _POSITIVE_INTS:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError(f"{key} must be a positive integer")
        return value
    if key == 'backspace_policy':
        return BackspacePolicy(value)
    if key == 'blink_interval':
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError("blink_interval must be a positive number")
        return float(value)
    if key == 'font_name':
        if not isinstance(value, str) or not value:
            raise ValueError("font_name must be a non-empty string")
        return value
    raise ValueError(f"unknown setting {key}")


def settings_from_dict(data: Dict[str, Any], base: Optional[ConsoleSettings] = None) -> ConsoleSettings:
    """Apply valid entries of data on top of base, logging the rest."""
    base = base or ConsoleSettings()
    known = {f.name for f in fields(ConsoleSettings)}
    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting {key!r}")
            continue
        try:
            overrides[key] = _coerce(key, value)
        except ValueError as e:
            logger.warning(f"Ignoring invalid setting {key!r}: {e}")
    return replace(base, **overrides)


def load_settings(path: Optional[Path] = None) -> ConsoleSettings:
    """Load settings from path (default: the user config directory).

    Returns:
        ConsoleSettings; defaults if the file is missing or unreadable.
    """
    path = path or default_settings_path()
    if not path.exists():
        return ConsoleSettings()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {path}: {e}")
        return ConsoleSettings()
    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not a dict), ignoring")
        return ConsoleSettings()
    return settings_from_dict(data)
