"""Scrollterm - a scrollable, wrapping, terminal-like line console."""

from .model import Line, LineBuffer, Cursor, BackspacePolicy
from .reflow import ReflowEngine, WidthOracle, wrap_text, reflow_lines
from .scroll import ScrollWindow
from .history import HistoryStore
from .commands import CommandDispatcher, CommandTable, ConsoleCommand, DispatchResult
from .console import Console
from .keyboard import InputEvent, InputKind
from .errors import ScrolltermError, LineOverflow, ReadOnlyLine, BufferFull, MeasurementFailure

__all__ = [
    'Line',
    'LineBuffer',
    'Cursor',
    'BackspacePolicy',
    'ReflowEngine',
    'WidthOracle',
    'wrap_text',
    'reflow_lines',
    'ScrollWindow',
    'HistoryStore',
    'CommandDispatcher',
    'CommandTable',
    'ConsoleCommand',
    'DispatchResult',
    'Console',
    'InputEvent',
    'InputKind',
    'ScrolltermError',
    'LineOverflow',
    'ReadOnlyLine',
    'BufferFull',
    'MeasurementFailure',
]
