"""Command pattern mapping input events to console operations."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, TYPE_CHECKING
from .keyboard import InputKind

if TYPE_CHECKING:
    from .console import Console
    from .keyboard import InputEvent


class EventAction(ABC):
    """Base class for event actions."""

    @abstractmethod
    def execute(self, console: 'Console', event: 'InputEvent') -> bool:
        """Apply the event.

        Args:
            console: Console instance
            event: The event that triggered this action

        Returns:
            True if the console state changed and needs a redraw
        """
        pass


class MovementAction(EventAction):
    """Base class for cursor movement within the active line."""

    def execute(self, console: 'Console', event: 'InputEvent') -> bool:
        before = (console.buffer.cursor.offset, console.scroll.top)
        self._move(console)
        console.reveal_active_line()
        return (console.buffer.cursor.offset, console.scroll.top) != before

    @abstractmethod
    def _move(self, console: 'Console'):
        """Perform the movement."""
        pass


class LeftAction(MovementAction):
    def _move(self, console):
        console.buffer.cursor.move_left()


class RightAction(MovementAction):
    def _move(self, console):
        console.buffer.cursor.move_right(len(console.buffer.active_line.text))


class HomeAction(MovementAction):
    def _move(self, console):
        console.buffer.cursor.move_home()


class EndAction(MovementAction):
    def _move(self, console):
        console.buffer.cursor.move_end(len(console.buffer.active_line.text))


class EditAction(EventAction):
    """Base class for edits of the active line."""

    def execute(self, console: 'Console', event: 'InputEvent') -> bool:
        return self._edit(console, event)

    @abstractmethod
    def _edit(self, console: 'Console', event: 'InputEvent') -> bool:
        """Perform the edit, returning whether anything changed."""
        pass


class InsertTextAction(EditAction):
    def _edit(self, console, event):
        return console.insert_text(event.text)


class BackspaceAction(EditAction):
    def _edit(self, console, event):
        return console.backspace()


class DeleteAction(EditAction):
    def _edit(self, console, event):
        return console.delete()


class EnterAction(EditAction):
    def _edit(self, console, event):
        console.enter()
        return True


class RecallPreviousAction(EditAction):
    def _edit(self, console, event):
        return console.recall_previous()


class RecallNextAction(EditAction):
    def _edit(self, console, event):
        return console.recall_next()


class SystemAction(EventAction):
    """Base class for events that change the view or lifecycle, not the text."""

    def execute(self, console: 'Console', event: 'InputEvent') -> bool:
        self._execute_system(console, event)
        return True

    @abstractmethod
    def _execute_system(self, console: 'Console', event: 'InputEvent'):
        """Perform the system action."""
        pass


class ResizeAction(SystemAction):
    def _execute_system(self, console, event):
        console.resize(width=event.width, rows=event.rows)


class ScrollAction(SystemAction):
    def _execute_system(self, console, event):
        console.scroll_by(event.delta)


class QuitAction(SystemAction):
    def _execute_system(self, console, event):
        console.exit()


class ActionRegistry:
    """Registry for mapping input kinds to actions."""

    def __init__(self):
        self._actions: Dict[InputKind, EventAction] = {}
        self._setup_default_actions()

    def _setup_default_actions(self):
        """Set up the default action mappings."""
        # Movement
        self.register(InputKind.LEFT, LeftAction())
        self.register(InputKind.RIGHT, RightAction())
        self.register(InputKind.HOME, HomeAction())
        self.register(InputKind.END, EndAction())

        # Editing
        self.register(InputKind.TEXT_INSERT, InsertTextAction())
        self.register(InputKind.BACKSPACE, BackspaceAction())
        self.register(InputKind.DELETE, DeleteAction())
        self.register(InputKind.ENTER, EnterAction())

        # History recall
        self.register(InputKind.UP, RecallPreviousAction())
        self.register(InputKind.DOWN, RecallNextAction())

        # View and lifecycle
        self.register(InputKind.RESIZE, ResizeAction())
        self.register(InputKind.SCROLL, ScrollAction())
        self.register(InputKind.QUIT, QuitAction())

    def register(self, kind: InputKind, action: EventAction):
        """Register an action for an input kind."""
        self._actions[kind] = action

    def get_action(self, kind: InputKind) -> Optional[EventAction]:
        return self._actions.get(kind)

    def execute(self, console: 'Console', event: 'InputEvent') -> bool:
        """Execute the action for the given event.

        Returns:
            True if the console state changed
        """
        action = self.get_action(event.kind)
        if action:
            return action.execute(console, event)
        return False
