"""Line commands recognised when the user presses Enter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .console import Console


class ConsoleCommand(ABC):
    """Base class for line commands."""

    def __init__(self, name: str, advertise: bool = True):
        self.name = name
        self.advertise = advertise

    @abstractmethod
    def execute(self, console: 'Console') -> bool:
        """Run the command.

        Args:
            console: Console the command may mutate

        Returns:
            True if the caller should commit the command line and move on
            to a fresh line, False if the command already left the buffer
            where it should be
        """
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r})"


class HelpCommand(ConsoleCommand):
    def execute(self, console):
        console.print(", ".join(console.dispatcher.table.advertised_names()))
        return True


class ClearCommand(ConsoleCommand):
    def execute(self, console):
        console.clear()
        return False


class ExitCommand(ConsoleCommand):
    def execute(self, console):
        console.exit()
        return True


class HistoryCommand(ConsoleCommand):
    def execute(self, console):
        for number, entry in enumerate(console.history.entries, start=1):
            console.print(f"{number:>3}  {entry}")
        return True


class CommandTable:
    """Immutable name -> command mapping, matched by exact text."""

    def __init__(self, commands: Iterable[ConsoleCommand]):
        self._commands: tuple[ConsoleCommand, ...] = tuple(commands)
        self._by_name: Dict[str, ConsoleCommand] = {}
        for command in self._commands:
            if command.name in self._by_name:
                raise ValueError(f"duplicate command name: {command.name!r}")
            self._by_name[command.name] = command

    def __iter__(self):
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, name: str) -> Optional[ConsoleCommand]:
        return self._by_name.get(name)

    def advertised_names(self) -> list[str]:
        """Names shown by help, in table order."""
        return [command.name for command in self._commands if command.advertise]


def default_command_table() -> CommandTable:
    """Built-in commands; aliases are separate rows that stay out of help."""
    return CommandTable([
        ClearCommand("clear"),
        ExitCommand("exit"),
        HelpCommand("help"),
        HistoryCommand("history"),
        ClearCommand("cls", advertise=False),
        ExitCommand("quit", advertise=False),
    ])


@dataclass
class DispatchResult:
    text: str
    dispatched: bool
    advance: bool = True
    command: Optional[str] = None


class CommandDispatcher:
    """Runs a matching command or hands the line back as ordinary input."""

    def __init__(self, table: Optional[CommandTable] = None):
        self.table = table if table is not None else default_command_table()

    def try_dispatch(self, console: 'Console', line_text: str) -> DispatchResult:
        command = self.table.get(line_text)
        if command is None:
            # Unknown text is input to execute, never an error
            if line_text:
                console.history.push(line_text)
            return DispatchResult(text=line_text, dispatched=False)
        advance = command.execute(console)
        return DispatchResult(text=line_text, dispatched=True, advance=bool(advance), command=command.name)
