"""MacroCommand — several commands recorded as one history entry."""

from pagecomposer.core.command_stack import BaseCommand


class MacroCommand(BaseCommand):
    """Run sub-commands in order; undo them in reverse order."""

    def __init__(self, commands: list[BaseCommand], description: str = "Macro") -> None:
        self._commands = list(commands)
        self._description = description

    def execute(self) -> None:
        for command in self._commands:
            command.execute()

    def undo(self) -> None:
        for command in reversed(self._commands):
            command.undo()

    @property
    def description(self) -> str:
        return self._description
