"""Core git workflow for convcommit."""
from typing import List, Optional

from rich.console import Console

from .commands import AmendCommand, CommitCommand, GitCommand, StageCommand
from .observers import GitOperationObserver
from .repository import GitRepository


class GitCommitter:
    """Handles git operations using the Command Pattern."""

    def __init__(
        self,
        repository: GitRepository,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        self.repository = repository
        self.console = console or Console()
        self.no_verify = no_verify
        self.observers: List[GitOperationObserver] = []
        self.command_history: List[GitCommand] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        """Add an observer to be notified of git operations."""
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    async def execute_command(self, command: GitCommand) -> bool:
        """Execute a git command and store it in history if successful."""
        for observer in self.observers:
            command.add_observer(observer)

        success = await command.execute()

        if success:
            self.command_history.append(command)

        return success

    async def undo_last_command(self) -> bool:
        """Undo the last executed command."""
        if not self.command_history:
            self.console.print("[yellow]No commands to undo[/yellow]")
            return False

        command = self.command_history.pop()
        return await command.undo()

    async def commit(self, message: str) -> bool:
        command = CommitCommand(self.repository, message, self.console, no_verify=self.no_verify)
        return await self.execute_command(command)

    async def amend(self, message: str) -> bool:
        command = AmendCommand(self.repository, message, self.console, no_verify=self.no_verify)
        return await self.execute_command(command)

    async def stage(self, files: Optional[List[str]] = None) -> bool:
        """Stage the given files, or all changes."""
        command = StageCommand(self.repository, files, self.console)
        return await self.execute_command(command)
