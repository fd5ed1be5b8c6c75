"""Shared behaviour of the undoable git commands."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from git.exc import GitCommandError
from rich.console import Console
from rich.markup import escape

from ..observers import GitOperationObserver
from ..repository import GitRepository


class GitCommand(ABC):
    """An undoable operation on a ``GitRepository``.

    ``execute`` and ``undo`` return True on success. Git failures are
    reported on the console and turned into False; they never escape.
    Observers attached before ``execute`` hear about what it did.
    """

    def __init__(self, repository: GitRepository, console: Optional[Console] = None):
        self.repository = repository
        self.console = console or Console()
        self.observers: List[GitOperationObserver] = []

    def add_observer(self, observer: GitOperationObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: GitOperationObserver) -> None:
        self.observers.remove(observer)

    async def notify(self, event: str, *args: Any) -> None:
        """Call ``event`` (an observer method name) on every observer."""
        for observer in self.observers:
            await getattr(observer, event)(*args)

    def report_failure(self, action: str, error: GitCommandError) -> bool:
        self.console.print(f"[red]{action}: {escape(str(error))}[/red]")
        return False

    @abstractmethod
    async def execute(self) -> bool:
        """Run the operation."""
        pass

    @abstractmethod
    async def undo(self) -> bool:
        """Revert what ``execute`` did."""
        pass
