"""Observer pattern for git operations."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape


def _summary(message: str) -> str:
    return message.split("\n")[0]


class GitOperationObserver(ABC):
    """Abstract base class for git operation observers."""

    @abstractmethod
    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        """Called when a commit is created."""
        pass

    @abstractmethod
    async def on_commit_amended(self, message: str, commit_hash: str) -> None:
        """Called when the last commit is amended."""
        pass

    @abstractmethod
    async def on_files_staged(self, files: List[str]) -> None:
        """Called when files are staged."""
        pass


class ConsoleLogObserver(GitOperationObserver):
    """Observer that logs git operations to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        self.console.print(f"[green]✓ Committed {commit_hash[:7]}: {escape(_summary(message))}[/green]")

    async def on_commit_amended(self, message: str, commit_hash: str) -> None:
        self.console.print(f"[green]✓ Amended commit {commit_hash[:7]}: {escape(_summary(message))}[/green]")

    async def on_files_staged(self, files: List[str]) -> None:
        if files:
            self.console.print(f"[green]✓ Staged {len(files)} file(s)[/green]")
        else:
            self.console.print("[green]✓ All changes staged[/green]")


class FileLogObserver(GitOperationObserver):
    """Observer that logs git operations to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    async def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a") as f:
            f.write(f"{timestamp} - {message}\n")

    async def on_commit_created(self, message: str, commit_hash: str) -> None:
        await self._log(f"Created commit {commit_hash}: {_summary(message)}")

    async def on_commit_amended(self, message: str, commit_hash: str) -> None:
        await self._log(f"Amended commit {commit_hash}: {_summary(message)}")

    async def on_files_staged(self, files: List[str]) -> None:
        await self._log(f"Staged {', '.join(files) if files else 'all changes'}")
