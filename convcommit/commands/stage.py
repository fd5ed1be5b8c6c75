"""Command for staging changes."""

from typing import List, Optional

from git.exc import GitCommandError
from rich.console import Console

from ..repository import GitRepository
from .base import GitCommand


class StageCommand(GitCommand):
    """Stages the given files, or every change when no files are given."""

    def __init__(
        self,
        repository: GitRepository,
        files: Optional[List[str]] = None,
        console: Optional[Console] = None,
    ):
        super().__init__(repository, console)
        self.files = list(files or [])
        self.executed = False

    async def execute(self) -> bool:
        try:
            if self.files:
                self.repository.stage_files(self.files)
            else:
                self.repository.stage_all()
        except GitCommandError as e:
            return self.report_failure("Failed to stage changes", e)

        self.executed = True
        await self.notify("on_files_staged", self.files)
        return True

    async def undo(self) -> bool:
        if not self.executed:
            self.console.print("[yellow]Nothing staged to undo[/yellow]")
            return False

        try:
            self.repository.unstage(self.files or None)
        except GitCommandError as e:
            return self.report_failure("Failed to unstage changes", e)

        self.executed = False
        return True
