"""Command for creating git commits."""

from typing import Optional

from git.exc import GitCommandError
from rich.console import Console

from ..repository import GitRepository
from .base import GitCommand


class CommitCommand(GitCommand):
    """Commits the staged changes with a finished message.

    Undo is a soft reset to the parent, so the changes stay staged.
    """

    def __init__(
        self,
        repository: GitRepository,
        message: str,
        console: Optional[Console] = None,
        no_verify: bool = False,
    ):
        super().__init__(repository, console)
        self.message = message
        self.no_verify = no_verify
        self.commit_hash: Optional[str] = None

    async def execute(self) -> bool:
        if not self.repository.has_staged_changes():
            self.console.print("[yellow]No staged changes to commit[/yellow]")
            return False

        try:
            self.commit_hash = self.repository.commit(self.message, no_verify=self.no_verify)
        except GitCommandError as e:
            return self.report_failure("Commit failed", e)

        await self.notify("on_commit_created", self.message, self.commit_hash)
        return True

    async def undo(self) -> bool:
        if not self.commit_hash:
            self.console.print("[yellow]No commit to undo[/yellow]")
            return False

        if not self.repository.head_has_parent():
            self.console.print("[yellow]Cannot undo the initial commit[/yellow]")
            return False

        try:
            self.repository.reset_soft("HEAD~1")
        except GitCommandError as e:
            return self.report_failure("Failed to undo commit", e)

        self.commit_hash = None
        return True
