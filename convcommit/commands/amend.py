"""Command for rewriting the message of the last commit."""

from typing import Optional

from git.exc import GitCommandError
from rich.console import Console

from ..repository import GitRepository
from .base import GitCommand


class AmendCommand(GitCommand):
    """Amends the last commit with a new message.

    Undo moves the branch back to the commit as it was before the amend.
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
        self.previous_hash: Optional[str] = None
        self.commit_hash: Optional[str] = None

    async def execute(self) -> bool:
        previous = self.repository.head_commit()
        if previous is None:
            self.console.print("[yellow]No commits to amend[/yellow]")
            return False

        try:
            self.commit_hash = self.repository.commit(
                self.message, amend=True, no_verify=self.no_verify
            )
        except GitCommandError as e:
            return self.report_failure("Amend failed", e)

        self.previous_hash = previous
        await self.notify("on_commit_amended", self.message, self.commit_hash)
        return True

    async def undo(self) -> bool:
        if not self.previous_hash:
            self.console.print("[yellow]No amend to undo[/yellow]")
            return False

        try:
            self.repository.reset_soft(self.previous_hash)
        except GitCommandError as e:
            return self.report_failure("Failed to undo amend", e)

        self.previous_hash = None
        self.commit_hash = None
        return True
