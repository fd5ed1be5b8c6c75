"""Undoable git operations.

Each command wraps one change to the repository (stage, commit, amend),
remembers enough to revert it, and tells attached observers what happened.
``GitCommitter`` keeps the executed commands so the latest can be undone:

    command = CommitCommand(GitRepository("."), "feat(api): add users endpoint")
    command.add_observer(FileLogObserver("git.log"))
    if await command.execute():
        await command.undo()  # changes stay staged
"""

from .amend import AmendCommand
from .base import GitCommand
from .commit import CommitCommand
from .stage import StageCommand

__all__ = [
    "AmendCommand",
    "GitCommand",
    "CommitCommand",
    "StageCommand",
]
