"""Git repository backend."""
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .models import CommitRecord, DiffSummary, FileStat, StatusSummary


class RepositoryError(Exception):
    """Raised when a directory cannot be used as a git repository."""


def _unique(paths: Iterable[Optional[str]]) -> List[str]:
    seen = []
    for path in paths:
        if path and path not in seen:
            seen.append(path)
    return seen


class GitRepository:
    """Thin wrapper over GitPython exposing what the commit flows need.

    Query methods never raise for an empty repository (no commits yet);
    mutating methods let ``GitCommandError`` propagate.
    """

    def __init__(self, repo_path: str = "."):
        try:
            self.repo = Repo(repo_path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryError(f"Not a git repository: {repo_path}") from e

    @staticmethod
    def is_git_repo(path: str = ".") -> bool:
        try:
            Repo(path, search_parent_directories=True)
            return True
        except (InvalidGitRepositoryError, NoSuchPathError):
            return False

    def has_commits(self) -> bool:
        return self.repo.head.is_valid()

    def staged_files(self) -> List[str]:
        if self.has_commits():
            return _unique(diff.a_path or diff.b_path for diff in self.repo.index.diff("HEAD"))
        return sorted({path for path, _stage in self.repo.index.entries})

    def changed_files(self) -> List[str]:
        unstaged = (diff.a_path or diff.b_path for diff in self.repo.index.diff(None))
        return _unique([*self.staged_files(), *unstaged, *self.repo.untracked_files])

    def has_staged_changes(self) -> bool:
        return bool(self.staged_files())

    def commit(self, message: str, amend: bool = False, no_verify: bool = False) -> str:
        """Create (or amend) a commit and return its hash.

        The message goes through a file so multi-line messages survive intact.
        """
        with tempfile.NamedTemporaryFile(
            mode="w", delete=False, suffix=".commitmsg", encoding="utf-8"
        ) as f:
            f.write(message)
            temp_file = f.name

        args = ["-F", temp_file]
        if amend:
            args.append("--amend")
        if no_verify:
            args.append("--no-verify")

        try:
            self.repo.git.commit(*args)
        finally:
            try:
                os.unlink(temp_file)
            except OSError:
                pass

        return self.repo.head.commit.hexsha

    def head_commit(self) -> Optional[str]:
        return self.repo.head.commit.hexsha if self.has_commits() else None

    def head_has_parent(self) -> bool:
        return self.has_commits() and bool(self.repo.head.commit.parents)

    def last_commit_message(self) -> str:
        if not self.has_commits():
            return ""
        return self.repo.head.commit.message.strip()

    def commit_history(self, count: int = 10) -> List[CommitRecord]:
        if not self.has_commits():
            return []
        return [
            CommitRecord(
                hash=commit.hexsha[:7],
                message=commit.message.strip(),
                author=commit.author.name,
                date=commit.committed_datetime.isoformat(),
            )
            for commit in self.repo.iter_commits(max_count=count)
        ]

    def diff_summary(self) -> DiffSummary:
        """Line statistics of the staged changes."""
        summary = DiffSummary()
        output = self.repo.git.diff("--cached", "--numstat")
        for line in output.splitlines():
            parts = line.split("\t", 2)
            if len(parts) != 3:
                continue
            # Binary files report "-" for both counts
            added = int(parts[0]) if parts[0].isdigit() else 0
            deleted = int(parts[1]) if parts[1].isdigit() else 0
            summary.files.append(FileStat(file=parts[2], additions=added, deletions=deleted))
            summary.additions += added
            summary.deletions += deleted
        summary.changes = len(summary.files)
        return summary

    def stage_all(self) -> None:
        self.repo.git.add("--all")

    def stage_files(self, files: List[str]) -> None:
        self.repo.git.add("--", *files)

    def unstage(self, files: Optional[List[str]] = None) -> None:
        if self.has_commits():
            if files:
                self.repo.git.reset("-q", "HEAD", "--", *files)
            else:
                self.repo.git.reset("-q")
        else:
            self.repo.git.rm("--cached", "-r", "-q", "--", *(files or ["."]))

    def reset_soft(self, ref: str) -> None:
        self.repo.git.reset("--soft", ref)

    def repo_root(self) -> Path:
        return Path(self.repo.working_tree_dir)

    def current_branch(self) -> str:
        try:
            return self.repo.active_branch.name
        except TypeError:
            return "HEAD (detached)"

    def is_clean(self) -> bool:
        return not self.repo.is_dirty(untracked_files=True)

    def status_summary(self) -> StatusSummary:
        ahead = behind = 0
        try:
            tracking = self.repo.active_branch.tracking_branch()
            if tracking is not None and self.has_commits():
                ahead = sum(1 for _ in self.repo.iter_commits(f"{tracking.name}..HEAD"))
                behind = sum(1 for _ in self.repo.iter_commits(f"HEAD..{tracking.name}"))
        except (TypeError, ValueError, GitCommandError):
            # Detached HEAD or a tracking branch that was never fetched
            pass

        return StatusSummary(
            branch=self.current_branch(),
            ahead=ahead,
            behind=behind,
            staged=len(self.staged_files()),
            modified=len(self.repo.index.diff(None)),
            untracked=len(self.repo.untracked_files),
            clean=self.is_clean(),
        )
