"""Tests for git commands."""

from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest
from git import Repo
from git.exc import GitCommandError
from rich.console import Console

from convcommit.commands import AmendCommand, CommitCommand, GitCommand, StageCommand
from convcommit.observers import GitOperationObserver
from convcommit.repository import GitRepository


@pytest.fixture
def mock_console():
    """Mock console for testing."""
    console = Mock(spec=Console)
    console.print = Mock()
    return console


@pytest.fixture
def mock_observer():
    observer = Mock(spec=GitOperationObserver)
    observer.on_commit_created = AsyncMock()
    observer.on_commit_amended = AsyncMock()
    observer.on_files_staged = AsyncMock()
    return observer


@pytest.mark.asyncio
async def test_commit_command(temp_git_repo, mock_console, mock_observer):
    """Test creating and undoing a commit."""
    test_file = Path(temp_git_repo) / "test.txt"
    test_file.write_text("Test content")
    repository = GitRepository(temp_git_repo)
    repository.stage_all()

    command = CommitCommand(repository, "feat(test): add test content", mock_console)
    command.add_observer(mock_observer)
    success = await command.execute()
    assert success is True

    repo = Repo(temp_git_repo)
    assert len(list(repo.iter_commits())) == 2
    assert repo.head.commit.message.startswith("feat(test): add test content")
    mock_observer.on_commit_created.assert_awaited_once_with(
        "feat(test): add test content", command.commit_hash
    )

    # Undo keeps the change staged
    success = await command.undo()
    assert success is True
    assert len(list(repo.iter_commits())) == 1
    assert repository.staged_files() == ["test.txt"]


@pytest.mark.asyncio
async def test_commit_command_without_staged_changes(temp_git_repo, mock_console, mock_observer):
    command = CommitCommand(GitRepository(temp_git_repo), "feat: add nothing", mock_console)
    command.add_observer(mock_observer)

    assert await command.execute() is False
    mock_console.print.assert_called_with("[yellow]No staged changes to commit[/yellow]")
    mock_observer.on_commit_created.assert_not_awaited()


@pytest.mark.asyncio
async def test_commit_command_git_failure(mock_console):
    repository = Mock(spec=GitRepository)
    repository.has_staged_changes.return_value = True
    repository.commit.side_effect = GitCommandError("commit", 1, stderr="hook rejected")

    command = CommitCommand(repository, "feat: add thing", mock_console)
    assert await command.execute() is False
    assert "Commit failed" in mock_console.print.call_args[0][0]


@pytest.mark.asyncio
async def test_commit_command_no_verify(mock_console):
    repository = Mock(spec=GitRepository)
    repository.has_staged_changes.return_value = True
    repository.commit.return_value = "abc1234"

    command = CommitCommand(repository, "feat: add thing", mock_console, no_verify=True)
    assert await command.execute() is True
    repository.commit.assert_called_once_with("feat: add thing", no_verify=True)


@pytest.mark.asyncio
async def test_undo_before_execute(mock_console):
    command = CommitCommand(Mock(spec=GitRepository), "feat: add thing", mock_console)
    assert await command.undo() is False


@pytest.mark.asyncio
async def test_undo_initial_commit(empty_git_repo, mock_console):
    (Path(empty_git_repo) / "first.txt").write_text("first")
    repository = GitRepository(str(empty_git_repo))
    repository.stage_all()

    command = CommitCommand(repository, "chore: initial commit", mock_console)
    assert await command.execute() is True

    assert await command.undo() is False
    mock_console.print.assert_called_with("[yellow]Cannot undo the initial commit[/yellow]")
    assert repository.head_commit() == command.commit_hash


@pytest.mark.asyncio
async def test_amend_command(temp_git_repo, mock_console, mock_observer):
    repository = GitRepository(temp_git_repo)
    original = repository.head_commit()

    command = AmendCommand(repository, "chore: set up repository", mock_console)
    command.add_observer(mock_observer)
    assert await command.execute() is True

    assert repository.last_commit_message() == "chore: set up repository"
    mock_observer.on_commit_amended.assert_awaited_once_with(
        "chore: set up repository", command.commit_hash
    )

    assert await command.undo() is True
    assert repository.head_commit() == original
    assert repository.last_commit_message() == "chore: initial commit"


@pytest.mark.asyncio
async def test_amend_command_without_commits(empty_git_repo, mock_console):
    command = AmendCommand(GitRepository(str(empty_git_repo)), "chore: nothing", mock_console)
    assert await command.execute() is False


@pytest.mark.asyncio
async def test_stage_command(temp_git_repo, mock_console, mock_observer):
    root = Path(temp_git_repo)
    (root / "a.txt").write_text("a")
    (root / "b.txt").write_text("b")
    repository = GitRepository(temp_git_repo)

    command = StageCommand(repository, ["a.txt"], mock_console)
    command.add_observer(mock_observer)
    assert await command.execute() is True
    assert repository.staged_files() == ["a.txt"]
    mock_observer.on_files_staged.assert_awaited_once_with(["a.txt"])

    assert await command.undo() is True
    assert repository.staged_files() == []


@pytest.mark.asyncio
async def test_stage_all_command(temp_git_repo, mock_console):
    root = Path(temp_git_repo)
    (root / "a.txt").write_text("a")
    (root / "test.txt").write_text("changed")
    repository = GitRepository(temp_git_repo)

    command = StageCommand(repository, console=mock_console)
    assert await command.execute() is True
    assert sorted(repository.staged_files()) == ["a.txt", "test.txt"]

    assert await command.undo() is True
    assert repository.staged_files() == []


@pytest.mark.asyncio
async def test_stage_command_failure(temp_git_repo, mock_console):
    command = StageCommand(GitRepository(temp_git_repo), ["missing.txt"], mock_console)
    assert await command.execute() is False
    assert "Failed to stage changes" in mock_console.print.call_args[0][0]


def test_git_command_is_abstract():
    with pytest.raises(TypeError):
        GitCommand(Mock(spec=GitRepository))
