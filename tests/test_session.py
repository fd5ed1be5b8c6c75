"""Tests for the commit session flows."""
import io
from pathlib import Path

import pytest
from rich.console import Console

from convcommit.config import DEFAULT_CONFIG_FILENAME, Config
from convcommit.repository import GitRepository, RepositoryError
from convcommit.session import CommitSession


def make_session(provider, repo_path=None, config=None):
    output = io.StringIO()
    console = Console(file=output, width=200, color_system=None)
    repository = GitRepository(str(repo_path)) if repo_path else None
    session = CommitSession(config or Config(), provider, repository, console)
    return session, output


def stage_change(repo_path, name="test.txt", content="changed"):
    (Path(repo_path) / name).write_text(content)
    GitRepository(str(repo_path)).stage_all()


@pytest.mark.asyncio
async def test_flows_require_repository(scripted):
    session, _ = make_session(scripted())
    with pytest.raises(RepositoryError):
        await session.interactive()
    with pytest.raises(RepositoryError):
        await session.validate_history()


@pytest.mark.asyncio
async def test_interactive_commit(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    provider = scripted({
        "type": "fix",
        "scope": "core",
        "subject": "resolve startup crash",
        "body": "",
        "is_breaking": False,
        "footer": "Fixes #8",
    })
    session, output = make_session(provider, temp_git_repo)

    assert await session.interactive() == 0
    assert session.repository.last_commit_message() == "fix(core): resolve startup crash\n\nFixes #8"
    assert "Repository Status" in output.getvalue()
    assert "Preview" in output.getvalue()


@pytest.mark.asyncio
async def test_interactive_offers_to_stage(temp_git_repo, scripted):
    (Path(temp_git_repo) / "test.txt").write_text("changed")
    provider = scripted({
        "stage_all": True, "type": "chore", "scope": None, "subject": "tidy test file", "body": "",
    })
    session, _ = make_session(provider, temp_git_repo)

    assert await session.interactive() == 0
    assert session.repository.last_commit_message() == "chore: tidy test file"


@pytest.mark.asyncio
async def test_interactive_nothing_staged_declined(temp_git_repo, scripted):
    session, output = make_session(scripted(), temp_git_repo)
    assert await session.interactive() == 0
    assert "No staged changes found" in output.getvalue()
    assert "git add <files>" in output.getvalue()


@pytest.mark.asyncio
async def test_interactive_cancelled(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    provider = scripted({"type": "docs", "scope": None, "subject": "document x", "confirm_commit": False})
    session, output = make_session(provider, temp_git_repo)
    before = session.repository.head_commit()

    assert await session.interactive() == 0
    assert session.repository.head_commit() == before
    assert "Commit cancelled" in output.getvalue()


@pytest.mark.asyncio
async def test_quick_commit(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    session, _ = make_session(scripted(), temp_git_repo)

    assert await session.quick("fixed login bug") == 0
    assert session.repository.last_commit_message() == "fix: fix login bug"


@pytest.mark.asyncio
async def test_quick_without_staged_changes(temp_git_repo, scripted):
    session, output = make_session(scripted(), temp_git_repo)
    assert await session.quick("fixed login bug") == 1
    assert "No staged changes" in output.getvalue()


@pytest.mark.asyncio
async def test_direct_commit(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    session, _ = make_session(scripted(), temp_git_repo)

    assert await session.direct("feat", "add greeting", "cli") == 0
    assert session.repository.last_commit_message() == "feat(cli): add greeting"


@pytest.mark.asyncio
async def test_direct_commit_invalid(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    provider = scripted()
    session, output = make_session(provider, temp_git_repo)
    before = session.repository.head_commit()

    assert await session.direct("feature", "Added greeting") == 1
    assert session.repository.head_commit() == before
    assert provider.asked == []
    assert 'Invalid type "feature"' in output.getvalue()


@pytest.mark.asyncio
async def test_amend(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    repository = GitRepository(temp_git_repo)
    repository.commit("Fixed: Crash on launch.")

    session, _ = make_session(scripted({"amend_action": "reformat"}), temp_git_repo)
    assert await session.amend() == 0
    assert session.repository.last_commit_message() == "fix: crash on launch"
    assert len(session.repository.commit_history(10)) == 2


@pytest.mark.asyncio
async def test_amend_past_tense_free_text(temp_git_repo, scripted):
    stage_change(temp_git_repo)
    GitRepository(temp_git_repo).commit("Added dark mode")

    session, _ = make_session(scripted({"amend_action": "reformat"}), temp_git_repo)
    assert await session.amend() == 0
    assert session.repository.last_commit_message() == "feat: add dark mode"


@pytest.mark.asyncio
async def test_amend_without_commits(empty_git_repo, scripted):
    session, output = make_session(scripted(), empty_git_repo)
    assert await session.amend() == 1
    assert "No commits found" in output.getvalue()


@pytest.mark.asyncio
async def test_auto(temp_git_repo, scripted):
    root = Path(temp_git_repo)
    (root / "src" / "auth").mkdir(parents=True)
    (root / "src" / "auth" / "login.py").write_text("def login():\n    pass\n")
    GitRepository(temp_git_repo).stage_all()

    provider = scripted({"type": "feat", "scope": None, "subject": "add login", "body": "", "is_breaking": False})
    session, output = make_session(provider, temp_git_repo)

    assert await session.auto() == 0
    text = output.getvalue()
    assert "Files changed: 1" in text
    assert "+2 -0" in text
    assert "Suggested scope based on changes: auth" in text
    assert "→ Modified: src/auth/login.py" in text
    assert session.repository.last_commit_message() == "feat(auth): add login"


@pytest.mark.asyncio
async def test_validate_history(temp_git_repo, scripted):
    repository = GitRepository(temp_git_repo)
    for message in ("feat: add parser", "Updated stuff"):
        stage_change(temp_git_repo, content=message)
        repository.commit(message)

    session, output = make_session(scripted(), temp_git_repo)
    assert await session.validate_history(2) == 0
    text = output.getvalue()
    assert "Validating last 2 commits" in text
    assert "Valid: 1, Invalid: 1" in text
    assert "Header must follow format: type(scope): subject" in text

    assert await session.validate_history(2, strict=True) == 1


@pytest.mark.asyncio
async def test_validate_history_uses_config_count(temp_git_repo, scripted):
    session, output = make_session(scripted(), temp_git_repo, Config(history_count=1))
    assert await session.validate_history() == 0
    assert "Validating last 1 commits" in output.getvalue()


@pytest.mark.asyncio
async def test_check(scripted):
    session, output = make_session(scripted())

    assert await session.check("feat: add x\n# Please enter the commit message\n") == 0
    assert "Commit message is valid" in output.getvalue()

    assert await session.check("feat: added x") == 1
    assert "Try: add x" in output.getvalue()


@pytest.mark.asyncio
async def test_check_stops_at_scissors(scripted):
    session, output = make_session(scripted())
    message = (
        "feat: add x\n"
        "\n"
        "# ------------------------ >8 ------------------------\n"
        "# Do not modify or remove the line above.\n"
        "diff --git a/x.py b/x.py\n"
        "+" + "y" * 150 + "\n"
    )

    assert await session.check(message) == 0
    assert "Commit message is valid" in output.getvalue()


@pytest.mark.asyncio
async def test_status(temp_git_repo, scripted):
    session, output = make_session(scripted(), temp_git_repo)
    assert await session.status() == 0
    assert "Clean" in output.getvalue()


def test_init_config(tmp_path, scripted):
    session, output = make_session(scripted(), config=Config(history_count=4))

    assert session.init_config(tmp_path) == 0
    assert (tmp_path / DEFAULT_CONFIG_FILENAME).exists()
    assert Config.load(tmp_path).history_count == 4

    assert session.init_config(tmp_path) == 1
    assert "already exists" in output.getvalue()
    assert session.init_config(tmp_path, force=True) == 0
