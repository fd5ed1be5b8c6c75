import pytest
from pathlib import Path
from typing import Any, Dict, List
from git import Repo

from convcommit.prompter import PromptProvider
from convcommit.prompts import Answers, Question

pytest_plugins = ('pytest_asyncio',)


def _init_repo(path: Path) -> Repo:
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture
def empty_git_repo(tmp_path):
    """A git repository without any commits."""
    _init_repo(tmp_path)
    return tmp_path


@pytest.fixture
def temp_git_repo(tmp_path):
    """Create a temporary git repository with one commit."""
    repo = _init_repo(tmp_path)

    test_file = tmp_path / "test.txt"
    test_file.write_text("Initial content")
    repo.index.add(["test.txt"])
    repo.index.commit("chore: initial commit")

    return tmp_path


class ScriptedPromptProvider(PromptProvider):
    """Answers questions from a script, falling back to each question's default.

    Script values may be callables taking the question, for answers that
    depend on the prompt text.
    """

    def __init__(self, answers: Dict[str, Any] = None):
        self.answers = dict(answers or {})
        self.asked: List[str] = []
        self.messages: Dict[str, str] = {}

    async def prompt(self, question: Question, answers: Answers) -> Any:
        self.asked.append(question.name)
        self.messages[question.name] = question.message
        if question.name not in self.answers:
            return question.default
        value = self.answers[question.name]
        if callable(value):
            return value(question)
        return value

    async def report_invalid(self, question: Question, message: str) -> None:
        raise AssertionError(f"Invalid answer for {question.name}: {message}")


@pytest.fixture
def scripted():
    """Factory for scripted prompt providers."""
    return ScriptedPromptProvider
