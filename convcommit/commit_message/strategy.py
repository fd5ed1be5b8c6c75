"""Commit message composition strategies.

A strategy decides which questions to ask and how the answers become
``CommitComponents``. Returning None means the user cancelled.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..config import Config
from ..models import CommitComponents
from ..prompter import PromptProvider
from ..prompts import (
    Answers,
    amend_questions,
    auto_format_question,
    build_questions,
    quick_questions,
    suggested_scope_question,
)
from .formatter import DEFAULT_TYPE, CommitMessageFormatter
from .mood import to_imperative
from .validator import CommitMessageValidator


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def components_from_answers(answers: Answers) -> CommitComponents:
    """Build components from the answers of the full question flow."""
    scope = answers.get("custom_scope") or answers.get("scope")
    return CommitComponents(
        type=answers.get("type") or DEFAULT_TYPE,
        scope=scope or None,
        subject=answers.get("subject", ""),
        body=_blank_to_none(answers.get("body")),
        breaking=_blank_to_none(answers.get("breaking")),
        footer=_blank_to_none(answers.get("footer")),
    )


class CommitMessageStrategy(ABC):
    """Abstract base class for commit message composition strategies."""

    @abstractmethod
    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        """Collect the components of a commit message."""
        pass


class InteractiveCommitStrategy(CommitMessageStrategy):
    """Walks the user through every question."""

    def __init__(self, config: Config, validator: Optional[CommitMessageValidator] = None):
        self.config = config
        self.validator = validator or CommitMessageValidator(config.rule_config())

    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        answers = await provider.ask(build_questions(self.config, self.validator))
        if not answers.get("confirm_commit"):
            return None
        return components_from_answers(answers)


class SuggestionCommitStrategy(InteractiveCommitStrategy):
    """Interactive flow that proposes a scope derived from the changed files."""

    def __init__(
        self,
        config: Config,
        changed_files: Sequence[str],
        formatter: Optional[CommitMessageFormatter] = None,
        validator: Optional[CommitMessageValidator] = None,
    ):
        super().__init__(config, validator)
        self.changed_files: List[str] = list(changed_files)
        self.formatter = formatter or CommitMessageFormatter(config.rule_config(), config.auto_detect)

    @property
    def suggested_scope(self) -> Optional[str]:
        return self.formatter.suggest_scope(self.changed_files)

    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        suggested = self.suggested_scope
        answers = await provider.ask(build_questions(self.config, self.validator))

        if not answers.get("custom_scope") and not answers.get("scope") and suggested:
            if await provider.ask_one(suggested_scope_question(suggested)):
                answers["scope"] = suggested

        if not answers.get("confirm_commit"):
            return None
        return components_from_answers(answers)


class QuickCommitStrategy(CommitMessageStrategy):
    """Type and subject only, optionally auto-formatted from a raw message."""

    def __init__(
        self,
        config: Config,
        raw_message: Optional[str] = None,
        formatter: Optional[CommitMessageFormatter] = None,
    ):
        self.config = config
        self.raw_message = raw_message
        self.formatter = formatter or CommitMessageFormatter(config.rule_config(), config.auto_detect)

    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        answers: Optional[Answers] = None

        if self.raw_message:
            detected = self.formatter.auto_format(self.raw_message)
            subject = to_imperative(detected.subject)
            if await provider.ask_one(auto_format_question(detected.type, subject)):
                answers = {"type": detected.type, "subject": subject}

        if answers is None:
            answers = await provider.ask(quick_questions(self.formatter.rules))

        return CommitComponents(type=answers["type"], subject=answers["subject"])


class DirectCommitStrategy(CommitMessageStrategy):
    """Components given up front, typically from command line options."""

    def __init__(self, commit_type: str, subject: str, scope: Optional[str] = None):
        self.components = CommitComponents(type=commit_type, subject=subject, scope=scope or None)

    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        return self.components


class AmendCommitStrategy(CommitMessageStrategy):
    """Reformats or edits the message of the last commit."""

    def __init__(
        self,
        current_message: str,
        formatter: Optional[CommitMessageFormatter] = None,
        validator: Optional[CommitMessageValidator] = None,
    ):
        self.current_message = current_message
        self.formatter = formatter or CommitMessageFormatter()
        self.validator = validator or CommitMessageValidator(self.formatter.rules)

    def reformat(self, message: str) -> CommitComponents:
        """Best conventional rendering of an existing message.

        A message that already has a conventional header keeps its scope,
        body and footer; anything else is reduced to a type and subject.
        """
        parsed = self.validator.parse(message)
        if parsed is not None and parsed.type.lower() in self.formatter.rules.type_names:
            subject = self.formatter.clean_subject(self.validator.to_imperative(parsed.subject))
            return CommitComponents(
                type=parsed.type.lower(),
                scope=parsed.scope,
                subject=subject[:1].lower() + subject[1:],
                body=parsed.body,
                footer=parsed.footer,
            )

        detected = self.formatter.auto_format(message.split("\n")[0])
        subject = self.formatter.clean_subject(self.validator.to_imperative(detected.subject))
        return CommitComponents(type=detected.type, subject=subject)

    async def compose(self, provider: PromptProvider) -> Optional[CommitComponents]:
        answers = await provider.ask(amend_questions(self.current_message))
        action = answers.get("amend_action")

        if action == "reformat":
            return self.reformat(self.current_message)
        if action == "edit":
            return self.reformat(answers.get("edited_message") or self.current_message)
        return None
