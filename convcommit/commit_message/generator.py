"""Commit message generation with validation feedback."""
from typing import Optional

from ..models import CommitMessageResult
from ..prompter import PromptProvider
from ..prompts import validation_question
from .formatter import CommitMessageFormatter
from .strategy import CommitMessageStrategy
from .validator import CommitMessageValidator


class CommitMessageGenerator:
    """Composes a message with a strategy, then formats and validates it."""

    def __init__(
        self,
        strategy: CommitMessageStrategy,
        formatter: Optional[CommitMessageFormatter] = None,
        validator: Optional[CommitMessageValidator] = None,
        max_attempts: int = 2,
    ):
        if strategy is None:
            raise ValueError("Strategy must be provided to CommitMessageGenerator")
        self.strategy = strategy
        self.formatter = formatter or CommitMessageFormatter()
        self.validator = validator or CommitMessageValidator(self.formatter.rules)
        self.max_attempts = max_attempts

    async def generate_commit_message(self, provider: PromptProvider) -> Optional[CommitMessageResult]:
        """Generate a validated commit message.

        When the message breaks a rule the user may start over; the last
        result is returned either way so the caller can decide what to do
        with an invalid message. None means the user cancelled.
        """
        result = None
        for attempt in range(1, self.max_attempts + 1):
            components = await self.strategy.compose(provider)
            if components is None:
                return None

            message = self.formatter.format(components)
            result = CommitMessageResult(
                message=message,
                components=components,
                validation=self.validator.validate(message),
            )
            if result.validation.valid or attempt == self.max_attempts:
                break

            if not await provider.ask_one(validation_question(result.validation.errors)):
                break

        return result
