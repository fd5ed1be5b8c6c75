"""Prompt providers that turn question lists into answers."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from .prompts import Answers, Question, QuestionKind


class PromptProvider(ABC):
    """Abstract base class for prompt providers.

    ``ask`` walks a question list in order, skipping questions whose ``when``
    predicate is false. Answers pass through the question's ``filter`` and
    are then checked by its ``validate``; an invalid answer is reported and
    the question is asked again.
    """

    async def ask(self, questions: Sequence[Question], answers: Optional[Answers] = None) -> Answers:
        collected: Answers = dict(answers or {})
        for question in questions:
            if not question.should_ask(collected):
                continue

            while True:
                value = await self.prompt(question, collected)
                if question.filter is not None:
                    value = question.filter(value)
                if question.validate is not None:
                    outcome = question.validate(value)
                    if outcome is not True:
                        await self.report_invalid(question, str(outcome))
                        continue
                break

            collected[question.name] = value
        return collected

    async def ask_one(self, question: Question) -> Any:
        answers = await self.ask([question])
        return answers.get(question.name)

    @abstractmethod
    async def prompt(self, question: Question, answers: Answers) -> Any:
        """Ask a single question and return the raw answer."""
        pass

    async def report_invalid(self, question: Question, message: str) -> None:
        """Called when an answer fails validation."""
        pass


class RichPromptProvider(PromptProvider):
    """Terminal prompts built on Rich, with the user's editor for long text."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    async def prompt(self, question: Question, answers: Answers) -> Any:
        message = escape(question.message)

        if question.kind == QuestionKind.SELECT:
            self.console.print(f"[bold]{message}[/bold]")
            values = [choice.value for choice in question.choices]
            for number, choice in enumerate(question.choices, start=1):
                self.console.print(f"  [cyan]{number})[/cyan] {escape(choice.name)}")
            default = values.index(question.default) + 1 if question.default in values else 1
            picked = Prompt.ask(
                "Choose",
                choices=[str(number) for number in range(1, len(values) + 1)],
                default=str(default),
                show_choices=False,
                console=self.console,
            )
            return values[int(picked) - 1]

        if question.kind == QuestionKind.CONFIRM:
            return Confirm.ask(message, default=bool(question.default), console=self.console)

        if question.kind == QuestionKind.EDITOR:
            self.console.print(f"[bold]{message}[/bold]")
            original = question.default or ""
            edited = click.edit(original)
            return original if edited is None else edited

        return Prompt.ask(
            message,
            default=question.default or "",
            show_default=bool(question.default),
            console=self.console,
        )

    async def report_invalid(self, question: Question, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")
