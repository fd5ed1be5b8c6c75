"""Commit flows that tie prompting, formatting, validation and git together.

Every flow returns a process exit status: 0 for success or a deliberate
cancellation, 1 when the flow could not finish.
"""
import re
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .commit_message import CommitMessageFormatter, CommitMessageValidator
from .commit_message.generator import CommitMessageGenerator
from .commit_message.strategy import (
    AmendCommitStrategy,
    CommitMessageStrategy,
    DirectCommitStrategy,
    InteractiveCommitStrategy,
    QuickCommitStrategy,
    SuggestionCommitStrategy,
)
from .config import DEFAULT_CONFIG_FILENAME, Config
from .core import GitCommitter
from .display import print_errors, print_file_list, print_preview, status_table
from .prompter import PromptProvider
from .prompts import stage_all_question
from .repository import GitRepository, RepositoryError

MAX_LISTED_FILES = 10

# Written by `git commit --verbose`; everything below it is the diff.
SCISSORS_LINE = re.compile(r"^# -+ >8 -+$")


class CommitSession:
    """Runs the commit flows against one repository."""

    def __init__(
        self,
        config: Config,
        provider: PromptProvider,
        repository: Optional[GitRepository] = None,
        console: Optional[Console] = None,
        committer: Optional[GitCommitter] = None,
    ):
        self.config = config
        self.rules = config.rule_config()
        self.validator = CommitMessageValidator(self.rules)
        self.formatter = CommitMessageFormatter(self.rules, config.auto_detect)
        self.provider = provider
        self.repository = repository
        self.console = console or Console()
        if committer is None and repository is not None:
            committer = GitCommitter(repository, self.console, no_verify=config.no_verify)
        self.committer = committer

    def _require_repository(self) -> GitRepository:
        if self.repository is None or self.committer is None:
            raise RepositoryError("Not a git repository")
        return self.repository

    async def _ensure_staged(self) -> bool:
        """Offer to stage everything when nothing is staged yet."""
        if self.repository.has_staged_changes():
            return True

        self.console.print("[yellow]⚠ No staged changes found[/yellow]")
        if await self.provider.ask_one(stage_all_question()):
            return await self.committer.stage()

        self.console.print("[blue]ℹ Please stage your changes with: git add <files>[/blue]")
        return False

    async def _run(self, strategy: CommitMessageStrategy, amend: bool = False, max_attempts: int = 2) -> int:
        generator = CommitMessageGenerator(strategy, self.formatter, self.validator, max_attempts)
        result = await generator.generate_commit_message(self.provider)

        if result is None:
            self.console.print("[yellow]⚠ Commit cancelled[/yellow]")
            return 0

        print_preview(self.console, result.message)

        if not result.validation.valid:
            print_errors(self.console, result.validation.errors)
            return 1

        if amend:
            success = await self.committer.amend(result.message)
        else:
            success = await self.committer.commit(result.message)
        return 0 if success else 1

    async def interactive(self) -> int:
        repository = self._require_repository()
        if not await self._ensure_staged():
            return 0

        self.console.print(status_table(repository.status_summary()))
        return await self._run(InteractiveCommitStrategy(self.config, self.validator))

    async def quick(self, message: Optional[str] = None) -> int:
        repository = self._require_repository()
        if not repository.has_staged_changes():
            self.console.print("[yellow]⚠ No staged changes[/yellow]")
            return 1

        return await self._run(QuickCommitStrategy(self.config, message, self.formatter))

    async def direct(self, commit_type: str, subject: str, scope: Optional[str] = None) -> int:
        repository = self._require_repository()
        if not repository.has_staged_changes():
            self.console.print("[yellow]⚠ No staged changes[/yellow]")
            return 1

        return await self._run(DirectCommitStrategy(commit_type, subject, scope), max_attempts=1)

    async def amend(self) -> int:
        repository = self._require_repository()
        last_message = repository.last_commit_message()
        if not last_message:
            self.console.print("[red]✗ No commits found[/red]")
            return 1

        strategy = AmendCommitStrategy(last_message, self.formatter, self.validator)
        return await self._run(strategy, amend=True)

    async def auto(self) -> int:
        repository = self._require_repository()
        if not repository.has_staged_changes():
            self.console.print("[yellow]⚠ No staged changes[/yellow]")
            return 1

        self.console.print("\n[bold cyan]Analyzing changes...[/bold cyan]\n")
        changed_files = repository.staged_files()
        diff = repository.diff_summary()
        self.console.print(f"[blue]ℹ Files changed: {len(changed_files)}[/blue]")
        self.console.print(f"[blue]ℹ +{diff.additions} -{diff.deletions}[/blue]")

        strategy = SuggestionCommitStrategy(self.config, changed_files, self.formatter, self.validator)
        suggested = strategy.suggested_scope
        if suggested:
            self.console.print(f"[blue]ℹ Suggested scope based on changes: {escape(suggested)}[/blue]")
        if len(changed_files) <= MAX_LISTED_FILES:
            print_file_list(self.console, changed_files)

        return await self._run(strategy)

    async def validate_history(self, count: Optional[int] = None, strict: bool = False) -> int:
        """Validate recent commits; with ``strict`` any invalid commit fails."""
        repository = self._require_repository()
        commits = repository.commit_history(count or self.config.history_count)

        self.console.print(f"\n[bold cyan]Validating last {len(commits)} commits[/bold cyan]\n")

        invalid_count = 0
        for commit in commits:
            validation = self.validator.validate(commit.message)
            line = f"{commit.hash} - {escape(commit.summary)}"
            if validation.valid:
                self.console.print(f"[green]✓ {line}[/green]")
            else:
                invalid_count += 1
                self.console.print(f"[red]✗ {line}[/red]")
                for error in validation.errors:
                    self.console.print(f"    {escape(error)}")

        self.console.print("[dim]" + "─" * 50 + "[/dim]")
        self.console.print(
            f"[blue]ℹ Valid: {len(commits) - invalid_count}, Invalid: {invalid_count}[/blue]"
        )

        if invalid_count:
            self.console.print(f"[yellow]⚠ Found {invalid_count} invalid commit(s)[/yellow]")
            self.console.print("[blue]ℹ Consider using: convcommit amend[/blue]")
            return 1 if strict else 0
        return 0

    async def check(self, message: str) -> int:
        """Validate a single message, ignoring git comment lines and anything below the scissors."""
        lines = []
        for line in message.split("\n"):
            if SCISSORS_LINE.match(line):
                break
            if not line.startswith("#"):
                lines.append(line.rstrip())
        text = "\n".join(lines).strip("\n")

        validation = self.validator.validate(text)
        if validation.valid:
            self.console.print("[green]✓ Commit message is valid[/green]")
            return 0

        print_errors(self.console, validation.errors, title="Commit message is invalid:")
        parsed = self.validator.parse(text)
        if parsed is not None and not self.validator.is_imperative(parsed.subject):
            fixed = self.validator.to_imperative(parsed.subject)
            self.console.print(f"[blue]ℹ Try: {escape(fixed)}[/blue]")
        return 1

    async def status(self) -> int:
        repository = self._require_repository()
        self.console.print(status_table(repository.status_summary()))
        return 0

    def init_config(self, path: Path, force: bool = False) -> int:
        """Write the current configuration to ``path``."""
        config_path = Path(path) / DEFAULT_CONFIG_FILENAME
        if config_path.exists() and not force:
            self.console.print(
                f"[yellow]⚠ {escape(str(config_path))} already exists (use --force to overwrite)[/yellow]"
            )
            return 1

        self.config.save(path)
        self.console.print(f"[green]✓ Created {DEFAULT_CONFIG_FILENAME}[/green]")
        self.console.print("[blue]ℹ You can now customize the configuration[/blue]")
        return 0
