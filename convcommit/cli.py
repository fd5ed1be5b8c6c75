#!/usr/bin/env python3
import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional

import click
import pyperclip
from rich.console import Console
from rich.markup import escape

from .config import DEFAULT_CONFIG_FILENAME, Config
from .core import GitCommitter
from .observers import ConsoleLogObserver, FileLogObserver
from .prompter import RichPromptProvider
from .repository import GitRepository, RepositoryError
from .session import CommitSession

console = Console()

Flow = Callable[[CommitSession], Awaitable[int]]


def run_async(coro):
    """Run a coroutine to completion from synchronous click callbacks."""
    return asyncio.run(coro)


def build_session(
    path: Path,
    log_file: Optional[Path] = None,
    no_verify: bool = False,
) -> CommitSession:
    """Load configuration and wire the repository, committer and observers."""
    try:
        repository = GitRepository(str(path))
    except RepositoryError:
        repository = None

    config = Config.load(repository.repo_root() if repository else path)

    # Command line options override config
    if no_verify:
        config.no_verify = True
    if log_file is not None:
        config.log_file = str(log_file)

    committer = None
    if repository is not None:
        committer = GitCommitter(repository, console, no_verify=config.no_verify)
        committer.add_observer(ConsoleLogObserver(console))
        log_file_path = log_file or config.get_log_file()
        if log_file_path:
            committer.add_observer(FileLogObserver(str(log_file_path)))

    return CommitSession(config, RichPromptProvider(console), repository, console, committer)


def run_flow(ctx: click.Context, flow: Flow) -> None:
    """Run a session flow and exit with its status."""
    session: CommitSession = ctx.obj["session"]
    try:
        code = run_async(flow(session))
    except RepositoryError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        code = 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        code = 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort()
    ctx.exit(code)


def print_config(config: Config, config_path: Path) -> None:
    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path.exists():
        console.print(f"[dim]Config file: {config_path.as_posix()}[/dim]")
        source = "config"
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")
        source = "default"

    console.print(f"\n{'Setting':<24} {'Value':<40} {'Source':<10}")
    console.print("-" * 76)

    rules = config.rule_config()
    settings = {
        "types": ", ".join(rules.type_names),
        "scopes": ", ".join(config.scopes),
        "allow_custom_scopes": config.allow_custom_scopes,
        "skip_questions": ", ".join(config.skip_questions) or "None",
        "max_subject_length": rules.max_subject_length,
        "min_subject_length": rules.min_subject_length,
        "max_body_line_length": rules.max_body_line_length,
        "enforce_imperative_mood": rules.enforce_imperative_mood,
        "subject_case": rules.subject_case.value,
        "breaking_eligible_types": ", ".join(rules.breaking_eligible_types),
        "history_count": config.history_count,
        "always_log": config.always_log,
        "log_file": config.log_file or "None",
        "no_verify": config.no_verify,
    }
    for name, value in settings.items():
        console.print(f"{name:<24} {escape(str(value)):<40} {source:<10}")

    console.print(
        f"\nTo modify these settings, run 'convcommit init' or edit {DEFAULT_CONFIG_FILENAME} in your repository root"
    )


@click.group(invoke_without_command=True)
@click.option(
    "-p",
    "--path",
    default=".",
    help="Path to git repository (defaults to current directory)",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("-m", "--message", help="Commit message (will be auto-formatted)")
@click.option("-t", "--type", "commit_type", help="Commit type (feat, fix, docs, etc.)")
@click.option("-s", "--subject", help="Commit subject")
@click.option("-o", "--scope", help="Commit scope")
@click.option(
    "-l",
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional file to log git operations (overrides config setting)",
)
@click.option("--no-verify", is_flag=True, help="Skip git hooks when creating commits")
@click.option("--config-list", is_flag=True, help="Display current configuration settings")
@click.option(
    "--config-dir",
    is_flag=True,
    help="Display the config file location and copy it to clipboard",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.pass_context
def main(
    ctx: click.Context,
    path: Path,
    message: Optional[str],
    commit_type: Optional[str],
    subject: Optional[str],
    scope: Optional[str],
    log_file: Optional[Path],
    no_verify: bool,
    config_list: bool,
    config_dir: bool,
    version: bool,
):
    """
    Interactive commit message formatter for Conventional Commits.

    Without a subcommand this walks you through type, scope, subject, body,
    breaking change and issue references, then commits the staged changes.

    \b
    Examples:
      convcommit
      convcommit -m "fix login bug"
      convcommit -t fix -o auth -s "resolve login timeout"
      convcommit validate --count 20

    Configuration can be set in .convcommit.toml in the repository root.
    Command line options override configuration file settings.
    """
    if version:
        from .version import display_version_info

        display_version_info(console)
        ctx.exit(0)

    ctx.ensure_object(dict)
    session = build_session(path.absolute(), log_file=log_file, no_verify=no_verify)
    ctx.obj["session"] = session

    if ctx.invoked_subcommand is not None:
        return

    config_root = session.repository.repo_root() if session.repository else path.absolute()
    config_path = config_root / DEFAULT_CONFIG_FILENAME

    if config_list:
        print_config(session.config, config_path)
        return

    if config_dir:
        if not config_path.exists():
            session.config.save(config_root)
            console.print("[yellow]Created new config file with default values[/yellow]")

        pyperclip.copy(str(config_path))
        console.print(f"[green]Config file location:[/green] {config_path}")
        console.print("[green]Path copied to clipboard![/green]")
        return

    if commit_type or subject:
        if not (commit_type and subject):
            raise click.UsageError("--type and --subject must be given together")
        run_flow(ctx, lambda s: s.direct(commit_type, subject, scope))
    elif message:
        run_flow(ctx, lambda s: s.quick(message))
    else:
        run_flow(ctx, lambda s: s.interactive())


@main.command()
@click.pass_context
def amend(ctx: click.Context):
    """Amend and reformat the last commit message."""
    run_flow(ctx, lambda s: s.amend())


@main.command()
@click.option("-c", "--count", type=click.IntRange(min=1), help="Number of commits to check")
@click.option("--strict", is_flag=True, help="Exit with status 1 when any commit is invalid")
@click.pass_context
def validate(ctx: click.Context, count: Optional[int], strict: bool):
    """Validate recent commit messages."""
    run_flow(ctx, lambda s: s.validate_history(count, strict=strict))


@main.command()
@click.pass_context
def auto(ctx: click.Context):
    """Suggest a commit based on the staged changes."""
    run_flow(ctx, lambda s: s.auto())


@main.command()
@click.pass_context
def status(ctx: click.Context):
    """Show repository status."""
    run_flow(ctx, lambda s: s.status())


@main.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init(ctx: click.Context, force: bool):
    """Write a .convcommit.toml with the current settings."""
    session: CommitSession = ctx.obj["session"]
    root = session.repository.repo_root() if session.repository else Path.cwd()
    try:
        code = session.init_config(root, force=force)
    except OSError as e:
        console.print(f"[red]Failed to create config: {escape(str(e))}[/red]")
        code = 1
    ctx.exit(code)


@main.command()
@click.argument(
    "message_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("-m", "--message", help="Message to check instead of a file")
@click.pass_context
def check(ctx: click.Context, message_file: Optional[Path], message: Optional[str]):
    """Validate a commit message file, e.g. from a commit-msg hook.

    Reads standard input when neither a file nor --message is given.
    """
    if message is None:
        if message_file is not None:
            message = message_file.read_text(encoding="utf-8")
        else:
            message = click.get_text_stream("stdin").read()
    run_flow(ctx, lambda s: s.check(message))


if __name__ == "__main__":
    main()
