"""Console rendering helpers."""
from typing import Iterable, Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commit_message.validation import FOOTER_REFERENCE_PATTERN, HEADER_PATTERN
from .models import StatusSummary


def render_message(message: str) -> Text:
    """Highlight the parts of a commit message."""
    text = Text()
    for index, line in enumerate(message.split("\n")):
        if index:
            text.append("\n")
        match = HEADER_PATTERN.match(line) if index == 0 else None
        if match:
            commit_type, scope, _, subject = match.groups()
            text.append(commit_type, style="bold cyan")
            if scope:
                text.append(scope, style="yellow")
            text.append(": ")
            text.append(subject)
        elif line.startswith("BREAKING CHANGE:"):
            text.append(line, style="bold red")
        elif FOOTER_REFERENCE_PATTERN.match(line):
            text.append(line, style="green")
        elif index == 0:
            text.append(line)
        else:
            text.append(line, style="dim")
    return text


def print_preview(console: Console, message: str) -> None:
    console.print(Panel(render_message(message), title="Preview", border_style="green"))


def status_table(summary: StatusSummary) -> Table:
    table = Table(title="Repository Status", show_header=False, box=None)
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("Branch", summary.branch)
    table.add_row("Ahead", str(summary.ahead))
    table.add_row("Behind", str(summary.behind))
    table.add_row("Staged", str(summary.staged))
    table.add_row("Modified", str(summary.modified))
    table.add_row("Untracked", str(summary.untracked))
    table.add_row("Status", "Clean" if summary.clean else "Dirty")
    return table


def print_errors(console: Console, errors: Iterable[str], title: str = "Validation failed:") -> None:
    console.print(f"[red]✗ {title}[/red]")
    for error in errors:
        console.print(Text(f"  • {error}", style="red"))


def print_file_list(console: Console, files: Sequence[str], label: str = "Modified") -> None:
    lines = [Text(f"  → {label}: {path}", style="dim") for path in files]
    console.print(Group(*lines))
