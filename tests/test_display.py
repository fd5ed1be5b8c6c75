"""Tests for console rendering helpers."""
import io

from rich.console import Console

from convcommit.display import print_errors, print_file_list, print_preview, render_message, status_table
from convcommit.models import StatusSummary


def make_console():
    output = io.StringIO()
    return Console(file=output, width=100, color_system=None), output


def styles_by_text(text):
    return {text.plain[span.start:span.end]: str(span.style) for span in text.spans}


def test_render_message_highlights_parts():
    text = render_message(
        "feat(api): add users endpoint\n\nLists users.\n\nBREAKING CHANGE: drops v1\nCloses #3"
    )
    styles = styles_by_text(text)

    assert text.plain.startswith("feat(api): add users endpoint")
    assert styles["feat"] == "bold cyan"
    assert styles["(api)"] == "yellow"
    assert styles["Lists users."] == "dim"
    assert styles["BREAKING CHANGE: drops v1"] == "bold red"
    assert styles["Closes #3"] == "green"


def test_render_message_plain_header():
    text = render_message("Merge branch 'main'")
    assert text.plain == "Merge branch 'main'"
    assert text.spans == []


def test_print_preview():
    console, output = make_console()
    print_preview(console, "fix: resolve crash")
    assert "Preview" in output.getvalue()
    assert "fix: resolve crash" in output.getvalue()


def test_status_table():
    console, output = make_console()
    console.print(status_table(StatusSummary(
        branch="main", ahead=1, behind=0, staged=2, modified=3, untracked=4, clean=False,
    )))
    text = output.getvalue()
    assert "Repository Status" in text
    assert "main" in text
    assert "Dirty" in text


def test_print_errors_and_files():
    console, output = make_console()
    print_errors(console, ["Type must be lowercase", "Subject [x] too long"])
    print_file_list(console, ["src/a.py", "src/b.py"])

    text = output.getvalue()
    assert "✗ Validation failed:" in text
    assert "• Type must be lowercase" in text
    assert "• Subject [x] too long" in text
    assert "→ Modified: src/b.py" in text
