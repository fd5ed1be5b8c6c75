"""Tests for git operation observers."""
import io
import re

import pytest
from rich.console import Console

from convcommit.observers import ConsoleLogObserver, FileLogObserver

LINE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - ")


@pytest.mark.asyncio
async def test_file_log_observer(tmp_path):
    log_file = tmp_path / "logs" / "git.log"
    observer = FileLogObserver(str(log_file))
    assert log_file.parent.exists()

    await observer.on_files_staged([])
    await observer.on_files_staged(["a.py", "b.py"])
    await observer.on_commit_created("feat: add a\n\nbody", "abc123")
    await observer.on_commit_amended("feat: add b", "def456")

    lines = log_file.read_text().splitlines()
    assert len(lines) == 4
    assert all(LINE.match(line) for line in lines)
    assert lines[0].endswith("Staged all changes")
    assert lines[1].endswith("Staged a.py, b.py")
    assert lines[2].endswith("Created commit abc123: feat: add a")
    assert lines[3].endswith("Amended commit def456: feat: add b")


@pytest.mark.asyncio
async def test_console_log_observer():
    output = io.StringIO()
    observer = ConsoleLogObserver(Console(file=output, width=120))

    await observer.on_commit_created("fix(api): handle [empty] pages\n\nbody", "0123456789abcdef")
    await observer.on_commit_amended("fix: reword", "fedcba9876543210")
    await observer.on_files_staged(["x.py"])
    await observer.on_files_staged([])

    text = output.getvalue()
    assert "✓ Committed 0123456: fix(api): handle [empty] pages" in text
    assert "✓ Amended commit fedcba9: fix: reword" in text
    assert "✓ Staged 1 file(s)" in text
    assert "✓ All changes staged" in text
    assert "body" not in text
