"""Commit message parsing, validation and formatting."""

from .formatter import CommitMessageFormatter
from .validator import CommitMessageValidator

__all__ = [
    'CommitMessageFormatter',
    'CommitMessageValidator',
]
