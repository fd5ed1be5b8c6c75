"""Commit message validation using Chain of Responsibility pattern.

Each handler reports every rule violation it finds and passes the message
on; only a handler that cannot make sense of the message stops the chain.
"""
import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..config import RuleConfig, SubjectCase
from .mood import is_imperative

HEADER_PATTERN = re.compile(r"^(\w+)(\(([\w-]+)\))?:\s*(.+)$", re.ASCII)
FOOTER_REFERENCE_PATTERN = re.compile(r"^(Closes|Fixes|Refs|Related to)\s+#\d+", re.IGNORECASE)
SCOPE_PATTERN = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)

EMPTY_MESSAGE_ERROR = "Commit message cannot be empty"
HEADER_FORMAT_ERROR = "Header must follow format: type(scope): subject"


def check_subject(subject: str, rules: RuleConfig) -> List[str]:
    errors = []

    if len(subject) > rules.max_subject_length:
        errors.append(
            f"Subject is too long ({len(subject)} chars). Maximum is {rules.max_subject_length}"
        )

    if len(subject) < rules.min_subject_length:
        errors.append(
            f"Subject is too short ({len(subject)} chars). Minimum is {rules.min_subject_length}"
        )

    if subject.endswith("."):
        errors.append("Subject must not end with a period")

    if rules.enforce_imperative_mood and not is_imperative(subject):
        errors.append('Subject must use imperative mood (e.g., "add" not "adds" or "added")')

    if rules.subject_case == SubjectCase.LOWERCASE and subject and subject[0] != subject[0].lower():
        errors.append("Subject must start with lowercase letter")

    return errors


def check_body(lines: Sequence[str], rules: RuleConfig) -> List[str]:
    limit = rules.max_body_line_length
    return [
        f"Body line {number} is too long ({len(line)} chars). Maximum is {limit}"
        for number, line in enumerate(lines, start=1)
        if len(line) > limit
    ]


class ValidationHandler(ABC):
    """Abstract base class for validation handlers."""

    def __init__(self, next_handler: Optional['ValidationHandler'] = None):
        self.next_handler = next_handler

    def handle(self, message: str) -> List[str]:
        """Collect this handler's errors, then the rest of the chain's."""
        errors = self.validate(message)
        if (errors and self.halts_chain) or not self.next_handler:
            return errors
        return errors + self.next_handler.handle(message)

    @property
    def halts_chain(self) -> bool:
        return False

    @abstractmethod
    def validate(self, message: str) -> List[str]:
        """Validate the commit message."""
        pass


class EmptyMessageHandler(ValidationHandler):
    """Rejects empty or whitespace-only messages."""

    @property
    def halts_chain(self) -> bool:
        return True

    def validate(self, message: str) -> List[str]:
        if not message or not message.strip():
            return [EMPTY_MESSAGE_ERROR]
        return []


class HeaderHandler(ValidationHandler):
    """Validates type, type case and subject of the first line."""

    def __init__(self, rules: RuleConfig, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.rules = rules

    def validate(self, message: str) -> List[str]:
        match = HEADER_PATTERN.match(message.split("\n")[0])
        if not match:
            return [HEADER_FORMAT_ERROR]

        commit_type, subject = match.group(1), match.group(4)
        errors = []

        type_names = self.rules.type_names
        if commit_type not in type_names:
            errors.append(f'Invalid type "{commit_type}". Must be one of: {", ".join(type_names)}')

        if commit_type != commit_type.lower():
            errors.append("Type must be lowercase")

        errors.extend(check_subject(subject, self.rules))
        return errors


class BodyLineLengthHandler(ValidationHandler):
    """Validates the length of every line after the header and blank line."""

    def __init__(self, rules: RuleConfig, next_handler: Optional[ValidationHandler] = None):
        super().__init__(next_handler)
        self.rules = rules

    def validate(self, message: str) -> List[str]:
        lines = message.split("\n")
        if len(lines) > 2:
            return check_body(lines[2:], self.rules)
        return []


def create_validation_chain(rules: RuleConfig) -> ValidationHandler:
    """Create the default validation chain."""
    body_length = BodyLineLengthHandler(rules)
    header = HeaderHandler(rules, body_length)
    return EmptyMessageHandler(header)
