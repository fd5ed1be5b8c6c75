"""Commit message validation and parsing."""
from typing import List, Optional, Sequence

from ..config import RuleConfig, create_rule_config
from ..models import ParsedMessage, ValidationResult
from . import mood
from .validation import (
    FOOTER_REFERENCE_PATTERN,
    HEADER_PATTERN,
    SCOPE_PATTERN,
    check_body,
    check_subject,
    create_validation_chain,
)

FOOTER_MARKERS = ("BREAKING CHANGE:", "Closes", "Fixes", "Refs")
BREAKING_MARKER = "BREAKING CHANGE:"


class CommitMessageValidator:
    """Validates commit messages against conventional commit standards.

    Malformed messages are reported, never raised: ``validate`` returns a
    result carrying the errors and ``parse`` returns ``None``.
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules or create_rule_config()
        self.validation_chain = create_validation_chain(self.rules)

    def validate(self, message: str) -> ValidationResult:
        """Validate a commit message against standards."""
        errors = self.validation_chain.handle(message or "")
        return ValidationResult(valid=not errors, errors=errors)

    def validate_subject(self, subject: str) -> List[str]:
        return check_subject(subject, self.rules)

    def validate_body(self, lines: Sequence[str]) -> List[str]:
        return check_body(lines, self.rules)

    def is_imperative(self, subject: str) -> bool:
        return mood.is_imperative(subject)

    def to_imperative(self, subject: str) -> str:
        return mood.to_imperative(subject)

    def is_valid_scope(self, scope: str) -> bool:
        return bool(SCOPE_PATTERN.match(scope or ""))

    def is_valid_footer(self, footer: str) -> bool:
        return bool(FOOTER_REFERENCE_PATTERN.match(footer or ""))

    def parse(self, message: str) -> Optional[ParsedMessage]:
        """Split a commit message into its components.

        Returns None when the first line is not a conventional header.
        """
        lines = (message or "").split("\n")
        match = HEADER_PATTERN.match(lines[0])
        if not match:
            return None

        commit_type, _, scope, subject = match.groups()

        body_start = None
        for index in range(1, len(lines) - 1):
            if lines[index].strip() == "":
                body_start = index + 1
                break

        body = ""
        footer = ""
        if body_start is not None:
            trailing = lines[body_start:]
            footer_index = next(
                (i for i, line in enumerate(trailing) if line.startswith(FOOTER_MARKERS)),
                None,
            )
            if footer_index is None:
                body = "\n".join(trailing).strip()
            else:
                body = "\n".join(trailing[:footer_index]).strip()
                footer = "\n".join(trailing[footer_index:]).strip()

        return ParsedMessage(
            type=commit_type,
            scope=scope or None,
            subject=subject,
            body=body or None,
            footer=footer or None,
            breaking=BREAKING_MARKER in footer,
        )
