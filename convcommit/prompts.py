"""Question definitions for the interactive commit flows.

Each flow is a plain list of ``Question`` descriptors. A question with a
``when`` predicate is only asked when the predicate, given the answers
collected so far, returns True.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .commit_message.validator import CommitMessageValidator
from .config import Config, RuleConfig

CUSTOM_SCOPE = "__custom__"

Answers = Dict[str, Any]
Validation = Union[bool, str]


class QuestionKind(str, Enum):
    SELECT = "select"
    INPUT = "input"
    EDITOR = "editor"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class Choice:
    name: str
    value: Any


@dataclass
class Question:
    name: str
    kind: QuestionKind
    message: str
    choices: Tuple[Choice, ...] = field(default_factory=tuple)
    default: Any = None
    when: Optional[Callable[[Answers], bool]] = None
    validate: Optional[Callable[[Any], Validation]] = None
    filter: Optional[Callable[[Any], Any]] = None

    def should_ask(self, answers: Answers) -> bool:
        return self.when is None or bool(self.when(answers))


def _normalize_subject(value: str) -> str:
    fixed = (value or "").strip()
    fixed = fixed[:1].lower() + fixed[1:]
    if fixed.endswith("."):
        fixed = fixed[:-1]
    return fixed


def build_questions(config: Config, validator: Optional[CommitMessageValidator] = None) -> List[Question]:
    """Questions for the full interactive flow."""
    rules = config.rule_config()
    validator = validator or CommitMessageValidator(rules)
    skip = set(config.skip_questions)
    max_length = rules.max_subject_length

    def scope_choices() -> Tuple[Choice, ...]:
        choices = [Choice(name=scope, value=scope) for scope in config.scopes]
        if config.allow_custom_scopes:
            choices.append(Choice(name="custom (type your own)", value=CUSTOM_SCOPE))
        if config.allow_empty_scopes:
            choices.append(Choice(name="empty (no scope)", value=None))
        return tuple(choices)

    def validate_custom_scope(value: str) -> Validation:
        if not value or not value.strip():
            return 'Scope cannot be empty. Use "empty" option if no scope needed.'
        if not validator.is_valid_scope(value):
            return "Scope must contain only letters, numbers, and hyphens"
        return True

    def validate_subject(value: str) -> Validation:
        if not value or not value.strip():
            return "Subject is required"
        if len(value) > max_length:
            return f"Subject is too long ({len(value)}/{max_length} chars)"
        if value.endswith("."):
            return "Subject should not end with a period"
        if not validator.is_imperative(value):
            return 'Use imperative mood (e.g., "add" not "adds" or "added")'
        return True

    def validate_breaking(value: str) -> Validation:
        if not value or not value.strip():
            return "Breaking change description is required"
        return True

    def validate_footer(value: str) -> Validation:
        if not value or not value.strip():
            return True
        if not validator.is_valid_footer(value.strip()):
            return 'Format: "Closes #123" or "Fixes #123, Refs #456"'
        return True

    return [
        Question(
            name="type",
            kind=QuestionKind.SELECT,
            message="Select the type of change:",
            choices=tuple(
                Choice(name=t.display_name(config.enable_emoji), value=t.value)
                for t in rules.valid_types
            ),
            when=lambda answers: "type" not in skip,
        ),
        Question(
            name="scope",
            kind=QuestionKind.SELECT,
            message="What is the scope of this change? (optional)",
            choices=scope_choices(),
            when=lambda answers: "scope" not in skip,
        ),
        Question(
            name="custom_scope",
            kind=QuestionKind.INPUT,
            message="Enter custom scope:",
            when=lambda answers: answers.get("scope") == CUSTOM_SCOPE,
            validate=validate_custom_scope,
            filter=lambda value: (value or "").strip(),
        ),
        Question(
            name="subject",
            kind=QuestionKind.INPUT,
            message="Write a short description (imperative mood):",
            validate=validate_subject,
            filter=_normalize_subject,
        ),
        Question(
            name="body",
            kind=QuestionKind.EDITOR,
            message="Provide a longer description (optional). Opens editor:",
            when=lambda answers: "body" not in skip,
        ),
        Question(
            name="is_breaking",
            kind=QuestionKind.CONFIRM,
            message="Is this a BREAKING CHANGE?",
            default=False,
            when=lambda answers: (
                "breaking" not in skip
                and answers.get("type") in rules.breaking_eligible_types
            ),
        ),
        Question(
            name="breaking",
            kind=QuestionKind.INPUT,
            message="Describe the breaking change:",
            when=lambda answers: answers.get("is_breaking") is True,
            validate=validate_breaking,
        ),
        Question(
            name="footer",
            kind=QuestionKind.INPUT,
            message='Reference issues/PRs (e.g., "Closes #123, Refs #456"):',
            when=lambda answers: "footer" not in skip,
            validate=validate_footer,
        ),
        Question(
            name="confirm_commit",
            kind=QuestionKind.CONFIRM,
            message="Commit this message?",
            default=True,
        ),
    ]


def quick_questions(rules: RuleConfig) -> List[Question]:
    """Minimal question set: type and subject."""
    return [
        Question(
            name="type",
            kind=QuestionKind.SELECT,
            message="Type:",
            choices=tuple(Choice(name=t.value, value=t.value) for t in rules.valid_types[:5]),
        ),
        Question(
            name="subject",
            kind=QuestionKind.INPUT,
            message="Subject:",
            validate=lambda value: True if value and value.strip() else "Subject is required",
            filter=_normalize_subject,
        ),
    ]


def amend_questions(current_message: str) -> List[Question]:
    return [
        Question(
            name="amend_action",
            kind=QuestionKind.SELECT,
            message=f"Current commit:\n  {current_message}\n\nWhat would you like to do?",
            choices=(
                Choice(name="Reformat (convert to conventional)", value="reformat"),
                Choice(name="Edit and reformat", value="edit"),
                Choice(name="Cancel", value="cancel"),
            ),
        ),
        Question(
            name="edited_message",
            kind=QuestionKind.EDITOR,
            message="Edit the commit message:",
            default=current_message,
            when=lambda answers: answers.get("amend_action") == "edit",
        ),
    ]


def auto_format_question(commit_type: str, subject: str) -> Question:
    return Question(
        name="use_auto_format",
        kind=QuestionKind.CONFIRM,
        message=f"Auto-formatted as: {commit_type}: {subject}\nUse this?",
        default=True,
    )


def suggested_scope_question(scope: str) -> Question:
    return Question(
        name="use_suggested_scope",
        kind=QuestionKind.CONFIRM,
        message=f'Use suggested scope "{scope}"?',
        default=True,
    )


def validation_question(errors: Sequence[str]) -> Question:
    listing = "\n".join(f"  • {error}" for error in errors)
    return Question(
        name="fix_errors",
        kind=QuestionKind.CONFIRM,
        message=f"Found {len(errors)} validation error(s):\n{listing}\n\nWould you like to fix them?",
        default=True,
    )


def stage_all_question() -> Question:
    return Question(
        name="stage_all",
        kind=QuestionKind.CONFIRM,
        message="Would you like to stage all changes?",
        default=False,
    )
