"""Render commit components as conventional commit text, plus heuristics
for turning free text and file lists into components."""
import re
import textwrap
from typing import Iterable, List, Mapping, Optional, Sequence

from ..config import AUTO_DETECT_KEYWORDS, RuleConfig, create_rule_config
from ..models import AutoFormatResult, CommitComponents, SubjectAnalysis, SubjectSuggestion
from .mood import is_imperative

DEFAULT_TYPE = "chore"

VERB_PREFIXES = (
    re.compile(r"^(fix|fixes|fixed|fixing):\s*", re.IGNORECASE),
    re.compile(r"^(add|adds|added|adding):\s*", re.IGNORECASE),
    re.compile(r"^(update|updates|updated|updating):\s*", re.IGNORECASE),
)

# First rule matched by any changed file wins.
SCOPE_RULES = (
    (re.compile(r"^src/api/"), "api"),
    (re.compile(r"^src/ui/|^src/components/"), "ui"),
    (re.compile(r"^src/db/|^migrations/"), "db"),
    (re.compile(r"^src/auth/"), "auth"),
    (re.compile(r"^tests?/"), "test"),
    (re.compile(r"^docs?/|README"), "docs"),
    (
        re.compile(
            r"(^|/)(package\.json|package-lock\.json|yarn\.lock|pyproject\.toml"
            r"|requirements[^/]*\.txt|poetry\.lock|Pipfile|Pipfile\.lock|uv\.lock)$"
        ),
        "deps",
    ),
    (re.compile(r"\.config\.|config/"), "config"),
)

FIRST_SEGMENT = re.compile(r"^(?:src/)?([^/]+)/")


class CommitMessageFormatter:
    """Formats commit messages to the conventional commit standard."""

    def __init__(
        self,
        rules: Optional[RuleConfig] = None,
        keywords: Optional[Mapping[str, Iterable[str]]] = None,
    ):
        self.rules = rules or create_rule_config()
        self.keywords = {
            commit_type: tuple(words)
            for commit_type, words in (keywords or AUTO_DETECT_KEYWORDS).items()
        }

    def format(self, components: CommitComponents) -> str:
        """Build the full message text from its components."""
        header = components.type
        if components.scope:
            header += f"({components.scope})"
        header += f": {components.subject}"

        parts = [header]

        if components.body:
            parts.append("")
            parts.append(self.wrap_text(components.body, self.rules.max_body_line_length))

        if components.breaking:
            parts.append("")
            parts.append("BREAKING CHANGE: " + components.breaking)

        if components.footer:
            # The breaking section already opened the footer block.
            if not components.breaking:
                parts.append("")
            parts.append(components.footer)

        return "\n".join(parts)

    def wrap_text(self, text: Optional[str], max_length: int = 100) -> str:
        """Greedy word wrap that keeps the text's own line breaks.

        A word longer than ``max_length`` is left whole on its own line.
        """
        if not text:
            return ""

        lines: List[str] = []
        for paragraph in text.split("\n"):
            wrapped = textwrap.wrap(
                paragraph,
                width=max(max_length, 1),
                break_long_words=False,
                break_on_hyphens=False,
            )
            lines.extend(wrapped or [""])
        return "\n".join(lines)

    def detect_type(self, message: str) -> Optional[str]:
        lowered = (message or "").lower()
        for commit_type, words in self.keywords.items():
            if any(word in lowered for word in words):
                return commit_type
        return None

    def auto_format(self, raw_message: str, detected_type: Optional[str] = None) -> AutoFormatResult:
        """Turn a free-text message into a type and a conventional subject."""
        commit_type = detected_type or self.detect_type(raw_message) or DEFAULT_TYPE

        subject = (raw_message or "").strip()
        for prefix in VERB_PREFIXES:
            subject = prefix.sub("", subject, count=1)

        subject = subject[:1].lower() + subject[1:]

        if subject.endswith("."):
            subject = subject[:-1]

        limit = self.rules.max_subject_length
        if len(subject) > limit:
            subject = (subject[:max(limit - 3, 0)] + "...")[:limit]

        return AutoFormatResult(
            type=commit_type,
            subject=subject,
            confidence="high" if detected_type else "medium",
        )

    def suggest_scope(self, changed_files: Optional[Sequence[str]]) -> Optional[str]:
        """Guess a scope from the paths of the changed files."""
        files = [path.replace("\\", "/") for path in (changed_files or []) if path]
        if not files:
            return None

        for pattern, scope in SCOPE_RULES:
            if any(pattern.search(path) for path in files):
                return scope

        match = FIRST_SEGMENT.match(files[0])
        return match.group(1) if match else None

    def clean_subject(self, subject: str) -> str:
        subject = re.sub(r"\s+", " ", (subject or "").strip())
        subject = re.sub(r"^[\"']|[\"']$", "", subject)
        if subject.endswith("."):
            subject = subject[:-1]
        return subject

    def analyze_subject(self, subject: str) -> SubjectAnalysis:
        """Collect style advice for a subject line without raising."""
        subject = subject or ""
        suggestions = []
        max_length = self.rules.max_subject_length
        min_length = self.rules.min_subject_length

        if len(subject) > max_length:
            suggestions.append(SubjectSuggestion(
                kind="length",
                message=f"Subject is {len(subject)} chars (max {max_length}). Consider shortening.",
            ))
        elif len(subject) < min_length:
            suggestions.append(SubjectSuggestion(
                kind="length",
                message=f"Subject is {len(subject)} chars (min {min_length}). Add more detail.",
            ))

        if not is_imperative(subject):
            suggestions.append(SubjectSuggestion(
                kind="mood",
                message='Use imperative mood (e.g., "add" not "adds" or "added")',
            ))

        if subject[:1].isupper():
            suggestions.append(SubjectSuggestion(kind="case", message="Start with lowercase letter"))

        if subject.endswith("."):
            suggestions.append(SubjectSuggestion(kind="punctuation", message="Remove trailing period"))

        return SubjectAnalysis(valid=not suggestions, suggestions=suggestions)
