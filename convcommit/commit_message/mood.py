"""Imperative mood heuristics.

A subject is treated as imperative unless it opens with a third-person,
continuous or past-tense form of one of a handful of common verbs. Anything
else, including verbs outside that set, passes.
"""
import re
from typing import NamedTuple, Pattern, Tuple


class MoodRule(NamedTuple):
    pattern: Pattern[str]
    base: str


def _rule(base: str, *forms: str) -> MoodRule:
    return MoodRule(re.compile(rf"^({'|'.join(forms)})\s", re.IGNORECASE), base)


MOOD_RULES: Tuple[MoodRule, ...] = (
    _rule("add", "adds", "adding", "added"),
    _rule("fix", "fixes", "fixing", "fixed"),
    _rule("update", "updates", "updating", "updated"),
    _rule("remove", "removes", "removing", "removed"),
    _rule("create", "creates", "creating", "created"),
    _rule("implement", "implements", "implementing", "implemented"),
    _rule("change", "changes", "changing", "changed"),
)


def is_imperative(subject: str) -> bool:
    return not any(rule.pattern.match(subject) for rule in MOOD_RULES)


def to_imperative(subject: str) -> str:
    """Replace a leading inflected verb with its base form."""
    for rule in MOOD_RULES:
        if rule.pattern.match(subject):
            return rule.pattern.sub(rule.base + " ", subject, count=1)
    return subject
