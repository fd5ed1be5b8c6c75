"""Shared models for convcommit."""
from typing import List, Optional
from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict, Field


class CommitComponents(BaseModel):
    """The parts of a commit message, as collected from the user."""

    model_config = ConfigDict(frozen=True)

    type: str
    scope: Optional[str] = None
    subject: str
    body: Optional[str] = None
    breaking: Optional[str] = None
    footer: Optional[str] = None


class ParsedMessage(BaseModel):
    """The parts of a commit message, as recovered from its text."""

    type: str
    scope: Optional[str] = None
    subject: str
    body: Optional[str] = None
    footer: Optional[str] = None
    breaking: bool = False


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)


class SubjectSuggestion(BaseModel):
    kind: str
    message: str


class SubjectAnalysis(BaseModel):
    valid: bool
    suggestions: List[SubjectSuggestion] = Field(default_factory=list)


class AutoFormatResult(BaseModel):
    type: str
    subject: str
    confidence: str = Field(description="'high' when the type was supplied, 'medium' when detected")


class CommitMessageResult(BaseModel):
    message: str
    components: CommitComponents
    validation: ValidationResult


@dataclass
class CommitRecord:
    hash: str
    message: str
    author: str
    date: str

    @property
    def summary(self) -> str:
        return self.message.split('\n')[0]


@dataclass
class FileStat:
    file: str
    additions: int
    deletions: int


@dataclass
class DiffSummary:
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    files: List[FileStat] = field(default_factory=list)


@dataclass
class StatusSummary:
    branch: str
    ahead: int
    behind: int
    staged: int
    modified: int
    untracked: int
    clean: bool
