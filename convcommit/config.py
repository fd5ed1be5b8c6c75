"""Configuration management for convcommit."""
from pathlib import Path
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
import tomli
import tomli_w
import os
import re

DEFAULT_CONFIG_FILENAME = ".convcommit.toml"
CONFIG_SECTION = "convcommit"


class SubjectCase(str, Enum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    CAMELCASE = "camelcase"
    NONE = "none"


class CommitTypeSpec(BaseModel):
    """A permitted commit type token with its menu label."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str = ""
    emoji: str = ""

    def display_name(self, with_emoji: bool = True) -> str:
        text = f"{self.value + ':':<10} {self.label}".rstrip()
        if with_emoji and self.emoji:
            return f"{self.emoji} {text}"
        return text


DEFAULT_TYPES: Tuple[CommitTypeSpec, ...] = (
    CommitTypeSpec(value="feat", label="A new feature", emoji="✨"),
    CommitTypeSpec(value="fix", label="A bug fix", emoji="🐛"),
    CommitTypeSpec(value="docs", label="Documentation only changes", emoji="📚"),
    CommitTypeSpec(value="style", label="Code style changes (formatting, semicolons, etc)", emoji="💎"),
    CommitTypeSpec(value="refactor", label="Code change that neither fixes a bug nor adds a feature", emoji="📦"),
    CommitTypeSpec(value="perf", label="Performance improvements", emoji="🚀"),
    CommitTypeSpec(value="test", label="Adding or updating tests", emoji="🚨"),
    CommitTypeSpec(value="build", label="Changes to build system or dependencies", emoji="🛠️"),
    CommitTypeSpec(value="ci", label="CI/CD configuration changes", emoji="⚙️"),
    CommitTypeSpec(value="chore", label="Other changes that don't modify src or test files", emoji="♻️"),
    CommitTypeSpec(value="revert", label="Reverts a previous commit", emoji="⏪"),
)

DEFAULT_SCOPES: Tuple[str, ...] = ("api", "ui", "db", "auth", "core", "config", "deps", "docs")

# Order matters: the first type with a matching keyword wins.
AUTO_DETECT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "feat": ("add", "create", "implement", "introduce", "new"),
    "fix": ("fix", "resolve", "correct", "repair", "patch", "bug"),
    "docs": ("document", "readme", "docs", "comment", "documentation"),
    "refactor": ("refactor", "restructure", "reorganize", "cleanup"),
    "test": ("test", "testing", "spec", "coverage"),
    "style": ("format", "styling", "indent", "whitespace", "prettier"),
    "chore": ("update", "upgrade", "dependency", "deps", "maintain"),
    "perf": ("optimize", "performance", "faster", "speed"),
}

DEFAULT_RULES: Dict[str, Any] = {
    "max_subject_length": 72,
    "min_subject_length": 3,
    "max_body_line_length": 100,
    "enforce_imperative_mood": True,
    "subject_case": SubjectCase.LOWERCASE.value,
    "breaking_eligible_types": ["feat", "fix"],
}

QUESTION_NAMES = ("type", "scope", "body", "breaking", "footer")


def _coerce_types(value: Any) -> Any:
    if value is None:
        return value
    coerced = []
    for item in value:
        if isinstance(item, str):
            coerced.append(CommitTypeSpec(value=item, label=item))
        else:
            coerced.append(item)
    return coerced


class RuleConfig(BaseModel):
    """Rule set shared by the validator and the formatter.

    Callers must keep ``min_subject_length <= max_subject_length`` and a
    non-empty, lowercase ``valid_types``; neither is checked here.
    """

    model_config = ConfigDict(frozen=True)

    valid_types: Tuple[CommitTypeSpec, ...] = DEFAULT_TYPES
    max_subject_length: int = 72
    min_subject_length: int = 3
    max_body_line_length: int = 100
    enforce_imperative_mood: bool = True
    subject_case: SubjectCase = SubjectCase.LOWERCASE
    breaking_eligible_types: Tuple[str, ...] = ("feat", "fix")

    @field_validator("valid_types", mode="before")
    @classmethod
    def _types_from_strings(cls, value: Any) -> Any:
        return _coerce_types(value)

    @property
    def type_names(self) -> List[str]:
        return [t.value for t in self.valid_types]


def create_rule_config(overrides: Optional[Mapping[str, Any]] = None) -> RuleConfig:
    """Merge ``overrides`` onto the default rules."""
    data = {**DEFAULT_RULES, **dict(overrides or {})}
    return RuleConfig(**data)


class Config(BaseModel):
    """Configuration settings for convcommit.

    Values come from ``.convcommit.toml`` in the repository root, environment
    variables, or command line arguments, in increasing precedence.
    """

    types: List[CommitTypeSpec] = Field(
        default_factory=lambda: list(DEFAULT_TYPES),
        description="Commit types offered in prompts and accepted by validation"
    )

    scopes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="Common scopes offered in the scope menu"
    )

    allow_custom_scopes: bool = Field(
        default=True,
        description="Whether the scope menu offers a free-text entry"
    )

    allow_empty_scopes: bool = Field(
        default=True,
        description="Whether the scope menu offers an empty choice"
    )

    skip_questions: List[str] = Field(
        default_factory=list,
        description="Questions to skip: type, scope, body, breaking, footer"
    )

    enable_emoji: bool = Field(
        default=True,
        description="Show emoji next to commit types in menus"
    )

    auto_detect: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in AUTO_DETECT_KEYWORDS.items()},
        description="Keywords used to guess a commit type from free text"
    )

    rules: Dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_RULES),
        description="Validation rule overrides"
    )

    history_count: int = Field(
        default=10,
        description="Number of commits checked by the validate command"
    )

    always_log: bool = Field(
        default=False,
        description="Whether to always generate log files"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to log file (if not using automatic log file generation)"
    )

    no_verify: bool = Field(
        default=False,
        description="Skip git hooks when committing"
    )

    @field_validator("types", mode="before")
    @classmethod
    def _types_from_strings(cls, value: Any) -> Any:
        return _coerce_types(value)

    @staticmethod
    def _sanitize_string(value: str) -> str:
        """Sanitize string values to prevent injection attacks."""
        if not value:
            return value

        # Remove control characters and null bytes
        value = re.sub(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]', '', value)

        value = re.split(r'[;&|`$()]', value)[0]

        if len(value) > 1000:
            value = value[:1000]

        return value.strip()

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check if a path is safe (no path traversal)."""
        if not path:
            return False

        if '..' in path or path.startswith('/') or '\\' in path:
            return False

        if os.path.isabs(path):
            return False

        dangerous_patterns = [
            r'/etc/', r'/var/', r'/usr/', r'/bin/', r'/sbin/',
            r'C:\\Windows', r'C:\\System', r'C:\\Program'
        ]

        for pattern in dangerous_patterns:
            if re.search(pattern, path, re.IGNORECASE):
                return False

        return True

    @classmethod
    def load(cls, repo_path: Path) -> 'Config':
        """Load configuration from the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Config: Configuration object with values from file or defaults
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with config_path.open('rb') as f:
                config_data = tomli.load(f)

            section = config_data.get(CONFIG_SECTION, config_data)

            if isinstance(section.get('log_file'), str):
                section['log_file'] = cls._sanitize_string(section['log_file'])
                if section['log_file'] and not cls._is_safe_path(section['log_file']):
                    print(f"Warning: Unsafe log file path '{section['log_file']}', using default")
                    section['log_file'] = None

            return cls(**section)
        except Exception as e:
            print(f"Warning: Error reading config file: {e}")
            return cls()

    def save(self, repo_path: Path) -> Path:
        """Save configuration to the config file.

        Args:
            repo_path: Path to the git repository

        Returns:
            Path: The written config file
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME

        config_dict = {k: v for k, v in self.model_dump(mode="json").items() if v is not None}

        if config_dict.get('log_file') and not self._is_safe_path(config_dict['log_file']):
            print(f"Warning: Unsafe log file path '{config_dict['log_file']}', not saving")
            config_dict.pop('log_file')

        with config_path.open('wb') as f:
            tomli_w.dump(config_dict, f)
        return config_path

    def rule_config(self) -> RuleConfig:
        """Build the immutable rule set for this configuration."""
        return create_rule_config({**self.rules, "valid_types": self.types})

    def get_log_file(self) -> Optional[Path]:
        """Get the path to the log file.

        If always_log is True, generates a timestamped log file name.
        Otherwise, returns the configured log_file path if set.

        Returns:
            Optional[Path]: Path to the log file, or None if logging is disabled
        """
        if self.always_log:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            return Path(f"convcommit_log-{timestamp}.log")
        elif self.log_file:
            if self._is_safe_path(self.log_file):
                return Path(self.log_file)
            else:
                print(f"Warning: Unsafe log file path '{self.log_file}', using default")
                return None
        return None

    def __init__(self, **data):
        """Initialize config with environment variable support and sanitization."""
        env_data = {}

        env_mapping = {
            'CONVCOMMIT_ALWAYS_LOG': 'always_log',
            'CONVCOMMIT_LOG_FILE': 'log_file',
            'CONVCOMMIT_NO_VERIFY': 'no_verify',
            'CONVCOMMIT_HISTORY_COUNT': 'history_count',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var]

                if field_name == 'log_file':
                    value = self._sanitize_string(value)

                if field_name in ['always_log', 'no_verify']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        merged_data = {**env_data, **data}

        super().__init__(**merged_data)
