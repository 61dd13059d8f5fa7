"""
Data models for the import star guard.

All models are immutable dataclasses; they are created once per pipeline run
and handed back to the caller for reporting.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Any
from enum import Enum


DEFAULT_TIMEOUT = 30  # seconds per repository page request


class Severity(str, Enum):
    """Threshold level crossed by an import."""
    WARN = "WARN"
    ERROR = "ERROR"


class ErrorKind(str, Enum):
    """Recoverable failure kinds raised below the processor."""
    FILE_UNREADABLE = "FILE_UNREADABLE"  # file-scope, from the scanner
    SYNTAX_INVALID = "SYNTAX_INVALID"  # file-scope, from the scanner
    QUERY_FAILED = "QUERY_FAILED"  # import-scope, from the stargazer
    METRIC_UNAVAILABLE = "METRIC_UNAVAILABLE"  # import-scope, from the stargazer


class StarGuardError(Exception):
    """
    Single error type for every recoverable failure.

    The kind tag decides how the processor reports it; target is the
    file name for scanner errors and the repository URL for fetch errors.
    """

    def __init__(self, kind: ErrorKind, target: str, detail: str):
        self.kind = kind
        self.target = target
        self.detail = detail
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.kind is ErrorKind.FILE_UNREADABLE:
            return f"unable to read file, file cannot be linted ({self.detail})"
        if self.kind is ErrorKind.SYNTAX_INVALID:
            return f"invalid syntax, file cannot be linted ({self.detail})"
        if self.kind is ErrorKind.QUERY_FAILED:
            return f"Error on Querying Github for {self.target} - {self.detail}"
        return f"Error on Parsing Stars for {self.target} - {self.detail}"


@dataclass(frozen=True)
class RepositoryException:
    """Repository listed under `exceptions` in the config file."""
    repository: str
    reason: str


@dataclass(frozen=True)
class Configuration:
    """
    Thresholds for one run.

    Expected invariant: error <= warn. The config loader enforces it;
    the evaluator itself only applies the error-first rule.
    """
    warn: int = 0
    error: int = 0
    exceptions: Tuple[RepositoryException, ...] = ()
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ImportReference:
    """One import declaration found by a scanner."""
    path: str  # e.g. "github.com/pkg/errors"
    file_name: str
    line: int  # 1-based


@dataclass(frozen=True)
class Issue:
    """A position-tagged finding returned to the caller."""
    file_name: str
    line_number: int  # 1-based, 0 for file-scope findings
    reason: str
    severity: Optional[Severity] = None  # None for read/query failures

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_number} {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "file_name": self.file_name,
            "line_number": self.line_number,
            "reason": self.reason,
            "severity": self.severity.value if self.severity else None,
        }
