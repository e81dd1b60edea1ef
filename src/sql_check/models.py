"""Data models shared by the scanner, the auditor and the reporters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Location:
    """Physical location of a code segment."""

    file_path: str
    line: int

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}"


@dataclass(frozen=True)
class SQLSegment:
    """One candidate SQL fragment extracted from source code."""

    sql: str
    location: Location
    language: str = "detected"  # e.g. "go", "python", "cpp"

    def to_dict(self) -> dict[str, Any]:
        return {
            "sql": self.sql,
            "file": self.location.file_path,
            "line": self.location.line,
            "language": self.language,
        }


class Severity(str, Enum):
    FATAL = "FATAL"
    WARNING = "WARNING"
    SUGGESTION = "SUGGESTION"


class IssueType(str, Enum):
    UNSAFE_UPDATE = "UNSAFE_UPDATE"
    UNSAFE_DELETE = "UNSAFE_DELETE"
    SELECT_STAR = "SELECT_STAR"
    NO_INDEXES_DEFINED = "NO_INDEXES_DEFINED"
    INDEX_MISS = "INDEX_MISS"
    IMPLICIT_CONVERSION = "IMPLICIT_CONVERSION"
    DEEP_PAGINATION = "DEEP_PAGINATION"
    NEGATIVE_QUERY = "NEGATIVE_QUERY"
    LEADING_WILDCARD = "LEADING_WILDCARD"


@dataclass(frozen=True)
class Issue:
    issue_type: IssueType
    severity: Severity
    message: str  # "UPDATE statement executed without WHERE clause ..."
    suggestion: str  # "Add a WHERE clause to limit ..."
    segment: SQLSegment

    @property
    def location(self) -> Location:
        return self.segment.location

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.issue_type.value,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "segment": self.segment.to_dict(),
        }
