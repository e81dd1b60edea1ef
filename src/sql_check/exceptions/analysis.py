"""Analysis-related exceptions: file access, extraction, parsing, rules, schema."""

from pathlib import Path
from typing import Optional, Union

from .base import SqlCheckError

PathLike = Union[str, Path]

# Keep error details readable when the offending SQL is a whole file
_SQL_PREVIEW_CHARS = 200


def _preview(sql: str) -> str:
    sql = " ".join(sql.split())
    if len(sql) > _SQL_PREVIEW_CHARS:
        return sql[:_SQL_PREVIEW_CHARS] + "..."
    return sql


class AnalysisError(SqlCheckError):
    """Base class for analysis-related errors."""
    pass


class FileSystemError(AnalysisError):
    """Raised when a path cannot be read, listed or written."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ExtractionError(AnalysisError):
    """Raised when SQL segments cannot be extracted from a readable file."""

    def __init__(self, filepath: PathLike, reason: str):
        super().__init__(
            f"Failed to extract SQL from {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParseError(AnalysisError):
    """Raised when a SQL fragment is not a parsable statement."""

    def __init__(self, sql: str, reason: str):
        super().__init__(
            "Failed to parse SQL",
            details={"sql": _preview(sql), "reason": reason},
        )
        self.sql = sql
        self.reason = reason


class RuleError(AnalysisError):
    """Raised (and contained by the auditor) when a rule fails on one segment."""

    def __init__(self, rule_name: str, location: str, reason: str):
        super().__init__(
            f"Rule {rule_name} failed at {location}",
            details={"rule": rule_name, "location": location, "reason": reason},
        )
        self.rule_name = rule_name
        self.location = location
        self.reason = reason


class SchemaLoadError(AnalysisError):
    """Raised when an explicitly supplied schema file cannot be loaded."""

    def __init__(self, path: PathLike, reason: str, table: Optional[str] = None):
        details = {"path": str(path), "reason": reason}
        if table:
            details["table"] = table

        super().__init__(f"Failed to load schema: {path}", details=details)
        self.path = path
        self.reason = reason
        self.table = table
