"""Exception hierarchy for sql-check."""

from .analysis import (
    AnalysisError,
    ExtractionError,
    FileSystemError,
    ParseError,
    RuleError,
    SchemaLoadError,
)
from .base import SqlCheckError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "SqlCheckError",
    "AnalysisError",
    "FileSystemError",
    "ExtractionError",
    "ParseError",
    "RuleError",
    "SchemaLoadError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
