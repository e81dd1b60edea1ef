"""
File operations for sql-check.

Every failure surfaces as ``FileSystemError`` so callers only have to
handle one exception type per path.
"""

import fnmatch
from pathlib import Path
from typing import Iterable, Union

from .exceptions import FileSystemError

PathLike = Union[str, Path]


def safe_read_bytes(filepath: PathLike) -> bytes:
    """
    Read a file's raw bytes.

    Args:
        filepath: File to read

    Returns:
        File contents

    Raises:
        FileSystemError: If the file cannot be read
    """
    try:
        with open(filepath, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileSystemError(filepath, f"OS error: {e}") from e


def safe_read_text(filepath: PathLike, encoding: str = "utf-8", errors: str = "replace") -> str:
    """
    Read a file as text, replacing undecodable bytes.

    Raises:
        FileSystemError: If the file cannot be read
    """
    return safe_read_bytes(filepath).decode(encoding, errors=errors)


def safe_write_file(filepath: PathLike, content: str, encoding: str = "utf-8") -> None:
    """
    Write text to a file, creating parent directories as needed.

    Args:
        filepath: File to write
        content: Content to write
        encoding: Text encoding

    Raises:
        FileSystemError: If the file cannot be written
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, "w", encoding=encoding) as f:
            f.write(content)
    except OSError as e:
        raise FileSystemError(filepath, f"Write failed: {e}") from e


def matches_exclude(name: str, exclude_patterns: Iterable[str]) -> bool:
    """
    Check a single path segment against exclusion patterns.

    A pattern matches when it equals the segment or, as a glob, matches it.

    Args:
        name: File or directory name (not a full path)
        exclude_patterns: Exact names or glob patterns

    Returns:
        True if the segment should be skipped
    """
    for pattern in exclude_patterns:
        if name == pattern or fnmatch.fnmatchcase(name, pattern):
            return True
    return False


def is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")
