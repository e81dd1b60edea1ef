"""SQL segment extraction from source files.

Extraction is lexical: any quoted literal (double, single or back-quoted)
whose body starts with SELECT, INSERT, UPDATE or DELETE is a candidate.
Host-language syntax is not understood, so escaped quotes inside a literal
end the match early and string concatenation is not followed. Candidates
that turn out not to be SQL are dropped later when they fail to parse.
"""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ExtractionError
from ..file_ops import safe_read_bytes
from ..logging_config import get_logger
from ..models import Location, SQLSegment

logger = get_logger(__name__)

_SQL_VERB = r"(?:SELECT|INSERT|UPDATE|DELETE)\b"

_QUOTED_SQL_PATTERNS = tuple(
    re.compile(f"{quote}({_SQL_VERB}.*?){quote}", re.IGNORECASE | re.DOTALL)
    for quote in ('"', "'", "`")
)

# Extension -> language tag for files the manager knows about
DEFAULT_LANGUAGES: dict[str, str] = {
    "go": "go",
    "py": "python",
    "cpp": "cpp",
    "cc": "cpp",
    "h": "cpp",
    "hpp": "cpp",
    "sql": "sql",
    "java": "java",
    "js": "javascript",
    "ts": "typescript",
    "php": "php",
    "rb": "ruby",
    "cs": "csharp",
    "kt": "kotlin",
}

FALLBACK_LANGUAGE = "detected"


class Extractor(ABC):
    """Turns file content into SQL segments."""

    @abstractmethod
    def extract(self, content: bytes, file_path: str) -> list[SQLSegment]:
        pass


class RegexExtractor(Extractor):
    """Finds SQL-verb-prefixed quoted literals in any text file."""

    def __init__(self, language: str = FALLBACK_LANGUAGE):
        self.language = language

    def extract(self, content: bytes, file_path: str) -> list[SQLSegment]:
        text = content.decode("utf-8", errors="replace")

        matches = [m for pattern in _QUOTED_SQL_PATTERNS for m in pattern.finditer(text)]
        matches.sort(key=lambda m: m.start())

        return [
            SQLSegment(
                sql=m.group(1),
                location=Location(file_path, text.count("\n", 0, m.start()) + 1),
                language=self.language,
            )
            for m in matches
        ]


class ExtractorManager:
    """Dispatches files to extractors by extension.

    Extensions without a registered extractor use the fallback, so an
    unusual extension that the walker accepted is still scanned.
    """

    def __init__(self, fallback: Optional[Extractor] = None):
        self._extractors: dict[str, Extractor] = {}
        self.fallback = fallback or RegexExtractor()

    def register(self, extension: str, extractor: Extractor) -> None:
        self._extractors[extension.lower().lstrip(".")] = extractor

    def extractor_for(self, file_path: Union[str, Path]) -> Extractor:
        _, ext = os.path.splitext(str(file_path))
        return self._extractors.get(ext.lower().lstrip("."), self.fallback)

    def extract(self, file_path: Union[str, Path]) -> list[SQLSegment]:
        """Read ``file_path`` and extract its segments.

        Raises:
            FileSystemError: If the file cannot be read.
            ExtractionError: If the extractor fails on the content.
        """
        content = safe_read_bytes(file_path)
        extractor = self.extractor_for(file_path)
        try:
            segments = extractor.extract(content, str(file_path))
        except Exception as e:
            raise ExtractionError(file_path, str(e)) from e

        if segments:
            logger.debug(f"{file_path}: {len(segments)} SQL segment(s)")
        return segments


def default_manager() -> ExtractorManager:
    manager = ExtractorManager()
    for ext, language in DEFAULT_LANGUAGES.items():
        manager.register(ext, RegexExtractor(language))
    return manager
