"""Source scanning: directory walk, concurrent extraction, SQL segment extraction."""

from .extractor import (
    DEFAULT_LANGUAGES,
    Extractor,
    ExtractorManager,
    RegexExtractor,
    default_manager,
)
from .pool import DEFAULT_WORKERS, ScanResult, WorkerPool
from .walker import DEFAULT_QUEUE_SIZE, FileWalker, PathStream, normalize_extensions

__all__ = [
    "Extractor",
    "RegexExtractor",
    "ExtractorManager",
    "default_manager",
    "DEFAULT_LANGUAGES",
    "FileWalker",
    "PathStream",
    "normalize_extensions",
    "DEFAULT_QUEUE_SIZE",
    "WorkerPool",
    "ScanResult",
    "DEFAULT_WORKERS",
]
