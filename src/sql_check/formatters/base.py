"""Base reporter interface for sql-check output rendering."""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Dict, List, Optional

from ..models import Issue, Severity


class BaseFormatter(ABC):
    """Abstract base class for issue reporters."""

    @abstractmethod
    def report(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> None:
        """Emit the issues. Raises on output failure."""

    @abstractmethod
    def format(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> str:
        """Return the rendered issues as a string."""


def severity_counts(issues: List[Issue]) -> Dict[str, int]:
    counts = Counter(issue.severity for issue in issues)
    return {severity.value.lower(): counts.get(severity, 0) for severity in Severity}
