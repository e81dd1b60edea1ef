"""JSON reporter for sql-check."""

import json
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..file_ops import safe_write_file
from ..models import Issue
from .base import BaseFormatter, severity_counts


class JsonReporter(BaseFormatter):
    """Writes ``{"issues": [...], "summary": {...}}`` to a file or stdout."""

    def __init__(self, output: Optional[Union[str, Path]] = None):
        self.output = Path(output) if output is not None else None

    def report(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> None:
        text = self.format(issues, summary)
        if self.output is None:
            sys.stdout.write(text + "\n")
        else:
            safe_write_file(self.output, text + "\n")

    def format(self, issues: List[Issue], summary: Optional[Dict[str, int]] = None) -> str:
        merged = {"issues": len(issues), **severity_counts(issues)}
        if summary:
            merged.update(summary)
        data = {"issues": [issue.to_dict() for issue in issues], "summary": merged}
        return json.dumps(data, indent=2, ensure_ascii=False)
