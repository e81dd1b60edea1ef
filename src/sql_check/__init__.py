"""sql-check - static auditing of SQL embedded in source code."""

__version__ = "0.1.0"

from .api import AuditRun, audit, run_audit  # noqa: E402
from .auditor import Auditor, AuditResult  # noqa: E402
from .config import AuditConfig, load_config  # noqa: E402
from .exceptions import SqlCheckError  # noqa: E402
from .models import Issue, IssueType, Location, Severity, SQLSegment  # noqa: E402
from .schema import SchemaCtx, load_schema  # noqa: E402

__all__ = [
    "__version__",
    "audit",
    "run_audit",
    "AuditRun",
    "Auditor",
    "AuditResult",
    "AuditConfig",
    "load_config",
    "SqlCheckError",
    "Issue",
    "IssueType",
    "Location",
    "Severity",
    "SQLSegment",
    "SchemaCtx",
    "load_schema",
]
