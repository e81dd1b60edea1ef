"""Public API for sql-check.

This module wires the pipeline together: walk the tree, extract SQL
segments concurrently, then audit them against the schema.

Example:
    >>> from sql_check import audit
    >>>
    >>> run = audit("/path/to/code", schema_path="db/schema.sql")
    >>> for issue in run.issues:
    ...     print(issue.location, issue.message)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .auditor import AuditResult, Auditor, get_default_rules
from .config import AuditConfig, load_config
from .exceptions import InvalidPathError, SqlCheckError
from .logging_config import get_logger, setup_logging
from .models import Issue, Severity, SQLSegment
from .parsing import SQLParser
from .scanning import FileWalker, ScanResult, WorkerPool, default_manager
from .schema import SchemaCtx, load_schema

logger = get_logger(__name__)


@dataclass
class AuditRun:
    """Everything one pipeline run produced."""

    root: str
    config: AuditConfig
    issues: list[Issue] = field(default_factory=list)
    segments: list[SQLSegment] = field(default_factory=list)
    files_scanned: int = 0
    file_errors: list[ScanResult] = field(default_factory=list)
    walk_error: Optional[SqlCheckError] = None
    audit: AuditResult = field(default_factory=AuditResult)
    tables: int = 0

    def count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)

    @property
    def has_fatal(self) -> bool:
        return self.count(Severity.FATAL) > 0

    def summary(self) -> dict[str, int]:
        return {
            "files_scanned": self.files_scanned,
            "file_errors": len(self.file_errors),
            "segments": len(self.segments),
            "parse_failures": self.audit.parse_failures,
            "rule_errors": len(self.audit.rule_errors),
            "tables": self.tables,
            "issues": len(self.issues),
            "fatal": self.count(Severity.FATAL),
            "warning": self.count(Severity.WARNING),
            "suggestion": self.count(Severity.SUGGESTION),
        }


def load_schema_for(config: AuditConfig, parser: SQLParser) -> SchemaCtx:
    """Load the configured schema, or an empty one when none is configured.

    Raises:
        SchemaLoadError: If a schema path is configured but cannot be loaded.
    """
    if not config.schema_path:
        logger.info("No schema configured; schema-aware rules are inactive")
        return SchemaCtx.empty()
    return load_schema(config.schema_path, parser=parser)


def run_audit(
    root: Union[str, Path],
    config: AuditConfig,
    stop_event: Optional[threading.Event] = None,
) -> AuditRun:
    """Scan ``root`` and audit every extracted segment.

    Per-file failures are collected on the returned run, never raised.

    Raises:
        InvalidPathError: If ``root`` is not a directory.
        SchemaLoadError: If the configured schema cannot be loaded.
    """
    root_path = Path(root)
    if not root_path.exists():
        raise InvalidPathError(root_path, "does not exist")
    if not root_path.is_dir():
        raise InvalidPathError(root_path, "not a directory")

    parser = SQLParser(config.dialect)
    schema = load_schema_for(config, parser)

    run = AuditRun(root=str(root_path.resolve()), config=config, tables=len(schema))

    walker = FileWalker(config.extensions, config.exclude_patterns, queue_size=config.queue_size)
    manager = default_manager()
    pool = WorkerPool(manager.extract, concurrency=config.workers)

    logger.info(f"Scanning {run.root} with {config.workers} worker(s)")
    stream = walker.walk(run.root, stop_event=stop_event)

    results = list(pool.run(stream, stop_event=stop_event))
    # Completion order is arbitrary; sort so repeated runs report identically
    results.sort(key=lambda r: r.path)

    for result in results:
        run.files_scanned += 1
        if result.ok:
            run.segments.extend(result.segments)
        else:
            run.file_errors.append(result)

    run.walk_error = stream.error
    logger.info(
        f"Scan complete: {run.files_scanned} file(s), {len(run.segments)} segment(s), "
        f"{len(run.file_errors)} error(s)"
    )

    auditor = Auditor(
        schema=schema, parser=parser, rules=get_default_rules(config.deep_pagination_threshold)
    )
    run.audit = auditor.run(run.segments)
    run.issues = run.audit.issues
    return run


def audit(
    path: Union[str, Path] = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> AuditRun:
    """Audit a source tree and return the run.

    Loads configuration (auto-discovered TOML, environment, then
    ``overrides``), configures logging and runs the pipeline.

    Args:
        path: Root of the source tree (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., schema_path="schema.sql", workers=4)

    Raises:
        SqlCheckError: If configuration, the root path or the schema is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    setup_logging(verbose=config.verbose, quiet=config.quiet)

    logger.info(f"Starting audit of {path}")
    return run_audit(path, config)
