"""Shared CLI helpers."""

import dataclasses
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import AuditConfig, load_config

console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    schema: Optional[Path] = None,
    exclude: Optional[List[str]] = None,
    ext: Optional[List[str]] = None,
    workers: Optional[int] = None,
    pagination_threshold: Optional[int] = None,
    dialect: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AuditConfig:
    """Build the audit configuration from CLI options.

    ``--ext`` replaces the configured extensions; ``--exclude`` adds to the
    configured exclude patterns.
    """
    overrides = {}
    if schema is not None:
        overrides["schema_path"] = str(schema)
    if ext:
        overrides["extensions"] = tuple(ext)
    if workers is not None:
        overrides["workers"] = workers
    if pagination_threshold is not None:
        overrides["deep_pagination_threshold"] = pagination_threshold
    if dialect is not None:
        overrides["dialect"] = dialect

    resolved = load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)
    if exclude:
        resolved = dataclasses.replace(
            resolved, exclude_patterns=resolved.exclude_patterns + tuple(exclude)
        )
    return resolved
