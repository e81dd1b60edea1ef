"""Configuration loading and management for sql-check.

Configuration sources are merged in priority order:
    1. Defaults (defined in AuditConfig)
    2. Global config (~/.sql-check.toml)
    3. Project config (./sql-check.toml)
    4. Explicit config file (--config)
    5. Environment variables (SQLCHECK_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, verbose=True)
    >>> config.workers
    4
    >>> config.verbosity
    'verbose'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .parsing.parser import DEFAULT_DIALECT
from .scanning.extractor import DEFAULT_LANGUAGES
from .scanning.pool import DEFAULT_WORKERS
from .scanning.walker import DEFAULT_QUEUE_SIZE
from .auditor.rules.deep_pagination import DEFAULT_THRESHOLD

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITIES = ("quiet", "normal", "verbose")

GLOBAL_CONFIG_NAME = ".sql-check.toml"
PROJECT_CONFIG_NAME = "sql-check.toml"
ENV_PREFIX = "SQLCHECK_"


@dataclass(frozen=True)
class AuditConfig:
    """Configuration for one audit run.

    Attributes:
        File selection:
            extensions: Accepted file extensions (without dot)
            exclude_patterns: Names or globs; matching directories are pruned

        Performance tuning:
            workers: Concurrent extraction workers
            queue_size: Capacity of the walker -> pool hand-off queue

        Rules:
            deep_pagination_threshold: OFFSET above this is reported
            schema_path: DDL file; None audits without schema-aware rules
            dialect: sqlglot dialect used for parsing

        Output control:
            verbosity: Logging verbosity level
    """

    # File selection
    extensions: tuple[str, ...] = field(default_factory=lambda: tuple(DEFAULT_LANGUAGES))
    exclude_patterns: tuple[str, ...] = (
        ".git",
        ".hg",
        ".svn",
        "vendor",
        "node_modules",
        "*_test.go",
    )

    # Performance tuning
    workers: int = DEFAULT_WORKERS
    queue_size: int = DEFAULT_QUEUE_SIZE

    # Rules
    deep_pagination_threshold: int = DEFAULT_THRESHOLD
    schema_path: Optional[str] = None
    dialect: str = DEFAULT_DIALECT

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # TOML arrays and CLI options arrive as lists
        object.__setattr__(self, "extensions", tuple(self.extensions))
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

        if self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.queue_size < 1:
            raise InvalidConfigError("queue_size", self.queue_size, "must be at least 1")
        if self.deep_pagination_threshold < 0:
            raise InvalidConfigError(
                "deep_pagination_threshold", self.deep_pagination_threshold, "must be non-negative"
            )
        if not any(ext.strip(".") for ext in self.extensions):
            raise InvalidConfigError("extensions", self.extensions, "at least one is required")
        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITIES)}"
            )
        if not self.dialect:
            raise InvalidConfigError("dialect", self.dialect, "must not be empty")

    @property
    def verbose(self) -> bool:
        return self.verbosity == "verbose"

    @property
    def quiet(self) -> bool:
        return self.verbosity == "quiet"


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> AuditConfig:
    """Load configuration with auto-discovery and merging.

    Overrides whose value is None are ignored, so unset CLI options do not
    mask file or environment values.

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation.
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_NAME
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to the verbosity field
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - set(AuditConfig.__dataclass_fields__))
    if unknown:
        raise ConfigurationError(f"Unknown configuration key(s): {', '.join(unknown)}")

    try:
        return AuditConfig(**merged)
    except TypeError as e:
        # Wrong value type from a config file, e.g. workers = "four"
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SQLCHECK_* environment variables.

    Only scalar fields are read; SQLCHECK_WORKERS=4,
    SQLCHECK_DEEP_PAGINATION_THRESHOLD=1000, SQLCHECK_SCHEMA_PATH=db.sql ...
    """
    type_hints = get_type_hints(AuditConfig)
    result: dict[str, Any] = {}

    for field_name in AuditConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hints[field_name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment string to the field's type; None for non-scalar fields."""
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin in (list, tuple) or type_hint in (list, tuple):
        return None

    if type_hint is int:
        return int(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the parsed dict.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid TOML.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # tomli is declared for Python < 3.11
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}") from e
