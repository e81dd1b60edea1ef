"""Schema model and DDL loader."""

from .loader import PRIMARY_INDEX_NAME, load_schema, load_schema_from_string
from .models import Column, Index, SchemaCtx, Table

__all__ = [
    "Column",
    "Index",
    "Table",
    "SchemaCtx",
    "load_schema",
    "load_schema_from_string",
    "PRIMARY_INDEX_NAME",
]
