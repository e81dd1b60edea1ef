"""Audit rules.

Each rule is an independent, stateless check with a ``name`` and a
``check(segment, statement, schema)`` method returning issues.
Registration order is report order.
"""

from .base import Rule, make_issue
from .deep_pagination import DEFAULT_THRESHOLD, DeepPaginationRule
from .implicit_conversion import ImplicitConversionRule
from .index_miss import IndexMissRule, collect_direct_columns
from .negative_query import NegativeQueryRule
from .no_where import NoWhereRule
from .select_star import SelectStarRule


def get_default_rules(pagination_threshold: int = DEFAULT_THRESHOLD) -> list[Rule]:
    return [
        NoWhereRule(),
        SelectStarRule(),
        IndexMissRule(),
        ImplicitConversionRule(),
        DeepPaginationRule(threshold=pagination_threshold),
        NegativeQueryRule(),
    ]


__all__ = [
    "Rule",
    "make_issue",
    "get_default_rules",
    "NoWhereRule",
    "SelectStarRule",
    "IndexMissRule",
    "ImplicitConversionRule",
    "DeepPaginationRule",
    "NegativeQueryRule",
    "collect_direct_columns",
    "DEFAULT_THRESHOLD",
]
