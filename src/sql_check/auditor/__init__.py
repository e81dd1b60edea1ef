"""Rule engine and rule set."""

from .engine import AuditResult, Auditor
from .rules import Rule, get_default_rules

__all__ = ["Auditor", "AuditResult", "Rule", "get_default_rules"]
