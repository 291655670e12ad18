"""
Rule identifiers and the rule catalog port.

The catalog is the source of truth for which (repository, key) pairs exist.
Concrete catalogs live in infrastructure.rules.
"""

from domain.rules.catalog import RuleCatalog
from domain.rules.reference import Rule, RuleReference

__all__ = [
    "Rule",
    "RuleReference",
    "RuleCatalog",
]
