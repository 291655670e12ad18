"""
Rule catalog adapters.

Implements the RuleCatalog port:
- InMemoryRuleCatalog (static snapshot, also used in tests)
- CachedRuleCatalog (memoizes a slow per-repository finder)

and loads catalog snapshots from YAML or tabular (CSV/Excel) files.
"""

from infrastructure.rules.cache import CachedRuleCatalog
from infrastructure.rules.loader import load_rule_catalog, parse_rule_records
from infrastructure.rules.memory import InMemoryRuleCatalog

__all__ = [
    # Concrete catalogs
    "InMemoryRuleCatalog",
    "CachedRuleCatalog",
    # Loaders
    "load_rule_catalog",
    "parse_rule_records",
]
