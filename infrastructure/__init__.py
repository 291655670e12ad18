"""
Infrastructure layer: External dependencies and I/O boundaries.

Contains adapters for:
- Model documents (XML reading, legacy layout translation)
- Rule catalogs (in-memory, cached, YAML/CSV/Excel snapshots)
- Configuration loading (YAML, environment)
- Observability (logging)

This is the only layer that performs I/O operations.
"""

# Most commonly used - exposed at top level for convenience
from infrastructure.config import ImporterConfig, load_importer_config
from infrastructure.document import parse_document, read_document
from infrastructure.rules import CachedRuleCatalog, InMemoryRuleCatalog, load_rule_catalog

__all__ = [
    # Documents (most commonly used)
    "parse_document",
    "read_document",
    # Rule catalogs
    "InMemoryRuleCatalog",
    "CachedRuleCatalog",
    "load_rule_catalog",
    # Configuration
    "ImporterConfig",
    "load_importer_config",
]
