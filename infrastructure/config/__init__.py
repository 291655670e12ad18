"""
Configuration management: models, loading, and validation.

Handles:
- ImporterConfig: day length, duplicate key policy, rule catalog location
- YAML loading
- Environment variable overrides (DEBTMODEL_*)

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import load_importer_config
from infrastructure.config.models import ImporterConfig

__all__ = [
    "ImporterConfig",
    "load_importer_config",
]
