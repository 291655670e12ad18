"""Configuration loading from YAML files."""

import logging
from pathlib import Path
from typing import Any

from infrastructure.config.models import ImporterConfig
from infrastructure.io import load_yaml

logger = logging.getLogger(__name__)


def load_importer_config(path: Path | None = None) -> ImporterConfig:
    """
    Load importer.yaml (if given); DEBTMODEL_* environment variables take precedence.

    Args:
        path: Optional YAML config file; defaults apply when None

    Returns:
        Validated ImporterConfig

    Raises:
        FileNotFoundError: If path is given but does not exist
        ValueError: If the YAML is not a mapping, has unknown keys or invalid values
    """
    data: dict[str, Any] = load_yaml(path) if path is not None else {}
    cfg = ImporterConfig(**data)
    logger.debug("Loaded importer config from %s: %s", path or "defaults", cfg.model_dump())
    return cfg
