"""Rule catalog loading from YAML or tabular files."""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from domain.rules import Rule
from infrastructure.io import load_yaml, read_table
from infrastructure.rules.memory import InMemoryRuleCatalog

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
TABLE_SUFFIXES = (".csv", ".xlsx", ".xls")


def parse_rule_records(data: Any) -> list[Rule]:
    """
    Parse rules from a pre-loaded YAML structure.

    Two layouts are accepted:

        rules:
          - {repository: checkstyle, key: Regexp, name: Regular expression}

        rules:
          checkstyle: [Regexp, LineLength]

    Raises:
        ValueError: If the structure matches neither layout
    """
    if isinstance(data, Mapping):
        data = data.get("rules", []) or []

    rules: list[Rule] = []
    if isinstance(data, Mapping):
        for repository, keys in data.items():
            if not isinstance(keys, list):
                raise ValueError(f"Rules of repository {repository!r} must be a list of keys")
            rules.extend(Rule(repository=str(repository).strip(), key=str(key).strip()) for key in keys)
    elif isinstance(data, list):
        for record in data:
            if not isinstance(record, Mapping):
                raise ValueError(f"Rule entries must be mappings, got {type(record).__name__}")
            rules.append(_rule_from_record(record))
    else:
        raise ValueError("rules must be a list of rule mappings or a repository -> keys mapping")
    return rules


def _rule_from_record(record: Mapping[str, Any]) -> Rule:
    if "repository" not in record or "key" not in record:
        raise ValueError(f"Rule entry missing 'repository' or 'key': {dict(record)!r}")
    name = record.get("name")
    return Rule(
        repository=str(record["repository"]).strip(),
        key=str(record["key"]).strip(),
        name=str(name).strip() if name is not None and not pd.isna(name) else None,
    )


def _rules_from_table(df: pd.DataFrame, path: Path) -> Iterable[Rule]:
    missing = [col for col in ("repository", "key") if col not in df.columns]
    if missing:
        raise KeyError(f"Rule table {path} is missing columns {missing}; found {list(df.columns)}")
    df = df.dropna(subset=["repository", "key"])
    df = df[(df["repository"] != "") & (df["key"] != "")]
    for record in df.to_dict(orient="records"):
        yield _rule_from_record(record)


def load_rule_catalog(path: Path) -> InMemoryRuleCatalog:
    """
    Load a rule catalog snapshot from disk.

    Supported formats:
    - YAML: .yaml, .yml (see parse_rule_records)
    - Tables: .csv, .xlsx, .xls with columns repository, key and optional name

    Raises:
        ValueError: If the file format is not supported or malformed
        FileNotFoundError: If the file does not exist
    """
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        rules = parse_rule_records(load_yaml(path))
    elif suffix in TABLE_SUFFIXES:
        rules = list(_rules_from_table(read_table(path), path))
    else:
        raise ValueError(
            f"Unsupported rule catalog format: {suffix}. Supported formats: {', '.join(YAML_SUFFIXES + TABLE_SUFFIXES)}"
        )

    catalog = InMemoryRuleCatalog(rules)
    logger.info("Loaded %d rules from %s", len(catalog), path)
    return catalog
