from pathlib import Path

# Repo-root conventional directories/files (overrideable from the CLI)
CONFIG_DIR = Path("configs")
IMPORTER_CONFIG_FILE = CONFIG_DIR / "importer.yaml"
RULES_FILE = CONFIG_DIR / "rules.yaml"

# Environment variable overrides
ENV_PREFIX = "DEBTMODEL_"
