"""I/O utilities: filesystem operations and tabular loading."""

from infrastructure.io.datasets import read_table
from infrastructure.io.fs import ensure_exists, load_yaml

__all__ = [
    "ensure_exists",
    "load_yaml",
    "read_table",
]
