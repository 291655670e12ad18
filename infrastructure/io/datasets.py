"""Tabular file loading."""

from pathlib import Path

import pandas as pd


def read_table(path: Path) -> pd.DataFrame:
    """
    Read a tabular file (Excel or CSV) with every column as text.

    Rule keys are exact, case-sensitive identifiers, so no type inference is
    applied (e.g. "0042" stays "0042"). Column names are stripped and
    lower-cased; cell values are stripped.

    Supported formats:
    - Excel: .xlsx, .xls
    - CSV: .csv

    Raises:
        ValueError: If file format is not supported
        FileNotFoundError: If file does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    suffix = path.suffix.lower()

    if suffix in [".xlsx", ".xls"]:
        df = pd.read_excel(path, dtype=str)
    elif suffix == ".csv":
        df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    else:
        raise ValueError(f"Unsupported file format: {suffix}. Supported formats: .xlsx, .xls, .csv")

    df.columns = [str(col).strip().lower() for col in df.columns]
    return df.apply(lambda col: col.str.strip())
