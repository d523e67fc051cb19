from __future__ import annotations

"""Soybean observation table reader (CSV/TSV/TXT)."""

from pathlib import Path
from typing import Optional, Sequence, Union

import pandas as pd

from soyensemble.contracts.preprocess_configs import (
    SOYBEAN_CATEGORICALS,
    SOYBEAN_PREDICTORS,
    SOYBEAN_TARGET,
)

REQUIRED_COLUMNS: list[str] = [*SOYBEAN_CATEGORICALS, *SOYBEAN_PREDICTORS, SOYBEAN_TARGET]


def _read_first_line(path: Path, encoding: Optional[str] = None) -> str:
    with path.open("r", encoding=encoding or "utf-8", errors="replace") as f:
        return f.readline().strip("\n")


def _infer_delimiter(sample_line: str) -> str:
    if "\t" in sample_line:
        return "\t"
    if "," in sample_line:
        return ","
    if ";" in sample_line:
        return ";"
    return r"\s+"


def _canonical_columns(columns: Sequence[str], required: Sequence[str]) -> dict[str, str]:
    """Map file column names onto the required names, ignoring case and padding."""
    wanted = {c.lower(): c for c in required}
    mapping: dict[str, str] = {}
    for col in columns:
        key = str(col).strip().lower()
        if key in wanted:
            mapping[col] = wanted[key]
    return mapping


def load_soybean_table(
    file_path: Union[str, Path],
    *,
    delimiter: Optional[str] = None,
    encoding: Optional[str] = None,
    required: Sequence[str] = REQUIRED_COLUMNS,
) -> pd.DataFrame:
    """Load the raw observation table.

    - If delimiter is None, it is inferred from the header line.
    - Column names are matched to ``required`` case-insensitively and renamed
      to their canonical spelling; other columns are kept as they are.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Table file not found: {path}")

    sep = delimiter
    if sep is None:
        sep = _infer_delimiter(_read_first_line(path, encoding))
    if sep == "\\t":
        sep = "\t"

    df = pd.read_csv(path.as_posix(), sep=sep, encoding=encoding or "utf-8", engine="python")
    df = df.rename(columns=_canonical_columns(df.columns, required))

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(
            f"{path.name}: missing required column(s) {missing}; found {[str(c) for c in df.columns]}."
        )
    if df.empty:
        raise ValueError(f"{path.name}: table has a header but no rows.")
    return df

