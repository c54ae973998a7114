from __future__ import annotations
from typing import Iterable
import pandas as pd


def expect_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing columns: {missing}")


def expect_non_empty(df: pd.DataFrame) -> None:
    if df.empty:
        raise ValueError("DataFrame is empty")


def expect_numeric(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    """Return a copy with `cols` coerced to float; unparseable cells become NaN."""
    out = df.copy()
    for c in cols:
        out[c] = pd.to_numeric(out[c], errors="coerce")
    return out
