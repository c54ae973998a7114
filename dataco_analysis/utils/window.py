from __future__ import annotations
import numpy as np
import pandas as pd


def ntile(values: pd.Series, n: int, ascending: bool = True) -> pd.Series:
    """SQL NTILE(n) over `values` ordered ascending (or descending).

    Buckets are numbered 1..n; sizes differ by at most one and the first
    len % n buckets take the extra row. Ties keep their input order.
    """
    if n < 1:
        raise ValueError("n must be a positive integer")
    total = len(values)
    if total == 0:
        return pd.Series([], index=values.index, dtype="int64", name=values.name)
    keys = values.to_numpy(dtype="float64")
    if not ascending:
        keys = -keys
    order = np.lexsort((np.arange(total), keys))
    size, extra = divmod(total, n)
    buckets = np.empty(total, dtype="int64")
    pos = 0
    for b in range(1, n + 1):
        width = size + (1 if b <= extra else 0)
        buckets[order[pos:pos + width]] = b
        pos += width
    return pd.Series(buckets, index=values.index, name=values.name)


def lag_growth_pct(values: pd.Series, periods: int) -> pd.Series:
    """Percent change against the row `periods` positions earlier.

    NaN where there is no earlier row or the earlier value is zero.
    """
    values = values.astype("float64")
    prev = values.shift(periods)
    growth = (values - prev) * 100.0 / prev.replace(0, np.nan)
    return growth
