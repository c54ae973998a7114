"""Delivery performance queries.

Groups keep rows whose status, market or shipping mode is empty, so shares
are always taken over every row.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from ..utils.validate import expect_columns, expect_numeric
from . import analysis_params as params
from .columns import DAYS_REAL, DAYS_SCHEDULED, DELIVERY_COLS, DELIVERY_STATUS, MARKET, SHIPPING_MODE

__all__ = ["delivery_status_distribution", "late_delivery_breakdown"]


def delivery_status_distribution(df: pd.DataFrame) -> pd.DataFrame:
    """Row count and share of total per Delivery Status, largest first."""
    expect_columns(df, [DELIVERY_STATUS])
    counts = df.groupby(DELIVERY_STATUS, dropna=False).size().rename("total_orders").reset_index()
    total = counts["total_orders"].sum()
    counts["percentage_of_total"] = counts["total_orders"] * 100.0 / total if total else np.nan
    return counts.sort_values("total_orders", ascending=False, kind="mergesort").reset_index(drop=True)


def late_delivery_breakdown(
    df: pd.DataFrame, late_status: str = params.LATE_DELIVERY_STATUS
) -> pd.DataFrame:
    """Late-order share and mean delay (late rows only) per Market x Shipping Mode."""
    expect_columns(df, DELIVERY_COLS)
    work = expect_numeric(df[DELIVERY_COLS], [DAYS_REAL, DAYS_SCHEDULED])
    work["is_late"] = (work[DELIVERY_STATUS] == late_status).astype("int64")
    delay = work[DAYS_REAL] - work[DAYS_SCHEDULED]
    # NaN outside late rows so mean() only sees late deliveries
    work["late_delay"] = delay.where(work["is_late"] == 1)
    out = (
        work.groupby([MARKET, SHIPPING_MODE], as_index=False, dropna=False)
        .agg(late=("is_late", "sum"), rows=("is_late", "size"), avg_delay_days=("late_delay", "mean"))
    )
    out["late_orders_pct"] = out["late"] * 100.0 / out["rows"]
    out = out[[MARKET, SHIPPING_MODE, "late_orders_pct", "avg_delay_days"]]
    return out.sort_values("late_orders_pct", ascending=False, kind="mergesort").reset_index(drop=True)
