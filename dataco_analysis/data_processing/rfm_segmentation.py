"""RFM (Recency, Frequency, Monetary) Customer Segmentation.

Scores every customer 1-4 on each RFM axis with NTILE-style quartiles and maps
the score triple to a named segment through a fixed rule table.

Primary method: rfm_segment_summary
Building blocks: customer_rfm, rfm_scores, assign_segment, segment_customers

Assumptions:
 - Recency is measured in whole days against the latest order day in the data,
   not against today.
 - R is scored with the most recent customers in bucket 4; F and M put the
   highest values in bucket 4.
"""
from __future__ import annotations

import logging

import pandas as pd

from ..utils.dates import drop_unparsed, order_day
from ..utils.validate import expect_columns
from ..utils.window import ntile
from . import analysis_params as params
from .columns import CUSTOMER_ID, ORDER_DATE, ORDER_ID, RFM_COLS, SALES

_LOG = logging.getLogger(__name__)


def customer_rfm(df: pd.DataFrame) -> pd.DataFrame:
    """Recency (days), Frequency (distinct orders) and Monetary (sales) per customer."""
    expect_columns(df, RFM_COLS)
    work = df[[CUSTOMER_ID, ORDER_ID, SALES]].copy()
    work["order_date"] = order_day(df[ORDER_DATE])
    work = drop_unparsed(work, "order_date")
    if work.empty:
        return pd.DataFrame(columns=["customer_id", "Recency", "Frequency", "Monetary"])
    latest = work["order_date"].max()
    out = (
        work.groupby(CUSTOMER_ID, dropna=False)
        .agg(
            last_order=("order_date", "max"),
            Frequency=(ORDER_ID, "nunique"),
            Monetary=(SALES, "sum"),
        )
        .rename_axis("customer_id")
        .reset_index()
    )
    out["Recency"] = (latest - out["last_order"]).dt.days.astype("int64")
    return out[["customer_id", "Recency", "Frequency", "Monetary"]]


def rfm_scores(rfm: pd.DataFrame, buckets: int = params.RFM_BUCKETS) -> pd.DataFrame:
    """Add R_Score, F_Score and M_Score quantile buckets (1..buckets)."""
    expect_columns(rfm, ["Recency", "Frequency", "Monetary"])
    out = rfm.copy()
    out["R_Score"] = ntile(out["Recency"], buckets, ascending=False).to_numpy()
    out["F_Score"] = ntile(out["Frequency"], buckets).to_numpy()
    out["M_Score"] = ntile(out["Monetary"], buckets).to_numpy()
    return out


def assign_segment(r: int, f: int, m: int) -> str:
    """Map one R/F/M score triple to a segment name; first matching rule wins."""
    if r == 4 and f == 4 and m == 4:
        return params.SEGMENT_CHAMPIONS
    if r >= 3 and f >= 3:
        return params.SEGMENT_LOYAL
    if r <= 2 and f >= 3 and m >= 3:
        return params.SEGMENT_AT_RISK
    if r <= 2 and f <= 2:
        return params.SEGMENT_HIBERNATING
    if r == 4 and f <= 2:
        return params.SEGMENT_NEW
    return params.SEGMENT_REGULAR


def segment_customers(df: pd.DataFrame) -> pd.DataFrame:
    """Per-customer RFM values, scores and segment label."""
    scored = rfm_scores(customer_rfm(df))
    scored["customer_segment"] = [
        assign_segment(r, f, m)
        for r, f, m in zip(scored["R_Score"], scored["F_Score"], scored["M_Score"])
    ]
    _LOG.info("Segmented %s customers", len(scored))
    return scored


def rfm_segment_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Customer count, monetary total and monetary share per segment."""
    seg = segment_customers(df)
    total = seg["Monetary"].sum()
    out = (
        seg.groupby("customer_segment", as_index=False)
        .agg(customer_count=("customer_id", "count"), total_monetary=("Monetary", "sum"))
    )
    out["monetary_percentage"] = out["total_monetary"] * 100.0 / total if total else float("nan")
    return out.sort_values("total_monetary", ascending=False, kind="mergesort").reset_index(drop=True)


__all__ = [
    "customer_rfm",
    "rfm_scores",
    "assign_segment",
    "segment_customers",
    "rfm_segment_summary",
]
