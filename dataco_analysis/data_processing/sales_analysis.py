"""Sales & profitability queries.

Monthly KPIs, month-over-month / year-over-year growth and the comparison of
the late-2017 anomaly window against each category's (or market's) normal
monthly run-rate.
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from ..utils.dates import drop_unparsed, year_month
from ..utils.validate import expect_columns
from ..utils.window import lag_growth_pct
from . import analysis_params as params
from .columns import BENEFIT, CATEGORY, MARKET, ORDER_DATE, ORDER_ID, SALES, SALES_COLS

_LOG = logging.getLogger(__name__)

__all__ = [
    "with_year_month",
    "monthly_kpis",
    "sales_growth",
    "anomaly_comparison",
    "category_anomaly",
    "market_anomaly",
    "detect_monthly_anomalies",
]

# Output label for the grouping column of anomaly_comparison
DIMENSION_LABELS = {CATEGORY: "category_name", MARKET: "market"}


def with_year_month(df: pd.DataFrame, cols: Sequence[str]) -> pd.DataFrame:
    """Copy `cols` plus a 'year_month' key; rows with bad dates are dropped."""
    expect_columns(df, [ORDER_DATE, *cols])
    work = df[list(dict.fromkeys([ORDER_DATE, *cols]))].copy()
    work["year_month"] = year_month(work[ORDER_DATE])
    work = drop_unparsed(work, "year_month")
    work["year_month"] = work["year_month"].astype(str)
    return work


def monthly_kpis(df: pd.DataFrame) -> pd.DataFrame:
    """Sales, profit, distinct orders, margin and AOV per month."""
    work = with_year_month(df, SALES_COLS)
    out = (
        work.groupby("year_month", as_index=False)
        .agg(
            total_sales=(SALES, "sum"),
            total_profit=(BENEFIT, "sum"),
            orders_count=(ORDER_ID, "nunique"),
        )
        .sort_values("year_month", kind="mergesort")
        .reset_index(drop=True)
    )
    sales = out["total_sales"].replace(0, np.nan)
    out["profit_margin_pct"] = out["total_profit"] * 100.0 / sales
    out["average_order_value_aov"] = out["total_sales"] / out["orders_count"].replace(0, np.nan)
    return out


def sales_growth(df: pd.DataFrame) -> pd.DataFrame:
    """Monthly sales with MoM (lag 1) and YoY (lag 12) growth in percent.

    Lags count present months, so a gap in the data shifts the YoY comparison.
    """
    work = with_year_month(df, [SALES])
    out = (
        work.groupby("year_month", as_index=False)
        .agg(total_sales=(SALES, "sum"))
        .sort_values("year_month", kind="mergesort")
        .reset_index(drop=True)
    )
    out["mom_growth_pct"] = lag_growth_pct(out["total_sales"], 1)
    out["yoy_growth_pct"] = lag_growth_pct(out["total_sales"], 12)
    return out


def anomaly_comparison(
    df: pd.DataFrame,
    dimension: str = CATEGORY,
    anomaly_months: Sequence[str] = params.ANOMALY_MONTHS,
    normal_before: str = params.NORMAL_BEFORE,
) -> pd.DataFrame:
    """Normal vs anomaly-window average monthly sales per `dimension` value.

    The normal average divides by the number of distinct months the value sold
    in before `normal_before`; the anomaly average always divides by the number
    of distinct window months. Values with no normal-period sales are not
    reported; an empty `dimension` value is kept as its own group.
    """
    anomaly_months = list(dict.fromkeys(anomaly_months))
    if not anomaly_months:
        raise ValueError("anomaly_months must name at least one month")
    work = with_year_month(df, [SALES, dimension])
    label = DIMENSION_LABELS.get(dimension, dimension.strip().lower().replace(" ", "_"))

    normal = (
        work[work["year_month"] < normal_before]
        .groupby(dimension, dropna=False)
        .agg(sales=(SALES, "sum"), months=("year_month", "nunique"))
    )
    normal_avg = (normal["sales"] / normal["months"]).rename("avg_monthly_sales_normal")
    anomaly_avg = (
        work[work["year_month"].isin(anomaly_months)]
        .groupby(dimension, dropna=False)[SALES]
        .sum()
        / float(len(anomaly_months))
    ).rename("avg_monthly_sales_anomaly")

    out = normal_avg.to_frame().join(anomaly_avg, how="left")
    out["avg_monthly_sales_anomaly"] = out["avg_monthly_sales_anomaly"].fillna(0.0)
    base = out["avg_monthly_sales_normal"].replace(0, np.nan)
    out["performance_change_pct"] = (
        (out["avg_monthly_sales_anomaly"] - out["avg_monthly_sales_normal"]) * 100.0 / base
    )
    out = out.rename_axis(label).reset_index()
    out = out.sort_values("performance_change_pct", kind="mergesort").reset_index(drop=True)
    _LOG.debug("Anomaly comparison over %s: %s groups", dimension, len(out))
    return out


def category_anomaly(df: pd.DataFrame, **kwargs) -> pd.DataFrame:
    return anomaly_comparison(df, dimension=CATEGORY, **kwargs)


def market_anomaly(df: pd.DataFrame, **kwargs) -> pd.DataFrame:
    return anomaly_comparison(df, dimension=MARKET, **kwargs)


def detect_monthly_anomalies(
    kpis: pd.DataFrame, z_threshold: float = params.MONTHLY_Z_THRESHOLD
) -> pd.DataFrame:
    """Flag months whose total sales sit more than `z_threshold` std devs from the mean.

    Expects the output of monthly_kpis (or sales_growth). Needs at least three
    months and non-zero spread, otherwise nothing is flagged.
    """
    expect_columns(kpis, ["year_month", "total_sales"])
    cols = ["year_month", "total_sales", "z_score", "type"]
    if len(kpis) < 3:
        return pd.DataFrame(columns=cols)
    sales = kpis["total_sales"].astype("float64")
    std = float(np.std(sales))
    if std == 0:
        return pd.DataFrame(columns=cols)
    z = (sales - float(np.mean(sales))) / std
    out = kpis.loc[z.abs() > z_threshold, ["year_month", "total_sales"]].copy()
    out["z_score"] = z[out.index].round(2)
    out["type"] = np.where(out["z_score"] > 0, "spike", "drop")
    return out.reset_index(drop=True)
