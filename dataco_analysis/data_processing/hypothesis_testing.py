"""Customer groups for the delivery-delay vs customer-value t-test."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats

from ..utils.validate import expect_columns
from . import analysis_params as params
from .columns import CUSTOMER_ID, DELIVERY_STATUS, SALES, TTEST_COLS

__all__ = ["TTestResult", "delivery_experience_groups", "late_delivery_ttest"]


@dataclass
class TTestResult:
    delayed_mean: float
    on_time_mean: float
    delayed_n: int
    on_time_n: int
    statistic: float
    p_value: float
    alpha: float = params.TTEST_ALPHA
    equal_var: bool = False

    @property
    def significant(self) -> bool:
        return bool(self.p_value < self.alpha)

    def as_frame(self) -> pd.DataFrame:
        return pd.DataFrame([{
            "group": params.GROUP_DELAYED, "customers": self.delayed_n, "mean_monetary": self.delayed_mean,
        }, {
            "group": params.GROUP_ON_TIME, "customers": self.on_time_n, "mean_monetary": self.on_time_mean,
        }]).assign(t_statistic=self.statistic, p_value=self.p_value, significant=self.significant)


def delivery_experience_groups(
    df: pd.DataFrame, late_status: str = params.LATE_DELIVERY_STATUS
) -> pd.DataFrame:
    """One row per customer: total sales and whether any of their rows was late."""
    expect_columns(df, TTEST_COLS)
    work = df[[CUSTOMER_ID, SALES]].copy()
    work["late_flag"] = (df[DELIVERY_STATUS] == late_status).astype("int64")
    out = (
        work.groupby(CUSTOMER_ID, dropna=False)
        .agg(had_late_delivery_flag=("late_flag", "max"), Monetary=(SALES, "sum"))
        .rename_axis("customer_id")
        .reset_index()
    )
    out["delivery_experience"] = np.where(
        out["had_late_delivery_flag"] == 1, params.GROUP_DELAYED, params.GROUP_ON_TIME
    )
    return out[["customer_id", "Monetary", "delivery_experience"]]


def late_delivery_ttest(
    groups: pd.DataFrame, *, equal_var: bool = False, alpha: float = params.TTEST_ALPHA
) -> TTestResult:
    """Two-sample t-test of Monetary between delayed and on-time customers.

    Welch's variant unless `equal_var` is set. Each group needs two or more customers.
    """
    expect_columns(groups, ["Monetary", "delivery_experience"])
    delayed = groups.loc[groups["delivery_experience"] == params.GROUP_DELAYED, "Monetary"].astype("float64")
    on_time = groups.loc[groups["delivery_experience"] == params.GROUP_ON_TIME, "Monetary"].astype("float64")
    if len(delayed) < 2 or len(on_time) < 2:
        raise ValueError(
            f"Need at least two customers per group (delayed={len(delayed)}, on_time={len(on_time)})"
        )
    res = stats.ttest_ind(delayed, on_time, equal_var=equal_var)
    return TTestResult(
        delayed_mean=float(delayed.mean()),
        on_time_mean=float(on_time.mean()),
        delayed_n=int(len(delayed)),
        on_time_n=int(len(on_time)),
        statistic=float(res.statistic),
        p_value=float(res.pvalue),
        alpha=alpha,
        equal_var=equal_var,
    )
