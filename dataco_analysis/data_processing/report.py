"""Run every analysis query over one orders frame."""
from __future__ import annotations

import logging
from typing import Dict, Optional

import pandas as pd

from ..utils.validate import expect_columns, expect_non_empty
from . import analysis_params as params
from .columns import ALL_COLS
from .delivery_analysis import delivery_status_distribution, late_delivery_breakdown
from .hypothesis_testing import delivery_experience_groups, late_delivery_ttest
from .regression_prep import fit_profit_model, regression_features
from .rfm_segmentation import rfm_segment_summary
from .sales_analysis import (
    category_anomaly,
    detect_monthly_anomalies,
    market_anomaly,
    monthly_kpis,
    sales_growth,
)

_LOG = logging.getLogger(__name__)

__all__ = ["run_all"]


def run_all(
    df: pd.DataFrame,
    *,
    sample_size: Optional[int] = params.REGRESSION_SAMPLE_SIZE,
    random_state: Optional[int] = None,
    with_models: bool = True,
) -> Dict[str, pd.DataFrame]:
    """Return result name -> DataFrame for every query, in report order.

    `with_models` adds the t-test and regression fit sheets. When either model
    cannot be computed (a t-test group too small, no usable regression rows)
    the failure is logged and that sheet skipped.
    """
    expect_columns(df, ALL_COLS)
    expect_non_empty(df)
    results: Dict[str, pd.DataFrame] = {}
    kpis = monthly_kpis(df)
    results["monthly_kpis"] = kpis
    results["sales_growth"] = sales_growth(df)
    results["monthly_anomalies"] = detect_monthly_anomalies(kpis)
    results["category_anomaly"] = category_anomaly(df)
    results["market_anomaly"] = market_anomaly(df)
    results["delivery_status"] = delivery_status_distribution(df)
    results["late_delivery"] = late_delivery_breakdown(df)
    results["rfm_summary"] = rfm_segment_summary(df)
    groups = delivery_experience_groups(df)
    results["ttest_groups"] = groups
    features = regression_features(df, sample_size=sample_size, random_state=random_state)
    results["regression_features"] = features
    if with_models:
        try:
            results["ttest_result"] = late_delivery_ttest(groups).as_frame()
        except ValueError as e:
            _LOG.warning("Skipping t-test: %s", e)
        try:
            fitted = fit_profit_model(features)
            results["profit_model"] = fitted.coefficients.assign(r2=fitted.r2, n_rows=fitted.n_rows)
        except ValueError as e:
            _LOG.warning("Skipping profit model: %s", e)
    _LOG.info("Computed %s result sets", len(results))
    return results
