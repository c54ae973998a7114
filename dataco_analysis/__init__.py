"""Top-level package exports

Curated re-exports for notebook ergonomics:

    from dataco_analysis import load_orders, monthly_kpis, rfm_segment_summary

BigQuery helpers live under `dataco_analysis.db_connect`.
"""
from __future__ import annotations
import logging
from importlib.metadata import version as _v, PackageNotFoundError

from .utils.io import load_orders
from .utils.validate import expect_columns, expect_non_empty
from .utils.window import ntile, lag_growth_pct
from .utils.dates import year_month, order_day

from .data_processing.sales_analysis import (
    monthly_kpis,
    sales_growth,
    anomaly_comparison,
    category_anomaly,
    market_anomaly,
    detect_monthly_anomalies,
)
from .data_processing.delivery_analysis import (
    delivery_status_distribution,
    late_delivery_breakdown,
)
from .data_processing.rfm_segmentation import (
    customer_rfm,
    rfm_scores,
    assign_segment,
    segment_customers,
    rfm_segment_summary,
)
from .data_processing.hypothesis_testing import (
    TTestResult,
    delivery_experience_groups,
    late_delivery_ttest,
)
from .data_processing.regression_prep import (
    regression_features,
    fit_profit_model,
    save_model_artifacts,
    load_model_artifacts,
)
from .data_processing.report import run_all
from .data_processing.export_utils import export_to_excel

__all__ = [
    # Data access / helpers
    "load_orders", "expect_columns", "expect_non_empty",
    "ntile", "lag_growth_pct", "year_month", "order_day",
    # Sales
    "monthly_kpis", "sales_growth", "anomaly_comparison",
    "category_anomaly", "market_anomaly", "detect_monthly_anomalies",
    # Delivery
    "delivery_status_distribution", "late_delivery_breakdown",
    # RFM
    "customer_rfm", "rfm_scores", "assign_segment", "segment_customers", "rfm_segment_summary",
    # Statistics / modelling
    "TTestResult", "delivery_experience_groups", "late_delivery_ttest",
    "regression_features", "fit_profit_model", "save_model_artifacts", "load_model_artifacts",
    # Reporting
    "run_all", "export_to_excel",
]

# Avoid "No handler found" warnings; callers configure logging themselves
logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__ = _v("dataco-analysis")
except PackageNotFoundError:
    __version__ = "0.0.0"
