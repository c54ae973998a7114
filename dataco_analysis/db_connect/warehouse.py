"""Run the registered analysis queries against a BigQuery copy of the orders table."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import pandas as pd

from ..data_processing import analysis_params as params
from ..utils.bq import run_sql
from ..utils.env import orders_table
from ..utils.io import read_or_query
from .sql_queries import render_query

_LOG = logging.getLogger(__name__)

_ANOMALY_WINDOW: Dict[str, Any] = {
    "anomaly_months": list(params.ANOMALY_MONTHS),
    "normal_before": params.NORMAL_BEFORE,
}

# Default query parameters per registry key
DEFAULT_PARAMS: Dict[str, Dict[str, Any]] = {
    "category_anomaly": _ANOMALY_WINDOW,
    "market_anomaly": _ANOMALY_WINDOW,
    "regression_features": {"sample_size": params.REGRESSION_SAMPLE_SIZE},
}


def _resolve_table(table: Optional[str]) -> str:
    table = table or orders_table()
    if not table:
        raise ValueError("No table given and PROJECT_ID/DATASET_ID/TABLE_ID are not all set")
    return table


def run_named_query(
    name: str,
    table: Optional[str] = None,
    query_params: Optional[Dict[str, Any]] = None,
    *,
    fetch_fn=run_sql,
) -> pd.DataFrame:
    """Render registry query `name` for `table` and execute it.

    Caller-supplied parameters override DEFAULT_PARAMS key by key.
    """
    sql = render_query(name, _resolve_table(table))
    bound = {**DEFAULT_PARAMS.get(name, {}), **(query_params or {})}
    _LOG.info("Running %s", name)
    return fetch_fn(sql, bound or None)


def fetch_orders(table: Optional[str] = None, *, force: bool = False, fetch_fn=run_sql) -> pd.DataFrame:
    """Pull the full orders table, cached locally as parquet."""
    sql = render_query("fetch_orders", _resolve_table(table))
    return read_or_query(sql, None, fetch_fn, force=force)
