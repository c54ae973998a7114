"""BigQuery access for the warehouse copy of the orders table.

`run_sql` binds plain values as scalar parameters and lists (the anomaly
window months) as ARRAY parameters, and retries transient API failures.
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import time, logging
from google.cloud import bigquery
from google.api_core.exceptions import GoogleAPICallError, RetryError
import pandas as pd

from .env import bq_location, bq_project

_LOG = logging.getLogger(__name__)

_TRANSIENT = (GoogleAPICallError, RetryError, TimeoutError)


def make_client() -> bigquery.Client:
    """Client for PROJECT_ID / BQ_LOCATION; credentials come from the environment."""
    return bigquery.Client(project=bq_project(), location=bq_location())


def _bq_type(v: Any) -> str:
    if isinstance(v, bool):
        return "BOOL"
    if isinstance(v, int):
        return "INT64"
    if isinstance(v, float):
        return "FLOAT64"
    return "STRING"


def _query_param(name: str, v: Any):
    if isinstance(v, (list, tuple)):
        elem = _bq_type(v[0]) if v else "STRING"
        return bigquery.ArrayQueryParameter(name, elem, list(v))
    return bigquery.ScalarQueryParameter(name, _bq_type(v), v)


def _job_config(params: Optional[Dict[str, Any]]) -> Optional[bigquery.QueryJobConfig]:
    if not params:
        return None
    return bigquery.QueryJobConfig(query_parameters=[_query_param(k, v) for k, v in params.items()])


def run_sql(
    query: str,
    params: Optional[Dict[str, Any]] = None,
    *,
    client: Optional[bigquery.Client] = None,
    max_retries: int = 3,
    timeout: int = 1800,
) -> pd.DataFrame:
    """Execute `query` and return the result as a DataFrame.

    Transient failures are retried up to `max_retries` times with a linear
    backoff (2s, 4s, ...); the last error is re-raised.
    """
    client = client or make_client()
    job_config = _job_config(params)
    for attempt in range(1, max_retries + 1):
        try:
            job = client.query(query, job_config=job_config)
            out = job.result(timeout=timeout).to_dataframe(create_bqstorage_client=True)
        except _TRANSIENT as e:
            _LOG.warning("Query attempt %s/%s failed: %s", attempt, max_retries, e)
            if attempt == max_retries:
                raise
            time.sleep(2 * attempt)
        else:
            _LOG.debug("Query returned %s rows", len(out))
            return out
