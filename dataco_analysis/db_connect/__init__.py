"""BigQuery access: query registry and runners."""
from .sql_queries import QUERIES, get_query, list_available_queries, render_query
from .warehouse import DEFAULT_PARAMS, fetch_orders, run_named_query

__all__ = [
    "QUERIES",
    "get_query",
    "render_query",
    "list_available_queries",
    "DEFAULT_PARAMS",
    "run_named_query",
    "fetch_orders",
]
