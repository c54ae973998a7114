from __future__ import annotations
from .dates import parse_order_dates, year_month, order_day, drop_unparsed
from .io import read_or_query, load_orders
from .validate import expect_columns, expect_non_empty, expect_numeric
from .window import ntile, lag_growth_pct

__all__ = [
    "parse_order_dates", "year_month", "order_day", "drop_unparsed",
    "read_or_query", "load_orders",
    "expect_columns", "expect_non_empty", "expect_numeric",
    "ntile", "lag_growth_pct",
]
