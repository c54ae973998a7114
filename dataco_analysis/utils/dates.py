from __future__ import annotations
import logging
import pandas as pd

_LOG = logging.getLogger(__name__)

# Leading M/D/YYYY; the trailing H:MM is ignored.
_DATE_RE = r"^\s*(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})"


def parse_order_dates(values: pd.Series) -> pd.DataFrame:
    """Split 'M/D/YYYY H:MM' text into integer year/month/day columns.

    Values that do not match (or name a month/day out of range) come back as
    <NA> in all three columns.
    """
    parts = values.astype("string").str.extract(_DATE_RE)
    out = pd.DataFrame(index=values.index)
    for col in ("year", "month", "day"):
        out[col] = pd.to_numeric(parts[col], errors="coerce").astype("Int64")
    bad = ~out["month"].between(1, 12) | ~out["day"].between(1, 31)
    out.loc[bad.fillna(True), ["year", "month", "day"]] = pd.NA
    return out


def _padded(parts: pd.DataFrame, col: str) -> pd.Series:
    return parts[col].astype("string").str.zfill(2)


def year_month(values: pd.Series) -> pd.Series:
    """'YYYY-MM' key per row, <NA> where the date is unparseable."""
    parts = parse_order_dates(values)
    key = parts["year"].astype("string") + "-" + _padded(parts, "month")
    return key.rename("year_month")


def order_day(values: pd.Series) -> pd.Series:
    """Calendar day (datetime64, midnight) per row, NaT where unparseable."""
    parts = parse_order_dates(values)
    iso = parts["year"].astype("string") + "-" + _padded(parts, "month") + "-" + _padded(parts, "day")
    # impossible days such as 2/30 also coerce to NaT here
    return pd.to_datetime(iso, format="%Y-%m-%d", errors="coerce").rename("order_date")


def drop_unparsed(df: pd.DataFrame, key_col: str) -> pd.DataFrame:
    """Drop rows whose date key is missing, logging how many were lost."""
    missing = df[key_col].isna()
    n = int(missing.sum())
    if n:
        _LOG.warning("Dropping %s rows with unparseable order dates", n)
        return df.loc[~missing]
    return df
