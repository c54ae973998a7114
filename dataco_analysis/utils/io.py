from __future__ import annotations
import hashlib, json, logging
from pathlib import Path
from typing import Optional
import pandas as pd

from .env import cache_dir, csv_path

_LOG = logging.getLogger(__name__)

# The public DataCo export is not UTF-8.
CSV_ENCODING = "latin-1"


def _cache_key(sql: str, params: dict | None) -> str:
    s = sql + "|" + json.dumps(params or {}, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def _cache_file(key: str) -> Path:
    d = cache_dir(); d.mkdir(parents=True, exist_ok=True)
    return d / f"{key}.parquet"


def read_or_query(sql: str, params: dict | None, fetch_fn, *, force: bool = False) -> pd.DataFrame:
    key = _cache_key(sql, params)
    fp = _cache_file(key)
    if fp.exists() and not force:
        _LOG.debug("Cache hit %s", fp)
        return pd.read_parquet(fp)
    df = fetch_fn(sql, params)
    df.to_parquet(fp, index=False)
    return df


def load_orders(path: Optional[str | Path] = None, *, force: bool = False, use_cache: bool = True) -> pd.DataFrame:
    """Read the DataCo order-item CSV.

    `path` falls back to DATACO_CSV_PATH. A parquet copy keyed on the file's
    absolute path and mtime is kept in the cache dir so repeat loads skip CSV parsing.
    """
    path = path or csv_path()
    if not path:
        raise ValueError("No CSV path given and DATACO_CSV_PATH is not set")
    src = Path(path)
    if not src.is_file():
        raise FileNotFoundError(f"Orders CSV not found: {src}")
    if not use_cache:
        return pd.read_csv(src, encoding=CSV_ENCODING)
    stamp = f"{src.resolve()}|{src.stat().st_mtime_ns}"
    fp = _cache_file(_cache_key(stamp, None))
    if fp.exists() and not force:
        _LOG.debug("Loading cached orders from %s", fp)
        return pd.read_parquet(fp)
    df = pd.read_csv(src, encoding=CSV_ENCODING)
    _LOG.info("Loaded %s rows from %s", len(df), src)
    df.to_parquet(fp, index=False)
    return df
