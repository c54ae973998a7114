"""Environment-driven settings (.env is honoured via python-dotenv)."""
from __future__ import annotations
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


def csv_path() -> Optional[str]:
    return os.getenv("DATACO_CSV_PATH")


def cache_dir() -> Path:
    return Path(os.getenv("DATACO_CACHE_DIR", "data/.cache"))


def bq_project() -> Optional[str]:
    return os.getenv("PROJECT_ID")


def bq_location() -> str:
    return os.getenv("BQ_LOCATION", "EU")


def orders_table() -> Optional[str]:
    """Fully-qualified `project.dataset.table`, or None if any part is unset."""
    project = os.getenv("PROJECT_ID")
    dataset = os.getenv("DATASET_ID")
    table = os.getenv("TABLE_ID")
    if project and dataset and table:
        return f"{project}.{dataset}.{table}"
    return None
