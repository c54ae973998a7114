"""Excel export of analysis results."""
from __future__ import annotations

import logging
import os
from typing import Dict, Mapping, Optional, Sequence

import pandas as pd

from .formatting_utils import safe_sheet_name, write_sheet_with_thousands

_LOG = logging.getLogger(__name__)

# Money-valued columns that get thousands separators in the workbook
MONEY_COLS: Sequence[str] = (
    "total_sales",
    "total_profit",
    "average_order_value_aov",
    "avg_monthly_sales_normal",
    "avg_monthly_sales_anomaly",
    "total_monetary",
    "Monetary",
)

__all__ = ["MONEY_COLS", "export_to_excel"]


def export_to_excel(
    sheets: Mapping[str, pd.DataFrame],
    output_path: str,
    thousand_cols: Optional[Sequence[str]] = MONEY_COLS,
) -> str:
    """Write each DataFrame to its own sheet; returns the written path."""
    if not sheets:
        raise ValueError("No sheets to export")
    out_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(out_dir, exist_ok=True)
    used: Dict[str, str] = {}
    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        for sheet_name, df in sheets.items():
            safe = safe_sheet_name(sheet_name)
            if safe in used:
                raise ValueError(f"Sheet names '{used[safe]}' and '{sheet_name}' collide as '{safe}'")
            used[safe] = sheet_name
            write_sheet_with_thousands(writer, df, safe, thousand_cols=list(thousand_cols or []))
    _LOG.info("Wrote %s sheets to %s", len(sheets), output_path)
    return output_path
