"""Charts for the sales trend and RFM segment share.

Plotting libraries are imported inside each function so the query modules
never pay for them. Each function returns the Figure; `show=True` also
displays it.
"""
from __future__ import annotations

import pandas as pd

from ..utils.validate import expect_columns


def plot_monthly_sales(growth: pd.DataFrame, *, title: str | None = None, show: bool = False):
    """Line of monthly total sales with MoM growth on a secondary axis."""
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    expect_columns(growth, ["year_month", "total_sales"])
    fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(growth["year_month"], growth["total_sales"], marker="o", label="Total sales")
    ax.set_title(title or "Monthly Sales")
    ax.set_xlabel("Month")
    ax.set_ylabel("Total sales")
    ax.yaxis.set_major_formatter(FuncFormatter(lambda y, pos: f"{y:,.0f}"))
    ax.tick_params(axis="x", rotation=90)
    if "mom_growth_pct" in growth.columns:
        ax2 = ax.twinx()
        ax2.bar(growth["year_month"], growth["mom_growth_pct"].fillna(0), alpha=0.3, color="grey")
        ax2.set_ylabel("MoM growth (%)")
    fig.tight_layout()
    if show:
        plt.show()
    return fig


def plot_segment_share(summary: pd.DataFrame, *, title: str | None = None, show: bool = False):
    """Horizontal bars of monetary share per RFM segment."""
    import matplotlib.pyplot as plt
    import seaborn as sns

    expect_columns(summary, ["customer_segment", "monetary_percentage"])
    fig, ax = plt.subplots(figsize=(8, 4))
    sns.barplot(data=summary, y="customer_segment", x="monetary_percentage", ax=ax, color="steelblue")
    ax.set_title(title or "Monetary Share by Customer Segment")
    ax.set_xlabel("Share of monetary value (%)")
    ax.set_ylabel("")
    fig.tight_layout()
    if show:
        plt.show()
    return fig
