from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import numpy as np
import pandas as pd
from sklearn.linear_model import LinearRegression
import joblib

from ..utils.validate import expect_columns, expect_non_empty, expect_numeric
from . import analysis_params as params
from .columns import (
    CATEGORY, ITEM_DISCOUNT, ITEM_QUANTITY, MARKET, PRODUCT_PRICE, PROFIT_RATIO, REGRESSION_COLS,
)

_LOG = logging.getLogger(__name__)

FEATURE_COLS: list[str] = [
    "log_product_price",
    "discount_rate",
    "quantity",
    *params.CATEGORY_FLAGS,
    *params.MARKET_FLAGS,
    "discount_interaction_fishing",
]


@dataclass
class ProfitModel:
    model: LinearRegression
    feature_cols: list[str]
    r2: float
    n_rows: int
    coefficients: pd.DataFrame = field(repr=False, default_factory=pd.DataFrame)


def regression_features(
    df: pd.DataFrame,
    sample_size: Optional[int] = params.REGRESSION_SAMPLE_SIZE,
    random_state: Optional[int] = None,
) -> pd.DataFrame:
    """Feature-engineered, shuffled sample of order items for profit modelling.

    Keeps rows with a positive price and a discount below the price. The row
    order is random; `random_state` pins it. `sample_size=None` keeps every row.
    """
    if sample_size is not None and sample_size < 1:
        raise ValueError("sample_size must be positive or None")
    expect_columns(df, REGRESSION_COLS)
    work = expect_numeric(df[REGRESSION_COLS], [PROFIT_RATIO, PRODUCT_PRICE, ITEM_DISCOUNT, ITEM_QUANTITY])
    price, discount = work[PRODUCT_PRICE], work[ITEM_DISCOUNT]
    keep = (price > 0) & (discount < price)
    src = work.loc[keep]
    price, discount = price[keep], discount[keep]

    out = pd.DataFrame(index=src.index)
    out["profit_ratio"] = src[PROFIT_RATIO]
    out["log_product_price"] = np.log(price)
    out["discount_rate"] = discount / price
    out["quantity"] = src[ITEM_QUANTITY]
    for name, value in params.CATEGORY_FLAGS.items():
        out[name] = (src[CATEGORY] == value).astype("int64")
    for name, value in params.MARKET_FLAGS.items():
        out[name] = (src[MARKET] == value).astype("int64")
    out["discount_interaction_fishing"] = out["discount_rate"] * out["is_fishing"]

    out = out.sample(frac=1.0, random_state=random_state)
    if sample_size is not None:
        out = out.head(sample_size)
    _LOG.info("Regression sample: %s of %s eligible rows", len(out), int(keep.sum()))
    return out.reset_index(drop=True)


def fit_profit_model(
    features: pd.DataFrame,
    feature_cols: Optional[list[str]] = None,
    target: str = params.REGRESSION_TARGET,
) -> ProfitModel:
    """OLS of profit ratio on the engineered features; rows with NaN are dropped."""
    feature_cols = list(feature_cols or FEATURE_COLS)
    expect_columns(features, [target, *feature_cols])
    data = features[[target, *feature_cols]].astype("float64").dropna()
    expect_non_empty(data)
    X = data[feature_cols].to_numpy()
    y = data[target].to_numpy()
    model = LinearRegression()
    model.fit(X, y)
    r2 = float(model.score(X, y)) if len(data) > 1 else float("nan")
    coef = pd.DataFrame({
        "feature": ["intercept", *feature_cols],
        "coefficient": [float(model.intercept_), *map(float, model.coef_)],
    })
    return ProfitModel(model=model, feature_cols=feature_cols, r2=r2, n_rows=len(data), coefficients=coef)


def save_model_artifacts(fitted: ProfitModel, path: str | Path, meta: Optional[dict] = None) -> None:
    path = Path(path); path.mkdir(parents=True, exist_ok=True)
    joblib.dump(fitted.model, path / "profit_model.joblib")
    info = {"feature_cols": fitted.feature_cols, "r2": fitted.r2, "n_rows": fitted.n_rows, **(meta or {})}
    (path / "meta.json").write_text(json.dumps(info, indent=2))


def load_model_artifacts(path: str | Path) -> tuple[LinearRegression, dict]:
    path = Path(path)
    model = joblib.load(path / "profit_model.joblib")
    meta = json.loads((path / "meta.json").read_text())
    return model, meta


__all__ = [
    "FEATURE_COLS",
    "ProfitModel",
    "regression_features",
    "fit_profit_model",
    "save_model_artifacts",
    "load_model_artifacts",
]
