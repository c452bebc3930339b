from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from npireg.data.schemas import SERIES_KINDS
from npireg.data.validation import SingularDesign, validate_positive_series


@dataclass(frozen=True)
class RegressionResult:
    """
    Fitted coefficients (log growth per day) for one (scenario, series) regression.
    Coefficients keep the design column order: intercept first, then one per intervention.
    """
    series: str
    coefficients: Dict[str, float]
    n_obs: int
    rank: int
    residual_ss: float = 0.0

    def __getitem__(self, predictor: str) -> float:
        return self.coefficients[predictor]

    @property
    def predictors(self) -> Tuple[str, ...]:
        return tuple(self.coefficients)


def log_difference(series: np.ndarray, name: str = "series") -> np.ndarray:
    """y[k] = log(series[k+1]) - log(series[k]); one shorter than the input."""
    s = np.asarray(series, dtype=float)
    validate_positive_series(s, name)
    return np.diff(np.log(s))


def least_squares(X: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, int, float]:
    """
    Ordinary least squares via a reduced QR decomposition.

    Returns (beta, rank, residual sum of squares).
    Raises SingularDesign when X does not have full column rank
    (including when there are fewer rows than columns).
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)

    if X.ndim != 2:
        raise ValueError(f"X must be 2-D, got shape {X.shape}")
    n, p = X.shape
    if y.shape != (n,):
        raise ValueError(f"y must have shape ({n},), got {y.shape}")

    if n < p:
        raise SingularDesign(f"{n} observations cannot identify {p} coefficients")

    rank = int(np.linalg.matrix_rank(X))
    if rank < p:
        raise SingularDesign(f"Design matrix has rank {rank} < {p} columns")

    q, r = np.linalg.qr(X, mode="reduced")
    beta = np.linalg.solve(r, q.T @ y)

    resid = y - X @ beta
    return beta, rank, float(resid @ resid)


def fit_growth_regression(series: np.ndarray, design: pd.DataFrame, series_name: str) -> RegressionResult:
    """
    Regress the first difference of log(series) on the design matrix columns.
    `series` covers days 0..horizon, `design` has one row per day 1..horizon.
    """
    if series_name not in SERIES_KINDS:
        raise ValueError(f"series_name must be one of {SERIES_KINDS}, got {series_name!r}")

    y = log_difference(series, name=f"{series_name} cases")
    if len(y) != len(design):
        raise ValueError(
            f"Response has {len(y)} observations but design matrix has {len(design)} rows"
        )

    try:
        beta, rank, rss = least_squares(design.to_numpy(dtype=float), y)
    except SingularDesign as e:
        raise SingularDesign(f"{series_name} regression: {e}") from e

    coefs = {str(c): float(b) for c, b in zip(design.columns, beta)}
    return RegressionResult(series=series_name, coefficients=coefs, n_obs=int(len(y)), rank=rank, residual_ss=rss)
