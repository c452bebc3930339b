# src/npireg/reporting/rates.py
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, List

import numpy as np
import pandas as pd

from npireg.data.schemas import SCHEMA, SERIES_KINDS
from npireg.regression.ols import RegressionResult
from npireg.simulation.interventions import predictor_names

if TYPE_CHECKING:
    from npireg.experiments.scenario import ScenarioResult


def period_multiplier(coefficient: float, period: float) -> float:
    """Log growth per day -> multiplicative growth over `period` days: exp(coef * period)."""
    return float(math.exp(coefficient * period))


def to_daily_log_rate(multiplier: float, period: float) -> float:
    """Inverse of period_multiplier: log(multiplier) / period. multiplier must be > 0."""
    if multiplier <= 0:
        raise ValueError(f"multiplier must be > 0, got {multiplier}")
    return float(math.log(multiplier) / period)


def coefficient_table(result: RegressionResult, period: float) -> pd.DataFrame:
    """One row per predictor: raw log-rate coefficient and its period-scaled multiplier."""
    rows = [
        (name, coef, period_multiplier(coef, period))
        for name, coef in result.coefficients.items()
    ]
    return pd.DataFrame(rows, columns=[SCHEMA.PREDICTOR, SCHEMA.COEFFICIENT, SCHEMA.MULTIPLIER])


def comparison_table(sr: "ScenarioResult") -> pd.DataFrame:
    """
    Side-by-side view of the daily and cumulative fits against the simulated truth.

    true_multiplier is r0 for the intercept and the intervention factor for each NPI.
    Regressions that did not fit show NaN in their columns; the status columns say why.
    """
    cfg = sr.config
    names = [SCHEMA.INTERCEPT, *predictor_names(cfg.interventions)]
    truth = [cfg.r0, *(npi.factor for npi in cfg.interventions)]

    df = pd.DataFrame({SCHEMA.PREDICTOR: names, "true_multiplier": truth})

    for series in SERIES_KINDS:
        outcome = sr.outcomes.get(series)
        coefs: List[float]
        if outcome is not None and outcome.result is not None:
            coefs = [outcome.result.coefficients[n] for n in names]
        else:
            coefs = [float("nan")] * len(names)
        arr = np.asarray(coefs, dtype=float)
        df[f"{series}_coefficient"] = arr
        df[f"{series}_multiplier"] = np.exp(arr * cfg.period)
        df[f"{series}_status"] = outcome.status if outcome is not None else "not_run"

    return df


def summarize_outcomes(sr: "ScenarioResult") -> Dict[str, Any]:
    """Flat dict for logs / reports: status, reason and multipliers per series."""
    out: Dict[str, Any] = {"scenario": sr.config.name, "horizon": sr.horizon}
    for series, outcome in sr.outcomes.items():
        out[f"{series}_status"] = outcome.status
        if outcome.result is not None:
            out[f"{series}_multipliers"] = {
                k: period_multiplier(v, sr.config.period) for k, v in outcome.result.coefficients.items()
            }
        else:
            out[f"{series}_reason"] = outcome.reason
    return out


def to_markdown(df: pd.DataFrame, floatfmt: str = ".4g") -> str:
    # pandas delegates to tabulate
    return df.to_markdown(index=False, floatfmt=floatfmt)
