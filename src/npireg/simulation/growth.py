from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from npireg.data.validation import ScenarioValidationError, validate_baseline
from npireg.simulation.interventions import Intervention, horizon as _horizon


@dataclass(frozen=True, eq=False)
class CaseSeries:
    """
    Daily and cumulative case counts for days 0..horizon.
    daily[0] is the seed value 1.
    """
    daily: np.ndarray
    cumulative: np.ndarray

    @property
    def horizon(self) -> int:
        return int(self.daily.size - 1)


def raw_rate_schedule(
    r0: float,
    interventions: Sequence[Intervention],
    horizon: Optional[int] = None,
) -> np.ndarray:
    """
    Per-day growth rate over `period` days, before period scaling.
    Index i is day i + 1. Overlapping interventions stack multiplicatively.
    """
    h = _horizon(interventions) if horizon is None else int(horizon)
    if h < 1:
        raise ScenarioValidationError(f"Horizon must be >= 1 day, got {h}")

    rates = np.full(h, float(r0), dtype=float)
    for npi in interventions:
        if npi.start > h:
            continue
        # days start..end -> indices start-1..end-1
        rates[npi.start - 1 : min(npi.end, h)] *= npi.factor
    return rates


def scale_to_daily(rates: np.ndarray, period: float) -> np.ndarray:
    """
    Convert "growth achieved over `period` days" into a one-day multiplicative step:
        exp(log(rate) / period)
    A raw rate of exactly 0 means no growth that day and maps to 0.
    """
    rates = np.asarray(rates, dtype=float)
    scaled = np.zeros_like(rates)
    positive = rates > 0
    scaled[positive] = np.exp(np.log(rates[positive]) / float(period))
    return scaled


def build_growth_schedule(
    r0: float,
    interventions: Sequence[Intervention],
    period: int,
    horizon: Optional[int] = None,
) -> np.ndarray:
    """Growth-rate sequence for days 1..horizon (period-scaled, one value per day)."""
    validate_baseline(r0, period)
    return scale_to_daily(raw_rate_schedule(r0, interventions, horizon), period)


def generate_case_series(rates: np.ndarray, seed: float = 1.0) -> CaseSeries:
    """
    Compound a growth-rate sequence into daily cases, then prefix-sum into cumulative cases.

        daily[0] = seed
        daily[k] = daily[k-1] * rates[k-1]     (rates index 0 is day 1)
        cumulative[k] = daily[0] + ... + daily[k]
    """
    rates = np.asarray(rates, dtype=float)
    if rates.ndim != 1:
        raise ValueError(f"rates must be one-dimensional, got shape {rates.shape}")
    if (rates < 0).any():
        raise ValueError("rates must be non-negative")

    daily = np.empty(rates.size + 1, dtype=float)
    daily[0] = seed
    daily[1:] = seed * np.cumprod(rates)
    cumulative = np.cumsum(daily)
    return CaseSeries(daily=daily, cumulative=cumulative)
