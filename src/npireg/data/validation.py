# src/npireg/data/validation.py
from __future__ import annotations

import math
from typing import Iterable

import numpy as np


class ScenarioValidationError(ValueError):
    """Raised before any computation when scenario inputs are unusable."""


class InvalidInterval(ScenarioValidationError):
    pass


class NegativeFactor(ScenarioValidationError):
    pass


class SeriesDomainError(ValueError):
    """A case series cannot be log-transformed (zero, negative or non-finite values)."""


class SingularDesign(ValueError):
    """The regression design matrix is rank-deficient."""


def _is_int_day(x) -> bool:
    # bool is an int subclass but never a day
    return isinstance(x, (int, np.integer)) and not isinstance(x, (bool, np.bool_))


def validate_interval(start: int, end: int) -> None:
    if not (_is_int_day(start) and _is_int_day(end)):
        raise InvalidInterval(f"Intervention days must be integers, got start={start!r}, end={end!r}")
    if start < 1:
        raise InvalidInterval(f"Intervention start must be a positive day, got {start}")
    if start > end:
        raise InvalidInterval(f"Intervention start ({start}) is after its end ({end})")


def validate_factor(factor: float) -> None:
    if not math.isfinite(factor):
        raise NegativeFactor(f"Intervention factor must be finite, got {factor}")
    if factor < 0:
        raise NegativeFactor(f"Intervention factor must be >= 0, got {factor}")


def validate_baseline(r0: float, period: int) -> None:
    if not math.isfinite(r0) or r0 <= 0:
        raise ScenarioValidationError(f"Baseline growth rate must be > 0, got {r0}")
    if isinstance(period, (bool, np.bool_)) or not isinstance(period, (int, np.integer, float, np.floating)):
        raise ScenarioValidationError(f"Period must be a whole number of days, got {period!r}")
    if not math.isfinite(period) or float(period) != int(period):
        raise ScenarioValidationError(f"Period must be a whole number of days, got {period}")
    if period <= 0:
        raise ScenarioValidationError(f"Period must be a positive number of days, got {period}")


def validate_unique_names(names: Iterable[str]) -> None:
    seen = set()
    dupes = []
    for n in names:
        if n in seen:
            dupes.append(n)
        seen.add(n)
    if dupes:
        raise ScenarioValidationError(f"Duplicate predictor names: {sorted(set(dupes))}")


def validate_positive_series(series: np.ndarray, name: str = "series") -> None:
    # log() of the series must be finite everywhere
    if series.ndim != 1:
        raise SeriesDomainError(f"{name} must be one-dimensional, got shape {series.shape}")
    if not np.isfinite(series).all():
        raise SeriesDomainError(f"{name} contains non-finite values")
    bad = np.flatnonzero(series <= 0)
    if bad.size > 0:
        raise SeriesDomainError(
            f"{name} has non-positive values at days {bad[:5].tolist()}"
            + (" ..." if bad.size > 5 else "")
        )
