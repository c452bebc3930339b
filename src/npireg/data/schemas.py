# src/npireg/data/schemas.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable


@dataclass(frozen=True)
class SeriesSchema:
    """
    Canonical column names for the tabular views of a scenario.
    Renderers (tables, plots, reports) should only rely on these.
    """
    DAY: Final[str] = "day"
    DAILY: Final[str] = "daily_cases"
    CUMULATIVE: Final[str] = "cumulative_cases"
    GROWTH_RATE: Final[str] = "growth_rate"
    DLOG_DAILY: Final[str] = "dlog_daily"
    DLOG_CUMULATIVE: Final[str] = "dlog_cumulative"

    # regression side
    INTERCEPT: Final[str] = "intercept"
    PREDICTOR: Final[str] = "predictor"
    COEFFICIENT: Final[str] = "coefficient"
    MULTIPLIER: Final[str] = "multiplier"

    @property
    def series_columns(self) -> Iterable[str]:
        return (self.DAY, self.DAILY, self.CUMULATIVE)

    @property
    def growth_columns(self) -> Iterable[str]:
        return (self.DAY, self.GROWTH_RATE, self.DLOG_DAILY, self.DLOG_CUMULATIVE)


SCHEMA = SeriesSchema()

# Which case series a regression was run against.
SERIES_DAILY: Final[str] = "daily"
SERIES_CUMULATIVE: Final[str] = "cumulative"
SERIES_KINDS: Final[tuple] = (SERIES_DAILY, SERIES_CUMULATIVE)
