from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from npireg.data.validation import ScenarioValidationError, validate_factor, validate_interval


@dataclass(frozen=True)
class Intervention:
    """
    A non-pharmaceutical intervention: active on days [start, end] (both inclusive),
    multiplying the baseline growth rate by `factor` while active.

    factor == 1.0 -> no effect
    factor == 0.0 -> growth halted
    factor  > 1.0 -> growth accelerated
    """
    start: int
    end: int
    factor: float
    label: Optional[str] = None

    def __post_init__(self) -> None:
        validate_interval(self.start, self.end)
        validate_factor(self.factor)

    def is_active(self, day: int) -> bool:
        return self.start <= day <= self.end

    @property
    def active_days(self) -> int:
        return self.end - self.start + 1


def horizon(interventions: Sequence[Intervention]) -> int:
    """Last simulated day: the latest end across all interventions."""
    if len(interventions) == 0:
        raise ScenarioValidationError("A scenario needs at least one intervention to define its horizon")
    return max(npi.end for npi in interventions)


def predictor_names(interventions: Sequence[Intervention]) -> list[str]:
    # 1-based position keeps names stable for unlabeled interventions
    return [npi.label if npi.label else f"npi_{i}" for i, npi in enumerate(interventions, start=1)]
