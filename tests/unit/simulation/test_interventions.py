from __future__ import annotations

import dataclasses

import numpy as np
import pytest

from npireg.data.validation import InvalidInterval, NegativeFactor, ScenarioValidationError
from npireg.simulation.interventions import Intervention, horizon, predictor_names


def test_valid_intervention_is_active_inclusive():
    npi = Intervention(start=3, end=5, factor=0.5)
    assert [npi.is_active(d) for d in range(1, 8)] == [False, False, True, True, True, False, False]
    assert npi.active_days == 3


def test_single_day_intervention():
    npi = Intervention(start=4, end=4, factor=0.0)
    assert npi.active_days == 1


def test_start_after_end_fails_fast():
    with pytest.raises(InvalidInterval):
        Intervention(start=10, end=9, factor=1.0)


def test_start_must_be_positive_day():
    with pytest.raises(InvalidInterval):
        Intervention(start=0, end=5, factor=1.0)


@pytest.mark.parametrize("factor", [-0.01, -1.0, float("nan")])
def test_negative_factor_rejected(factor):
    with pytest.raises(NegativeFactor):
        Intervention(start=1, end=5, factor=factor)


def test_intervention_is_immutable():
    npi = Intervention(start=1, end=5, factor=0.5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        npi.factor = 0.1  # type: ignore[misc]


def test_horizon_is_latest_end(two_npis):
    assert horizon(two_npis) == 30
    assert horizon([Intervention(2, 40, 1.0), Intervention(5, 12, 0.3)]) == 40


def test_horizon_of_nothing_is_an_error():
    with pytest.raises(ScenarioValidationError):
        horizon([])


def test_predictor_names_default_and_label():
    npis = [Intervention(1, 5, 0.5), Intervention(2, 6, 0.5, label="schools")]
    assert predictor_names(npis) == ["npi_1", "schools"]


@pytest.mark.parametrize(
    "start,end",
    [(2.5, 10), (1, 10.0), (True, 5), (1, "5"), (float("nan"), 5)],
)
def test_non_integer_days_rejected_at_construction(start, end):
    with pytest.raises(InvalidInterval):
        Intervention(start=start, end=end, factor=0.5)


def test_numpy_integer_days_accepted():
    npi = Intervention(start=np.int64(3), end=np.int32(9), factor=0.5)
    assert npi.active_days == 7
