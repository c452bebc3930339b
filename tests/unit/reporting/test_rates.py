from __future__ import annotations

import math

import numpy as np
import pytest

from npireg.experiments.presets import SCENARIO_A, SCENARIO_C
from npireg.experiments.scenario import run_scenario
from npireg.regression.ols import RegressionResult
from npireg.reporting.rates import (
    coefficient_table,
    comparison_table,
    period_multiplier,
    summarize_outcomes,
    to_daily_log_rate,
    to_markdown,
)


def test_period_multiplier_formula():
    assert period_multiplier(math.log(0.5) / 7, 7) == pytest.approx(0.5)
    assert period_multiplier(0.0, 7) == 1.0


@pytest.mark.parametrize("x", [1e-6, 0.01, 0.5, 1.0, 1.05, 2.5, 40.0])
def test_round_trip_through_period_scaling(x):
    assert period_multiplier(to_daily_log_rate(x, 7), 7) == pytest.approx(x, rel=1e-12)


def test_to_daily_log_rate_rejects_non_positive():
    with pytest.raises(ValueError):
        to_daily_log_rate(0.0, 7)


def test_coefficient_table_rows():
    res = RegressionResult(
        series="daily",
        coefficients={"intercept": math.log(2.0) / 7, "npi_1": math.log(0.25) / 7},
        n_obs=10,
        rank=2,
    )
    df = coefficient_table(res, period=7)

    assert list(df.columns) == ["predictor", "coefficient", "multiplier"]
    assert df["predictor"].tolist() == ["intercept", "npi_1"]
    np.testing.assert_allclose(df["multiplier"], [2.0, 0.25])


def test_comparison_table_scenario_a():
    df = comparison_table(run_scenario(SCENARIO_A))

    assert df["predictor"].tolist() == ["intercept", "npi_1", "npi_2"]
    np.testing.assert_allclose(df["true_multiplier"], [2.5, 0.5, 0.5])
    np.testing.assert_allclose(df["daily_multiplier"], df["true_multiplier"], rtol=1e-6)
    assert (df["daily_status"] == "fitted").all()
    assert (df["cumulative_status"] == "fitted").all()


def test_comparison_table_marks_skipped_daily():
    df = comparison_table(run_scenario(SCENARIO_C))

    assert df["daily_coefficient"].isna().all()
    assert (df["daily_status"] == "skipped_zero_factor").all()
    assert df["cumulative_coefficient"].notna().all()


def test_summarize_outcomes_keys():
    out = summarize_outcomes(run_scenario(SCENARIO_C))

    assert out["scenario"] == "C"
    assert out["daily_status"] == "skipped_zero_factor"
    assert "daily_reason" in out
    assert set(out["cumulative_multipliers"]) == {"intercept", "npi_1", "npi_2"}


def test_to_markdown_renders_table():
    df = comparison_table(run_scenario(SCENARIO_A))
    md = to_markdown(df)
    assert "| predictor" in md
    assert "npi_2" in md
