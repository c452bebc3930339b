from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from npireg.data.schemas import SCHEMA, SERIES_CUMULATIVE, SERIES_DAILY
from npireg.data.validation import SeriesDomainError, SingularDesign, validate_baseline
from npireg.regression.design import build_design_matrix
from npireg.regression.ols import RegressionResult, fit_growth_regression
from npireg.reporting.rates import period_multiplier
from npireg.simulation.growth import CaseSeries, build_growth_schedule, generate_case_series
from npireg.simulation.interventions import Intervention, horizon as _horizon


STATUS_FITTED: str = "fitted"
STATUS_SKIPPED_ZERO_FACTOR: str = "skipped_zero_factor"
STATUS_SINGULAR_DESIGN: str = "singular_design"
STATUS_DEGENERATE_SERIES: str = "degenerate_series"

OutcomeStatus = Literal["fitted", "skipped_zero_factor", "singular_design", "degenerate_series"]

ZERO_FACTOR_REASON = "a zero-factor Intervention removes the daily signal needed to separate effects"


@dataclass(frozen=True)
class ScenarioConfig:
    name: str = "scenario"

    # Baseline growth achieved over `period` days (e.g. 2.5x per week)
    r0: float = 2.5
    period: int = 7

    interventions: Tuple[Intervention, ...] = ()

    def __post_init__(self) -> None:
        # accept lists but store an immutable tuple
        object.__setattr__(self, "interventions", tuple(self.interventions))

    @property
    def horizon(self) -> int:
        return _horizon(self.interventions)

    @property
    def has_zero_factor(self) -> bool:
        return any(npi.factor == 0 for npi in self.interventions)


@dataclass(frozen=True)
class RegressionOutcome:
    """What happened to one regression of a scenario: a fit, a policy skip, a singular design or an unloggable series."""
    series: str
    status: OutcomeStatus
    result: Optional[RegressionResult] = None
    reason: str = ""

    @property
    def fitted(self) -> bool:
        return self.status == STATUS_FITTED


@dataclass(frozen=True, eq=False)
class ScenarioResult:
    config: ScenarioConfig
    growth_rates: np.ndarray
    cases: CaseSeries
    dlog_daily: np.ndarray
    dlog_cumulative: np.ndarray
    design: pd.DataFrame
    outcomes: Dict[str, RegressionOutcome] = field(default_factory=dict)

    @property
    def horizon(self) -> int:
        return int(self.growth_rates.size)

    @property
    def results(self) -> List[RegressionResult]:
        return [o.result for o in self.outcomes.values() if o.result is not None]

    def multipliers(self, series: str) -> Dict[str, float]:
        """Period-scaled multipliers for a fitted series; KeyError if that regression did not fit."""
        outcome = self.outcomes[series]
        if outcome.result is None:
            raise KeyError(f"{series} regression has no fit ({outcome.status}: {outcome.reason})")
        return {
            k: period_multiplier(v, self.config.period)
            for k, v in outcome.result.coefficients.items()
        }

    def series_frame(self) -> pd.DataFrame:
        """Days 0..horizon with daily and cumulative cases."""
        return pd.DataFrame(
            {
                SCHEMA.DAY: np.arange(self.horizon + 1),
                SCHEMA.DAILY: self.cases.daily,
                SCHEMA.CUMULATIVE: self.cases.cumulative,
            }
        )

    def growth_frame(self) -> pd.DataFrame:
        """Days 1..horizon: growth rate, both log-differences and the indicator columns."""
        df = pd.DataFrame(
            {
                SCHEMA.DAY: np.arange(1, self.horizon + 1),
                SCHEMA.GROWTH_RATE: self.growth_rates,
                SCHEMA.DLOG_DAILY: self.dlog_daily,
                SCHEMA.DLOG_CUMULATIVE: self.dlog_cumulative,
            }
        )
        for c in self.design.columns:
            if c == SCHEMA.INTERCEPT:
                continue
            df[c] = self.design[c].to_numpy()
        return df


def _log(msg: str) -> None:
    print(msg, flush=True)


def _maybe_log(msg: str, verbose: bool) -> None:
    if verbose:
        _log(msg)


def _display_log_difference(series: np.ndarray) -> np.ndarray:
    # Zero daily counts give -inf / nan here; they are never fed to a regression.
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.diff(np.log(series))


def _run_regression(series: np.ndarray, design: pd.DataFrame, series_name: str) -> RegressionOutcome:
    try:
        res = fit_growth_regression(series, design, series_name)
    except SingularDesign as e:
        return RegressionOutcome(series=series_name, status=STATUS_SINGULAR_DESIGN, reason=str(e))
    except SeriesDomainError as e:
        # e.g. daily cases underflowing to 0 under a tiny but non-zero factor
        return RegressionOutcome(series=series_name, status=STATUS_DEGENERATE_SERIES, reason=str(e))
    return RegressionOutcome(series=series_name, status=STATUS_FITTED, result=res)


def run_scenario(cfg: ScenarioConfig, verbose: bool = False) -> ScenarioResult:
    """
    Simulate one scenario and fit the daily and cumulative growth regressions.

    The daily regression is skipped when any intervention has factor 0; the cumulative
    regression is always attempted. A singular design or a series that cannot be
    log-transformed only affects its own regression.
    """
    validate_baseline(cfg.r0, cfg.period)
    h = cfg.horizon

    _maybe_log(f"=== Scenario {cfg.name}: r0={cfg.r0} per {cfg.period}d, {len(cfg.interventions)} NPIs, horizon={h} ===", verbose)
    _maybe_log("[1/4] Building growth schedule", verbose)
    rates = build_growth_schedule(cfg.r0, cfg.interventions, cfg.period, horizon=h)

    _maybe_log("[2/4] Generating daily + cumulative cases", verbose)
    cases = generate_case_series(rates)

    _maybe_log("[3/4] Building indicator design matrix", verbose)
    design = build_design_matrix(cfg.interventions, h)

    _maybe_log("[4/4] Fitting growth regressions", verbose)
    outcomes: Dict[str, RegressionOutcome] = {}
    if cfg.has_zero_factor:
        outcomes[SERIES_DAILY] = RegressionOutcome(
            series=SERIES_DAILY, status=STATUS_SKIPPED_ZERO_FACTOR, reason=ZERO_FACTOR_REASON
        )
    else:
        outcomes[SERIES_DAILY] = _run_regression(cases.daily, design, SERIES_DAILY)
    outcomes[SERIES_CUMULATIVE] = _run_regression(cases.cumulative, design, SERIES_CUMULATIVE)

    for o in outcomes.values():
        if o.fitted:
            _maybe_log(f"  {o.series:<10} fitted ({o.result.n_obs} obs)", verbose)
        else:
            _maybe_log(f"  {o.series:<10} {o.status}: {o.reason}", verbose)

    return ScenarioResult(
        config=cfg,
        growth_rates=rates,
        cases=cases,
        dlog_daily=_display_log_difference(cases.daily),
        dlog_cumulative=_display_log_difference(cases.cumulative),
        design=design,
        outcomes=outcomes,
    )


def run_scenarios(configs: Sequence[ScenarioConfig], verbose: bool = False) -> List[ScenarioResult]:
    # scenarios share no state; order of results follows `configs`
    return [run_scenario(cfg, verbose=verbose) for cfg in configs]
