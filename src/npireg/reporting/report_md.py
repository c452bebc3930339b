# src/npireg/reporting/report_md.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from npireg.data.schemas import SERIES_KINDS
from npireg.experiments.scenario import ScenarioResult
from npireg.reporting.rates import coefficient_table, comparison_table, to_markdown
from npireg.simulation.interventions import predictor_names


@dataclass(frozen=True)
class ReportConfig:
    out_md: Path = Path("reports/npi_regression_report.md")
    floatfmt: str = ".4g"


def _interventions_md(sr: ScenarioResult) -> str:
    lines = ["| NPI | days | factor |", "|---|---|---|"]
    for name, npi in zip(predictor_names(sr.config.interventions), sr.config.interventions):
        lines.append(f"| {name} | {npi.start}–{npi.end} | {npi.factor:g} |")
    return "\n".join(lines)


def scenario_section_md(sr: ScenarioResult, floatfmt: str = ".4g") -> str:
    cfg = sr.config
    parts = [
        f"## Scenario {cfg.name}",
        "",
        f"Baseline growth **{cfg.r0:g}x per {cfg.period} days**, horizon **{sr.horizon} days**.",
        "",
        _interventions_md(sr),
        "",
    ]

    for series in SERIES_KINDS:
        outcome = sr.outcomes.get(series)
        if outcome is None:
            continue
        parts.append(f"### {series.capitalize()} cases regression")
        parts.append("")
        if outcome.result is None:
            parts.append(f"_Not fitted ({outcome.status}): {outcome.reason}._")
        else:
            parts.append(to_markdown(coefficient_table(outcome.result, cfg.period), floatfmt=floatfmt))
        parts.append("")

    parts.append("### Daily vs cumulative")
    parts.append("")
    parts.append(to_markdown(comparison_table(sr), floatfmt=floatfmt))
    parts.append("")
    return "\n".join(parts)


def build_report_md(results: Sequence[ScenarioResult], floatfmt: str = ".4g") -> str:
    header = """# NPI effect estimates: daily vs cumulative case growth

Each scenario simulates an epidemic whose growth rate is multiplied by the factor of every
active NPI. OLS is then fitted to the day-over-day change in log(daily cases) and in
log(cumulative cases) against NPI-active indicators. Coefficients are log growth per day;
multipliers are `exp(coefficient * period)`.

The daily fit recovers the simulated factors. The cumulative fit does not: cumulative
growth reacts to a change with a long lag, so effects leak across NPIs that start at
different times.
"""
    sections = [scenario_section_md(sr, floatfmt=floatfmt) for sr in results]
    return header + "\n" + "\n".join(sections)


def write_report_md(results: Sequence[ScenarioResult], cfg: ReportConfig = ReportConfig()) -> Path:
    cfg.out_md.parent.mkdir(parents=True, exist_ok=True)
    cfg.out_md.write_text(build_report_md(results, floatfmt=cfg.floatfmt), encoding="utf-8")
    return cfg.out_md
