from __future__ import annotations

from pathlib import Path

from npireg.experiments.presets import SCENARIO_A, SCENARIO_C
from npireg.experiments.scenario import run_scenarios
from npireg.reporting.report_md import ReportConfig, build_report_md, write_report_md


def test_report_has_a_section_per_scenario():
    md = build_report_md(run_scenarios([SCENARIO_A, SCENARIO_C]))

    assert md.startswith("# NPI effect estimates")
    assert "## Scenario A" in md
    assert "## Scenario C" in md
    assert "### Cumulative cases regression" in md


def test_report_states_why_daily_was_not_fitted():
    md = build_report_md(run_scenarios([SCENARIO_C]))
    assert "skipped_zero_factor" in md
    assert "zero-factor Intervention" in md


def test_write_report_md_creates_parent(sandbox: Path):
    out = sandbox / "nested" / "report.md"
    p = write_report_md(run_scenarios([SCENARIO_A]), ReportConfig(out_md=out))

    assert p == out
    assert out.exists()
    assert "Scenario A" in out.read_text(encoding="utf-8")


def test_default_report_path_is_relative(chdir_sandbox: Path):
    p = write_report_md(run_scenarios([SCENARIO_A]))
    assert p == Path("reports/npi_regression_report.md")
    assert (chdir_sandbox / p).exists()


def test_report_npi_names_match_coefficient_names(small_config):
    from npireg.experiments.scenario import run_scenario

    sr = run_scenario(small_config)
    md = build_report_md([sr])

    for name in sr.outcomes["daily"].result.predictors:
        assert f"| {name}" in md
    assert "| event | 8–10 |" in md
