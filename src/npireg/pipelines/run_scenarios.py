from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from npireg.experiments.presets import PRESETS, get_preset
from npireg.experiments.scenario import ScenarioConfig, ScenarioResult, run_scenarios
from npireg.reporting.rates import comparison_table, to_markdown
from npireg.reporting.report_md import ReportConfig, write_report_md


def _log(msg: str) -> None:
    print(msg, flush=True)


def _select(names: Sequence[str]) -> List[ScenarioConfig]:
    if not names or "all" in [n.lower() for n in names]:
        return list(PRESETS.values())
    return [get_preset(n) for n in names]


def main(argv: Optional[Sequence[str]] = None) -> List[ScenarioResult]:
    ap = argparse.ArgumentParser(description="Compare daily vs cumulative growth regressions on simulated NPI scenarios.")
    ap.add_argument("--scenario", "-s", action="append", default=[], help="A, B, C or all (repeatable; default all)")
    ap.add_argument("--report", type=Path, default=None, help="write a markdown report to this path")
    ap.add_argument("--quiet", action="store_true", help="only print the comparison tables")
    args = ap.parse_args(argv)

    configs = _select(args.scenario)
    results = run_scenarios(configs, verbose=not args.quiet)

    for sr in results:
        _log(f"\n## Scenario {sr.config.name}")
        _log(to_markdown(comparison_table(sr)))

    if args.report is not None:
        out = write_report_md(results, ReportConfig(out_md=args.report))
        _log(f"✅ Report: {out}")

    return results


def cli() -> None:
    main()


if __name__ == "__main__":
    cli()
