# src/npireg/reporting/plots.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from npireg.data.schemas import SCHEMA, SERIES_CUMULATIVE, SERIES_DAILY
from npireg.experiments.scenario import ScenarioResult
from npireg.reporting.rates import comparison_table


# -------------------------
# Helpers
# -------------------------

def _ensure_dir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def _save(fig: plt.Figure, out: Path, also_pdf: bool = False, dpi: int = 170) -> None:
    fig.tight_layout()
    fig.savefig(out, dpi=dpi, bbox_inches="tight")
    if also_pdf:
        fig.savefig(out.with_suffix(".pdf"), bbox_inches="tight")
    plt.close(fig)

def _maybe_log(msg: str, verbose: bool) -> None:
    if verbose:
        print(msg, flush=True)

def _shade_interventions(ax: plt.Axes, sr: ScenarioResult) -> None:
    # light band per NPI, stacked bands darken where NPIs overlap
    for npi in sr.config.interventions:
        ax.axvspan(npi.start - 0.5, npi.end + 0.5, alpha=0.08, color="tab:red")


# -------------------------
# Paths
# -------------------------

@dataclass(frozen=True)
class FigurePaths:
    out_dir: Path = Path("reports/figures")


# -------------------------
# A) The four derived sequences of one scenario
# -------------------------

def fig_scenario_series(
    sr: ScenarioResult,
    paths: FigurePaths,
    also_pdf: bool = False,
    verbose: bool = False,
) -> Optional[Path]:
    s = sr.series_frame()
    g = sr.growth_frame()

    fig, axes = plt.subplots(2, 2, figsize=(10, 6.5), sharex=True)
    (ax_d, ax_c), (ax_dd, ax_dc) = axes

    ax_d.plot(s[SCHEMA.DAY], s[SCHEMA.DAILY], marker=".")
    ax_d.set_title("Daily cases")
    ax_d.set_ylabel("cases")

    ax_c.plot(s[SCHEMA.DAY], s[SCHEMA.CUMULATIVE], marker=".")
    ax_c.set_title("Cumulative cases")

    # zero-factor days make the daily log change -inf; matplotlib leaves gaps there
    dd = g[SCHEMA.DLOG_DAILY].to_numpy(dtype=float)
    ax_dd.plot(g[SCHEMA.DAY], np.where(np.isfinite(dd), dd, np.nan), marker=".")
    ax_dd.set_title("Δ log(daily cases)")
    ax_dd.set_xlabel("day")
    ax_dd.set_ylabel("log growth / day")

    ax_dc.plot(g[SCHEMA.DAY], g[SCHEMA.DLOG_CUMULATIVE], marker=".")
    ax_dc.set_title("Δ log(cumulative cases)")
    ax_dc.set_xlabel("day")

    for ax in axes.ravel():
        _shade_interventions(ax, sr)
        ax.grid(True, alpha=0.25)

    fig.suptitle(f"Scenario {sr.config.name}: r0={sr.config.r0} per {sr.config.period} days")

    out = paths.out_dir / f"scenario_{sr.config.name}_series.png"
    _save(fig, out, also_pdf=also_pdf)
    _maybe_log(f"[scenario_series] {out}", verbose)
    return out


# -------------------------
# B) Recovered multipliers vs truth
# -------------------------

def fig_multiplier_comparison(
    sr: ScenarioResult,
    paths: FigurePaths,
    also_pdf: bool = False,
    verbose: bool = False,
) -> Optional[Path]:
    df = comparison_table(sr)
    df = df[df[SCHEMA.PREDICTOR] != SCHEMA.INTERCEPT]
    if len(df) == 0:
        _maybe_log("[multipliers] no intervention predictors", verbose)
        return None

    x = np.arange(len(df))
    width = 0.27

    fig = plt.figure(figsize=(8, 4.2))
    ax = fig.add_subplot(1, 1, 1)

    ax.bar(x - width, df["true_multiplier"], width, label="true factor")
    for offset, series in ((0.0, SERIES_DAILY), (width, SERIES_CUMULATIVE)):
        vals = df[f"{series}_multiplier"].to_numpy(dtype=float)
        status = df[f"{series}_status"].iloc[0]
        label = series if np.isfinite(vals).all() else f"{series} ({status})"
        ax.bar(x + offset, np.nan_to_num(vals, nan=0.0), width, label=label)

    ax.axhline(1.0, linestyle="--", color="grey")
    ax.set_xticks(x)
    ax.set_xticklabels(df[SCHEMA.PREDICTOR])
    ax.set_ylabel(f"growth multiplier per {sr.config.period} days")
    ax.set_title(f"Scenario {sr.config.name}: recovered NPI multipliers")
    ax.legend(loc="best")

    out = paths.out_dir / f"scenario_{sr.config.name}_multipliers.png"
    _save(fig, out, also_pdf=also_pdf)
    _maybe_log(f"[multipliers] {out}", verbose)
    return out


# -------------------------
# Build all figures + write index.md (markdown)
# -------------------------

def build_all_figures(
    results: Sequence[ScenarioResult],
    paths: FigurePaths = FigurePaths(),
    also_pdf: bool = False,
    verbose: bool = True,
) -> Path:
    _ensure_dir(paths.out_dir)

    produced: list[Tuple[str, Optional[Path]]] = []
    for sr in results:
        name = sr.config.name
        produced.append((f"{name}) Cases and log growth", fig_scenario_series(sr, paths, also_pdf=also_pdf, verbose=verbose)))
        produced.append((f"{name}) Recovered multipliers", fig_multiplier_comparison(sr, paths, also_pdf=also_pdf, verbose=verbose)))

    idx = paths.out_dir / "index.md"
    lines = []
    lines.append("# NPI regression figures\n")
    lines.append("Daily vs cumulative growth regressions on simulated epidemics.\n")
    lines.append("Run: `python -m npireg.pipelines.make_figures`\n")

    for title, p in produced:
        lines.append(f"## {title}\n")
        if p is None:
            lines.append("_Not generated._\n")
            continue
        lines.append(f"![]({p.name})\n")  # relative within same folder

    idx.write_text("\n".join(lines), encoding="utf-8")
    return paths.out_dir
