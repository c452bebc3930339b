from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from npireg.experiments.presets import PRESETS
from npireg.experiments.scenario import run_scenarios
from npireg.reporting.plots import FigurePaths, build_all_figures


def main(argv: Optional[Sequence[str]] = None) -> Path:
    ap = argparse.ArgumentParser(description="Plot cases and log growth for the preset NPI scenarios.")
    ap.add_argument("--out", type=Path, default=FigurePaths().out_dir)
    ap.add_argument("--pdf", action="store_true", help="also write PDF copies")
    args = ap.parse_args(argv)

    results = run_scenarios(list(PRESETS.values()))
    out_dir = build_all_figures(results, FigurePaths(out_dir=args.out), also_pdf=args.pdf)
    print(f"✅ Wrote figures to: {out_dir}/", flush=True)
    print(f"✅ Index: {out_dir / 'index.md'}", flush=True)
    return out_dir


def cli() -> None:
    main()


if __name__ == "__main__":
    cli()
