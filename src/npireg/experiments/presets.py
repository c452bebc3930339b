from __future__ import annotations

from typing import Dict

from npireg.experiments.scenario import ScenarioConfig
from npireg.simulation.interventions import Intervention


# Two overlapping NPIs that each halve weekly growth.
SCENARIO_A = ScenarioConfig(
    name="A",
    r0=2.5,
    period=7,
    interventions=(
        Intervention(start=11, end=30, factor=0.5),
        Intervention(start=21, end=30, factor=0.5),
    ),
)

# A near-useless NPI followed by a near-total one.
SCENARIO_B = ScenarioConfig(
    name="B",
    r0=2.5,
    period=7,
    interventions=(
        Intervention(start=11, end=30, factor=0.99),
        Intervention(start=21, end=30, factor=0.01),
    ),
)

# A growth-accelerating NPI followed by a full halt (daily regression is skipped).
SCENARIO_C = ScenarioConfig(
    name="C",
    r0=2.5,
    period=7,
    interventions=(
        Intervention(start=11, end=30, factor=1.05),
        Intervention(start=21, end=30, factor=0.0),
    ),
)

PRESETS: Dict[str, ScenarioConfig] = {
    "A": SCENARIO_A,
    "B": SCENARIO_B,
    "C": SCENARIO_C,
}


def get_preset(name: str) -> ScenarioConfig:
    key = name.strip().upper()
    if key not in PRESETS:
        raise KeyError(f"Unknown scenario {name!r}. Valid: {sorted(PRESETS)}")
    return PRESETS[key]
