# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from npireg.experiments.scenario import ScenarioConfig
from npireg.simulation.interventions import Intervention


@pytest.fixture()
def sandbox(tmp_path: Path) -> Path:
    """Per-test filesystem sandbox."""
    return tmp_path


@pytest.fixture()
def project_root() -> Path:
    """Repo root (where pyproject.toml lives)."""
    # tests/ -> repo root
    return Path(__file__).resolve().parents[1]


@pytest.fixture()
def chdir_sandbox(monkeypatch, sandbox: Path):
    """
    Run code as-if repo root is sandbox so default relative paths
    like reports/... resolve inside sandbox.
    """
    monkeypatch.chdir(sandbox)
    return sandbox


@pytest.fixture()
def two_npis() -> tuple:
    """Overlapping pair: a long mild NPI and a shorter strong one on top."""
    return (
        Intervention(start=11, end=30, factor=0.5),
        Intervention(start=21, end=30, factor=0.5),
    )


@pytest.fixture()
def small_config() -> ScenarioConfig:
    """Short horizon, three distinct activation patterns."""
    return ScenarioConfig(
        name="small",
        r0=2.0,
        period=7,
        interventions=(
            Intervention(start=4, end=12, factor=0.6),
            Intervention(start=8, end=10, factor=1.3, label="event"),
        ),
    )
