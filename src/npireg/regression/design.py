from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from npireg.data.schemas import SCHEMA
from npireg.data.validation import validate_unique_names
from npireg.simulation.interventions import Intervention, predictor_names


def indicator_vector(intervention: Intervention, horizon: int) -> np.ndarray:
    """
    Binary activation vector for one intervention, one entry per day 1..horizon.
    Entry d-1 is 1 iff start <= d <= end.
    """
    days = np.arange(1, int(horizon) + 1)
    return ((days >= intervention.start) & (days <= intervention.end)).astype(np.int64)


def build_design_matrix(interventions: Sequence[Intervention], horizon: int) -> pd.DataFrame:
    """
    Design matrix for the growth regression: intercept + one indicator column per intervention.
    Rows are days 1..horizon (row for day d pairs with the log change from day d-1 to day d).
    """
    names = predictor_names(interventions)
    validate_unique_names([SCHEMA.INTERCEPT, *names])

    cols = {SCHEMA.INTERCEPT: np.ones(int(horizon), dtype=np.int64)}
    for name, npi in zip(names, interventions):
        cols[name] = indicator_vector(npi, horizon)

    X = pd.DataFrame(cols, index=pd.RangeIndex(1, int(horizon) + 1, name=SCHEMA.DAY))
    return X
