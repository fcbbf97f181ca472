"""Shared fixtures for event-study-compare tests."""

import pandas as pd
import pytest

from event_study_compare import (
    EventIndicatorBuilder,
    RawSeries,
    SimulationConfig,
    SplitLabels,
    StaggeredSimulator,
)
from event_study_compare.estimators import BaseEstimator


@pytest.fixture
def config() -> SimulationConfig:
    return SimulationConfig()


@pytest.fixture
def simulator(config) -> StaggeredSimulator:
    """40 units, 15 periods, adoption in periods 9-15."""
    return StaggeredSimulator(n_units=40, n_periods=15, seed=1, config=config)


@pytest.fixture
def panel(simulator) -> pd.DataFrame:
    return simulator.generate()


@pytest.fixture
def estimation_panel(panel, config) -> pd.DataFrame:
    return EventIndicatorBuilder(panel, config).build()


@pytest.fixture
def split_raw() -> RawSeries:
    """Split-label output with the lead_1 reference omitted."""
    return RawSeries(
        name="split",
        labels=SplitLabels(lag_prefix="lag", lead_prefix="lead"),
        entries=(
            ("lag0", 0.5, 0.01),
            ("lag1", 0.3, 0.02),
            ("lead2", 0.1, 0.03),
        ),
    )


class FixedEstimator(BaseEstimator):
    """Returns a fixed coefficient table; no third-party call."""

    labels = SplitLabels()

    def __init__(self, name, table, **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.table = table

    def _estimate(self, panel):
        return self.table


class FailingEstimator(BaseEstimator):
    """Raises on every fit."""

    labels = SplitLabels()

    def __init__(self, name="broken", **kwargs):
        super().__init__(**kwargs)
        self.name = name

    def _estimate(self, panel):
        raise RuntimeError("estimation blew up")


def coefficient_table(rows: dict) -> pd.DataFrame:
    """``{label: (estimate, se)}`` -> table with ``Estimate`` / ``Std. Error``."""
    return pd.DataFrame.from_dict(
        rows, orient="index", columns=["Estimate", "Std. Error"]
    )


@pytest.fixture
def fixed_estimator() -> FixedEstimator:
    table = coefficient_table({
        "lead_3": (0.05, 0.1),
        "lead_2": (-0.02, 0.1),
        "lag_0": (1.0, 0.2),
        "lag_1": (1.5, 0.2),
    })
    return FixedEstimator("fixed", table)


@pytest.fixture
def failing_estimator() -> FailingEstimator:
    return FailingEstimator()


@pytest.fixture
def make_table():
    return coefficient_table


@pytest.fixture
def make_estimator():
    return FixedEstimator
