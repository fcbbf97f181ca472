"""Shared types and configuration for event-study-compare."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

import numpy as np
import pandas as pd

ALIGNED_COLUMNS = ["relative_time", "estimate", "variance", "is_reference"]


def _unit_index(i):
    return i


def _linear_trend(t):
    return 3 * t


def _centered_effect(t):
    return t - 12.5


@dataclass(frozen=True)
class SimulationConfig:
    """Column names and data-generating process for the simulated panel.

    Every simulator and the indicator builder take this as their
    configuration argument.

    Parameters
    ----------
    unit_col, time_col : str
        Names of the unit identifier and calendar period columns.
    adoption_col : str
        Column holding each unit's first treated period (NaN if never treated).
    relative_time_col : str
        Column holding ``t - adoption`` (NaN if never treated).
    treatment_col, outcome_col : str
        Binary treatment indicator and outcome columns.
    cohort_col : str
        Cohort column used by the estimators; never-treated units get
        ``never_treated_value``.
    adoption_window : int
        Number of contiguous adoption periods ending at ``adoption_end``.
    adoption_end : int, optional
        Last possible adoption period. Defaults to the final panel period.
    never_treated_share : float
        Fraction of units that are never treated.
    never_treated_value : int
        Cohort sentinel for never-treated units. Must not be a real period.
    unit_effect, time_trend, treatment_effect : callable
        Vectorised components of the outcome equation. ``treatment_effect``
        must depend on calendar time only.

    Example
    -------
    >>> config = SimulationConfig(adoption_window=5, never_treated_share=0.2)
    """

    unit_col: str = "i"
    time_col: str = "t"
    adoption_col: str = "Ei"
    relative_time_col: str = "K"
    treatment_col: str = "D"
    outcome_col: str = "Y"
    cohort_col: str = "gvar"
    adoption_window: int = 7
    adoption_end: int | None = None
    never_treated_share: float = 0.0
    never_treated_value: int = 0
    unit_effect: Callable = field(default=_unit_index, compare=False)
    time_trend: Callable = field(default=_linear_trend, compare=False)
    treatment_effect: Callable = field(default=_centered_effect, compare=False)

    def adoption_bounds(self, n_periods: int) -> tuple[int, int]:
        """Inclusive ``(first, last)`` adoption periods for a panel of ``n_periods``."""
        last = n_periods if self.adoption_end is None else self.adoption_end
        return last - self.adoption_window + 1, last


@dataclass(frozen=True)
class EstimationConfig:
    """Knobs shared by the estimator adapters.

    Parameters
    ----------
    horizons : int
        Number of post-treatment horizons reported (0 through ``horizons``).
    pretrends : int
        Number of pre-treatment leads reported.
    cluster_col : str
        Column to cluster standard errors on.
    n_bootstrap : int
        Bootstrap replications for the estimators that support it.
        0 uses analytical standard errors.
    seed : int, optional
        Seed passed to bootstrap-based estimators.
    """

    horizons: int = 5
    pretrends: int = 5
    cluster_col: str = "i"
    n_bootstrap: int = 0
    seed: int | None = None


@dataclass(frozen=True)
class SignedLabels:
    """Labels that already are signed relative times.

    Parameters
    ----------
    reference : int, optional
        Relative time normalised to zero by the estimator. Synthesized as a
        reference anchor when the estimator leaves it out.
    """

    reference: int | None = -1


@dataclass(frozen=True)
class SplitLabels:
    """Separate lag (K >= 0) and lead (K < 0) counters, e.g. ``lag_0`` / ``lead_2``.

    A lag index ``l`` maps to ``K = l + lag_offset``; a lead index ``l`` maps to
    ``K = -(l + lead_offset)``.
    """

    lag_prefix: str = "lag_"
    lead_prefix: str = "lead_"
    lag_offset: int = 0
    lead_offset: int = 0
    reference: int | None = -1


LabelConvention = Union[SignedLabels, SplitLabels]


@dataclass(frozen=True)
class RawSeries:
    """One estimator's output before alignment.

    Parameters
    ----------
    name : str
        Estimator name, used as the series label downstream.
    labels : SignedLabels or SplitLabels
        How to decode ``entries`` labels into relative time.
    entries : tuple
        Ordered ``(label, estimate, variance)`` triples.
    """

    name: str
    labels: LabelConvention
    entries: tuple = ()

    @classmethod
    def from_table(
        cls,
        name: str,
        table: pd.DataFrame,
        labels: LabelConvention,
        estimate_col: str = "Estimate",
        se_col: str = "Std. Error",
    ) -> RawSeries:
        """Build from a coefficient table indexed by label.

        Variances are the squared standard errors.
        """
        se = table[se_col].astype(float).to_numpy()
        entries = tuple(
            (label, float(est), float(var))
            for label, est, var in zip(
                table.index, table[estimate_col].astype(float), np.square(se)
            )
        )
        return cls(name=name, labels=labels, entries=entries)

    def __len__(self) -> int:
        return len(self.entries)
