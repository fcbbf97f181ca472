"""Event-time indicators and cohort coding for the estimators."""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .._types import SimulationConfig

logger = logging.getLogger(__name__)

LEAD_PREFIX = "lead_"
LAG_PREFIX = "lag_"


def indicator_columns(
    df: pd.DataFrame,
    prefix: str,
    max_index: int | None = None,
    skip: tuple[int, ...] = (),
) -> list[str]:
    """Names of ``{prefix}{h}`` dummy columns in ``df``, ordered by ``h``.

    Parameters
    ----------
    df : pd.DataFrame
        Estimation panel.
    prefix : str
        Dummy prefix, e.g. ``"lead_"``.
    max_index : int, optional
        Keep only ``h <= max_index``.
    skip : tuple of int
        Indices to leave out (e.g. the reference lead).
    """
    found = []
    for col in df.columns:
        suffix = str(col)[len(prefix):]
        if str(col).startswith(prefix) and suffix.isdigit():
            h = int(suffix)
            if h in skip or (max_index is not None and h > max_index):
                continue
            found.append(h)
    return [f"{prefix}{h}" for h in sorted(found)]


def last_cohort_as_control(df: pd.DataFrame, config: SimulationConfig | None = None) -> pd.DataFrame:
    """Recode the latest adoption cohort as never treated.

    Rows from the latest cohort's adoption period onwards are dropped, so
    that cohort is untreated over the whole remaining sample.

    Parameters
    ----------
    df : pd.DataFrame
        Estimation panel with the cohort column.
    config : SimulationConfig, optional
        Column name mapping.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with the recoded cohort column.
    """
    c = config or SimulationConfig()
    last = df.loc[df[c.cohort_col] != c.never_treated_value, c.cohort_col].max()
    if pd.isna(last):
        logger.info("No treated cohort to recode")
        return df.copy()

    out = df[df[c.time_col] < last].copy()
    out[c.cohort_col] = np.where(
        out[c.cohort_col] == last, c.never_treated_value, out[c.cohort_col]
    )
    logger.info(
        "Last cohort (t=%s) used as control: %s -> %s rows",
        int(last),
        f"{len(df):,}",
        f"{len(out):,}",
    )
    return out


def drop_fully_treated_periods(df: pd.DataFrame, config: SimulationConfig | None = None) -> pd.DataFrame:
    """Keep only periods that still have at least one untreated row.

    A period in which every unit is treated has no untreated observation to
    identify its period effect from.
    """
    c = config or SimulationConfig()
    untreated = df.loc[df[c.treatment_col] == 0, c.time_col].unique()
    out = df[df[c.time_col].isin(untreated)]
    if len(out) < len(df):
        logger.info(
            "Dropped fully treated periods %s: %s -> %s rows",
            sorted(set(df[c.time_col].unique()) - set(untreated)),
            f"{len(df):,}",
            f"{len(out):,}",
        )
    return out


class EventIndicatorBuilder:
    """Prepare a simulated panel for estimation.

    Adds the cohort column (never-treated units get the sentinel) and one
    dummy per observed relative time: ``lead_{h}`` for ``K == -h`` and
    ``lag_{h}`` for ``K == h``. Never-treated rows are zero in every dummy.

    Parameters
    ----------
    df : pd.DataFrame
        Panel from a simulator, with unit, time, adoption, relative-time,
        treatment and outcome columns.
    config : SimulationConfig, optional
        Column name mapping. Uses defaults if not provided.

    Example
    -------
    >>> builder = EventIndicatorBuilder(sim.generate())
    >>> panel = builder.build()
    >>> builder.lead_columns(max_lead=5)
    ['lead_2', 'lead_3', 'lead_4', 'lead_5']
    """

    def __init__(self, df: pd.DataFrame, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self._df = df.copy()
        self._validate()
        self._result: pd.DataFrame | None = None

    def _validate(self) -> None:
        """Check required columns exist."""
        c = self.config
        required = [
            c.unit_col, c.time_col, c.adoption_col,
            c.relative_time_col, c.treatment_col, c.outcome_col,
        ]
        missing = [col for col in required if col not in self._df.columns]
        if missing:
            raise ValueError(
                f"Missing required columns: {missing}. "
                f"Available: {sorted(self._df.columns.tolist())}"
            )
        if (self._df[c.adoption_col] == c.never_treated_value).any():
            raise ValueError(
                f"Adoption period {c.never_treated_value} equals the never-treated cohort code; "
                "set SimulationConfig.never_treated_value to a value outside the adoption window"
            )

    def build(self) -> pd.DataFrame:
        """Add the cohort column and relative-time dummies.

        Returns
        -------
        pd.DataFrame
            Input panel plus the cohort column and the ``lead_*`` / ``lag_*`` dummies.
        """
        c = self.config
        df = self._df.copy()

        df[c.cohort_col] = (
            df[c.adoption_col].fillna(c.never_treated_value).astype(int)
        )

        rel = df[c.relative_time_col]
        observed = rel.dropna().astype(int)
        max_lead = int(max(-observed.min(), 0)) if len(observed) else 0
        max_lag = int(observed.max()) if len(observed) else -1

        dummies = {}
        for h in range(1, max_lead + 1):
            dummies[f"{LEAD_PREFIX}{h}"] = (rel == -h).astype(int)
        for h in range(0, max_lag + 1):
            dummies[f"{LAG_PREFIX}{h}"] = (rel == h).astype(int)
        df = pd.concat([df, pd.DataFrame(dummies, index=df.index)], axis=1)

        self._result = df
        logger.info("Event indicators built: %s leads, %s lags", max_lead, max(max_lag + 1, 0))
        return df

    @property
    def result(self) -> pd.DataFrame:
        """Lazily build and cache the estimation panel."""
        if self._result is None:
            self._result = self.build()
        return self._result

    def lead_columns(self, max_lead: int | None = None, skip: tuple[int, ...] = (1,)) -> list[str]:
        """Lead dummy names, excluding the reference lead by default."""
        return indicator_columns(self.result, LEAD_PREFIX, max_lead, skip)

    def lag_columns(self, max_lag: int | None = None) -> list[str]:
        """Lag dummy names in ascending order."""
        return indicator_columns(self.result, LAG_PREFIX, max_lag)

    def last_cohort_as_control(self) -> pd.DataFrame:
        """See ``last_cohort_as_control``."""
        return last_cohort_as_control(self.result, self.config)
