"""Base class for panel simulators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import numpy as np
import pandas as pd

from .._types import SimulationConfig
from ..exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


class BaseSimulator(ABC):
    """Abstract base for synthetic panel generators.

    Subclasses implement ``generate()`` to produce a balanced unit-period
    panel. Validation, seeding, caching and summary statistics live here.

    Parameters
    ----------
    n_units : int
        Number of units ``I``.
    n_periods : int
        Number of calendar periods ``T``.
    seed : int
        Seed for every random draw. Required so runs are reproducible.
    config : SimulationConfig, optional
        Column names and outcome equation. Uses defaults if not provided.
    noise_seed : int, optional
        Separate seed for the outcome noise. Defaults to the stream derived
        from ``seed``.
    """

    def __init__(
        self,
        n_units: int,
        n_periods: int,
        seed: int,
        config: SimulationConfig | None = None,
        noise_seed: int | None = None,
    ):
        self.config = config or SimulationConfig()
        self.n_units = n_units
        self.n_periods = n_periods
        self.seed = seed
        self.noise_seed = noise_seed
        self._validate()
        self._panel: pd.DataFrame | None = None

    def _validate(self) -> None:
        """Reject parameters that cannot produce a panel."""
        if not isinstance(self.n_units, (int, np.integer)) or self.n_units <= 0:
            raise InvalidConfiguration(f"n_units must be a positive integer, got {self.n_units!r}")
        if not isinstance(self.n_periods, (int, np.integer)) or self.n_periods <= 0:
            raise InvalidConfiguration(
                f"n_periods must be a positive integer, got {self.n_periods!r}"
            )
        if self.seed is None:
            raise InvalidConfiguration("seed is required")

        share = self.config.never_treated_share
        if not 0.0 <= share < 1.0:
            raise InvalidConfiguration(f"never_treated_share must be in [0, 1), got {share}")

        logger.info(
            "%s initialized: %s units, %s periods, seed=%s",
            type(self).__name__,
            f"{self.n_units:,}",
            f"{self.n_periods:,}",
            self.seed,
        )

    def _streams(self) -> tuple[np.random.Generator, np.random.Generator]:
        """Independent generators for treatment assignment and outcome noise."""
        assign_seq, noise_seq = np.random.SeedSequence(self.seed).spawn(2)
        if self.noise_seed is not None:
            noise_seq = np.random.SeedSequence(self.noise_seed)
        return np.random.default_rng(assign_seq), np.random.default_rng(noise_seq)

    @abstractmethod
    def generate(self) -> pd.DataFrame:
        """Simulate the panel. Returns one row per unit-period."""
        ...

    @property
    def panel(self) -> pd.DataFrame:
        """Lazily generate and cache the panel."""
        if self._panel is None:
            self._panel = self.generate()
        return self._panel

    def summary(self) -> pd.DataFrame:
        """Return panel summary statistics.

        Returns
        -------
        pd.DataFrame
            One-row DataFrame with n_obs, n_units, period range, number of
            treated and never-treated units, and treated share of rows.
        """
        c = self.config
        df = self.panel
        adoption = df.drop_duplicates(c.unit_col)[c.adoption_col]

        return pd.DataFrame([{
            "n_obs": len(df),
            "n_units": df[c.unit_col].nunique(),
            "time_min": df[c.time_col].min(),
            "time_max": df[c.time_col].max(),
            "n_ever_treated": int(adoption.notna().sum()),
            "n_never_treated": int(adoption.isna().sum()),
            "treated_share": float(df[c.treatment_col].mean()),
        }])
