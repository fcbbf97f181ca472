"""Staggered-adoption panel simulator with a known treatment effect.

Each unit draws its first treated period once from a discrete uniform
adoption window; the outcome is additive in a unit effect, a time trend,
a calendar-time treatment effect and standard-normal noise:

    Y_it = unit_effect(i) + time_trend(t) + treatment_effect(t) * D_it + e_it
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from ._base import BaseSimulator
from ..exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)


class StaggeredSimulator(BaseSimulator):
    """Simulate a balanced panel with staggered treatment adoption.

    Parameters
    ----------
    n_units : int
        Number of units ``I``.
    n_periods : int
        Number of periods ``T``. Should exceed the adoption window, otherwise
        some cohorts have no pre-periods or the panel ends before the last
        cohort is treated.
    seed : int
        Seed for adoption draws and noise.
    config : SimulationConfig, optional
        Column names and outcome equation.
    noise_seed : int, optional
        Redraw only the noise, keeping the adoption pattern of ``seed``.

    Example
    -------
    >>> sim = StaggeredSimulator(n_units=300, n_periods=15, seed=10)
    >>> df = sim.generate()
    >>> truth = sim.ground_truth()
    """

    def _validate(self) -> None:
        super()._validate()
        first, last = self.config.adoption_bounds(self.n_periods)
        if self.config.adoption_window <= 0:
            raise InvalidConfiguration(
                f"adoption_window must be positive, got {self.config.adoption_window}"
            )
        if first > self.n_periods:
            raise InvalidConfiguration(
                f"Adoption window starts at period {first}, after the last period {self.n_periods}"
            )

        if first < 1:
            logger.warning(
                "Adoption window starts at period %s, before the first period; "
                "units adopting by period 1 are treated throughout",
                first,
            )
        elif first == 1:
            logger.warning("Units adopting in period 1 have no pre-treatment periods")
        if last > self.n_periods:
            logger.warning(
                "Adoption window ends at %s, after the last period %s; late cohorts are never observed treated",
                last,
                self.n_periods,
            )
        elif last == self.n_periods and self.n_periods <= self.config.adoption_window:
            logger.warning(
                "Panel of %s periods does not exceed the %s-period adoption window",
                self.n_periods,
                self.config.adoption_window,
            )

    def draw_adoption(self, rng: np.random.Generator) -> np.ndarray:
        """Draw one adoption period per unit (NaN for never-treated units)."""
        c = self.config
        first, last = c.adoption_bounds(self.n_periods)
        adoption = rng.integers(first, last + 1, size=self.n_units).astype(float)

        n_never = int(round(self.n_units * c.never_treated_share))
        if n_never:
            never = rng.choice(self.n_units, size=n_never, replace=False)
            adoption[never] = np.nan
        return adoption

    def generate(self) -> pd.DataFrame:
        """Simulate the panel.

        Returns
        -------
        pd.DataFrame
            ``I * T`` rows sorted by unit then period, with columns:

            - unit and period identifiers (1-based)
            - adoption period (NaN for never-treated)
            - relative time ``t - adoption`` (NaN for never-treated)
            - treatment indicator ``D``
            - outcome ``Y``
        """
        c = self.config
        assign_rng, noise_rng = self._streams()

        units = np.arange(1, self.n_units + 1)
        periods = np.arange(1, self.n_periods + 1)
        adoption = self.draw_adoption(assign_rng)

        # Adoption is drawn per unit and broadcast to every period of that unit
        unit = np.repeat(units, self.n_periods)
        time = np.tile(periods, self.n_units)
        first_treated = np.repeat(adoption, self.n_periods)

        relative = time - first_treated
        treated = np.nan_to_num(relative, nan=-1.0) >= 0
        noise = noise_rng.standard_normal(unit.size)

        outcome = (
            np.asarray(c.unit_effect(unit), dtype=float)
            + np.asarray(c.time_trend(time), dtype=float)
            + np.asarray(c.treatment_effect(time), dtype=float) * treated
            + noise
        )

        df = pd.DataFrame({
            c.unit_col: unit,
            c.time_col: time,
            c.adoption_col: first_treated,
            c.relative_time_col: relative,
            c.treatment_col: treated.astype(int),
            c.outcome_col: outcome,
        })

        self._panel = df
        self._log_summary(df)
        return df

    def ground_truth(self, df: pd.DataFrame | None = None) -> pd.DataFrame:
        """True average effect by relative time, from the effect function alone.

        Averages ``treatment_effect(t)`` over the rows with ``K == h`` for every
        post-treatment horizon ``h`` observed in the panel. The outcome column
        is never used, so the curve does not depend on the noise draw.

        Parameters
        ----------
        df : pd.DataFrame, optional
            Panel from ``generate()``. If None, uses the cached panel.

        Returns
        -------
        pd.DataFrame
            Columns ``relative_time``, ``estimate`` and ``n_obs``, ascending.
        """
        c = self.config
        if df is None:
            df = self.panel

        treated = df[df[c.treatment_col] == 1]
        effect = pd.Series(
            np.asarray(c.treatment_effect(treated[c.time_col].to_numpy()), dtype=float),
            index=treated.index,
        )
        truth = (
            effect.groupby(treated[c.relative_time_col].astype(int))
            .agg(["mean", "count"])
            .reset_index()
        )
        truth.columns = ["relative_time", "estimate", "n_obs"]
        return truth.sort_values("relative_time", ignore_index=True)

    def _log_summary(self, df: pd.DataFrame) -> None:
        c = self.config
        cohorts = df.drop_duplicates(c.unit_col)[c.adoption_col].value_counts(dropna=False)
        logger.info("Staggered panel simulated: %s rows", f"{len(df):,}")
        for cohort, cnt in cohorts.sort_index().items():
            label = "never treated" if pd.isna(cohort) else f"adopt t={int(cohort)}"
            logger.info("  %s: %s units", label, f"{cnt:,}")


def generate(n_units: int, n_periods: int, seed: int, **kwargs) -> pd.DataFrame:
    """Simulate a staggered panel in one call. See ``StaggeredSimulator``."""
    return StaggeredSimulator(n_units, n_periods, seed, **kwargs).generate()
