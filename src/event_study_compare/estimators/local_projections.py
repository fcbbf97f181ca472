"""Local projections DiD -- Dube, Girardi, Jorda & Taylor (2023).

One long-difference regression per horizon, using only clean controls
(units not yet treated at the horizon). Every long difference is taken
relative to ``t - 1``, so the ``h = -1`` row is zero by construction and is
left to the aligner as the reference period. Run through ``pyfixest.lpdid``.

Reference:
    Dube, A., Girardi, D., Jorda, O., & Taylor, A. M. (2023). A local
    projections approach to difference-in-differences event studies. NBER WP 31184.
"""

from __future__ import annotations

import pandas as pd

from .._types import SignedLabels
from ._base import BaseEstimator


def horizon_of(name) -> int:
    """Horizon from a coefficient name such as ``"time_to_treatment::-5"``."""
    return int(str(name).split("::")[-1])


class LocalProjectionsEstimator(BaseEstimator):
    """LP-DiD event study via ``pyfixest.lpdid``. Labels are signed horizons."""

    name = "Local projections"
    labels = SignedLabels(reference=-1)

    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        import pyfixest as pf

        c = self.sim_config
        fit = pf.lpdid(
            data=panel,
            yname=c.outcome_col,
            idname=c.unit_col,
            tname=c.time_col,
            gname=c.cohort_col,
            vcov={"CRV1": self.config.cluster_col},
            pre_window=-self.config.pretrends,
            post_window=self.config.horizons,
            never_treated=c.never_treated_value,
            att=False,
        )
        tidy = fit.tidy()
        tidy.index = tidy.index.map(horizon_of)
        return tidy.drop(index=self.labels.reference, errors="ignore")
