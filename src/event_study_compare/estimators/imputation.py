"""Imputation estimator -- Borusyak, Jaravel & Spiess (2024).

Fits unit and period fixed effects on untreated observations only, imputes
untreated potential outcomes for treated rows, and averages the imputed
effects per horizon. Run through ``pyfixest.did2s`` (Gardner's two-stage
form), whose second stage on the lag dummies reproduces the imputation
point estimates.

Reference:
    Borusyak, K., Jaravel, X., & Spiess, J. (2024). Revisiting event-study
    designs: Robust and efficient estimation. Review of Economic Studies.
"""

from __future__ import annotations

import pandas as pd

from .._types import SplitLabels
from ..treatment import LAG_PREFIX, LEAD_PREFIX, drop_fully_treated_periods, indicator_columns
from ._base import BaseEstimator


class ImputationEstimator(BaseEstimator):
    """Borusyak et al. imputation estimator via ``pyfixest.did2s``.

    Periods in which every unit is treated are dropped, since the first
    stage cannot estimate their period effect. Every lag observed in the
    remaining sample gets its own second-stage dummy; horizons beyond
    ``config.horizons`` are trimmed after alignment. Pre-trend leads are not
    estimated.
    """

    name = "Borusyak et al."
    labels = SplitLabels(lag_prefix=LAG_PREFIX, lead_prefix=LEAD_PREFIX, reference=-1)

    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        import pyfixest as pf

        c = self.sim_config
        sample = drop_fully_treated_periods(panel, c)
        lags = [lag for lag in indicator_columns(sample, LAG_PREFIX) if sample[lag].any()]
        fit = pf.did2s(
            data=sample,
            yname=c.outcome_col,
            first_stage=f"~ 0 | {c.unit_col} + {c.time_col}",
            second_stage="~ " + " + ".join(lags),
            treatment=c.treatment_col,
            cluster=self.config.cluster_col,
        )
        tidy = fit.tidy()
        return tidy.loc[[lag for lag in lags if lag in tidy.index]]
