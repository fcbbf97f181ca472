"""Sun & Abraham (2021) interaction-weighted estimator.

Saturated cohort-by-relative-time regression whose coefficients are
re-weighted by cohort shares. The latest adoption cohort is the control
group, so the sample stops the period before it is treated. Run through
``diff_diff.SunAbraham``.

Reference:
    Sun, L., & Abraham, S. (2021). Estimating dynamic treatment effects in
    event studies with heterogeneous treatment effects. Journal of Econometrics.
"""

from __future__ import annotations

import pandas as pd

from .._types import SignedLabels
from ..treatment import last_cohort_as_control
from ._base import BaseEstimator, effects_table


class SunAbrahamEstimator(BaseEstimator):
    """Sun-Abraham event study via ``diff_diff``, last cohort as control."""

    name = "Sun-Abraham"
    labels = SignedLabels(reference=-1)

    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        from diff_diff import SunAbraham

        c = self.sim_config
        sample = last_cohort_as_control(panel, c)
        sa = SunAbraham(
            control_group="never_treated",
            cluster=self.config.cluster_col,
            n_bootstrap=self.config.n_bootstrap,
            seed=self.config.seed,
        )
        results = sa.fit(
            data=sample,
            outcome=c.outcome_col,
            unit=c.unit_col,
            time=c.time_col,
            first_treat=c.cohort_col,
        )
        if not results.event_study_effects:
            raise RuntimeError(f"{self.name} returned no event-study effects")
        return effects_table(results.event_study_effects, drop=(self.labels.reference,))
