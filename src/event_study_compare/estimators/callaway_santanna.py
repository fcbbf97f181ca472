"""Callaway & Sant'Anna (2021) group-time ATT estimator.

Estimates ATT(g, t) for every cohort and period against not-yet-treated
controls, then aggregates to event time. Run through
``diff_diff.CallawaySantAnna``.

Reference:
    Callaway, B., & Sant'Anna, P. H. C. (2021). Difference-in-differences with
    multiple time periods. Journal of Econometrics.
"""

from __future__ import annotations

import pandas as pd

from .._types import SignedLabels
from ._base import BaseEstimator, effects_table


class CallawaySantAnnaEstimator(BaseEstimator):
    """Callaway-Sant'Anna event study via ``diff_diff``.

    Not-yet-treated units serve as controls since the default panel has no
    never-treated units. Every ATT(g, t) is measured against the period
    before adoption (universal base period), so ``K = -1`` is the
    normalised reference and is not reported. ``config.n_bootstrap > 0``
    switches to multiplier bootstrap standard errors.
    """

    name = "Callaway-Sant'Anna"
    labels = SignedLabels(reference=-1)

    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        from diff_diff import CallawaySantAnna

        c = self.sim_config
        cs = CallawaySantAnna(
            control_group="not_yet_treated",
            base_period="universal",
            n_bootstrap=self.config.n_bootstrap,
            seed=self.config.seed,
        )
        results = cs.fit(
            data=panel,
            outcome=c.outcome_col,
            unit=c.unit_col,
            time=c.time_col,
            first_treat=c.cohort_col,
        )
        event_study = results.aggregate("event_study")
        effects = getattr(event_study, "event_study_effects", event_study)
        if not effects:
            raise RuntimeError(f"{self.name} returned no event-study effects")
        return effects_table(effects, drop=(self.labels.reference,))
