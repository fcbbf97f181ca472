"""Dynamic two-way fixed effects OLS.

    Y_it = a_i + l_t + sum_{h=2..P} b_{-h} lead_h + sum_{h>=0} b_h lag_h + e_it

Leads beyond ``pretrends`` are binned with the ``K = -1`` reference period,
which avoids the collinearity of a fully dynamic specification without a
never-treated group. Standard errors are clustered by unit. The lag
coefficients mix cohorts whose effects differ at the same horizon, so they
are not the average effect at that horizon under this design.
"""

from __future__ import annotations

import pandas as pd

from .._types import SplitLabels
from ..treatment import LAG_PREFIX, LEAD_PREFIX, indicator_columns
from ._base import BaseEstimator


class TWFEEstimator(BaseEstimator):
    """Event-study OLS with unit and period fixed effects via ``pyfixest.feols``."""

    name = "OLS"
    labels = SplitLabels(lag_prefix=LAG_PREFIX, lead_prefix=LEAD_PREFIX, reference=-1)

    def formula(self, panel: pd.DataFrame) -> str:
        """Regression formula with the lead and lag dummies present in ``panel``."""
        c = self.sim_config
        leads = indicator_columns(panel, LEAD_PREFIX, self.config.pretrends, skip=(1,))
        lags = indicator_columns(panel, LAG_PREFIX)
        terms = " + ".join(leads + lags)
        return f"{c.outcome_col} ~ {terms} | {c.unit_col} + {c.time_col}"

    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        import pyfixest as pf

        fit = pf.feols(
            self.formula(panel),
            data=panel,
            vcov={"CRV1": self.config.cluster_col},
        )
        tidy = fit.tidy()
        keep = [
            name for name in tidy.index
            if str(name).startswith((LEAD_PREFIX, LAG_PREFIX))
        ]
        return tidy.loc[keep]
