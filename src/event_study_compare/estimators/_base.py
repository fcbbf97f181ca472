"""Base class for estimator adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import pandas as pd

from .._types import EstimationConfig, LabelConvention, RawSeries, SimulationConfig

logger = logging.getLogger(__name__)


class BaseEstimator(ABC):
    """Adapter around one third-party event-study estimator.

    Subclasses implement ``_estimate()`` to call the library and return its
    coefficient table (index = labels, ``Estimate`` and ``Std. Error``
    columns). ``fit()`` wraps that table into a ``RawSeries``.

    Parameters
    ----------
    config : EstimationConfig, optional
        Horizons, clustering and bootstrap settings.
    sim_config : SimulationConfig, optional
        Column names of the estimation panel.
    """

    name: str = ""
    labels: LabelConvention

    def __init__(
        self,
        config: EstimationConfig | None = None,
        sim_config: SimulationConfig | None = None,
    ):
        self.config = config or EstimationConfig()
        self.sim_config = sim_config or SimulationConfig()

    @abstractmethod
    def _estimate(self, panel: pd.DataFrame) -> pd.DataFrame:
        """Run the library call and return its coefficient table."""
        ...

    def fit(self, panel: pd.DataFrame) -> RawSeries:
        """Estimate on ``panel`` and return the labeled coefficients.

        Parameters
        ----------
        panel : pd.DataFrame
            Estimation panel from ``EventIndicatorBuilder.build()``.
        """
        table = self._estimate(panel)
        raw = RawSeries.from_table(self.name, table, self.labels)
        logger.info("%s: %s coefficients", self.name, len(raw))
        return raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def effects_table(effects: dict, drop: tuple = ()) -> pd.DataFrame:
    """Coefficient table from a ``{relative_time: {"effect", "se", ...}}`` dict.

    Relative times in ``drop`` (e.g. a normalised base period) are left out.
    """
    rows = {
        rel: {"Estimate": data["effect"], "Std. Error": data["se"]}
        for rel, data in sorted(effects.items())
        if rel not in drop
    }
    return pd.DataFrame.from_dict(rows, orient="index", columns=["Estimate", "Std. Error"])
