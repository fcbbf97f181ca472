"""Sequential estimator runs with per-estimator failure isolation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from .._types import EstimationConfig, RawSeries, SimulationConfig
from ._base import BaseEstimator
from .callaway_santanna import CallawaySantAnnaEstimator
from .imputation import ImputationEstimator
from .local_projections import LocalProjectionsEstimator
from .sun_abraham import SunAbrahamEstimator
from .twfe import TWFEEstimator

logger = logging.getLogger(__name__)

ESTIMATORS = {
    "imputation": ImputationEstimator,
    "lpdid": LocalProjectionsEstimator,
    "cs": CallawaySantAnnaEstimator,
    "sa": SunAbrahamEstimator,
    "ols": TWFEEstimator,
}


@dataclass
class EstimationRun:
    """Outputs of one pass over the estimators.

    Attributes
    ----------
    results : dict
        ``{estimator name: RawSeries}`` for estimators that succeeded, in run order.
    failures : dict
        ``{estimator name: exception}`` for estimators that raised.
    timings : dict
        Wall-clock seconds per estimator, successful or not.
    """

    results: dict[str, RawSeries] = field(default_factory=dict)
    failures: dict[str, Exception] = field(default_factory=dict)
    timings: dict[str, float] = field(default_factory=dict)

    def summary(self) -> pd.DataFrame:
        """One row per estimator with status, coefficient count and seconds."""
        rows = []
        for name, seconds in self.timings.items():
            ok = name in self.results
            rows.append({
                "estimator": name,
                "status": "ok" if ok else "failed",
                "n_coefficients": len(self.results[name]) if ok else 0,
                "seconds": round(seconds, 3),
                "error": "" if ok else repr(self.failures.get(name)),
            })
        return pd.DataFrame(rows)


def default_estimators(
    config: EstimationConfig | None = None,
    sim_config: SimulationConfig | None = None,
    keys: Iterable[str] | None = None,
) -> list[BaseEstimator]:
    """Instantiate the registered estimators, optionally a subset by key.

    Keys: ``imputation``, ``lpdid``, ``cs``, ``sa``, ``ols``.
    """
    keys = list(ESTIMATORS) if keys is None else list(keys)
    unknown = [k for k in keys if k not in ESTIMATORS]
    if unknown:
        raise ValueError(f"Unknown estimators: {unknown}. Available: {list(ESTIMATORS)}")
    return [ESTIMATORS[k](config, sim_config) for k in keys]


def run_estimators(
    panel: pd.DataFrame,
    estimators: Iterable[BaseEstimator],
    raise_errors: bool = False,
) -> EstimationRun:
    """Fit each estimator on ``panel`` one after another.

    Parameters
    ----------
    panel : pd.DataFrame
        Estimation panel. Estimators only read it.
    estimators : iterable of BaseEstimator
        Adapters to run, in order.
    raise_errors : bool
        Re-raise the first failure instead of recording it and moving on.

    Returns
    -------
    EstimationRun
    """
    run = EstimationRun()
    for est in estimators:
        logger.info("Running %s", est.name)
        start = time.perf_counter()
        try:
            run.results[est.name] = est.fit(panel)
        except Exception as exc:
            if raise_errors:
                raise
            run.failures[est.name] = exc
            logger.warning("%s failed, omitting it: %s", est.name, exc, exc_info=True)
        finally:
            run.timings[est.name] = time.perf_counter() - start
            logger.info("%s finished in %.2fs", est.name, run.timings[est.name])

    logger.info(
        "Estimation done: %s succeeded, %s failed",
        len(run.results),
        len(run.failures),
    )
    return run
