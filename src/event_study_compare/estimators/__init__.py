"""Adapters around third-party event-study estimators."""

from ._base import BaseEstimator
from .callaway_santanna import CallawaySantAnnaEstimator
from .imputation import ImputationEstimator
from .local_projections import LocalProjectionsEstimator
from .runner import ESTIMATORS, EstimationRun, default_estimators, run_estimators
from .sun_abraham import SunAbrahamEstimator
from .twfe import TWFEEstimator

__all__ = [
    "BaseEstimator",
    "ImputationEstimator",
    "LocalProjectionsEstimator",
    "CallawaySantAnnaEstimator",
    "SunAbrahamEstimator",
    "TWFEEstimator",
    "ESTIMATORS",
    "EstimationRun",
    "default_estimators",
    "run_estimators",
]
