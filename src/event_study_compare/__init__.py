"""event-study-compare: Compare event-study estimators on a simulated staggered panel."""

from ._types import (
    EstimationConfig,
    RawSeries,
    SignedLabels,
    SimulationConfig,
    SplitLabels,
)
from .alignment import align, align_series, trim_lags, trim_leads
from .exceptions import (
    AlignmentError,
    DuplicateRelativeTime,
    EventStudyError,
    InvalidConfiguration,
    MissingReferencePeriod,
    UnrecognizedLabel,
)
from .simulation import StaggeredSimulator, generate
from .treatment import EventIndicatorBuilder

__all__ = [
    "SimulationConfig",
    "EstimationConfig",
    "RawSeries",
    "SignedLabels",
    "SplitLabels",
    "StaggeredSimulator",
    "generate",
    "EventIndicatorBuilder",
    "align",
    "align_series",
    "trim_leads",
    "trim_lags",
    "EventStudyError",
    "InvalidConfiguration",
    "AlignmentError",
    "DuplicateRelativeTime",
    "MissingReferencePeriod",
    "UnrecognizedLabel",
]

__version__ = "0.1.0"
