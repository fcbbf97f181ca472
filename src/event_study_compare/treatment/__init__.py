"""Estimation-panel preparation: cohort coding and event-time dummies."""

from .indicators import (
    LAG_PREFIX,
    LEAD_PREFIX,
    EventIndicatorBuilder,
    drop_fully_treated_periods,
    indicator_columns,
    last_cohort_as_control,
)

__all__ = [
    "EventIndicatorBuilder",
    "indicator_columns",
    "drop_fully_treated_periods",
    "last_cohort_as_control",
    "LEAD_PREFIX",
    "LAG_PREFIX",
]
