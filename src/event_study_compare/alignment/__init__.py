"""Normalization of estimator output onto relative time."""

from .aligner import align, align_series, trim_lags, trim_leads

__all__ = ["align", "align_series", "trim_leads", "trim_lags"]
