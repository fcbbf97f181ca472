"""Visualization of aligned event-study estimates."""

from .comparison import plot_estimator_comparison, render_comparison

__all__ = ["plot_estimator_comparison", "render_comparison"]
