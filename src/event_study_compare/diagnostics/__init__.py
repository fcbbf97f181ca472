"""Diagnostics comparing estimates with the known truth."""

from .accuracy import compare_to_truth, summarize_accuracy

__all__ = ["compare_to_truth", "summarize_accuracy"]
