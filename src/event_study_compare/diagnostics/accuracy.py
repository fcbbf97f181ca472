"""Accuracy of each estimator against the simulated ground truth."""

from __future__ import annotations

from typing import Mapping

import numpy as np
import pandas as pd

from ..visualization._style import get_z

ACCURACY_COLUMNS = ["estimator", "n_horizons", "mean_bias", "rmse", "coverage", "mean_se"]


def compare_to_truth(
    aligned: pd.DataFrame,
    truth: pd.DataFrame,
    ci: float = 0.95,
) -> pd.DataFrame:
    """Join one aligned series to the truth on post-treatment horizons.

    Returns one row per shared horizon with ``estimate``, ``true``,
    ``error``, ``se`` and ``covered``. Reference anchors are dropped.
    """
    z = get_z(ci)
    est = aligned[~aligned["is_reference"] & (aligned["relative_time"] >= 0)]
    merged = est.merge(
        truth[["relative_time", "estimate"]].rename(columns={"estimate": "true"}),
        on="relative_time",
        how="inner",
    )
    merged["error"] = merged["estimate"] - merged["true"]
    merged["se"] = np.sqrt(merged["variance"])
    merged["covered"] = (merged["error"].abs() <= z * merged["se"]) & merged["se"].notna()
    return merged[["relative_time", "estimate", "true", "error", "se", "covered"]]


def summarize_accuracy(
    aligned: Mapping[str, pd.DataFrame],
    truth: pd.DataFrame,
    ci: float = 0.95,
) -> pd.DataFrame:
    """Bias, RMSE and CI coverage per estimator over post-treatment horizons.

    Parameters
    ----------
    aligned : mapping
        ``{name: aligned DataFrame}``.
    truth : pd.DataFrame
        Ground truth with ``relative_time`` and ``estimate``.
    ci : float
        Confidence level for coverage.

    Returns
    -------
    pd.DataFrame
        One row per estimator: ``n_horizons``, ``mean_bias``, ``rmse``,
        ``coverage`` (share of horizons whose interval contains the truth),
        ``mean_se``.
    """
    rows = []
    for name, df in aligned.items():
        cmp = compare_to_truth(df, truth, ci=ci)
        n = len(cmp)
        rows.append({
            "estimator": name,
            "n_horizons": n,
            "mean_bias": float(cmp["error"].mean()) if n else np.nan,
            "rmse": float(np.sqrt((cmp["error"] ** 2).mean())) if n else np.nan,
            "coverage": float(cmp["covered"].mean()) if n else np.nan,
            "mean_se": float(cmp["se"].mean()) if n else np.nan,
        })
    return pd.DataFrame(rows, columns=ACCURACY_COLUMNS)
