"""Estimator comparison plot: every aligned series plus the true effect."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np
import pandas as pd

from ._style import COLORS, default_offsets, get_z, series_style

logger = logging.getLogger(__name__)

CI_STYLES = ("errorbar", "band")


def _resolve_offsets(names: list[str], offsets) -> dict[str, float]:
    if offsets is None:
        return dict(zip(names, default_offsets(len(names))))
    if isinstance(offsets, Mapping):
        return {name: float(offsets.get(name, 0.0)) for name in names}
    offsets = list(offsets)
    if len(offsets) != len(names):
        raise ValueError(f"Got {len(offsets)} offsets for {len(names)} series")
    return dict(zip(names, map(float, offsets)))


def plot_estimator_comparison(
    series: Mapping[str, pd.DataFrame],
    truth: pd.DataFrame | None = None,
    truth_label: str = "True value",
    offsets: Mapping[str, float] | Sequence[float] | None = None,
    ci: float = 0.95,
    ci_style: str = "errorbar",
    event_window: tuple[int, int] | None = None,
    title: str | None = None,
    figsize: tuple[float, float] = (10, 6),
    ax=None,
):
    """Plot aligned event-study estimates side by side.

    Parameters
    ----------
    series : mapping
        ``{name: aligned DataFrame}`` with ``relative_time``, ``estimate``,
        ``variance`` and ``is_reference`` columns. Drawn in mapping order.
    truth : pd.DataFrame, optional
        True effect by ``relative_time`` (``estimate`` column). Drawn first,
        without an interval.
    truth_label : str
        Legend label of the truth series.
    offsets : mapping or sequence, optional
        Horizontal shift per series, by name or in drawing order (truth first).
        Defaults to evenly spaced offsets 0.13 apart, centred on zero.
    ci : float
        Confidence level (0.80, 0.90, 0.95, or 0.99).
    ci_style : str
        ``"errorbar"`` for capped intervals, ``"band"`` for shaded bands.
    event_window : tuple, optional
        ``(min, max)`` relative time shown on the x axis.
    title : str, optional
        Plot title.
    figsize : tuple
        Figure size when a new figure is created.
    ax : matplotlib.axes.Axes, optional
        Axes to plot on. If None, creates new figure.

    Returns
    -------
    matplotlib.figure.Figure
    """
    import matplotlib.pyplot as plt

    if ci_style not in CI_STYLES:
        raise ValueError(f"ci_style must be one of {CI_STYLES}, got {ci_style!r}")
    z = get_z(ci)

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.get_figure()

    names = ([truth_label] if truth is not None else []) + list(series)
    shift = _resolve_offsets(names, offsets)

    if truth is not None:
        ax.plot(
            truth["relative_time"] + shift[truth_label],
            truth["estimate"],
            "o",
            color=COLORS["truth"],
            markersize=7,
            label=truth_label,
        )

    for idx, (name, df) in enumerate(series.items()):
        color, marker = series_style(idx)
        x = df["relative_time"].to_numpy(dtype=float) + shift[name]
        y = df["estimate"].to_numpy(dtype=float)
        is_ref = df["is_reference"].to_numpy(dtype=bool)

        ax.plot(x[~is_ref], y[~is_ref], marker, linestyle="none", color=color, markersize=6, label=name)
        if is_ref.any():
            # Normalisation anchor, not an estimate
            ax.plot(
                x[is_ref], y[is_ref], marker, linestyle="none",
                markerfacecolor="none", color=color, markersize=6, label="_nolegend_",
            )

        var = df["variance"].to_numpy(dtype=float)
        has_ci = ~is_ref & ~np.isnan(var)
        if not has_ci.any():
            continue
        half = z * np.sqrt(var[has_ci])
        if ci_style == "errorbar":
            ax.errorbar(
                x[has_ci], y[has_ci], yerr=half,
                fmt="none", ecolor=color, elinewidth=1.2, capsize=3,
            )
        else:
            ax.fill_between(x[has_ci], y[has_ci] - half, y[has_ci] + half, alpha=0.2, color=color)

    ax.axvline(-0.5, color=COLORS["reference"], linestyle="--", linewidth=1)
    ax.axhline(0, color=COLORS["reference"], linewidth=1)

    if event_window is not None:
        ax.set_xticks(range(event_window[0], event_window[1] + 1))
        ax.set_xlim(event_window[0] - 0.6, event_window[1] + 0.6)

    ax.set_xlabel("Periods since the event", fontsize=12, fontweight="bold")
    ax.set_ylabel("Average causal effect", fontsize=12, fontweight="bold")
    ax.set_title(title or "Event study estimators in a simulated panel", fontsize=13, fontweight="bold")
    ax.legend(frameon=False, ncol=min(3, max(len(names), 1)))

    plt.tight_layout()
    return fig


def render_comparison(
    series: Mapping[str, pd.DataFrame],
    path: str | Path,
    dpi: int = 150,
    **kwargs,
) -> Path:
    """Draw the comparison plot and write it to ``path``, replacing any existing file.

    Parameters
    ----------
    series : mapping
        Aligned series, as for ``plot_estimator_comparison``.
    path : str or Path
        Output image path; the format follows the suffix.
    dpi : int
        Resolution for raster formats.
    **kwargs
        Passed to ``plot_estimator_comparison``.

    Returns
    -------
    Path
    """
    import matplotlib.pyplot as plt

    path = Path(path)
    fig = plot_estimator_comparison(series, **kwargs)
    try:
        fig.savefig(path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    logger.info("Comparison plot written to %s", path)
    return path
