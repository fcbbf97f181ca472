"""End-to-end comparison: simulate, estimate, align, render."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

import pandas as pd

from ._types import EstimationConfig, SimulationConfig
from .alignment import align_series, trim_lags, trim_leads
from .diagnostics import summarize_accuracy
from .estimators import BaseEstimator, EstimationRun, default_estimators, run_estimators
from .exceptions import AlignmentError
from .simulation import StaggeredSimulator
from .treatment import EventIndicatorBuilder
from .visualization import render_comparison

logger = logging.getLogger(__name__)


@dataclass
class ComparisonResult:
    """Everything produced by ``run_comparison``."""

    panel: pd.DataFrame
    truth: pd.DataFrame
    estimation: EstimationRun
    aligned: dict[str, pd.DataFrame]
    failures: dict[str, Exception] = field(default_factory=dict)
    accuracy: pd.DataFrame | None = None
    output_path: Path | None = None


def align_isolated(run: EstimationRun) -> tuple[dict[str, pd.DataFrame], dict[str, Exception]]:
    """Align each successful estimator, omitting the ones whose output is malformed."""
    aligned, failures = {}, {}
    for name, raw in run.results.items():
        try:
            aligned[name] = align_series(raw)
        except AlignmentError as exc:
            failures[name] = exc
            logger.warning("Could not align %s, omitting it: %s", name, exc)
    return aligned, failures


def run_comparison(
    output_path: str | Path,
    n_units: int = 300,
    n_periods: int = 15,
    seed: int = 10,
    sim_config: SimulationConfig | None = None,
    config: EstimationConfig | None = None,
    estimators: Sequence[BaseEstimator] | None = None,
    raise_errors: bool = False,
    **plot_kwargs,
) -> ComparisonResult:
    """Run the full comparison and write one chart to ``output_path``.

    Parameters
    ----------
    output_path : str or Path
        Image file to write; replaced if it exists.
    n_units, n_periods, seed : int
        Simulation size and seed.
    sim_config : SimulationConfig, optional
        Column names and data-generating process.
    config : EstimationConfig, optional
        Horizons, clustering, bootstrap settings.
    estimators : sequence of BaseEstimator, optional
        Adapters to run. Defaults to all five registered estimators.
    raise_errors : bool
        Abort on the first estimator failure instead of omitting it.
    **plot_kwargs
        Passed to ``render_comparison``.

    Returns
    -------
    ComparisonResult
    """
    sim_config = sim_config or SimulationConfig()
    config = config or EstimationConfig()

    sim = StaggeredSimulator(n_units, n_periods, seed, config=sim_config)
    panel = sim.generate()
    truth = sim.ground_truth()

    estimation_panel = EventIndicatorBuilder(panel, sim_config).build()
    if estimators is None:
        estimators = default_estimators(config, sim_config)
    run = run_estimators(estimation_panel, estimators, raise_errors=raise_errors)

    aligned, align_failures = align_isolated(run)
    if align_failures and raise_errors:
        raise next(iter(align_failures.values()))
    aligned = trim_lags(trim_leads(aligned, config.pretrends), config.horizons)
    truth_shown = trim_lags(truth, config.horizons)

    accuracy = summarize_accuracy(aligned, truth_shown)
    for _, row in accuracy.iterrows():
        logger.info(
            "  %s: bias=%.3f rmse=%.3f coverage=%.0f%%",
            row["estimator"], row["mean_bias"], row["rmse"], 100 * row["coverage"],
        )

    plot_kwargs.setdefault("event_window", (-config.pretrends, config.horizons))
    plot_kwargs.setdefault(
        "title",
        f"Event study estimators in a simulated panel ({n_units:,} units, {n_periods} periods)",
    )
    path = render_comparison(aligned, output_path, truth=truth_shown, **plot_kwargs)

    return ComparisonResult(
        panel=panel,
        truth=truth,
        estimation=run,
        aligned=aligned,
        failures={**run.failures, **align_failures},
        accuracy=accuracy,
        output_path=path,
    )
