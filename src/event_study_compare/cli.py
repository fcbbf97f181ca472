"""Command-line entry point: write the estimator comparison chart."""

from __future__ import annotations

import argparse
import logging
import sys

from ._types import EstimationConfig, SimulationConfig
from .estimators import ESTIMATORS, default_estimators
from .pipeline import run_comparison


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="event-study-compare",
        description="Compare event-study estimators on a simulated staggered-adoption panel",
    )
    parser.add_argument("output", help="Image file to write (replaced if it exists)")
    parser.add_argument("--units", type=int, default=300, help="Number of units")
    parser.add_argument("--periods", type=int, default=15, help="Number of periods")
    parser.add_argument("--seed", type=int, default=10, help="Simulation seed")
    parser.add_argument("--horizons", type=int, default=5, help="Post-treatment horizons shown")
    parser.add_argument("--pretrends", type=int, default=5, help="Pre-treatment leads shown")
    parser.add_argument(
        "--bootstrap",
        type=int,
        default=0,
        help="Bootstrap replications for estimators that support it (0 = analytical SEs)",
    )
    parser.add_argument(
        "--estimators",
        nargs="+",
        choices=list(ESTIMATORS),
        default=list(ESTIMATORS),
        help="Estimators to run, in plotting order",
    )
    parser.add_argument(
        "--never-treated-share",
        type=float,
        default=0.0,
        help="Fraction of units that are never treated",
    )
    parser.add_argument("--strict", action="store_true", help="Abort on the first estimator failure")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sim_config = SimulationConfig(never_treated_share=args.never_treated_share)
    config = EstimationConfig(
        horizons=args.horizons,
        pretrends=args.pretrends,
        n_bootstrap=args.bootstrap,
        seed=args.seed,
    )
    result = run_comparison(
        args.output,
        n_units=args.units,
        n_periods=args.periods,
        seed=args.seed,
        sim_config=sim_config,
        config=config,
        estimators=default_estimators(config, sim_config, args.estimators),
        raise_errors=args.strict,
    )
    for name, exc in result.failures.items():
        logging.getLogger(__name__).error("%s omitted: %s", name, exc)
    return 1 if not result.aligned else 0


if __name__ == "__main__":
    sys.exit(main())
