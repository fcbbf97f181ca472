"""Re-key estimator output onto a common relative-time axis.

Estimators label their event-study coefficients differently: some report a
signed relative time directly, others count lags and leads separately and
leave out the normalised reference period. ``align_series`` decodes either
convention into a DataFrame sorted by ``relative_time``.
"""

from __future__ import annotations

import logging
from typing import Mapping

import numpy as np
import pandas as pd

from .._types import ALIGNED_COLUMNS, RawSeries, SignedLabels, SplitLabels
from ..exceptions import DuplicateRelativeTime, MissingReferencePeriod, UnrecognizedLabel

logger = logging.getLogger(__name__)


def _decode_signed(name: str, label) -> int:
    try:
        value = float(label)
    except (TypeError, ValueError):
        raise UnrecognizedLabel(name, f"label {label!r} is not a relative time") from None
    if not np.isfinite(value) or value != int(value):
        raise UnrecognizedLabel(name, f"label {label!r} is not an integer relative time")
    return int(value)


def _decode_split(name: str, label, labels: SplitLabels) -> tuple[str, int]:
    """Return ``("lag" | "lead", relative_time)`` for one split label."""
    text = str(label)
    # Longer prefix first so e.g. "lead" is not read as a "l..." lag
    prefixes = sorted(
        [("lag", labels.lag_prefix), ("lead", labels.lead_prefix)],
        key=lambda kp: len(kp[1]),
        reverse=True,
    )
    for kind, prefix in prefixes:
        suffix = text[len(prefix):]
        if text.startswith(prefix) and suffix.isdigit():
            index = int(suffix)
            if kind == "lag":
                return kind, index + labels.lag_offset
            return kind, -(index + labels.lead_offset)
    raise UnrecognizedLabel(
        name,
        f"label {label!r} matches neither {labels.lag_prefix!r} nor {labels.lead_prefix!r}",
    )


def _check_leads(raw: RawSeries, lead_times: list[int]) -> None:
    """Leads must be contiguous up to -1, apart from the reference period."""
    if not lead_times:
        return
    expected = set(range(min(lead_times), 0))
    missing = sorted(expected - set(lead_times) - {raw.labels.reference})
    if missing:
        raise MissingReferencePeriod(raw.name, missing)


def align_series(raw: RawSeries) -> pd.DataFrame:
    """Place one estimator's output on the signed relative-time axis.

    Parameters
    ----------
    raw : RawSeries
        Labeled estimates and variances in the estimator's own convention.

    Returns
    -------
    pd.DataFrame
        Columns ``relative_time``, ``estimate``, ``variance``, ``is_reference``,
        ascending by ``relative_time``. When the convention names a reference
        period that the estimator did not report, it is added as
        ``(reference, 0, 0, is_reference=True)``.

    Raises
    ------
    DuplicateRelativeTime
        Two labels decode to the same relative time.
    MissingReferencePeriod
        A split-label series skips a lead other than the reference.
    UnrecognizedLabel
        A label cannot be decoded.
    """
    convention = raw.labels
    rows: dict[int, tuple] = {}
    sources: dict[int, list] = {}
    lead_times: list[int] = []

    for label, estimate, variance in raw.entries:
        if isinstance(convention, SplitLabels):
            kind, rel = _decode_split(raw.name, label, convention)
            if kind == "lead":
                lead_times.append(rel)
        elif isinstance(convention, SignedLabels):
            rel = _decode_signed(raw.name, label)
        else:
            raise TypeError(f"Unknown label convention: {type(convention).__name__}")

        sources.setdefault(rel, []).append(label)
        if rel in rows:
            raise DuplicateRelativeTime(raw.name, rel, tuple(sources[rel]))
        rows[rel] = (rel, float(estimate), float(variance), False)

    if isinstance(convention, SplitLabels):
        _check_leads(raw, lead_times)

    ref = convention.reference
    if ref is not None:
        if ref in rows:
            logger.debug("%s reports its reference period %s; keeping the estimate", raw.name, ref)
        else:
            rows[ref] = (ref, 0.0, 0.0, True)

    df = pd.DataFrame(
        [rows[k] for k in sorted(rows)],
        columns=ALIGNED_COLUMNS,
    )
    df = df.astype({
        "relative_time": int,
        "estimate": float,
        "variance": float,
        "is_reference": bool,
    })
    logger.info(
        "Aligned %s: %s points, relative time %s..%s",
        raw.name,
        len(df),
        df["relative_time"].min() if len(df) else None,
        df["relative_time"].max() if len(df) else None,
    )
    return df


def align(outputs: Mapping[str, RawSeries]) -> dict[str, pd.DataFrame]:
    """Align every estimator's output. Keys are kept in input order.

    Any alignment error propagates; see ``pipeline.run_comparison`` for the
    per-estimator isolated variant.
    """
    return {name: align_series(raw) for name, raw in outputs.items()}


def _filter(aligned, keep):
    if isinstance(aligned, pd.DataFrame):
        return aligned[keep(aligned)].reset_index(drop=True)
    return {name: _filter(df, keep) for name, df in aligned.items()}


def trim_leads(aligned, horizon: int = 5):
    """Drop points more than ``horizon`` periods before treatment.

    Accepts one aligned DataFrame or a mapping of them.
    """
    return _filter(aligned, lambda df: df["relative_time"] >= -horizon)


def trim_lags(aligned, horizon: int = 5):
    """Drop points more than ``horizon`` periods after treatment."""
    return _filter(aligned, lambda df: df["relative_time"] <= horizon)
