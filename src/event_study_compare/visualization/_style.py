"""Shared visualization style and color palette."""

from __future__ import annotations

COLORS = {
    "truth": "#1D1D1D",
    "reference": "#9E9E9E",
    "highlight": "#E63946",
}

# One color per estimator series, in plotting order
SERIES_COLORS = [
    "#E07A5F",
    "#3D405B",
    "#81B29A",
    "#F2CC8F",
    "#3498db",
    "#9b59b6",
    "#2ecc71",
]

MARKERS = ["o", "s", "D", "^", "v", "P", "X"]

# z-values by confidence level
Z_VALUES = {
    0.80: 1.282,
    0.90: 1.645,
    0.95: 1.960,
    0.99: 2.576,
}

# Horizontal gap between neighbouring series sharing an x value
OFFSET_STEP = 0.13


def get_z(ci: float) -> float:
    """Get z-value for a confidence level."""
    if ci in Z_VALUES:
        return Z_VALUES[ci]
    raise ValueError(f"Unsupported CI level: {ci}. Use one of {list(Z_VALUES.keys())}")


def default_offsets(n_series: int, step: float = OFFSET_STEP) -> list[float]:
    """Evenly spaced offsets centred on zero, e.g. -0.325..0.325 for six series."""
    center = (n_series - 1) / 2
    return [round((k - center) * step, 10) for k in range(n_series)]


def series_style(index: int) -> tuple[str, str]:
    """``(color, marker)`` for the series at position ``index``."""
    return SERIES_COLORS[index % len(SERIES_COLORS)], MARKERS[index % len(MARKERS)]

