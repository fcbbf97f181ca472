"""Tests for the shared plot style helpers."""

import pytest

from event_study_compare.visualization._style import (
    MARKERS,
    SERIES_COLORS,
    default_offsets,
    get_z,
    series_style,
)


def test_six_series_offsets():
    assert default_offsets(6) == pytest.approx([-0.325, -0.195, -0.065, 0.065, 0.195, 0.325])


def test_single_series_centred():
    assert default_offsets(1) == [0.0]


def test_offsets_distinct():
    offsets = default_offsets(7)
    assert len(set(offsets)) == 7


def test_z_lookup():
    assert get_z(0.95) == 1.96
    with pytest.raises(ValueError):
        get_z(0.5)


def test_series_style_cycles():
    assert series_style(0) == (SERIES_COLORS[0], MARKERS[0])
    assert series_style(len(SERIES_COLORS)) == (SERIES_COLORS[0], MARKERS[0])
