"""Tests for accuracy against the ground truth."""

import numpy as np
import pandas as pd
import pytest

from event_study_compare.diagnostics import compare_to_truth, summarize_accuracy


@pytest.fixture
def truth():
    return pd.DataFrame({"relative_time": [0, 1, 2], "estimate": [1.0, 2.0, 3.0], "n_obs": [10, 9, 8]})


@pytest.fixture
def aligned():
    return pd.DataFrame({
        "relative_time": [-2, -1, 0, 1, 2],
        "estimate": [0.3, 0.0, 1.1, 2.5, 2.9],
        "variance": [0.01, 0.0, 0.01, 0.01, 0.01],
        "is_reference": [False, True, False, False, False],
    })


class TestCompareToTruth:
    def test_post_treatment_only(self, aligned, truth):
        cmp = compare_to_truth(aligned, truth)
        assert list(cmp["relative_time"]) == [0, 1, 2]

    def test_errors_and_coverage(self, aligned, truth):
        cmp = compare_to_truth(aligned, truth)
        np.testing.assert_allclose(cmp["error"], [0.1, 0.5, -0.1])
        np.testing.assert_allclose(cmp["se"], [0.1, 0.1, 0.1])
        # 0.5 is outside 1.96 * 0.1
        assert list(cmp["covered"]) == [True, False, True]

    def test_missing_horizons_dropped(self, truth):
        partial = pd.DataFrame({
            "relative_time": [0],
            "estimate": [1.0],
            "variance": [0.04],
            "is_reference": [False],
        })
        assert len(compare_to_truth(partial, truth)) == 1


class TestSummarizeAccuracy:
    def test_one_row_per_estimator(self, aligned, truth):
        out = summarize_accuracy({"a": aligned, "b": aligned}, truth)
        assert list(out["estimator"]) == ["a", "b"]
        row = out.iloc[0]
        assert row["n_horizons"] == 3
        assert row["mean_bias"] == pytest.approx(0.5 / 3)
        assert row["rmse"] == pytest.approx(np.sqrt((0.01 + 0.25 + 0.01) / 3))
        assert row["coverage"] == pytest.approx(2 / 3)
        assert row["mean_se"] == pytest.approx(0.1)

    def test_no_overlap_gives_nan(self, truth):
        pre_only = pd.DataFrame({
            "relative_time": [-2, -1],
            "estimate": [0.1, 0.0],
            "variance": [0.01, 0.0],
            "is_reference": [False, True],
        })
        row = summarize_accuracy({"pre": pre_only}, truth).iloc[0]
        assert row["n_horizons"] == 0
        assert np.isnan(row["rmse"])

    def test_empty_mapping(self, truth):
        out = summarize_accuracy({}, truth)
        assert out.empty
        assert "coverage" in out.columns
