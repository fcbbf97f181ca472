"""Tests for the sequential estimator runner."""

import logging

import pytest

from event_study_compare import EstimationConfig, SplitLabels
from event_study_compare.estimators import (
    ESTIMATORS,
    EstimationRun,
    TWFEEstimator,
    default_estimators,
    run_estimators,
)


class TestRunEstimators:
    def test_success(self, estimation_panel, fixed_estimator):
        run = run_estimators(estimation_panel, [fixed_estimator])
        raw = run.results["fixed"]
        assert raw.name == "fixed"
        assert raw.labels == SplitLabels()
        assert raw.entries[0] == ("lead_3", 0.05, pytest.approx(0.01))
        assert run.failures == {}

    def test_failure_isolated(self, estimation_panel, fixed_estimator, failing_estimator):
        run = run_estimators(estimation_panel, [failing_estimator, fixed_estimator])
        assert list(run.results) == ["fixed"]
        assert isinstance(run.failures["broken"], RuntimeError)
        assert set(run.timings) == {"broken", "fixed"}

    def test_failure_logged(self, estimation_panel, failing_estimator, caplog):
        with caplog.at_level(logging.WARNING):
            run_estimators(estimation_panel, [failing_estimator])
        assert "broken failed" in caplog.text

    def test_raise_errors(self, estimation_panel, fixed_estimator, failing_estimator):
        with pytest.raises(RuntimeError, match="blew up"):
            run_estimators(estimation_panel, [fixed_estimator, failing_estimator], raise_errors=True)

    def test_panel_not_modified(self, estimation_panel, fixed_estimator):
        before = estimation_panel.copy()
        run_estimators(estimation_panel, [fixed_estimator])
        assert estimation_panel.equals(before)


class TestEstimationRun:
    def test_summary(self, estimation_panel, fixed_estimator, failing_estimator):
        run = run_estimators(estimation_panel, [fixed_estimator, failing_estimator])
        s = run.summary().set_index("estimator")
        assert s.loc["fixed", "status"] == "ok"
        assert s.loc["fixed", "n_coefficients"] == 4
        assert s.loc["broken", "status"] == "failed"
        assert "blew up" in s.loc["broken", "error"]

    def test_empty_summary(self):
        assert EstimationRun().summary().empty


class TestDefaultEstimators:
    def test_all_registered(self):
        ests = default_estimators()
        assert [type(e) for e in ests] == list(ESTIMATORS.values())
        assert len({e.name for e in ests}) == len(ests)

    def test_subset_keeps_order(self):
        ests = default_estimators(keys=["ols", "cs"])
        assert [e.name for e in ests] == ["OLS", "Callaway-Sant'Anna"]

    def test_config_passed_through(self):
        config = EstimationConfig(horizons=3, pretrends=2)
        (est,) = default_estimators(config, keys=["ols"])
        assert isinstance(est, TWFEEstimator)
        assert est.config is config

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown estimators"):
            default_estimators(keys=["ols", "dcdh"])
