"""Tests for the command-line entry point."""

import matplotlib

matplotlib.use("Agg")

import pytest

from event_study_compare import cli
from event_study_compare.estimators import ESTIMATORS


class TestParseArgs:
    def test_defaults(self):
        args = cli.parse_args(["out.png"])
        assert args.output == "out.png"
        assert args.units == 300
        assert args.periods == 15
        assert args.seed == 10
        assert args.estimators == list(ESTIMATORS)
        assert not args.strict

    def test_estimator_subset(self):
        args = cli.parse_args(["out.png", "--estimators", "ols", "cs"])
        assert args.estimators == ["ols", "cs"]

    def test_unknown_estimator_rejected(self):
        with pytest.raises(SystemExit):
            cli.parse_args(["out.png", "--estimators", "dcdh"])


class TestMain:
    def test_writes_chart(self, tmp_path, monkeypatch, fixed_estimator):
        monkeypatch.setattr(cli, "default_estimators", lambda *args, **kwargs: [fixed_estimator])
        out = tmp_path / "chart.png"
        assert cli.main([str(out), "--units", "40"]) == 0
        assert out.exists()

    def test_nothing_aligned_is_error(self, tmp_path, monkeypatch, failing_estimator):
        monkeypatch.setattr(cli, "default_estimators", lambda *args, **kwargs: [failing_estimator])
        assert cli.main([str(tmp_path / "chart.png"), "--units", "40"]) == 1
