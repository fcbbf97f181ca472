"""Tests for StaggeredSimulator."""

import logging

import numpy as np
import pandas as pd
import pytest

from event_study_compare import InvalidConfiguration, SimulationConfig, StaggeredSimulator, generate

EXPECTED_COLUMNS = ["i", "t", "Ei", "K", "D", "Y"]


class TestGenerate:
    def test_output_columns(self, panel):
        assert list(panel.columns) == EXPECTED_COLUMNS

    def test_balanced_row_count(self, panel):
        assert len(panel) == 40 * 15
        counts = panel.groupby("i")["t"].nunique()
        assert (counts == 15).all()

    def test_same_seed_identical(self):
        df1 = generate(50, 15, seed=3)
        df2 = generate(50, 15, seed=3)
        pd.testing.assert_frame_equal(df1, df2)

    def test_different_seed_differs(self):
        df1 = generate(50, 15, seed=3)
        df2 = generate(50, 15, seed=4)
        assert not df1["Y"].equals(df2["Y"])

    def test_adoption_constant_within_unit(self, panel):
        assert (panel.groupby("i")["Ei"].nunique(dropna=False) == 1).all()

    def test_adoption_in_window(self, panel):
        assert panel["Ei"].between(9, 15).all()

    def test_relative_time_arithmetic(self, panel):
        np.testing.assert_array_equal(panel["K"], panel["t"] - panel["Ei"])

    def test_treatment_indicator(self, panel):
        expected = (panel["Ei"].notna() & (panel["t"] >= panel["Ei"])).astype(int)
        assert (panel["D"] == expected).all()

    def test_outcome_equation(self, panel):
        # Y minus the deterministic part is the noise draw
        noise = panel["Y"] - (panel["i"] + 3 * panel["t"] + (panel["t"] - 12.5) * panel["D"])
        assert abs(noise.mean()) < 0.2
        assert 0.8 < noise.std() < 1.2

    def test_panel_property_caches(self, simulator):
        assert simulator.panel is simulator.panel


class TestNeverTreated:
    def test_share_of_never_treated(self):
        config = SimulationConfig(never_treated_share=0.25)
        df = StaggeredSimulator(40, 15, seed=2, config=config).generate()
        units = df.drop_duplicates("i")
        assert units["Ei"].isna().sum() == 10

    def test_relative_time_undefined_iff_adoption_undefined(self):
        config = SimulationConfig(never_treated_share=0.25)
        df = StaggeredSimulator(40, 15, seed=2, config=config).generate()
        assert (df["K"].isna() == df["Ei"].isna()).all()
        assert (df.loc[df["Ei"].isna(), "D"] == 0).all()


class TestGroundTruth:
    def test_columns(self, simulator):
        truth = simulator.ground_truth()
        assert list(truth.columns) == ["relative_time", "estimate", "n_obs"]

    def test_horizons_are_post_treatment(self, simulator):
        truth = simulator.ground_truth()
        assert truth["relative_time"].min() == 0
        assert truth["relative_time"].max() == 15 - simulator.panel["Ei"].min()

    def test_matches_effect_function(self, simulator, panel):
        truth = simulator.ground_truth().set_index("relative_time")
        for h in truth.index:
            rows = panel[panel["K"] == h]
            assert truth.loc[h, "estimate"] == pytest.approx((rows["t"] - 12.5).mean())
            assert truth.loc[h, "n_obs"] == len(rows)

    def test_independent_of_noise(self):
        base = StaggeredSimulator(100, 15, seed=7)
        redrawn = StaggeredSimulator(100, 15, seed=7, noise_seed=99)
        assert not base.panel["Y"].equals(redrawn.panel["Y"])
        pd.testing.assert_frame_equal(base.ground_truth(), redrawn.ground_truth())

    def test_reference_scenario_increasing(self):
        sim = StaggeredSimulator(300, 15, seed=10)
        df = sim.generate()
        truth = sim.ground_truth()
        truth = truth[truth["relative_time"].between(0, 5)]

        assert list(truth["relative_time"]) == [0, 1, 2, 3, 4, 5]
        assert (np.diff(truth["estimate"]) > 0).all()
        for h, value in zip(truth["relative_time"], truth["estimate"]):
            assert value == pytest.approx((df.loc[df["K"] == h, "t"] - 12.5).mean())

    def test_custom_effect_function(self):
        config = SimulationConfig(treatment_effect=lambda t: np.full(np.shape(t), 2.0))
        truth = StaggeredSimulator(30, 15, seed=1, config=config).ground_truth()
        assert (truth["estimate"] == 2.0).all()


class TestSummary:
    def test_summary_returns_dataframe(self, simulator):
        s = simulator.summary()
        assert isinstance(s, pd.DataFrame)
        assert s.iloc[0]["n_obs"] == 600
        assert s.iloc[0]["n_units"] == 40
        assert s.iloc[0]["n_never_treated"] == 0


class TestValidation:
    @pytest.mark.parametrize("n_units,n_periods", [(0, 15), (-3, 15), (10, 0), (10, -1)])
    def test_non_positive_sizes(self, n_units, n_periods):
        with pytest.raises(InvalidConfiguration):
            StaggeredSimulator(n_units, n_periods, seed=1)

    def test_window_starts_after_last_period(self):
        config = SimulationConfig(adoption_window=3, adoption_end=25)
        with pytest.raises(InvalidConfiguration, match="after the last period"):
            StaggeredSimulator(10, 15, seed=1, config=config)

    def test_window_before_first_period_warns(self, caplog):
        with caplog.at_level(logging.WARNING):
            df = generate(10, 5, seed=1)
        assert "before the first period" in caplog.text
        assert len(df) == 10 * 5
        assert df["Ei"].between(-1, 5).all()
        assert (df.loc[df["Ei"] <= 1, "D"] == 1).all()

    def test_bad_never_treated_share(self):
        with pytest.raises(InvalidConfiguration):
            StaggeredSimulator(10, 15, seed=1, config=SimulationConfig(never_treated_share=1.0))

    def test_seed_required(self):
        with pytest.raises(InvalidConfiguration, match="seed"):
            StaggeredSimulator(10, 15, seed=None)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            StaggeredSimulator(0, 15, seed=1)
