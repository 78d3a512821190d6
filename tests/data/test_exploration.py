"""
Tests for the exploration helpers.

Tests cover:
- Feature summaries and class distribution
- Per-varietal profiles
- Correlation matrix and strongest pairs
- The collected ExplorationSummary and its notes
"""
import numpy as np
import pytest

from winelab.data import (
    class_distribution,
    explore,
    feature_correlations,
    summarize_features,
    top_correlated_pairs,
    varietal_profiles,
)


class TestSummaries:
    """Tests for the per-table summaries."""

    def test_summarize_features(self, wine_df):
        summary = summarize_features(wine_df, "varietal")

        assert len(summary) == 13
        assert list(summary.columns) == ["count", "missing", "mean", "std", "min", "median", "max"]
        assert summary.loc["alcohol", "count"] == 178
        assert summary.loc["proline", "min"] <= summary.loc["proline", "median"] <= summary.loc["proline", "max"]

    def test_summarize_counts_missing(self, wine_df_with_missing):
        summary = summarize_features(wine_df_with_missing, "varietal")
        assert summary.loc["alcohol", "missing"] == 3
        assert summary.loc["alcohol", "count"] == 175

    def test_class_distribution(self, wine_df):
        dist = class_distribution(wine_df, "varietal")

        assert dist.index[0] == "Grignolino"
        assert dist["count"].sum() == 178
        assert dist["proportion"].sum() == pytest.approx(1.0)

    def test_varietal_profiles(self, wine_df):
        profiles = varietal_profiles(wine_df, "varietal")

        assert set(profiles.index) == {"Barolo", "Grignolino", "Barbera"}
        assert profiles.shape[1] == 13
        # Barolo wines carry the highest proline
        assert profiles["proline"].idxmax() == "Barolo"


class TestCorrelations:
    """Tests for feature_correlations and top_correlated_pairs."""

    def test_correlation_matrix(self, wine_df):
        corr = feature_correlations(wine_df, "varietal")

        assert corr.shape == (13, 13)
        np.testing.assert_allclose(np.diag(corr), 1.0)
        np.testing.assert_allclose(corr.to_numpy(), corr.to_numpy().T)

    def test_top_pair(self, wine_df):
        """Flavanoids and total phenols are the most correlated pair."""
        pairs = top_correlated_pairs(feature_correlations(wine_df, "varietal"), n=3)

        assert len(pairs) == 3
        assert {pairs.loc[0, "feature_a"], pairs.loc[0, "feature_b"]} == {"total_phenols", "flavanoids"}
        assert pairs["correlation"].abs().is_monotonic_decreasing

    def test_no_self_pairs(self, wine_df):
        pairs = top_correlated_pairs(feature_correlations(wine_df, "varietal"), n=20)
        assert (pairs["feature_a"] != pairs["feature_b"]).all()

    def test_invalid_n(self, wine_df):
        with pytest.raises(ValueError, match="positive"):
            top_correlated_pairs(feature_correlations(wine_df, "varietal"), n=0)


class TestExplore:
    """Tests for explore()."""

    def test_summary_fields(self, wine_df):
        summary = explore(wine_df, "varietal")

        assert summary.n_rows == 178
        assert summary.n_features == 13
        assert summary.n_missing == 0
        assert len(summary.top_pairs) == 5
        assert any("no missing" in note for note in summary.notes)

    def test_notes_mention_missing(self, wine_df_with_missing):
        summary = explore(wine_df_with_missing, "varietal")

        assert summary.n_missing == 5
        assert any("alcohol" in note for note in summary.notes)

    def test_to_dict(self, wine_df):
        data = explore(wine_df, "varietal", n_pairs=2).to_dict()
        assert data["classes"]["Barolo"] == 59
        assert data["n_features"] == 13
