"""
Tests for grid tuning.

Tests cover:
- Candidate generation from a grid
- Ranking by the chosen metric (higher is better)
- Best parameters vs. best full configuration
- Grid lookup (YAML over built-in grids)
- Errors for bad grids and metrics
"""
import numpy as np
import pytest

from winelab.cross_validation import (
    PARAM_GRIDS,
    CrossValidationRunner,
    GridTuner,
    get_param_grid,
)


@pytest.fixture
def tuner(quick_resampling):
    return GridTuner(CrossValidationRunner(quick_resampling), metric="accuracy")


class TestGridTuner:
    """Tests for GridTuner.tune."""

    def test_candidate_count(self, tuner, wine_split):
        grid = {"n_neighbors": [3, 9], "weights": ["uniform", "distance"]}
        result = tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid=grid)

        assert result.n_candidates == 4
        assert len(result.candidates) == 4
        assert list(result.candidates["rank"]) == [1, 2, 3, 4]

    def test_candidates_sorted_best_first(self, tuner, wine_split):
        grid = {"var_smoothing": [1e-9, 1e-3, 0.5]}
        result = tuner.tune("naive_bayes", wine_split.X_train, wine_split.y_train, grid=grid)

        scores = result.candidates["mean_accuracy"].to_numpy()
        assert np.all(np.diff(scores) <= 0)
        assert result.best_score == pytest.approx(scores[0])
        assert result.best_result.mean("accuracy") == pytest.approx(scores[0])

    def test_best_params_vs_config(self, tuner, wine_split):
        """best_params holds grid values; best_config adds the shared base."""
        result = tuner.tune(
            "knn", wine_split.X_train, wine_split.y_train,
            grid={"n_neighbors": [5, 7]},
            base_config={"weights": "distance"},
        )

        assert set(result.best_params) == {"n_neighbors"}
        assert result.best_config["weights"] == "distance"
        assert result.best_config["n_neighbors"] == result.best_params["n_neighbors"]

    def test_empty_grid_runs_base_config(self, tuner, wine_split):
        result = tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid={})

        assert result.n_candidates == 1
        assert result.best_params == {}

    def test_table_columns(self, tuner, wine_split):
        result = tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid={"n_neighbors": [5]})
        columns = list(result.candidates.columns)

        assert columns[:2] == ["rank", "n_neighbors"]
        for metric in ("accuracy", "kappa", "f1", "roc_auc"):
            assert f"mean_{metric}" in columns
            assert f"std_{metric}" in columns
        assert result.candidates.loc[0, "n_resamples"] == 3

    def test_show_best_and_to_dict(self, tuner, wine_split):
        result = tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid={"n_neighbors": [3, 5, 7]})

        assert len(result.show_best(2)) == 2
        data = result.to_dict()
        assert data["n_candidates"] == 3
        assert data["metric"] == "accuracy"

    def test_non_list_grid_values(self, tuner, wine_split):
        with pytest.raises(ValueError, match="non-empty list"):
            tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid={"n_neighbors": 5})

    def test_empty_grid_values(self, tuner, wine_split):
        with pytest.raises(ValueError, match="non-empty list"):
            tuner.tune("knn", wine_split.X_train, wine_split.y_train, grid={"n_neighbors": []})

    def test_unknown_metric(self, quick_resampling):
        with pytest.raises(ValueError, match="metric must be one of"):
            GridTuner(CrossValidationRunner(quick_resampling), metric="log_loss")


class TestParamGrids:
    """Tests for grid lookup."""

    def test_every_model_has_grid(self):
        for name in ("random_forest", "svm", "knn", "naive_bayes"):
            grid = get_param_grid(name)
            assert grid
            assert all(isinstance(v, list) and v for v in grid.values())

    def test_alias_resolves(self):
        assert get_param_grid("rf") == get_param_grid("random_forest")

    def test_yaml_grid_wins(self, tmp_path):
        (tmp_path / "knn.yaml").write_text("tuning:\n  grid:\n    n_neighbors: [21]\n")
        assert get_param_grid("knn", config_dir=tmp_path) == {"n_neighbors": [21]}

    def test_builtin_fallback(self, tmp_path):
        assert get_param_grid("svm", config_dir=tmp_path) == PARAM_GRIDS["svm"]

    def test_unknown_model_empty(self, tmp_path):
        assert get_param_grid("mystery", config_dir=tmp_path) == {}
