"""
Tests for Trainer - final fit and held-out evaluation.

Tests cover:
- Result dictionary contents
- Test-set predictions frame
- Artifact layout on disk
- skip_save and recipe handling
"""
import json

import joblib
import pandas as pd
import pytest

from winelab.config import RecipeConfig, TrainerConfig
from winelab.models import Trainer


@pytest.fixture
def trainer_config(tmp_path, fast_rf_config):
    return TrainerConfig(
        model_name="random_forest",
        model_config=fast_rf_config,
        output_dir=tmp_path / "runs",
    )


# =============================================================================
# RESULTS
# =============================================================================

class TestTrainerResults:
    """Tests for the dictionary returned by Trainer.run."""

    def test_result_keys(self, trainer_config, wine_split):
        results = Trainer(trainer_config).run(wine_split, skip_save=True)

        for key in (
            "run_id", "model_name", "params", "training_metrics", "test_metrics",
            "confusion", "roc_curves", "predictions", "removed_features",
            "feature_importance", "output_path", "total_time_seconds",
        ):
            assert key in results
        assert results["model_name"] == "random_forest"
        assert results["output_path"] is None

    def test_test_metrics(self, trainer_config, wine_split):
        metrics = Trainer(trainer_config).run(wine_split, skip_save=True)["test_metrics"]

        assert metrics["n_samples"] == wine_split.n_test
        assert metrics["accuracy"] > 0.85
        assert metrics["roc_auc"] > 0.9

    def test_confusion_and_roc(self, trainer_config, wine_split):
        results = Trainer(trainer_config).run(wine_split, skip_save=True)

        assert results["confusion"].to_numpy().sum() == wine_split.n_test
        assert [curve.label for curve in results["roc_curves"]] == wine_split.classes

    def test_predictions_frame(self, trainer_config, wine_split):
        predictions = Trainer(trainer_config).run(wine_split, skip_save=True)["predictions"]

        assert list(predictions.columns) == [
            "truth", "prediction", "confidence",
            "prob_Barbera", "prob_Barolo", "prob_Grignolino",
        ]
        assert list(predictions.index) == list(wine_split.X_test.index)
        assert predictions.index.name == "row"

    def test_run_id_prefix(self, tmp_path):
        config = TrainerConfig(model_name="knn", experiment_name="wine_knn", output_dir=tmp_path)
        trainer = Trainer(config)

        assert trainer.run_id.startswith("wine_knn_")
        assert trainer.output_path == tmp_path / trainer.run_id

    def test_auto_scaling_skips_scaler_for_forest(self, tmp_path, fast_rf_config, wine_split):
        config = TrainerConfig(
            model_name="random_forest",
            model_config=fast_rf_config,
            recipe=RecipeConfig(scaling="auto"),
            output_dir=tmp_path,
        )
        trainer = Trainer(config)
        trainer.run(wine_split, skip_save=True)

        step_names = [name for name, _ in trainer.prepared_recipe.pipeline.steps]
        assert "normalize" not in step_names

    def test_removed_features_reported(self, tmp_path, wine_df_with_missing):
        from winelab.data import split_train_test

        split = split_train_test(wine_df_with_missing, "varietal")
        config = TrainerConfig(model_name="naive_bayes", output_dir=tmp_path)
        results = Trainer(config).run(split, skip_save=True)

        assert results["removed_features"] == ["batch"]
        assert results["feature_importance"] is None

    def test_random_seed_applied_when_unset(self, tmp_path):
        config = TrainerConfig(
            model_name="random_forest",
            model_config={"n_estimators": 10},
            random_seed=7,
            output_dir=tmp_path,
        )
        assert Trainer(config).model.config["random_state"] == 7

    def test_explicit_random_state_kept(self, tmp_path):
        config = TrainerConfig(
            model_name="svm",
            model_config={"random_state": 3},
            random_seed=7,
            output_dir=tmp_path,
        )
        assert Trainer(config).model.config["random_state"] == 3

    def test_random_seed_ignored_for_deterministic_model(self, tmp_path):
        config = TrainerConfig(model_name="knn", random_seed=7, output_dir=tmp_path)
        assert "random_state" not in Trainer(config).model.config

    def test_unknown_model(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown model"):
            Trainer(TrainerConfig(model_name="xgboost", output_dir=tmp_path))

    def test_empty_model_name(self):
        with pytest.raises(ValueError, match="non-empty"):
            TrainerConfig(model_name="  ")


# =============================================================================
# ARTIFACTS
# =============================================================================

class TestTrainerArtifacts:
    """Tests for the files written by Trainer.run."""

    def test_artifact_layout(self, trainer_config, wine_split):
        results = Trainer(trainer_config).run(wine_split)
        out = trainer_config.output_dir / results["run_id"]

        assert results["output_path"] == str(out)
        assert (out / "config" / "training_config.json").exists()
        assert (out / "config" / "model_config.json").exists()
        assert (out / "metrics" / "training_metrics.json").exists()
        assert (out / "metrics" / "test_metrics.json").exists()
        assert (out / "metrics" / "feature_importance.json").exists()
        assert (out / "predictions" / "test_predictions.csv").exists()
        assert (out / "checkpoints" / "model" / "model.joblib").exists()
        assert (out / "checkpoints" / "model" / "metadata.joblib").exists()
        assert (out / "checkpoints" / "recipe.joblib").exists()

    def test_saved_metrics_match(self, trainer_config, wine_split):
        results = Trainer(trainer_config).run(wine_split)
        out = trainer_config.output_dir / results["run_id"]

        with open(out / "metrics" / "test_metrics.json") as f:
            saved = json.load(f)
        assert saved["accuracy"] == pytest.approx(results["test_metrics"]["accuracy"])

        predictions = pd.read_csv(out / "predictions" / "test_predictions.csv", index_col="row")
        assert len(predictions) == wine_split.n_test

    def test_saved_recipe_transforms(self, trainer_config, wine_split):
        """The saved recipe pipeline reproduces the baked test predictors."""
        trainer = Trainer(trainer_config)
        results = trainer.run(wine_split)

        pipeline = joblib.load(trainer.output_path / "checkpoints" / "recipe.joblib")
        baked = pipeline.transform(wine_split.X_test)
        pd.testing.assert_frame_equal(baked, trainer.prepared_recipe.bake(wine_split.X_test))
        assert results["output_path"] is not None

    def test_save_disabled_by_config(self, tmp_path, fast_rf_config, wine_split):
        config = TrainerConfig(
            model_name="random_forest",
            model_config=fast_rf_config,
            output_dir=tmp_path / "runs",
            save_artifacts=False,
        )
        results = Trainer(config).run(wine_split)

        assert results["output_path"] is None
        assert not (tmp_path / "runs").exists()
