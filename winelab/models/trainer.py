"""
Trainer - final fit and held-out evaluation.

The Trainer handles the last stage of the walkthrough:
1. Prep the recipe on the full training set
2. Fit the chosen model with its chosen hyperparameters
3. Evaluate once on the held-out test set
4. Save artifacts (model, fitted recipe, config, metrics, predictions)

Example:
    >>> from winelab.models.trainer import Trainer
    >>> from winelab.config import TrainerConfig
    >>> from winelab.data import load_wine_data, split_train_test
    ...
    >>> df = load_wine_data()
    >>> split = split_train_test(df, target="varietal")
    >>> trainer = Trainer(TrainerConfig(model_name="random_forest"))
    >>> results = trainer.run(split)
    >>> print(results["test_metrics"]["roc_auc"])
"""
from __future__ import annotations

import json
import logging
import secrets
import time
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict

import joblib
import pandas as pd

from winelab.config.serialization import save_config_json
from winelab.config.trainer_config import TrainerConfig
from winelab.evaluation.roc import compute_roc_curves
from winelab.preprocessing.recipe import PreparedRecipe, Recipe

from .base import PredictionOutput
from .metrics import compute_classification_metrics, confusion_table
from .registry import ModelRegistry

if TYPE_CHECKING:
    from winelab.data.splits import DataSplit

logger = logging.getLogger(__name__)


class Trainer:
    """
    Final fit of one model on the training split, scored once on the test split.

    Attributes:
        config: Model name, hyperparameters, recipe and output settings
        model: Unfitted model created through the registry
        recipe: Recipe adjusted to the model's scaling needs
        prepared_recipe: Recipe prepped on the training split (after run())
        run_id: "<experiment or model>_<timestamp>_<hex>"
        output_path: output_dir / run_id
    """

    ARTIFACT_DIRS = ("config", "checkpoints", "predictions", "metrics")

    def __init__(self, config: TrainerConfig) -> None:
        self.config = config
        self.model = ModelRegistry.create(config.model_name, config=config.model_config)
        # Seed only stochastic models whose params leave random_state unset
        if "random_state" in self.model.config and "random_state" not in config.model_config:
            self.model.config["random_state"] = config.random_seed
        self.recipe = Recipe(config.recipe).for_model(self.model)
        self.prepared_recipe: PreparedRecipe | None = None

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self.run_id = f"{config.experiment_name or config.model_name}_{stamp}_{secrets.token_hex(2)}"
        self.output_path = config.output_dir / self.run_id
        logger.info(f"Trainer ready: {config.model_name} (run {self.run_id})")

    def run(self, split: "DataSplit", skip_save: bool | None = None) -> Dict[str, Any]:
        """
        Prep, fit, predict the test set and optionally write artifacts.

        Args:
            split: Train/test partition
            skip_save: Overrides ``config.save_artifacts`` when given

        Returns:
            Dict with run_id, model_name, params, training_metrics,
            test_metrics, confusion (Truth x Prediction), roc_curves,
            predictions, removed_features, feature_importance, output_path
            (None when nothing was written) and total_time_seconds
        """
        started = time.time()
        save = self.config.save_artifacts if skip_save is None else not skip_save

        self.prepared_recipe = self.recipe.prep(split.X_train)
        if self.prepared_recipe.removed_features:
            logger.info(f"Recipe dropped: {self.prepared_recipe.removed_features}")
        X_train = self.prepared_recipe.bake(split.X_train)
        logger.info(f"Fitting {self.config.model_name}: {X_train.shape[0]} wines x {X_train.shape[1]} predictors")
        training_metrics = self.model.fit(X_train, split.y_train)

        truth = split.y_test.to_numpy()
        output = self.model.predict(self.prepared_recipe.bake(split.X_test))
        test_metrics = compute_classification_metrics(
            y_true=truth,
            y_pred=output.class_predictions,
            y_proba=output.class_probabilities,
            classes=output.classes,
        )
        logger.info(
            f"Held-out {len(truth)} wines: accuracy={test_metrics['accuracy']:.4f} "
            f"kappa={test_metrics['kappa']:.4f} roc_auc={test_metrics['roc_auc']:.4f}"
        )

        results = {
            "run_id": self.run_id,
            "model_name": self.config.model_name,
            "params": dict(self.config.model_config),
            "training_metrics": training_metrics.to_dict(),
            "test_metrics": test_metrics,
            "confusion": confusion_table(truth, output.class_predictions, output.classes),
            "roc_curves": compute_roc_curves(truth, output.class_probabilities, output.classes),
            "predictions": self._predictions_frame(split, output),
            "removed_features": self.prepared_recipe.removed_features,
            "feature_importance": self.model.get_feature_importance(),
            "output_path": None,
        }
        if save:
            self._write_artifacts(results)
            results["output_path"] = str(self.output_path)

        results["total_time_seconds"] = time.time() - started
        logger.info(f"Final fit done in {results['total_time_seconds']:.1f}s")
        return results

    @staticmethod
    def _predictions_frame(split: "DataSplit", output: PredictionOutput) -> pd.DataFrame:
        """One row per test wine: truth, prediction, confidence, prob_<class>..."""
        probs = pd.DataFrame(
            output.class_probabilities,
            index=split.X_test.index,
            columns=[f"prob_{c}" for c in output.classes],
        )
        head = pd.DataFrame(
            {
                "truth": split.y_test.to_numpy(),
                "prediction": output.class_predictions,
                "confidence": output.confidence,
            },
            index=split.X_test.index,
        )
        frame = pd.concat([head, probs], axis=1)
        frame.index.name = "row"
        return frame

    def _write_json(self, relative: str, data: Any) -> None:
        with open(self.output_path / relative, "w") as f:
            json.dump(data, f, indent=2)

    def _write_artifacts(self, results: Dict[str, Any]) -> None:
        """
        Layout under output_path:
            config/      training_config.json, model_config.json
            metrics/     training_metrics.json, test_metrics.json, feature_importance.json
            predictions/ test_predictions.csv
            checkpoints/ model/, recipe.joblib
        """
        for name in self.ARTIFACT_DIRS:
            (self.output_path / name).mkdir(parents=True, exist_ok=True)

        save_config_json(self.config.to_dict(), self.output_path / "config" / "training_config.json")
        save_config_json(self.config.model_config, self.output_path / "config" / "model_config.json")

        self._write_json("metrics/training_metrics.json", results["training_metrics"])
        self._write_json("metrics/test_metrics.json", results["test_metrics"])
        if results["feature_importance"]:
            self._write_json("metrics/feature_importance.json", results["feature_importance"])

        results["predictions"].to_csv(self.output_path / "predictions" / "test_predictions.csv")

        checkpoints = self.output_path / "checkpoints"
        self.model.save(checkpoints / "model")
        joblib.dump(self.prepared_recipe.pipeline, checkpoints / "recipe.joblib")
        logger.info(f"Artifacts written to {self.output_path}")


__all__ = ["Trainer", "TrainerConfig"]
