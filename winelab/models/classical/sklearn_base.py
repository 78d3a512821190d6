"""
Shared fit/predict/persist logic for the scikit-learn backed classifiers.

Each concrete model only decides which estimator to build from its
config; label encoding, metrics, probability-column ordering and joblib
persistence live here.
"""
from __future__ import annotations

import logging
import time
from abc import abstractmethod
from pathlib import Path
from typing import Any

import joblib
import numpy as np
import pandas as pd
from sklearn.base import ClassifierMixin
from sklearn.metrics import accuracy_score, f1_score

from ..base import BaseModel, PredictionOutput, TrainingMetrics
from ..common import fit_classes, map_classes_to_labels, map_labels_to_classes

logger = logging.getLogger(__name__)


class SklearnClassifierModel(BaseModel):
    """Base for models that wrap a single scikit-learn classifier."""

    #: Registry name, used in logs and prediction metadata
    name: str = "sklearn"

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self._model: ClassifierMixin | None = None

    @property
    def model_family(self) -> str:
        return "classical"

    @property
    def estimator(self) -> ClassifierMixin | None:
        """The fitted scikit-learn estimator (None before fit)."""
        return self._model

    @abstractmethod
    def _build_estimator(
        self, config: dict[str, Any], n_samples: int, n_features: int
    ) -> ClassifierMixin:
        """Create an unfitted estimator for the given training shape."""

    def _training_metadata(self) -> dict[str, Any]:
        """Model-specific entries for TrainingMetrics.metadata."""
        return {}

    def fit(
        self,
        X_train: np.ndarray | pd.DataFrame,
        y_train: np.ndarray | pd.Series,
        X_val: np.ndarray | pd.DataFrame | None = None,
        y_val: np.ndarray | pd.Series | None = None,
        config: dict[str, Any] | None = None,
    ) -> TrainingMetrics:
        """
        Train the wrapped estimator.

        The validation set, when given, is only used to report
        validation metrics.
        """
        self._validate_input_shape(X_train, "X_train")
        if X_val is not None:
            self._validate_input_shape(X_val, "X_val")
        if len(X_train) != len(y_train):
            raise ValueError(
                f"X_train has {len(X_train)} rows but y_train has {len(y_train)}"
            )
        start_time = time.time()

        train_config = self._config.copy()
        if config:
            train_config.update(config)

        if isinstance(X_train, pd.DataFrame):
            self._feature_names = [str(c) for c in X_train.columns]

        self._classes = fit_classes(y_train)
        y_train_idx = map_labels_to_classes(y_train, self._classes)
        X_train_arr = self._as_array(X_train)

        self._model = self._build_estimator(
            train_config, n_samples=X_train_arr.shape[0], n_features=X_train_arr.shape[1]
        )
        logger.info(
            f"Training {self.name}: n_samples={X_train_arr.shape[0]}, "
            f"n_features={X_train_arr.shape[1]}, classes={self._classes}"
        )

        self._model.fit(X_train_arr, y_train_idx)
        self._is_fitted = True
        training_time = time.time() - start_time

        train_metrics = self._compute_metrics(X_train, y_train)
        val_metrics = {"accuracy": None, "f1": None}
        if X_val is not None and y_val is not None:
            val_metrics = self._compute_metrics(X_val, y_val)
            logger.info(
                f"Training complete: val_accuracy={val_metrics['accuracy']:.4f}, "
                f"val_f1={val_metrics['f1']:.4f}, time={training_time:.2f}s"
            )
        else:
            logger.info(
                f"Training complete: train_accuracy={train_metrics['accuracy']:.4f}, "
                f"time={training_time:.2f}s"
            )

        return TrainingMetrics(
            train_accuracy=train_metrics["accuracy"],
            train_f1=train_metrics["f1"],
            val_accuracy=val_metrics["accuracy"],
            val_f1=val_metrics["f1"],
            training_time_seconds=training_time,
            metadata={
                "n_features": X_train_arr.shape[1],
                "n_train_samples": X_train_arr.shape[0],
                "n_val_samples": len(X_val) if X_val is not None else 0,
                "classes": list(self._classes),
                **self._training_metadata(),
            },
        )

    def predict(self, X: np.ndarray | pd.DataFrame) -> PredictionOutput:
        """Generate varietal predictions with class probabilities."""
        probabilities = self.predict_proba(X)
        class_indices = np.argmax(probabilities, axis=1)

        return PredictionOutput(
            class_predictions=map_classes_to_labels(class_indices, self._classes),
            class_probabilities=probabilities,
            confidence=np.max(probabilities, axis=1),
            classes=list(self._classes),
            metadata={"model": self.name},
        )

    def predict_proba(self, X: np.ndarray | pd.DataFrame) -> np.ndarray:
        """Return probabilities with one column per fitted class."""
        self._validate_fitted()
        self._validate_input_shape(X, "X")

        raw = self._model.predict_proba(self._as_array(X))

        # Columns follow estimator.classes_, which are indices into self._classes
        probabilities = np.zeros((raw.shape[0], len(self._classes)))
        probabilities[:, self._model.classes_.astype(int)] = raw
        return probabilities

    def save(self, path: Path) -> None:
        """Save estimator and metadata to a directory."""
        self._validate_fitted()
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)

        joblib.dump(self._model, path / "model.joblib")
        joblib.dump(
            {
                "config": self._config,
                "feature_names": self._feature_names,
                "classes": self._classes,
            },
            path / "metadata.joblib",
        )

        logger.info(f"Saved {self.name} model to {path}")

    def load(self, path: Path) -> None:
        """Load estimator and metadata from a directory."""
        path = Path(path)
        model_path = path / "model.joblib"
        if not model_path.exists():
            raise FileNotFoundError(f"Model file not found: {model_path}")

        self._model = joblib.load(model_path)

        metadata_path = path / "metadata.joblib"
        if metadata_path.exists():
            metadata = joblib.load(metadata_path)
            self._config = metadata.get("config", self._config)
            self._feature_names = metadata.get("feature_names")
            self._classes = metadata.get("classes", [])

        if not self._classes:
            self._classes = [str(c) for c in self._model.classes_]

        self._is_fitted = True
        logger.info(f"Loaded {self.name} model from {path}")

    def _feature_labels(self, n: int) -> list[str]:
        return self._feature_names or [f"f{i}" for i in range(n)]

    @staticmethod
    def _as_array(X: np.ndarray | pd.DataFrame) -> np.ndarray:
        return np.asarray(X, dtype=np.float64)

    def _compute_metrics(
        self, X: np.ndarray | pd.DataFrame, y_true: np.ndarray | pd.Series
    ) -> dict[str, float]:
        """Compute accuracy and macro F1 for a dataset."""
        y_pred = self.predict(X).class_predictions
        y_true = np.asarray(y_true, dtype=object).astype(str)

        return {
            "accuracy": float(accuracy_score(y_true, y_pred)),
            "f1": float(f1_score(y_true, y_pred, average="macro", zero_division=0)),
        }


__all__ = ["SklearnClassifierModel"]
