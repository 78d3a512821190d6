"""
Common interface of the varietal classifiers.

The resampling runner, the tuner and the Trainer only talk to models
through BaseModel, so adding a classifier means subclassing it (usually via
SklearnClassifierModel) and registering the class with ModelRegistry.

Predictions and training results travel in two small containers:
PredictionOutput and TrainingMetrics.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np


@dataclass
class PredictionOutput:
    """
    Labels and probabilities for a batch of wines.

    ``class_probabilities`` has one column per entry of ``classes``, in the
    same order; ``confidence`` is the row-wise maximum of those columns.
    """
    class_predictions: np.ndarray
    class_probabilities: np.ndarray
    confidence: np.ndarray
    classes: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        n = len(self.class_predictions)
        for label, arr in (("class_probabilities", self.class_probabilities), ("confidence", self.confidence)):
            if len(arr) != n:
                raise ValueError(f"{label} has {len(arr)} rows, expected {n}")
        if self.classes and self.class_probabilities.shape[1] != len(self.classes):
            raise ValueError(
                f"{self.class_probabilities.shape[1]} probability columns for "
                f"{len(self.classes)} classes"
            )

    @property
    def n_samples(self) -> int:
        return len(self.class_predictions)


@dataclass
class TrainingMetrics:
    """
    Outcome of one fit() call.

    The ``val_*`` fields stay None for fits without a validation set, which
    is the case for the final model trained on the whole training split.
    """
    train_accuracy: float
    train_f1: float
    training_time_seconds: float
    val_accuracy: Optional[float] = None
    val_f1: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.training_time_seconds < 0:
            raise ValueError(f"negative training time: {self.training_time_seconds}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BaseModel(ABC):
    """
    A multi-class classifier over the wine chemistry predictors.

    ``config`` is the default hyperparameters updated with whatever the
    caller passed. Labels are kept as the varietal strings seen in fit();
    ``classes`` gives their probability-column order.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self._config = {**self.get_default_config(), **(config or {})}
        self._is_fitted = False
        self._classes: List[str] = []
        self._feature_names: Optional[List[str]] = None

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def is_fitted(self) -> bool:
        return self._is_fitted

    @property
    def classes(self) -> List[str]:
        return list(self._classes)

    @property
    @abstractmethod
    def model_family(self) -> str:
        """Registry family, e.g. "classical"."""

    @property
    @abstractmethod
    def requires_scaling(self) -> bool:
        """True for distance and kernel methods that need centred, scaled inputs."""

    @abstractmethod
    def get_default_config(self) -> Dict[str, Any]:
        """Hyperparameters used when the caller leaves them unset."""

    @abstractmethod
    def fit(
        self,
        X_train: np.ndarray,
        y_train: np.ndarray,
        X_val: Optional[np.ndarray] = None,
        y_val: Optional[np.ndarray] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> TrainingMetrics:
        """
        Train on (X_train, y_train), scoring on the optional validation set.

        ``config`` overrides hyperparameters for this call only.
        """

    @abstractmethod
    def predict(self, X: np.ndarray) -> PredictionOutput:
        """Labels, probabilities and confidence; RuntimeError before fit()."""

    @abstractmethod
    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Probability matrix with columns in ``classes`` order."""

    @abstractmethod
    def save(self, path: Path) -> None:
        """Persist a fitted model under the directory ``path``."""

    @abstractmethod
    def load(self, path: Path) -> None:
        """Restore a model written by save(); FileNotFoundError if absent."""

    def get_feature_importance(self) -> Optional[Dict[str, float]]:
        """Predictor -> importance, for models that expose one. None otherwise."""
        return None

    def _validate_input_shape(self, X: np.ndarray, context: str = "input") -> None:
        shape = np.shape(X)
        if len(shape) != 2:
            raise ValueError(f"{context} must be 2D (n_samples, n_features), got shape {shape}")
        if shape[0] == 0:
            raise ValueError(f"{context} has no rows")

    def _validate_fitted(self) -> None:
        if not self._is_fitted:
            raise RuntimeError(f"{type(self).__name__} is not fitted; call fit() first")

    def __repr__(self) -> str:
        state = "fitted" if self._is_fitted else "unfitted"
        return f"{type(self).__name__}({self.model_family}, {state})"


__all__ = ["PredictionOutput", "TrainingMetrics", "BaseModel"]
