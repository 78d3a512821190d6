"""
Cross-Validation Runner.

Estimates how a model will perform on new wines using only the training
set: the training rows are repeatedly split into analysis and assessment
rows (stratified v-fold), a fresh recipe is prepped on each fold's
analysis rows, and a fresh model is fit and scored on the assessment rows.
The held-out test set is never passed to this module.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from dataclasses import asdict, dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from sklearn.model_selection import RepeatedStratifiedKFold, StratifiedKFold

from winelab.config.walkthrough_config import RecipeConfig, ResamplingConfig
from winelab.models.metrics import compute_classification_metrics
from winelab.models.registry import ModelRegistry
from winelab.preprocessing.recipe import Recipe

logger = logging.getLogger(__name__)

FOLD_METRICS = ("accuracy", "kappa", "f1", "roc_auc")


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class FoldMetrics:
    """Metrics from a single resample."""
    fold: int
    repeat: int
    train_size: int
    val_size: int
    accuracy: float
    kappa: float
    f1: float
    roc_auc: float
    training_time: float
    removed_features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CVResult:
    """
    Results from resampling one model configuration.

    Attributes:
        model_name: Registered model name
        params: Hyperparameters the model was fit with
        fold_metrics: Per-resample metrics
        oof_predictions: Assessment-row predictions (row, fold, repeat,
            truth, prediction and one probability column per class)
        total_time: Wall time in seconds
    """
    model_name: str
    params: dict[str, Any]
    fold_metrics: list[FoldMetrics]
    oof_predictions: pd.DataFrame = field(default_factory=pd.DataFrame)
    total_time: float = 0.0

    @property
    def n_folds(self) -> int:
        return len(self.fold_metrics)

    def values(self, metric: str) -> np.ndarray:
        """Per-resample values of a metric."""
        if metric not in FOLD_METRICS:
            raise ValueError(f"Unknown metric '{metric}'. Available: {FOLD_METRICS}")
        return np.array([getattr(m, metric) for m in self.fold_metrics], dtype=np.float64)

    def mean(self, metric: str) -> float:
        values = self.values(metric)
        return float(np.nanmean(values)) if np.isfinite(values).any() else float("nan")

    def std(self, metric: str) -> float:
        values = self.values(metric)
        if np.isfinite(values).sum() < 2:
            return 0.0
        return float(np.nanstd(values, ddof=1))

    def std_err(self, metric: str) -> float:
        n = int(np.isfinite(self.values(metric)).sum())
        return self.std(metric) / np.sqrt(n) if n else float("nan")

    @property
    def mean_accuracy(self) -> float:
        return self.mean("accuracy")

    @property
    def mean_roc_auc(self) -> float:
        return self.mean("roc_auc")

    def summary(self) -> dict[str, dict[str, float]]:
        """Mean, standard deviation and standard error of every metric."""
        return {
            metric: {
                "mean": self.mean(metric),
                "std": self.std(metric),
                "std_err": self.std_err(metric),
            }
            for metric in FOLD_METRICS
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per resample."""
        frame = pd.DataFrame([m.to_dict() for m in self.fold_metrics])
        if not frame.empty:
            frame.insert(0, "model", self.model_name)
        return frame

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_name": self.model_name,
            "params": self.params,
            "n_folds": self.n_folds,
            "summary": self.summary(),
            "total_time": self.total_time,
            "fold_metrics": [m.to_dict() for m in self.fold_metrics],
        }


# =============================================================================
# RUNNER
# =============================================================================

class CrossValidationRunner:
    """
    Resample a model on the training set with a fold-local recipe.

    Example:
        >>> runner = CrossValidationRunner(ResamplingConfig(n_splits=5))
        >>> result = runner.run("knn", split.X_train, split.y_train)
        >>> result.mean("roc_auc")
    """

    def __init__(
        self,
        resampling: ResamplingConfig | None = None,
        recipe: RecipeConfig | None = None,
    ) -> None:
        self.resampling = resampling or ResamplingConfig()
        self.recipe = Recipe(recipe)

    def split(
        self, X: pd.DataFrame, y: pd.Series
    ) -> Iterator[tuple[int, int, np.ndarray, np.ndarray]]:
        """
        Yield (repeat, fold, analysis_idx, assessment_idx) positional indices.

        Raises:
            ValueError: If a varietal has fewer rows than n_splits
        """
        cfg = self.resampling
        smallest = pd.Series(np.asarray(y)).value_counts().min()
        if smallest < cfg.n_splits:
            raise ValueError(
                f"n_splits={cfg.n_splits} is larger than the smallest varietal "
                f"({smallest} rows) in the training set"
            )

        if cfg.n_repeats > 1:
            splitter = RepeatedStratifiedKFold(
                n_splits=cfg.n_splits,
                n_repeats=cfg.n_repeats,
                random_state=cfg.random_seed,
            )
        else:
            splitter = StratifiedKFold(
                n_splits=cfg.n_splits,
                shuffle=cfg.shuffle,
                random_state=cfg.random_seed if cfg.shuffle else None,
            )

        for i, (analysis_idx, assessment_idx) in enumerate(splitter.split(X, y)):
            yield i // cfg.n_splits, i % cfg.n_splits, analysis_idx, assessment_idx

    def run(
        self,
        model_name: str,
        X: pd.DataFrame,
        y: pd.Series,
        model_config: dict[str, Any] | None = None,
        keep_predictions: bool = True,
    ) -> CVResult:
        """
        Resample one model configuration.

        Args:
            model_name: Registered model name or alias
            X: Training predictors
            y: Training varietal labels
            model_config: Hyperparameter overrides
            keep_predictions: Collect assessment-row predictions

        Returns:
            CVResult with one FoldMetrics per resample
        """
        if not isinstance(X, pd.DataFrame):
            raise TypeError(f"X must be a DataFrame, got {type(X).__name__}")
        y = pd.Series(np.asarray(y, dtype=object).astype(str), index=X.index, name="truth")
        if len(X) != len(y):
            raise ValueError(f"X has {len(X)} rows but y has {len(y)}")

        params = dict(model_config or {})
        start_time = time.time()
        fold_metrics: list[FoldMetrics] = []
        predictions: list[pd.DataFrame] = []

        logger.info(
            f"Resampling {model_name}: {self.resampling.n_splits}-fold x "
            f"{self.resampling.n_repeats} repeat(s), params={params}"
        )

        for repeat, fold, analysis_idx, assessment_idx in self.split(X, y):
            fold_start = time.time()
            model = ModelRegistry.create(model_name, config=params)

            prepped = self.recipe.for_model(model).prep(X.iloc[analysis_idx])
            X_analysis = prepped.bake(X.iloc[analysis_idx])
            X_assessment = prepped.bake(X.iloc[assessment_idx])
            y_analysis = y.iloc[analysis_idx]
            y_assessment = y.iloc[assessment_idx]

            model.fit(X_analysis, y_analysis)
            output = model.predict(X_assessment)
            metrics = compute_classification_metrics(
                y_assessment.to_numpy(),
                output.class_predictions,
                output.class_probabilities,
                classes=output.classes,
            )

            fold_metrics.append(
                FoldMetrics(
                    fold=fold,
                    repeat=repeat,
                    train_size=len(analysis_idx),
                    val_size=len(assessment_idx),
                    accuracy=metrics["accuracy"],
                    kappa=metrics["kappa"],
                    f1=metrics["macro_f1"],
                    roc_auc=metrics["roc_auc"],
                    training_time=time.time() - fold_start,
                    removed_features=prepped.removed_features,
                )
            )

            if keep_predictions:
                fold_preds = pd.DataFrame(
                    output.class_probabilities,
                    index=X.index[assessment_idx],
                    columns=[f"prob_{c}" for c in output.classes],
                )
                fold_preds.insert(0, "prediction", output.class_predictions)
                fold_preds.insert(0, "truth", y_assessment.to_numpy())
                fold_preds.insert(0, "fold", fold)
                fold_preds.insert(0, "repeat", repeat)
                predictions.append(fold_preds)

            logger.debug(
                f"  {model_name} repeat={repeat} fold={fold}: "
                f"accuracy={metrics['accuracy']:.4f}, roc_auc={metrics['roc_auc']:.4f}"
            )

        result = CVResult(
            model_name=model_name,
            params=params,
            fold_metrics=fold_metrics,
            oof_predictions=pd.concat(predictions) if predictions else pd.DataFrame(),
            total_time=time.time() - start_time,
        )
        logger.info(
            f"{model_name}: accuracy={result.mean('accuracy'):.4f} "
            f"(+/- {result.std('accuracy'):.4f}), "
            f"roc_auc={result.mean('roc_auc'):.4f}, time={result.total_time:.1f}s"
        )
        return result


__all__ = ["FOLD_METRICS", "FoldMetrics", "CVResult", "CrossValidationRunner"]
