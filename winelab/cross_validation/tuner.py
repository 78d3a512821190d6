"""
Grid tuning with resampling.

Every candidate in a model's grid is resampled with the same folds, and
the candidates are ranked by the mean of one metric (higher is better).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from sklearn.model_selection import ParameterGrid

from .cv_runner import FOLD_METRICS, CrossValidationRunner, CVResult
from .param_grids import get_param_grid

logger = logging.getLogger(__name__)


@dataclass
class TuningResult:
    """
    Outcome of tuning one model.

    Attributes:
        model_name: Registered model name
        metric: Ranking metric
        candidates: One row per candidate with its parameters and the
            mean/std of every resampled metric, best first
        results: CVResult per candidate, in the same order as candidates
        candidate_params: Grid values of each candidate, in the same order
    """
    model_name: str
    metric: str
    candidates: pd.DataFrame
    results: list[CVResult] = field(default_factory=list)
    candidate_params: list[dict[str, Any]] = field(default_factory=list)

    @property
    def best_result(self) -> CVResult:
        return self.results[0]

    @property
    def best_params(self) -> dict[str, Any]:
        """Tuned grid values of the best candidate."""
        return dict(self.candidate_params[0])

    @property
    def best_config(self) -> dict[str, Any]:
        """Full hyperparameters of the best candidate (base config plus tuned values)."""
        return dict(self.best_result.params)

    @property
    def best_score(self) -> float:
        return self.best_result.mean(self.metric)

    @property
    def n_candidates(self) -> int:
        return len(self.results)

    def show_best(self, n: int = 5) -> pd.DataFrame:
        """The n best candidates."""
        return self.candidates.head(n)

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_name": self.model_name,
            "metric": self.metric,
            "n_candidates": self.n_candidates,
            "best_params": self.best_params,
            "best_score": self.best_score,
        }


class GridTuner:
    """
    Resample every combination in a hyperparameter grid.

    Example:
        >>> tuner = GridTuner(CrossValidationRunner(ResamplingConfig(n_splits=5)))
        >>> result = tuner.tune("knn", split.X_train, split.y_train)
        >>> result.best_params
    """

    def __init__(self, runner: CrossValidationRunner, metric: str = "roc_auc") -> None:
        if metric not in FOLD_METRICS:
            raise ValueError(f"metric must be one of {FOLD_METRICS}, got '{metric}'")
        self.runner = runner
        self.metric = metric

    def tune(
        self,
        model_name: str,
        X: pd.DataFrame,
        y: pd.Series,
        grid: dict[str, list[Any]] | None = None,
        base_config: dict[str, Any] | None = None,
    ) -> TuningResult:
        """
        Resample each grid candidate and rank them.

        Args:
            model_name: Registered model name or alias
            X: Training predictors
            y: Training labels
            grid: Parameter name -> candidate values; defaults to the
                model's tuning grid. An empty grid resamples the base
                configuration only.
            base_config: Hyperparameters shared by all candidates

        Returns:
            TuningResult with candidates sorted best first
        """
        if grid is None:
            grid = get_param_grid(model_name)
        for name, values in grid.items():
            if not isinstance(values, (list, tuple)) or not values:
                raise ValueError(f"Grid values for '{name}' must be a non-empty list")

        base = dict(base_config or {})
        candidates = list(ParameterGrid(grid)) if grid else [{}]
        logger.info(f"Tuning {model_name}: {len(candidates)} candidate(s), metric={self.metric}")

        results = []
        rows = []
        for params in candidates:
            cv_result = self.runner.run(
                model_name, X, y, model_config={**base, **params}, keep_predictions=False
            )
            results.append(cv_result)

            row: dict[str, Any] = dict(params)
            for metric in FOLD_METRICS:
                row[f"mean_{metric}"] = cv_result.mean(metric)
                row[f"std_{metric}"] = cv_result.std(metric)
            row["n_resamples"] = cv_result.n_folds
            rows.append(row)

        # Stable sort keeps grid order among ties; NaN scores rank last
        scores = np.array([r[f"mean_{self.metric}"] for r in rows], dtype=np.float64)
        order = np.argsort(np.where(np.isnan(scores), np.inf, -scores), kind="stable")

        table = pd.DataFrame([rows[i] for i in order]).reset_index(drop=True)
        table.insert(0, "rank", np.arange(1, len(table) + 1))
        result = TuningResult(
            model_name=model_name,
            metric=self.metric,
            candidates=table,
            results=[results[i] for i in order],
            candidate_params=[candidates[i] for i in order],
        )
        logger.info(
            f"Best {model_name}: {self.metric}={result.best_score:.4f} "
            f"with {result.best_params or 'default parameters'}"
        )
        return result


__all__ = ["TuningResult", "GridTuner"]
