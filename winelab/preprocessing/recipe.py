"""
Preprocessing recipe.

A recipe is declared once, then prepped (fit) on training rows and baked
(applied) onto any other rows. Prepping only ever sees the rows it is
given, so inside resampling each fold gets its own prepped recipe and the
assessment rows never leak into imputation medians or scaling statistics.

Steps, in order:
1. impute missing predictors (median, mean or k-nearest-neighbors)
2. remove near-zero-variance predictors
3. center and/or scale the remaining predictors
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
from sklearn.impute import KNNImputer, SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from winelab.config.walkthrough_config import RecipeConfig

from .nzv import NearZeroVarianceFilter

if TYPE_CHECKING:
    from winelab.models.base import BaseModel

logger = logging.getLogger(__name__)


class PreparedRecipe:
    """A recipe whose steps have been fit on training data."""

    def __init__(self, recipe: "Recipe", pipeline: Pipeline, feature_names_in: list[str]) -> None:
        self.recipe = recipe
        self.pipeline = pipeline
        self.feature_names_in = feature_names_in

    @property
    def removed_features(self) -> list[str]:
        """Predictors dropped while prepping (all-missing or near-zero variance)."""
        kept = set(self.feature_names_out)
        return [name for name in self.feature_names_in if name not in kept]

    @property
    def feature_names_out(self) -> list[str]:
        if not self.pipeline.steps:
            return list(self.feature_names_in)
        return [str(name) for name in self.pipeline.get_feature_names_out()]

    def bake(self, X: pd.DataFrame) -> pd.DataFrame:
        """Apply the fitted steps to new rows."""
        if not isinstance(X, pd.DataFrame):
            raise TypeError(f"bake() expects a DataFrame, got {type(X).__name__}")
        missing = [c for c in self.feature_names_in if c not in X.columns]
        if missing:
            raise ValueError(f"Cannot bake: columns missing from new data: {missing}")

        X = X[self.feature_names_in]
        if not self.pipeline.steps:
            return X.copy()
        return self.pipeline.transform(X.astype(np.float64))

    def __repr__(self) -> str:
        return (
            f"PreparedRecipe(steps={[name for name, _ in self.pipeline.steps]}, "
            f"n_features_out={len(self.feature_names_out)})"
        )


class Recipe:
    """
    Declarative preprocessing specification.

    Example:
        >>> recipe = Recipe(RecipeConfig(impute="knn"))
        >>> prepped = recipe.prep(X_train)
        >>> X_test_baked = prepped.bake(X_test)
    """

    def __init__(self, config: RecipeConfig | None = None) -> None:
        self.config = config or RecipeConfig()

    def for_model(self, model: "BaseModel") -> "Recipe":
        """
        Resolve ``scaling="auto"`` for a model.

        With auto scaling, models that are insensitive to feature scale
        skip the center/scale step. ``scaling="always"`` returns self.
        """
        if self.config.scaling == "always" or model.requires_scaling:
            return self
        return Recipe(replace(self.config, center=False, scale=False))

    def steps(self) -> list[str]:
        """Human-readable description of each step, in order."""
        cfg = self.config
        described = []
        if cfg.impute == "knn":
            described.append(f"impute missing predictors with {cfg.knn_neighbors}-nearest neighbors")
        elif cfg.impute in ("median", "mean"):
            described.append(f"impute missing predictors with the training {cfg.impute}")
        if cfg.nzv:
            described.append(
                f"remove near-zero-variance predictors "
                f"(freq ratio > {cfg.nzv_freq_cut:g}, unique <= {cfg.nzv_unique_cut:g}%)"
            )
        if cfg.center and cfg.scale:
            described.append("center and scale all predictors")
        elif cfg.center:
            described.append("center all predictors")
        elif cfg.scale:
            described.append("scale all predictors")
        return described

    def _build_pipeline(self) -> Pipeline:
        cfg = self.config
        steps = []
        if cfg.impute == "knn":
            steps.append(("impute", KNNImputer(n_neighbors=cfg.knn_neighbors)))
        elif cfg.impute in ("median", "mean"):
            steps.append(("impute", SimpleImputer(strategy=cfg.impute)))
        if cfg.nzv:
            steps.append(
                ("nzv", NearZeroVarianceFilter(freq_cut=cfg.nzv_freq_cut, unique_cut=cfg.nzv_unique_cut))
            )
        if cfg.center or cfg.scale:
            steps.append(("normalize", StandardScaler(with_mean=cfg.center, with_std=cfg.scale)))

        pipeline = Pipeline(steps)
        return pipeline.set_output(transform="pandas") if steps else pipeline

    def prep(self, X: pd.DataFrame) -> PreparedRecipe:
        """
        Fit every step on the given (training) rows.

        Raises:
            TypeError: If X is not a DataFrame
            ValueError: If X is empty, has non-numeric predictors, or has
                missing values while the recipe does not impute
        """
        if not isinstance(X, pd.DataFrame):
            raise TypeError(f"prep() expects a DataFrame, got {type(X).__name__}")
        if X.empty:
            raise ValueError("Cannot prep a recipe on an empty DataFrame")

        non_numeric = [c for c in X.columns if not pd.api.types.is_numeric_dtype(X[c])]
        if non_numeric:
            raise ValueError(f"Recipe predictors must be numeric, got: {non_numeric}")

        n_missing = int(X.isna().sum().sum())
        if n_missing and self.config.impute == "none":
            raise ValueError(
                f"Training data has {n_missing} missing value(s) but the recipe does "
                f"not impute. Use impute='median'/'mean'/'knn' or drop missing rows."
            )

        pipeline = self._build_pipeline()
        if pipeline.steps:
            pipeline.fit(X.astype(np.float64))

        prepped = PreparedRecipe(self, pipeline, [str(c) for c in X.columns])
        logger.debug(
            f"Prepped recipe on {len(X)} rows: {len(prepped.feature_names_out)} "
            f"predictors kept, removed={prepped.removed_features}"
        )
        return prepped

    def __repr__(self) -> str:
        return f"Recipe(steps={self.steps()})"


__all__ = ["Recipe", "PreparedRecipe"]
