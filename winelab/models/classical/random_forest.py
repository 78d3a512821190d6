"""
Random Forest Model - Ensemble of decision trees for varietal prediction.

Uses scikit-learn's RandomForestClassifier. Trees are insensitive to
feature scale, and the forest exposes Gini feature importances.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sklearn.ensemble import RandomForestClassifier

from ..registry import register
from .sklearn_base import SklearnClassifierModel

logger = logging.getLogger(__name__)


@register(
    name="random_forest",
    family="classical",
    description="Random Forest ensemble of decision trees",
    aliases=["rf"],
)
class RandomForestModel(SklearnClassifierModel):
    """
    Random Forest classifier.

    ``max_features`` plays the role of "mtry" (the number of predictors
    sampled at each split) and is the main tuning parameter.
    """

    name = "random_forest"

    @property
    def requires_scaling(self) -> bool:
        # Random Forest is scale-invariant
        return False

    def get_default_config(self) -> Dict[str, Any]:
        return {
            "n_estimators": 500,
            "max_features": "sqrt",
            "max_depth": None,
            "min_samples_leaf": 1,
            "class_weight": None,
            "bootstrap": True,
            "oob_score": False,
            "n_jobs": -1,
            "random_state": 42,
        }

    def _build_estimator(
        self, config: Dict[str, Any], n_samples: int, n_features: int
    ) -> RandomForestClassifier:
        max_features = config.get("max_features", "sqrt")
        # An integer mtry larger than the surviving predictors is clamped
        if isinstance(max_features, int) and max_features > n_features:
            logger.warning(
                f"max_features={max_features} exceeds {n_features} features, "
                f"using {n_features}"
            )
            max_features = n_features

        return RandomForestClassifier(
            n_estimators=config.get("n_estimators", 500),
            max_features=max_features,
            max_depth=config.get("max_depth"),
            min_samples_leaf=config.get("min_samples_leaf", 1),
            class_weight=config.get("class_weight"),
            bootstrap=config.get("bootstrap", True),
            oob_score=config.get("oob_score", False),
            n_jobs=config.get("n_jobs", -1),
            random_state=config.get("random_state", 42),
        )

    def _training_metadata(self) -> Dict[str, Any]:
        oob_score = getattr(self._model, "oob_score_", None)
        return {
            "n_estimators": self._model.n_estimators,
            "oob_score": float(oob_score) if oob_score is not None else None,
            "feature_importances_available": True,
        }

    def get_feature_importance(self) -> Optional[Dict[str, float]]:
        """Return feature importances (Gini importance)."""
        if not self._is_fitted:
            return None

        importance = self._model.feature_importances_
        return dict(zip(self._feature_labels(len(importance)), importance.tolist()))


__all__ = ["RandomForestModel"]
