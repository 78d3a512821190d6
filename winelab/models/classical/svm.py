"""
SVM Model - Support Vector Machine for varietal prediction.

Uses scikit-learn's SVC with an RBF kernel by default. Probability
estimates come from Platt scaling, so ``probability`` must stay enabled
for ROC curves. Requires centered and scaled features.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from sklearn.svm import SVC

from ..registry import register
from .sklearn_base import SklearnClassifierModel

logger = logging.getLogger(__name__)


@register(
    name="svm",
    family="classical",
    description="Support Vector Machine with radial basis kernel",
    aliases=["svc"],
)
class SVMModel(SklearnClassifierModel):
    """
    Support Vector Machine classifier.

    Tuning parameters are the cost ``C`` and the kernel width ``gamma``.
    """

    name = "svm"

    @property
    def requires_scaling(self) -> bool:
        # Kernel distances are dominated by large-range features otherwise
        return True

    def get_default_config(self) -> dict[str, Any]:
        return {
            "kernel": "rbf",
            "C": 1.0,
            "gamma": "scale",
            "degree": 3,
            "class_weight": None,
            "probability": True,
            "tol": 1e-3,
            "random_state": 42,
        }

    def _build_estimator(
        self, config: dict[str, Any], n_samples: int, n_features: int
    ) -> SVC:
        if not config.get("probability", True):
            logger.warning("SVM probability estimates are required; enabling probability=True")

        return SVC(
            kernel=config.get("kernel", "rbf"),
            C=config.get("C", 1.0),
            gamma=config.get("gamma", "scale"),
            degree=config.get("degree", 3),
            class_weight=config.get("class_weight"),
            probability=True,
            tol=config.get("tol", 1e-3),
            random_state=config.get("random_state", 42),
        )

    def _training_metadata(self) -> dict[str, Any]:
        return {
            "n_support_vectors": int(np.sum(self._model.n_support_)),
            "n_support_per_class": self._model.n_support_.tolist(),
            "kernel": self._model.kernel,
        }

    def get_feature_importance(self) -> dict[str, float] | None:
        """Mean |coef| over the one-vs-one problems; linear kernel only."""
        if not self._is_fitted or self._model.kernel != "linear":
            return None

        coefs = np.abs(self._model.coef_).mean(axis=0)
        return dict(zip(self._feature_labels(len(coefs)), coefs.tolist()))


__all__ = ["SVMModel"]
