"""
k-NN Model - k-nearest neighbors for varietal prediction.

Uses scikit-learn's KNeighborsClassifier. Predictions are votes among
the closest training wines, so features must be centered and scaled.
"""
from __future__ import annotations

import logging
from typing import Any

from sklearn.neighbors import KNeighborsClassifier

from ..registry import register
from .sklearn_base import SklearnClassifierModel

logger = logging.getLogger(__name__)


@register(
    name="knn",
    family="classical",
    description="k-nearest neighbors classifier",
    aliases=["nearest_neighbors"],
)
class KNNModel(SklearnClassifierModel):
    """k-nearest neighbors classifier tuned over ``n_neighbors`` and ``weights``."""

    name = "knn"

    @property
    def requires_scaling(self) -> bool:
        return True

    def get_default_config(self) -> dict[str, Any]:
        return {
            "n_neighbors": 5,
            "weights": "uniform",
            "p": 2,
            "algorithm": "auto",
        }

    def _build_estimator(
        self, config: dict[str, Any], n_samples: int, n_features: int
    ) -> KNeighborsClassifier:
        n_neighbors = int(config.get("n_neighbors", 5))
        if n_neighbors > n_samples:
            logger.warning(
                f"n_neighbors={n_neighbors} exceeds {n_samples} training rows, "
                f"using {n_samples}"
            )
            n_neighbors = n_samples

        return KNeighborsClassifier(
            n_neighbors=n_neighbors,
            weights=config.get("weights", "uniform"),
            p=config.get("p", 2),
            algorithm=config.get("algorithm", "auto"),
        )

    def _training_metadata(self) -> dict[str, Any]:
        return {
            "n_neighbors": self._model.n_neighbors,
            "weights": self._model.weights,
        }


__all__ = ["KNNModel"]
