"""
Naive Bayes Model - Gaussian Naive Bayes for varietal prediction.

Each chemical measurement is modeled as a normal distribution per
varietal. Per-class means and variances are estimated independently, so
the model does not depend on feature scale.
"""
from __future__ import annotations

from typing import Any

from sklearn.naive_bayes import GaussianNB

from ..registry import register
from .sklearn_base import SklearnClassifierModel


@register(
    name="naive_bayes",
    family="classical",
    description="Gaussian Naive Bayes classifier",
    aliases=["nb"],
)
class NaiveBayesModel(SklearnClassifierModel):
    name = "naive_bayes"

    @property
    def requires_scaling(self) -> bool:
        return False

    def get_default_config(self) -> dict[str, Any]:
        return {
            "var_smoothing": 1e-9,
            "priors": None,
        }

    def _build_estimator(
        self, config: dict[str, Any], n_samples: int, n_features: int
    ) -> GaussianNB:
        return GaussianNB(
            var_smoothing=float(config.get("var_smoothing", 1e-9)),
            priors=config.get("priors"),
        )

    def _training_metadata(self) -> dict[str, Any]:
        return {
            "class_prior": dict(zip(self._classes, self._model.class_prior_.tolist())),
        }


__all__ = ["NaiveBayesModel"]
