"""
Model Factory - registry-based classifiers for varietal prediction.

Every model wraps a scikit-learn estimator behind the same BaseModel
interface, so resampling, tuning and the final fit never special-case a
model family.

Supported models (family "classical"):
- random_forest: Random Forest
- svm: Support Vector Machine (RBF kernel, probability estimates)
- knn: k-nearest neighbors
- naive_bayes: Gaussian Naive Bayes

Quick Start:
-----------
    # Register a new model
    from winelab.models import BaseModel, register

    @register("my_model", family="classical")
    class MyModel(BaseModel):
        ...

    # Final fit on the training set, one evaluation on the test set
    from winelab.models import Trainer
    from winelab.config import TrainerConfig

    trainer = Trainer(TrainerConfig(model_name="svm", model_config={"C": 4.0}))
    results = trainer.run(split)

Architecture:
------------
    BaseModel: Abstract interface for all models
    ModelRegistry: Plugin system for model registration
    Trainer: Final fit and held-out evaluation

    config/models/*.yaml: Model defaults and tuning grids
"""
from __future__ import annotations

from .base import (
    BaseModel,
    PredictionOutput,
    TrainingMetrics,
)
from .registry import (
    ModelRegistry,
    register,
)

# Import model implementations so they register themselves
from . import classical  # noqa: F401

from .metrics import compute_classification_metrics, confusion_table
from .trainer import Trainer

__all__ = [
    "BaseModel",
    "PredictionOutput",
    "TrainingMetrics",
    "ModelRegistry",
    "register",
    "compute_classification_metrics",
    "confusion_table",
    "Trainer",
]
