"""
Classical ML model implementations.

The four model families compared in the walkthrough:
- Random Forest: Ensemble of decision trees
- SVM: Support Vector Machine with RBF kernel
- k-NN: k-nearest neighbors
- Naive Bayes: Gaussian Naive Bayes

All models auto-register with ModelRegistry on import.

Example:
    from winelab.models import ModelRegistry
    model = ModelRegistry.create("random_forest")
"""

from .knn import KNNModel
from .naive_bayes import NaiveBayesModel
from .random_forest import RandomForestModel
from .sklearn_base import SklearnClassifierModel
from .svm import SVMModel

__all__ = [
    "SklearnClassifierModel",
    "RandomForestModel",
    "SVMModel",
    "KNNModel",
    "NaiveBayesModel",
]
