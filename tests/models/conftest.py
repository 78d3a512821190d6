"""
Shared fixtures for model tests.
"""
import pytest

from winelab.preprocessing import Recipe


@pytest.fixture
def prepped_split(wine_split):
    """Train/test predictors centered and scaled with training statistics."""
    prepped = Recipe().prep(wine_split.X_train)
    return (
        prepped.bake(wine_split.X_train),
        wine_split.y_train,
        prepped.bake(wine_split.X_test),
        wine_split.y_test,
    )


@pytest.fixture
def fast_model_configs(fast_rf_config):
    """Per-model configs small enough to fit in well under a second."""
    return {
        "random_forest": fast_rf_config,
        "svm": {},
        "knn": {"n_neighbors": 5},
        "naive_bayes": {},
    }
