"""
Hyperparameter grids for grid tuning.

The built-in grids are used when a model's YAML has no ``tuning.grid``
section. Every model must be tunable, so each grid is small enough to
resample in full.
"""
from pathlib import Path
from typing import Any, Dict, List, Optional

from winelab.config.loaders import load_tuning_grid

# =============================================================================
# HYPERPARAMETER GRIDS
# =============================================================================

PARAM_GRIDS: Dict[str, Dict[str, List[Any]]] = {
    "random_forest": {
        "max_features": [2, 4, 6],
        "min_samples_leaf": [1, 5, 10],
    },
    "svm": {
        "C": [0.25, 1.0, 4.0, 16.0],
        "gamma": ["scale", 0.01, 0.1],
    },
    "knn": {
        "n_neighbors": [3, 5, 7, 9, 11, 15],
        "weights": ["uniform", "distance"],
    },
    "naive_bayes": {
        "var_smoothing": [1e-9, 1e-7, 1e-5, 1e-3],
    },
}


def get_param_grid(model_name: str, config_dir: Optional[Path] = None) -> Dict[str, List[Any]]:
    """
    Get the tuning grid for a model.

    The ``tuning.grid`` section of config/models/{model_name}.yaml wins over
    the built-in grid. An unknown model has an empty grid (defaults only).
    """
    from winelab.models.registry import ModelRegistry

    name = model_name.lower()
    if ModelRegistry.is_registered(name):
        name = ModelRegistry.canonical_name(name)

    grid = load_tuning_grid(name, config_dir)
    if grid is not None:
        return grid
    return dict(PARAM_GRIDS.get(name, {}))


__all__ = ["PARAM_GRIDS", "get_param_grid"]
