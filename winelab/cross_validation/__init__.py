"""
Resampling and tuning on the training set.

Each fold preps its own recipe on the fold's analysis rows, so resampled
estimates never see assessment-row statistics.

Main components:
- CrossValidationRunner: stratified v-fold (optionally repeated) resampling
- GridTuner: resamples every candidate in a hyperparameter grid
- PARAM_GRIDS: built-in grids, overridable from config/models/*.yaml

Usage:
    from winelab.cross_validation import CrossValidationRunner, GridTuner

    runner = CrossValidationRunner(config.resampling, config.recipe)
    tuning = GridTuner(runner, metric="roc_auc").tune("svm", X_train, y_train)
    tuning.show_best(3)
"""
from winelab.cross_validation.cv_runner import (
    FOLD_METRICS,
    CrossValidationRunner,
    CVResult,
    FoldMetrics,
)
from winelab.cross_validation.param_grids import PARAM_GRIDS, get_param_grid
from winelab.cross_validation.tuner import GridTuner, TuningResult

__all__ = [
    "FOLD_METRICS",
    "CrossValidationRunner",
    "CVResult",
    "FoldMetrics",
    "PARAM_GRIDS",
    "get_param_grid",
    "GridTuner",
    "TuningResult",
]
