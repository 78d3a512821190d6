"""
Evaluation: ROC curves, multiclass AUC and model comparison.
"""
from .comparison import COMPARISON_METRICS, best_model, compare_models
from .roc import AUC_METHODS, RocCurve, compute_roc_curves, multiclass_roc_auc

__all__ = [
    "AUC_METHODS",
    "RocCurve",
    "compute_roc_curves",
    "multiclass_roc_auc",
    "COMPARISON_METRICS",
    "compare_models",
    "best_model",
]
