"""
Classification metrics for model evaluation.

Used for every resampling fold and for the single held-out evaluation,
so resampled and test estimates are computed the same way.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from sklearn.metrics import (
    accuracy_score,
    cohen_kappa_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
)

from winelab.evaluation.roc import multiclass_roc_auc


def compute_classification_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    y_proba: np.ndarray | None = None,
    classes: list[str] | None = None,
) -> dict[str, Any]:
    """
    Compute classification metrics.

    Args:
        y_true: True varietal labels
        y_pred: Predicted varietal labels
        y_proba: Predicted probabilities (columns ordered like `classes`);
            when given, the multiclass ROC AUC is included
        classes: Class labels; defaults to the sorted union of y_true and y_pred

    Returns:
        Dict with accuracy, kappa, F1 scores, precision, recall,
        per-class F1, confusion matrix and (optionally) roc_auc
    """
    y_true = np.asarray(y_true, dtype=object).astype(str)
    y_pred = np.asarray(y_pred, dtype=object).astype(str)
    if len(y_true) != len(y_pred):
        raise ValueError(
            f"y_true has {len(y_true)} rows but y_pred has {len(y_pred)}"
        )
    if classes is None:
        classes = sorted(set(y_true) | set(y_pred))

    per_class_f1 = f1_score(y_true, y_pred, average=None, labels=classes, zero_division=0)
    cm = confusion_matrix(y_true, y_pred, labels=classes)

    # Kappa is undefined (NaN with a warning) when both sides hold a single class
    if len(set(y_true) | set(y_pred)) > 1:
        kappa = float(cohen_kappa_score(y_true, y_pred, labels=classes))
    else:
        kappa = float("nan")

    metrics = {
        "accuracy": float(accuracy_score(y_true, y_pred)),
        "kappa": kappa,
        "macro_f1": float(f1_score(y_true, y_pred, average="macro", labels=classes, zero_division=0)),
        "weighted_f1": float(f1_score(y_true, y_pred, average="weighted", labels=classes, zero_division=0)),
        "precision": float(precision_score(y_true, y_pred, average="macro", labels=classes, zero_division=0)),
        "recall": float(recall_score(y_true, y_pred, average="macro", labels=classes, zero_division=0)),
        "per_class_f1": {c: float(f1) for c, f1 in zip(classes, per_class_f1)},
        "confusion_matrix": cm.tolist(),
        "classes": list(classes),
        "n_samples": len(y_true),
    }

    if y_proba is not None:
        metrics["roc_auc"] = multiclass_roc_auc(y_true, y_proba, list(classes))

    return metrics


def confusion_table(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    classes: list[str] | None = None,
) -> pd.DataFrame:
    """
    Confusion matrix as a labeled DataFrame.

    Rows are the true varietal ("Truth"), columns the predicted one
    ("Prediction").
    """
    y_true = np.asarray(y_true, dtype=object).astype(str)
    y_pred = np.asarray(y_pred, dtype=object).astype(str)
    if classes is None:
        classes = sorted(set(y_true) | set(y_pred))

    cm = confusion_matrix(y_true, y_pred, labels=classes)
    return pd.DataFrame(
        cm,
        index=pd.Index(classes, name="Truth"),
        columns=pd.Index(classes, name="Prediction"),
    )


__all__ = [
    "compute_classification_metrics",
    "confusion_table",
]
