"""
ROC curves and multiclass AUC.

Three varietals means three one-vs-rest ROC curves, one per class. The
headline AUC is the Hand & Till generalisation: the macro average of the
pairwise one-vs-one AUCs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from sklearn.metrics import roc_auc_score, roc_curve

logger = logging.getLogger(__name__)

AUC_METHODS = ("hand_till", "ovr")


@dataclass
class RocCurve:
    """One-vs-rest ROC curve for a single class."""

    label: str
    fpr: np.ndarray
    tpr: np.ndarray
    thresholds: np.ndarray
    auc: float

    def to_frame(self) -> pd.DataFrame:
        """Curve points as a DataFrame (specificity = 1 - fpr)."""
        return pd.DataFrame(
            {
                "class": self.label,
                "threshold": self.thresholds,
                "specificity": 1.0 - self.fpr,
                "sensitivity": self.tpr,
            }
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "fpr": self.fpr.tolist(),
            "tpr": self.tpr.tolist(),
            "thresholds": self.thresholds.tolist(),
            "auc": self.auc,
        }


def _check_inputs(
    y_true: np.ndarray | pd.Series,
    probabilities: np.ndarray,
    classes: list[str],
) -> tuple[np.ndarray, np.ndarray]:
    y = np.asarray(y_true, dtype=object).astype(str)
    proba = np.asarray(probabilities, dtype=np.float64)

    if proba.ndim != 2 or proba.shape[1] != len(classes):
        raise ValueError(
            f"probabilities must have shape (n_samples, {len(classes)}), got {proba.shape}"
        )
    if len(y) != proba.shape[0]:
        raise ValueError(
            f"y_true has {len(y)} rows but probabilities has {proba.shape[0]}"
        )
    unknown = sorted(set(y) - set(classes))
    if unknown:
        raise ValueError(f"y_true contains labels {unknown} not in classes {classes}")
    return y, proba


def compute_roc_curves(
    y_true: np.ndarray | pd.Series,
    probabilities: np.ndarray,
    classes: list[str],
) -> list[RocCurve]:
    """
    Compute a one-vs-rest ROC curve for every class.

    Classes absent from y_true get an empty curve with AUC NaN, since
    a curve needs both positives and negatives.

    Args:
        y_true: True varietal labels
        probabilities: Predicted probabilities, columns ordered like `classes`
        classes: Class labels

    Returns:
        One RocCurve per class, in `classes` order
    """
    y, proba = _check_inputs(y_true, probabilities, classes)

    curves = []
    for idx, label in enumerate(classes):
        positives = y == label
        if positives.all() or not positives.any():
            logger.debug(f"ROC curve for '{label}' undefined: one-sided labels")
            empty = np.array([], dtype=np.float64)
            curves.append(RocCurve(label, empty, empty, empty, float("nan")))
            continue

        fpr, tpr, thresholds = roc_curve(positives, proba[:, idx])
        auc = float(roc_auc_score(positives, proba[:, idx]))
        curves.append(RocCurve(label, fpr, tpr, thresholds, auc))

    return curves


def multiclass_roc_auc(
    y_true: np.ndarray | pd.Series,
    probabilities: np.ndarray,
    classes: list[str],
    method: str = "hand_till",
) -> float:
    """
    Multiclass ROC AUC.

    Args:
        y_true: True varietal labels
        probabilities: Predicted probabilities, columns ordered like `classes`
        classes: Class labels
        method: "hand_till" (one-vs-one macro average) or "ovr"
            (one-vs-rest macro average)

    Returns:
        AUC in [0, 1], or NaN when fewer than two classes are present
    """
    if method not in AUC_METHODS:
        raise ValueError(f"method must be one of {AUC_METHODS}, got '{method}'")

    y, proba = _check_inputs(y_true, probabilities, classes)
    present = [c for c in classes if c in set(y)]
    if len(present) < 2:
        logger.warning("ROC AUC undefined with fewer than two classes present")
        return float("nan")

    if len(classes) == 2:
        return float(roc_auc_score(y == classes[1], proba[:, 1]))

    if len(present) < len(classes):
        # roc_auc_score requires every label column to appear in y_true
        aucs = [
            curve.auc for curve in compute_roc_curves(y, proba, classes)
            if not np.isnan(curve.auc)
        ]
        return float(np.mean(aucs))

    # Rows must sum to one for the multiclass scorer
    row_sums = proba.sum(axis=1, keepdims=True)
    row_sums[row_sums == 0] = 1.0
    proba = proba / row_sums

    multi_class = "ovo" if method == "hand_till" else "ovr"
    return float(
        roc_auc_score(y, proba, labels=classes, multi_class=multi_class, average="macro")
    )


__all__ = ["RocCurve", "AUC_METHODS", "compute_roc_curves", "multiclass_roc_auc"]
