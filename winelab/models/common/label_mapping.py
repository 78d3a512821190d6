"""
Varietal names <-> integer class indices.

Estimators are trained on indices into a sorted class list that is fixed
when the model is fit and saved with it, so probability column ``i``
always belongs to ``classes[i]``:

    classes = ["Barbera", "Barolo", "Grignolino"]  ->  0, 1, 2
"""

import numpy as np
import pandas as pd


def fit_classes(y: np.ndarray | pd.Series) -> list[str]:
    """Distinct labels of ``y`` as sorted strings. ValueError on empty or missing labels."""
    labels = pd.Series(np.asarray(y, dtype=object))
    if labels.empty:
        raise ValueError("Cannot fit classes on an empty label array")
    n_missing = int(labels.isna().sum())
    if n_missing:
        raise ValueError(f"Labels contain {n_missing} missing value(s)")
    return sorted({str(v) for v in labels})


def map_labels_to_classes(y: np.ndarray | pd.Series, classes: list[str]) -> np.ndarray:
    """
    Index of each label in ``classes``.

    >>> map_labels_to_classes(np.array(["Barolo", "Barbera"]), ["Barbera", "Barolo"])
    array([1, 0])
    """
    labels = np.asarray(y, dtype=object).astype(str)
    position = pd.Index(classes).get_indexer(labels)
    if (position < 0).any():
        unseen = sorted(set(labels[position < 0]))
        raise ValueError(f"Invalid labels: {unseen}. Expected one of {list(classes)}")
    return position.astype(np.int64)


def map_classes_to_labels(indices: np.ndarray | pd.Series, classes: list[str]) -> np.ndarray:
    """Varietal name for each class index; ValueError for indices outside ``classes``."""
    idx = np.asarray(indices, dtype=np.int64)
    out_of_range = (idx < 0) | (idx >= len(classes))
    if out_of_range.any():
        raise ValueError(
            f"Class indices must be in [0, {len(classes) - 1}], "
            f"got {sorted(set(idx[out_of_range].tolist()))}"
        )
    return np.asarray(classes, dtype=object)[idx]
