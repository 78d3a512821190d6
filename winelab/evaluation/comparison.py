"""
Comparison of resampled models.

Works on anything shaped like a CVResult (``mean``/``std`` per metric and a
``params`` dict), so it can be fed tuned or untuned results alike.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

COMPARISON_METRICS = ("accuracy", "kappa", "f1", "roc_auc")


def compare_models(results: Mapping[str, Any], metric: str = "roc_auc") -> pd.DataFrame:
    """
    One row per model with the mean and std of each resampled metric.

    Args:
        results: Model name -> CVResult
        metric: Ranking metric (higher is better)

    Returns:
        DataFrame indexed by model, sorted best first, with NaN scores last
    """
    if metric not in COMPARISON_METRICS:
        raise ValueError(f"metric must be one of {COMPARISON_METRICS}, got '{metric}'")
    if not results:
        raise ValueError("No model results to compare")

    rows = []
    for name, result in results.items():
        row: dict[str, Any] = {"model": name}
        for m in COMPARISON_METRICS:
            row[f"mean_{m}"] = result.mean(m)
            row[f"std_{m}"] = result.std(m)
        row["n_resamples"] = result.n_folds
        row["params"] = dict(result.params)
        rows.append(row)

    table = pd.DataFrame(rows).set_index("model")
    table = table.sort_values(f"mean_{metric}", ascending=False, na_position="last", kind="stable")
    table.insert(0, "rank", np.arange(1, len(table) + 1))
    return table


def best_model(results: Mapping[str, Any], metric: str = "roc_auc") -> str:
    """Name of the model with the highest mean ranking metric."""
    table = compare_models(results, metric)
    best = str(table.index[0])
    if np.isnan(table.iloc[0][f"mean_{metric}"]):
        logger.warning(f"No model has a finite {metric}; picking {best} by order")
    return best


__all__ = ["COMPARISON_METRICS", "compare_models", "best_model"]
