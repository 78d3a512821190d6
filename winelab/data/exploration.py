"""
Data exploration helpers for the first look at the wine table.

Each function returns a DataFrame so the walkthrough can both log it and
render it into the report.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from .missing import missing_value_report

logger = logging.getLogger(__name__)


def summarize_features(df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Per-predictor count, missing, mean, std, min, median and max."""
    features = df.drop(columns=[target])
    summary = pd.DataFrame(
        {
            "count": features.count(),
            "missing": features.isna().sum(),
            "mean": features.mean(),
            "std": features.std(),
            "min": features.min(),
            "median": features.median(),
            "max": features.max(),
        }
    )
    summary.index.name = "feature"
    return summary


def class_distribution(df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Count and proportion of each varietal, largest first."""
    counts = df[target].value_counts()
    dist = pd.DataFrame({"count": counts, "proportion": counts / counts.sum()})
    dist.index.name = target
    return dist


def varietal_profiles(df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Mean of every predictor within each varietal (rows = varietals)."""
    return df.groupby(target).mean(numeric_only=True)


def feature_correlations(df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Pearson correlation matrix of the predictors (pairwise complete)."""
    return df.drop(columns=[target]).corr(method="pearson")


def top_correlated_pairs(corr: pd.DataFrame, n: int = 5) -> pd.DataFrame:
    """
    The n most strongly correlated predictor pairs by absolute correlation.

    Returns:
        DataFrame with feature_a, feature_b, correlation
    """
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")

    upper = np.triu(np.ones(corr.shape, dtype=bool), k=1)
    pairs = corr.where(upper).stack().dropna().rename("correlation").reset_index()
    pairs.columns = ["feature_a", "feature_b", "correlation"]
    order = pairs["correlation"].abs().sort_values(ascending=False).index
    return pairs.loc[order].head(n).reset_index(drop=True)


@dataclass
class ExplorationSummary:
    """Everything the exploration section shows."""

    n_rows: int
    n_features: int
    features: pd.DataFrame
    classes: pd.DataFrame
    profiles: pd.DataFrame
    correlations: pd.DataFrame
    top_pairs: pd.DataFrame
    missing: pd.DataFrame
    notes: list[str] = field(default_factory=list)

    @property
    def n_missing(self) -> int:
        return int(self.missing["n_missing"].sum())

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_rows": self.n_rows,
            "n_features": self.n_features,
            "n_missing": self.n_missing,
            "classes": self.classes["count"].to_dict(),
            "notes": list(self.notes),
        }


def explore(df: pd.DataFrame, target: str, n_pairs: int = 5) -> ExplorationSummary:
    """Run every exploration helper and collect short narrative notes."""
    classes = class_distribution(df, target)
    correlations = feature_correlations(df, target)
    top_pairs = top_correlated_pairs(correlations, n=n_pairs)
    missing = missing_value_report(df.drop(columns=[target]))

    notes = []
    smallest = classes["proportion"].min()
    largest = classes["proportion"].max()
    notes.append(
        f"{len(classes)} varietals, from {smallest:.0%} to {largest:.0%} of the wines"
    )
    if not top_pairs.empty:
        best = top_pairs.iloc[0]
        notes.append(
            f"strongest correlation: {best['feature_a']} vs {best['feature_b']} "
            f"({best['correlation']:+.2f})"
        )
    n_missing = int(missing["n_missing"].sum())
    if n_missing:
        incomplete = missing[missing["n_missing"] > 0].index.tolist()
        notes.append(f"{n_missing} missing value(s) in {incomplete}")
    else:
        notes.append("no missing predictor values")

    summary = ExplorationSummary(
        n_rows=len(df),
        n_features=df.shape[1] - 1,
        features=summarize_features(df, target),
        classes=classes,
        profiles=varietal_profiles(df, target),
        correlations=correlations,
        top_pairs=top_pairs,
        missing=missing,
        notes=notes,
    )
    for note in notes:
        logger.info(f"Exploration: {note}")
    return summary


__all__ = [
    "summarize_features",
    "class_distribution",
    "varietal_profiles",
    "feature_correlations",
    "top_correlated_pairs",
    "ExplorationSummary",
    "explore",
]
