"""
Missing-value audit and the blanket drop/impute decision.

The walkthrough makes a single decision for the whole table: either every
row with a missing predictor is dropped up front, or rows are kept and the
recipe imputes them (fit on training rows only).
"""
from __future__ import annotations

import logging

import pandas as pd

from winelab.config.walkthrough_config import MISSING_STRATEGIES

logger = logging.getLogger(__name__)


def missing_value_report(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count missing values per column.

    Returns:
        DataFrame indexed by column with n_missing and pct_missing, sorted
        with the most incomplete columns first; columns without missing
        values are included with zeros
    """
    n_missing = df.isna().sum()
    report = pd.DataFrame(
        {
            "n_missing": n_missing.astype(int),
            "pct_missing": (100.0 * n_missing / len(df)) if len(df) else 0.0,
        }
    )
    report.index.name = "column"
    return report.sort_values("n_missing", ascending=False, kind="stable")


def handle_missing(df: pd.DataFrame, strategy: str, target: str) -> pd.DataFrame:
    """
    Apply the blanket missing-data decision.

    Args:
        df: Wine table
        strategy: "drop" removes every row with a missing value;
            "impute" keeps rows for the recipe to impute
        target: Label column; rows missing the label are always dropped

    Returns:
        New DataFrame with a fresh RangeIndex
    """
    if strategy not in MISSING_STRATEGIES:
        raise ValueError(
            f"strategy must be one of {MISSING_STRATEGIES}, got '{strategy}'"
        )

    n_before = len(df)
    if strategy == "drop":
        result = df.dropna()
    else:
        result = df.dropna(subset=[target])
        n_incomplete = int(result.isna().any(axis=1).sum())
        if n_incomplete:
            logger.info(f"{n_incomplete} row(s) with missing predictors will be imputed")

    n_dropped = n_before - len(result)
    if n_dropped:
        logger.info(
            f"Dropped {n_dropped} of {n_before} row(s) with missing values "
            f"(strategy={strategy})"
        )
    if result.empty:
        raise ValueError(f"No rows left after handling missing values (strategy={strategy})")

    return result.reset_index(drop=True)


__all__ = ["missing_value_report", "handle_missing"]
