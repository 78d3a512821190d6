"""
Initial train/test split.

The test set is set aside once, before any preprocessing or resampling,
and is only used for the final evaluation of the chosen model.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pandas as pd
from sklearn.model_selection import train_test_split

from winelab.config.walkthrough_config import SplitConfig

logger = logging.getLogger(__name__)


@dataclass
class DataSplit:
    """Train/test partition of the wine table."""

    X_train: pd.DataFrame
    y_train: pd.Series
    X_test: pd.DataFrame
    y_test: pd.Series
    target: str

    @property
    def feature_names(self) -> list[str]:
        return list(self.X_train.columns)

    @property
    def classes(self) -> list[str]:
        return sorted(str(c) for c in self.y_train.unique())

    @property
    def n_train(self) -> int:
        return len(self.X_train)

    @property
    def n_test(self) -> int:
        return len(self.X_test)

    def summary(self) -> pd.DataFrame:
        """Per-varietal row counts in each partition."""
        table = pd.DataFrame(
            {
                "train": self.y_train.value_counts(),
                "test": self.y_test.value_counts(),
            }
        ).fillna(0).astype(int)
        table.index.name = self.target
        return table.sort_index()

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_train": self.n_train,
            "n_test": self.n_test,
            "target": self.target,
            "classes": self.classes,
            "feature_names": self.feature_names,
        }


def split_train_test(
    df: pd.DataFrame,
    target: str,
    config: SplitConfig | None = None,
) -> DataSplit:
    """
    Split the table into training and test partitions.

    With ``stratify=True`` each varietal keeps roughly the same share in
    both partitions. Row indices are preserved so the partitions can be
    traced back to the source table.

    Raises:
        ValueError: If the target is missing or a class is too small to
            appear in both partitions
    """
    config = config or SplitConfig()
    if target not in df.columns:
        raise ValueError(f"Target column '{target}' not found")

    y = df[target].astype(str)
    X = df.drop(columns=[target])

    if config.stratify:
        smallest = y.value_counts().min()
        if smallest < 2:
            raise ValueError(
                f"Stratified split needs at least 2 rows per varietal, "
                f"smallest class has {smallest}"
            )

    X_train, X_test, y_train, y_test = train_test_split(
        X,
        y,
        test_size=config.test_size,
        stratify=y if config.stratify else None,
        random_state=config.random_seed,
    )

    split = DataSplit(
        X_train=X_train,
        y_train=y_train,
        X_test=X_test,
        y_test=y_test,
        target=target,
    )
    logger.info(
        f"Split {len(df)} wines: train={split.n_train}, test={split.n_test} "
        f"(test_size={config.test_size}, stratified={config.stratify})"
    )
    return split


__all__ = ["DataSplit", "split_train_test"]
