"""
Data stage: load the wine table, audit it, explore it and split it.

Usage:
    from winelab.data import load_wine_data, explore, split_train_test

    df = load_wine_data(DatasetConfig(source="bundled"))
    summary = explore(df, target="varietal")
    split = split_train_test(df, target="varietal")
"""
from .exploration import (
    ExplorationSummary,
    class_distribution,
    explore,
    feature_correlations,
    summarize_features,
    top_correlated_pairs,
    varietal_profiles,
)
from .loaders import VARIETAL_NAMES, WINE_FEATURES, feature_columns, load_wine_data
from .missing import handle_missing, missing_value_report
from .splits import DataSplit, split_train_test
from .validators import DatasetError, normalize_column_name, validate_dataset

__all__ = [
    "WINE_FEATURES",
    "VARIETAL_NAMES",
    "load_wine_data",
    "feature_columns",
    "DatasetError",
    "validate_dataset",
    "normalize_column_name",
    "handle_missing",
    "missing_value_report",
    "ExplorationSummary",
    "explore",
    "summarize_features",
    "class_distribution",
    "varietal_profiles",
    "feature_correlations",
    "top_correlated_pairs",
    "DataSplit",
    "split_train_test",
]
