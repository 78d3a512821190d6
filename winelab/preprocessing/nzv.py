"""
Near-zero-variance filter.

Flags predictors that are constant, or so dominated by one value that
they carry almost no information and can destabilise resampling (a fold
may see only the dominant value).

A column is removed when it has a single distinct value, or when both:
- frequency ratio (most common / second most common count) > freq_cut
- percent of distinct values (of non-missing rows) <= unique_cut
"""
from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

logger = logging.getLogger(__name__)


def near_zero_variance_stats(
    X: pd.DataFrame,
    freq_cut: float = 95 / 5,
    unique_cut: float = 10.0,
) -> pd.DataFrame:
    """
    Per-column statistics behind the near-zero-variance decision.

    Returns:
        DataFrame indexed by column with freq_ratio, percent_unique,
        zero_variance and nzv
    """
    rows = []
    for column in X.columns:
        values = X[column].dropna()
        counts = values.value_counts()
        n_unique = len(counts)

        if n_unique <= 1:
            freq_ratio = np.inf if n_unique == 1 else np.nan
        else:
            freq_ratio = counts.iloc[0] / counts.iloc[1]

        percent_unique = 100.0 * n_unique / len(values) if len(values) else 0.0
        zero_variance = n_unique <= 1
        nzv = zero_variance or (freq_ratio > freq_cut and percent_unique <= unique_cut)

        rows.append(
            {
                "column": column,
                "freq_ratio": float(freq_ratio),
                "percent_unique": float(percent_unique),
                "zero_variance": bool(zero_variance),
                "nzv": bool(nzv),
            }
        )

    return pd.DataFrame(rows).set_index("column")


class NearZeroVarianceFilter(TransformerMixin, BaseEstimator):
    """
    scikit-learn transformer dropping near-zero-variance columns.

    Works on DataFrames and arrays; with ``set_output(transform="pandas")``
    the surviving column names are kept.

    Example:
        >>> nzv = NearZeroVarianceFilter().fit(X_train)
        >>> nzv.removed_features_
        ['constant_col']
    """

    def __init__(self, freq_cut: float = 95 / 5, unique_cut: float = 10.0) -> None:
        self.freq_cut = freq_cut
        self.unique_cut = unique_cut

    def fit(self, X, y=None) -> "NearZeroVarianceFilter":
        frame = self._to_frame(X)
        self.feature_names_in_ = np.asarray(frame.columns, dtype=object)
        self.n_features_in_ = frame.shape[1]

        self.stats_ = near_zero_variance_stats(frame, self.freq_cut, self.unique_cut)
        self.support_ = ~self.stats_["nzv"].to_numpy()
        self.removed_features_ = [
            str(c) for c, keep in zip(frame.columns, self.support_) if not keep
        ]

        if self.removed_features_:
            logger.info(f"Near-zero-variance filter removed: {self.removed_features_}")
        return self

    def transform(self, X):
        check_is_fitted(self, "support_")
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has {X.shape[1]} features, but NearZeroVarianceFilter "
                f"was fitted with {self.n_features_in_}"
            )
        if isinstance(X, pd.DataFrame):
            return X.loc[:, self.support_]
        return np.asarray(X)[:, self.support_]

    def get_feature_names_out(self, input_features=None) -> np.ndarray:
        check_is_fitted(self, "support_")
        names = self.feature_names_in_ if input_features is None else np.asarray(input_features, dtype=object)
        return names[self.support_]

    @staticmethod
    def _to_frame(X) -> pd.DataFrame:
        if isinstance(X, pd.DataFrame):
            return X
        arr = np.asarray(X)
        return pd.DataFrame(arr, columns=[f"x{i}" for i in range(arr.shape[1])])


__all__ = ["NearZeroVarianceFilter", "near_zero_variance_stats"]
