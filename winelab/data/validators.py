"""
Validation functions for the wine table.

Handles:
- Column name normalization
- Target presence and completeness checks
- Predictor dtype checks
"""
import logging
import re

import pandas as pd

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

EXPECTED_N_CLASSES = 3


class DatasetError(ValueError):
    """Raised when the loaded table cannot be used for the walkthrough."""
    pass


def normalize_column_name(name: object) -> str:
    """
    Convert a raw column header to snake_case.

    >>> normalize_column_name("OD280/OD315 of diluted wines")
    'od280_od315_of_diluted_wines'
    """
    text = str(name).strip().lower()
    text = re.sub(r"[^0-9a-z]+", "_", text)
    return text.strip("_")


def validate_dataset(df: pd.DataFrame, target: str) -> None:
    """
    Check that a loaded table is usable.

    Parameters:
    -----------
    df : Loaded wine table
    target : Name of the label column

    Raises:
    -------
    DatasetError : If the table is empty, the target column is missing or
        has unlabeled rows, no predictors remain, or a predictor is not numeric
    """
    if df is None or len(df) == 0:
        raise DatasetError("Dataset is empty")

    if target not in df.columns:
        raise DatasetError(
            f"Target column '{target}' not found. Columns: {list(df.columns)}"
        )

    n_unlabeled = int(df[target].isna().sum())
    if n_unlabeled:
        raise DatasetError(
            f"Target column '{target}' has {n_unlabeled} missing label(s); "
            f"drop unlabeled rows before validation"
        )

    features = [c for c in df.columns if c != target]
    if not features:
        raise DatasetError("Dataset has no predictor columns")

    non_numeric = [c for c in features if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise DatasetError(f"Predictor columns must be numeric, got: {non_numeric}")

    n_classes = df[target].nunique()
    if n_classes < 2:
        raise DatasetError(
            f"Target column '{target}' has {n_classes} class; need at least 2"
        )
    if n_classes != EXPECTED_N_CLASSES:
        logger.warning(
            f"Expected {EXPECTED_N_CLASSES} varietals, found {n_classes}: "
            f"{sorted(df[target].astype(str).unique())}"
        )

    duplicated = [c for c in df.columns[df.columns.duplicated()]]
    if duplicated:
        raise DatasetError(f"Duplicate column names after normalization: {duplicated}")
