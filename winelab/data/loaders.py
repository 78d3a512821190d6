"""
Loading functions for the wine chemical-profile table.

Handles:
- Fetching the remote CSV at execution time (default: UCI wine data)
- Reading a local CSV file
- The copy bundled with scikit-learn, for offline runs
"""

import logging

import pandas as pd
from sklearn.datasets import load_wine

from winelab.config.walkthrough_config import DatasetConfig

from .validators import DatasetError, normalize_column_name, validate_dataset

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

WINE_FEATURES: list[str] = [
    "alcohol",
    "malic_acid",
    "ash",
    "alcalinity_of_ash",
    "magnesium",
    "total_phenols",
    "flavanoids",
    "nonflavanoid_phenols",
    "proanthocyanins",
    "color_intensity",
    "hue",
    "od280_od315_of_diluted_wines",
    "proline",
]

# Cultivar codes of the wine-recognition data
VARIETAL_NAMES: dict[int, str] = {
    1: "Barolo",
    2: "Grignolino",
    3: "Barbera",
}


def load_wine_data(config: DatasetConfig | None = None) -> pd.DataFrame:
    """
    Load the wine table described by a DatasetConfig.

    Parameters:
    -----------
    config : Dataset settings (source, url/path, header, target column)

    Returns:
    --------
    pd.DataFrame : One row per wine, snake_case numeric predictors plus the
        target column holding varietal names

    Raises:
    -------
    DatasetError : If the table fails validation
    FileNotFoundError : If source='file' and the file does not exist
    urllib.error.URLError : If the remote fetch fails
    """
    config = config or DatasetConfig()

    if config.source == "bundled":
        df = _load_bundled(config.target)
    else:
        df = _read_csv(config)

    if config.target not in df.columns:
        raise DatasetError(
            f"Target column '{config.target}' not found in {config.location}; "
            f"columns are {list(df.columns)}"
        )
    df = _label_varietals(df, config.target)

    n_unlabeled = int(df[config.target].isna().sum())
    if n_unlabeled:
        logger.warning(f"Dropping {n_unlabeled} row(s) without a {config.target} label")
        df = df.dropna(subset=[config.target]).reset_index(drop=True)

    validate_dataset(df, config.target)

    logger.info(
        f"Loaded {len(df):,} wines, {df.shape[1] - 1} predictors, "
        f"{df[config.target].nunique()} varietals"
    )
    return df


def _read_csv(config: DatasetConfig) -> pd.DataFrame:
    location = config.location
    if config.source == "file" and not config.path.exists():
        raise FileNotFoundError(f"File not found: {config.path}")

    logger.info(f"Reading wine data from {location}")

    try:
        if config.has_header:
            df = pd.read_csv(location)
            df.columns = [normalize_column_name(c) for c in df.columns]
        else:
            # Header-less UCI layout: class code first, then the 13 measurements
            df = pd.read_csv(location, header=None)
            expected = len(WINE_FEATURES) + 1
            if df.shape[1] != expected:
                raise DatasetError(
                    f"Header-less wine data must have {expected} columns, "
                    f"got {df.shape[1]}"
                )
            df.columns = [config.target] + WINE_FEATURES
    except pd.errors.ParserError as e:
        logger.error(f"Error parsing CSV from {location}: {e}")
        raise DatasetError(f"Could not parse wine data from {location}: {e}") from e
    except pd.errors.EmptyDataError as e:
        raise DatasetError(f"Wine data at {location} is empty") from e

    return df


def _load_bundled(target: str) -> pd.DataFrame:
    logger.info("Loading wine data bundled with scikit-learn")
    bunch = load_wine(as_frame=True)
    df = bunch.data.copy()
    df.columns = [normalize_column_name(c) for c in df.columns]
    # Bundled targets are 0-based cultivar codes
    df.insert(0, target, bunch.target.to_numpy() + 1)
    return df


def _label_varietals(df: pd.DataFrame, target: str) -> pd.DataFrame:
    """Replace numeric cultivar codes with varietal names; leave names untouched."""
    if target not in df.columns:
        return df

    df = df.copy()
    labels = df[target]
    if pd.api.types.is_numeric_dtype(labels):
        codes = labels.dropna().astype(int).unique()
        unknown = sorted(set(codes) - VARIETAL_NAMES.keys())
        if unknown:
            logger.warning(f"Unknown cultivar codes {unknown}; keeping them as text")
        df[target] = labels.map(
            lambda v: VARIETAL_NAMES.get(int(v), str(int(v))) if pd.notna(v) else None
        )
    else:
        df[target] = labels.map(lambda v: str(v).strip() if pd.notna(v) else None)

    return df


def feature_columns(df: pd.DataFrame, target: str) -> list[str]:
    """Predictor columns: everything except the target."""
    return [c for c in df.columns if c != target]


__all__ = [
    "WINE_FEATURES",
    "VARIETAL_NAMES",
    "load_wine_data",
    "feature_columns",
]
