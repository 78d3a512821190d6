"""
Shared fixtures for the wine walkthrough tests.

Provides:
- The wine table bundled with scikit-learn (no network access)
- A copy with injected missing values and a near-constant predictor
- A header-less UCI-layout CSV on disk
- Small, fast walkthrough configurations
"""
import numpy as np
import pandas as pd
import pytest
from sklearn.datasets import load_wine

from winelab.config import (
    DatasetConfig,
    RecipeConfig,
    ResamplingConfig,
    SplitConfig,
    WalkthroughConfig,
)
from winelab.data import load_wine_data, split_train_test

TARGET = "varietal"


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def _bundled_wine() -> pd.DataFrame:
    return load_wine_data(DatasetConfig(source="bundled"))


@pytest.fixture
def wine_df(_bundled_wine) -> pd.DataFrame:
    """The 178-wine table: varietal column plus 13 numeric predictors."""
    return _bundled_wine.copy()


@pytest.fixture
def wine_df_with_missing(wine_df) -> pd.DataFrame:
    """
    Wine table with 5 missing predictor values in 4 rows and a
    near-constant 'batch' predictor (175 zeros, 3 ones).
    """
    df = wine_df.copy()
    df.loc[[0, 5, 10], "alcohol"] = np.nan
    df.loc[[5, 20], "magnesium"] = np.nan

    batch = np.zeros(len(df))
    batch[[2, 60, 140]] = 1.0
    df["batch"] = batch
    return df


@pytest.fixture
def wine_split(wine_df):
    """Default stratified 75/25 split of the bundled table."""
    return split_train_test(wine_df, TARGET, SplitConfig())


@pytest.fixture
def uci_csv(tmp_path):
    """Header-less CSV in the UCI layout (cultivar code first)."""
    bunch = load_wine(as_frame=True)
    df = bunch.data.copy()
    df.insert(0, "class", bunch.target.to_numpy() + 1)
    path = tmp_path / "wine.data"
    df.to_csv(path, header=False, index=False)
    return path


# =============================================================================
# CONFIG FIXTURES
# =============================================================================

@pytest.fixture
def fast_rf_config():
    """Random forest small enough for per-test resampling."""
    return {"n_estimators": 25, "n_jobs": 1, "random_state": 0}


@pytest.fixture
def quick_resampling() -> ResamplingConfig:
    return ResamplingConfig(n_splits=3, n_repeats=1, random_seed=0)


@pytest.fixture
def quick_config(tmp_path, fast_rf_config) -> WalkthroughConfig:
    """Two models, 3-fold resampling, no tuning, outputs under tmp_path."""
    return WalkthroughConfig(
        dataset=DatasetConfig(source="bundled"),
        split=SplitConfig(),
        recipe=RecipeConfig(),
        resampling=ResamplingConfig(n_splits=3),
        models=["random_forest", "knn"],
        model_configs={"random_forest": fast_rf_config},
        tune=False,
        output_dir=tmp_path / "walkthrough",
        write_report=True,
        save_artifacts=True,
    )


@pytest.fixture(scope="session")
def walkthrough_result(tmp_path_factory):
    """
    One quick walkthrough run shared by the report tests.

    Tunes k-NN over a small grid and resamples Naive Bayes; nothing is
    written to disk.
    """
    from winelab.walkthrough import run_walkthrough

    config = WalkthroughConfig(
        dataset=DatasetConfig(source="bundled"),
        resampling=ResamplingConfig(n_splits=3),
        models=["knn", "naive_bayes"],
        model_configs={},
        tune=True,
        output_dir=tmp_path_factory.mktemp("walkthrough_shared"),
        write_report=False,
        save_artifacts=False,
    )
    return run_walkthrough(config)
