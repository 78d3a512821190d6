"""
Dataclass configurations for the walkthrough stages.

Each stage of the walkthrough (data loading, splitting, the preprocessing
recipe, resampling) has its own small config. WalkthroughConfig bundles
them together with the list of models to compare.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .paths import DEFAULT_OUTPUT_DIR

UCI_WINE_URL = (
    "https://archive.ics.uci.edu/ml/machine-learning-databases/wine/wine.data"
)

DATA_SOURCES = ("url", "file", "bundled")
MISSING_STRATEGIES = ("impute", "drop")
IMPUTE_METHODS = ("median", "mean", "knn", "none")
SCALING_MODES = ("always", "auto")
RANKING_METRICS = ("roc_auc", "accuracy", "kappa", "f1")
DEFAULT_MODELS = ["random_forest", "svm", "knn", "naive_bayes"]


class _SectionConfig:
    """to_dict/from_dict shared by the stage configs."""

    def to_dict(self) -> dict[str, Any]:
        return {k: str(v) if isinstance(v, Path) else v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls(**data)


@dataclass
class DatasetConfig(_SectionConfig):
    """Where the wine table comes from and which column holds the label."""
    source: str = "url"
    url: str = UCI_WINE_URL
    path: Path | None = None
    has_header: bool = False
    target: str = "varietal"
    missing: str = "impute"

    def __post_init__(self) -> None:
        if self.source not in DATA_SOURCES:
            raise ValueError(
                f"source must be one of {DATA_SOURCES}, got '{self.source}'"
            )
        if self.missing not in MISSING_STRATEGIES:
            raise ValueError(
                f"missing must be one of {MISSING_STRATEGIES}, got '{self.missing}'"
            )
        if isinstance(self.path, str):
            self.path = Path(self.path)
        if self.source == "file" and self.path is None:
            raise ValueError("path is required when source='file'")

    @property
    def location(self) -> str:
        """URL or file path handed to the CSV reader."""
        if self.source == "file":
            return str(self.path)
        if self.source == "bundled":
            return "sklearn.datasets.load_wine"
        return self.url


@dataclass
class SplitConfig(_SectionConfig):
    """Initial train/test split settings."""
    test_size: float = 0.25
    stratify: bool = True
    random_seed: int = 42

    def __post_init__(self) -> None:
        if not 0.0 < self.test_size < 1.0:
            raise ValueError(
                f"test_size must be in (0, 1), got {self.test_size}"
            )


@dataclass
class RecipeConfig(_SectionConfig):
    """Preprocessing recipe: impute -> near-zero-variance filter -> center/scale."""
    impute: str = "median"
    knn_neighbors: int = 5
    nzv: bool = True
    nzv_freq_cut: float = 95 / 5
    nzv_unique_cut: float = 10.0
    center: bool = True
    scale: bool = True
    scaling: str = "always"

    def __post_init__(self) -> None:
        if self.impute not in IMPUTE_METHODS:
            raise ValueError(
                f"impute must be one of {IMPUTE_METHODS}, got '{self.impute}'"
            )
        if self.scaling not in SCALING_MODES:
            raise ValueError(
                f"scaling must be one of {SCALING_MODES}, got '{self.scaling}'"
            )
        if self.knn_neighbors <= 0:
            raise ValueError(
                f"knn_neighbors must be positive, got {self.knn_neighbors}"
            )
        if self.nzv_freq_cut <= 1.0:
            raise ValueError(
                f"nzv_freq_cut must be > 1, got {self.nzv_freq_cut}"
            )
        if not 0.0 <= self.nzv_unique_cut <= 100.0:
            raise ValueError(
                f"nzv_unique_cut must be in [0, 100], got {self.nzv_unique_cut}"
            )


@dataclass
class ResamplingConfig(_SectionConfig):
    """V-fold cross-validation settings used inside the training set."""
    n_splits: int = 10
    n_repeats: int = 1
    shuffle: bool = True
    random_seed: int = 42

    def __post_init__(self) -> None:
        if self.n_splits < 2:
            raise ValueError(f"n_splits must be >= 2, got {self.n_splits}")
        if self.n_repeats < 1:
            raise ValueError(f"n_repeats must be >= 1, got {self.n_repeats}")
        if self.n_repeats > 1 and not self.shuffle:
            raise ValueError(
                "shuffle=False cannot be combined with n_repeats > 1; "
                "repeated folds are always reshuffled"
            )

    @property
    def n_resamples(self) -> int:
        return self.n_splits * self.n_repeats


@dataclass
class WalkthroughConfig:
    """Configuration for a full walkthrough run."""
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    split: SplitConfig = field(default_factory=SplitConfig)
    recipe: RecipeConfig = field(default_factory=RecipeConfig)
    resampling: ResamplingConfig = field(default_factory=ResamplingConfig)
    models: list[str] = field(default_factory=lambda: list(DEFAULT_MODELS))
    model_configs: dict[str, dict[str, Any]] = field(default_factory=dict)
    tune: bool = True
    metric: str = "roc_auc"
    final_model: str | None = None
    output_dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR)
    write_report: bool = True
    save_artifacts: bool = True

    def __post_init__(self) -> None:
        if not self.models:
            raise ValueError("models must name at least one model")
        if self.metric not in RANKING_METRICS:
            raise ValueError(
                f"metric must be one of {RANKING_METRICS}, got '{self.metric}'"
            )
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        for key in ("dataset", "split", "recipe", "resampling"):
            data[key] = getattr(self, key).to_dict()
        data["output_dir"] = str(self.output_dir)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WalkthroughConfig":
        """Create WalkthroughConfig from a (possibly partial) nested dictionary."""
        data = dict(data)
        sections = {
            "dataset": DatasetConfig,
            "split": SplitConfig,
            "recipe": RecipeConfig,
            "resampling": ResamplingConfig,
        }
        for key, section_cls in sections.items():
            value = data.get(key)
            if value is None:
                data.pop(key, None)
            elif isinstance(value, dict):
                data[key] = section_cls.from_dict(value)
        return cls(**data)
