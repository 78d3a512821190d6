"""TrainerConfig dataclass for the final fit and held-out evaluation."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .paths import DEFAULT_OUTPUT_DIR
from .walkthrough_config import RecipeConfig


@dataclass
class TrainerConfig:
    """Configuration for fitting one model on the training set (hyperparameters + recipe)."""
    model_name: str
    model_config: dict[str, Any] = field(default_factory=dict)
    recipe: RecipeConfig = field(default_factory=RecipeConfig)
    random_seed: int = 42
    experiment_name: str | None = None
    output_dir: Path = field(default_factory=lambda: DEFAULT_OUTPUT_DIR / "runs")
    save_artifacts: bool = True

    def __post_init__(self) -> None:
        """Validate and convert configuration values."""
        if not self.model_name or not self.model_name.strip():
            raise ValueError("model_name must be a non-empty string")
        if isinstance(self.recipe, dict):
            self.recipe = RecipeConfig(**self.recipe)
        if isinstance(self.output_dir, str):
            self.output_dir = Path(self.output_dir)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "model_name": self.model_name,
            "model_config": self.model_config,
            "recipe": self.recipe.to_dict(),
            "random_seed": self.random_seed,
            "experiment_name": self.experiment_name,
            "output_dir": str(self.output_dir),
            "save_artifacts": self.save_artifacts,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrainerConfig":
        """Create TrainerConfig from dictionary."""
        return cls(**data)
