"""
Walkthrough Configuration - dataclass configs, YAML loading and CLI arg merging.

Precedence: CLI args > explicit YAML file > default YAML > dataclass defaults
"""
from .paths import CONFIG_ROOT, CONFIG_DIR, WALKTHROUGH_CONFIG_PATH, DEFAULT_OUTPUT_DIR
from .exceptions import ConfigError, ConfigValidationError
from .walkthrough_config import (
    DEFAULT_MODELS,
    UCI_WINE_URL,
    DatasetConfig,
    RecipeConfig,
    ResamplingConfig,
    SplitConfig,
    WalkthroughConfig,
)
from .trainer_config import TrainerConfig
from .loaders import (
    load_yaml_config,
    load_model_config,
    flatten_model_config,
    find_model_config,
    load_tuning_grid,
    load_walkthrough_yaml,
)
from .merging import merge_configs, build_model_config, build_walkthrough_config
from .validation import (
    match_model_name,
    validate_model_config_structure,
    validate_walkthrough_config,
    validate_config_strict,
)
from .serialization import save_config, save_config_json

__all__ = [
    # Paths
    "CONFIG_ROOT", "CONFIG_DIR", "WALKTHROUGH_CONFIG_PATH", "DEFAULT_OUTPUT_DIR",
    # Exceptions
    "ConfigError", "ConfigValidationError",
    # Dataclasses
    "DEFAULT_MODELS", "UCI_WINE_URL",
    "DatasetConfig", "SplitConfig", "RecipeConfig", "ResamplingConfig",
    "WalkthroughConfig", "TrainerConfig",
    # Loaders
    "load_yaml_config", "load_model_config", "flatten_model_config",
    "find_model_config", "load_tuning_grid", "load_walkthrough_yaml",
    # Merging
    "merge_configs", "build_model_config", "build_walkthrough_config",
    # Validation
    "validate_model_config_structure", "validate_walkthrough_config",
    "validate_config_strict", "match_model_name",
    # Serialization
    "save_config", "save_config_json",
]
