"""Configuration validation functions."""

from typing import Any

from .exceptions import ConfigValidationError
from .walkthrough_config import WalkthroughConfig


def validate_model_config_structure(config: dict[str, Any]) -> list[str]:
    """Validate structured model YAML (checks model/defaults/tuning sections)."""
    errors = []

    if "model" not in config:
        errors.append("Missing required section: 'model'")
    else:
        model_section = config["model"]
        if "name" not in model_section:
            errors.append("Missing required field: model.name")
        if "family" not in model_section:
            errors.append("Missing required field: model.family")

        valid_families = {"classical"}
        if "family" in model_section and model_section["family"] not in valid_families:
            errors.append(
                f"Invalid model.family: {model_section['family']}. "
                f"Must be one of: {valid_families}"
            )

    if "defaults" in config and not isinstance(config["defaults"], dict):
        errors.append("Section 'defaults' must be a mapping")

    tuning = config.get("tuning")
    if tuning is not None:
        grid = tuning.get("grid", {}) if isinstance(tuning, dict) else None
        if not isinstance(grid, dict):
            errors.append("Section 'tuning.grid' must be a mapping")
        else:
            for name, values in grid.items():
                if not isinstance(values, list) or not values:
                    errors.append(f"tuning.grid.{name} must be a non-empty list")

    return errors


def match_model_name(name: str, models: list[str]) -> str | None:
    """Entry of ``models`` naming the same registered model as ``name``, if any."""
    from winelab.models.registry import ModelRegistry

    canonical = ModelRegistry.canonical_name(name)
    for candidate in models:
        if ModelRegistry.is_registered(candidate) and ModelRegistry.canonical_name(candidate) == canonical:
            return candidate
    return None


def validate_walkthrough_config(config: WalkthroughConfig) -> list[str]:
    """Validate cross-field constraints the dataclasses cannot check alone."""
    from winelab.models.registry import ModelRegistry

    errors = []

    for name in config.models:
        if not ModelRegistry.is_registered(name):
            errors.append(
                f"Unknown model '{name}'. Available: {ModelRegistry.list_all()}"
            )

    if len(set(config.models)) != len(config.models):
        errors.append(f"Duplicate model names in {config.models}")

    for name in config.model_configs:
        if name not in config.models:
            errors.append(f"model_configs has settings for unused model '{name}'")

    if config.final_model is not None:
        if not ModelRegistry.is_registered(config.final_model):
            errors.append(
                f"Unknown final_model '{config.final_model}'. Available: {ModelRegistry.list_all()}"
            )
        elif match_model_name(config.final_model, config.models) is None:
            errors.append(
                f"final_model '{config.final_model}' is not in models {config.models}"
            )

    # Each varietal needs a member in every fold
    if config.resampling.n_splits > 50:
        errors.append(
            f"n_splits={config.resampling.n_splits} is too large for a dataset of this size"
        )

    return errors


def validate_config_strict(config: WalkthroughConfig) -> None:
    """Validate config and raise ConfigValidationError if any check fails."""
    errors = validate_walkthrough_config(config)
    if errors:
        raise ConfigValidationError(errors)
