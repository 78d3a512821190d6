"""
YAML loading for the walkthrough and model configs.

Two kinds of file are read:
- config/pipeline/walkthrough.yaml: nested stage settings (dataset, split,
  recipe, resampling, models, ...)
- config/models/<name>.yaml: a ``model`` metadata block, ``defaults``
  hyperparameters and an optional ``tuning.grid``

A file the user named explicitly must load or the run stops with a
ConfigError. Auto-discovered files may be absent.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .paths import CONFIG_DIR, WALKTHROUGH_CONFIG_PATH

logger = logging.getLogger(__name__)

# Sections of a model YAML that are not hyperparameters
MODEL_META_SECTIONS = ("model", "defaults", "tuning")


def load_yaml_config(path: str | Path, explicit: bool = False) -> dict[str, Any]:
    """
    Read a YAML mapping.

    Args:
        path: YAML file
        explicit: The user asked for this file, so a missing or unparsable
            file is a ConfigError. Otherwise FileNotFoundError and
            yaml.YAMLError reach the caller unchanged.

    Returns:
        The parsed mapping ({} for an empty file)

    Raises:
        ConfigError: Explicit file missing or unparsable, or the document
            is not a mapping
    """
    path = Path(path)
    if not path.exists():
        if explicit:
            raise ConfigError(
                f"Configuration file not found: {path.absolute()}\n"
                f"Check the --config path."
            )
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            if not explicit:
                raise
            raise ConfigError(f"Failed to parse YAML in {path.absolute()}: {e}") from e

    if data is None:
        logger.warning(f"Empty config file: {path}")
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"{path.absolute()} must hold a mapping at the top level, "
            f"got {type(data).__name__}"
        )

    logger.debug(f"Read {len(data)} key(s) from {path}")
    return data


def find_model_config(model_name: str, config_dir: Path | None = None) -> Path | None:
    """Path of <config_dir>/<model_name>.yaml, or None when there is no such file."""
    path = (config_dir or CONFIG_DIR) / f"{model_name}.yaml"
    return path if path.exists() else None


def flatten_model_config(config: dict[str, Any]) -> dict[str, Any]:
    """
    Hyperparameters of a model YAML as one flat dict.

    ``defaults`` come first; any other top-level key that is not a
    metadata section is treated as a hyperparameter and wins.
    """
    params = dict(config.get("defaults") or {})
    params.update({k: v for k, v in config.items() if k not in MODEL_META_SECTIONS})
    return params


def load_model_config(
    model_name: str,
    config_dir: Path | None = None,
    flatten: bool = True,
    explicit: bool = False,
) -> dict[str, Any]:
    """
    Read config/models/<model_name>.yaml.

    Args:
        model_name: Registered model name, e.g. "svm"
        config_dir: Directory holding the model YAMLs
        flatten: Return hyperparameters only (see flatten_model_config)
        explicit: Fail with ConfigError rather than FileNotFoundError

    Raises:
        ConfigError: Explicit load failed, or the file is not a mapping
        FileNotFoundError: Non-explicit load of a missing file
    """
    path = (config_dir or CONFIG_DIR) / f"{model_name}.yaml"
    raw = load_yaml_config(path, explicit=explicit)
    return flatten_model_config(raw) if flatten else raw


def load_tuning_grid(
    model_name: str,
    config_dir: Path | None = None,
) -> dict[str, list[Any]] | None:
    """
    The ``tuning.grid`` section of a model YAML.

    Returns:
        Parameter name -> candidate values, or None when the model has no
        YAML file or the file has no grid

    Raises:
        ConfigError: If a grid entry is not a list
    """
    path = find_model_config(model_name, config_dir)
    if path is None:
        return None

    tuning = load_yaml_config(path).get("tuning") or {}
    grid = tuning.get("grid")
    if grid is None:
        return None

    bad = {name: type(values).__name__ for name, values in grid.items() if not isinstance(values, list)}
    if bad:
        name, kind = next(iter(bad.items()))
        raise ConfigError(f"tuning.grid.{name} in {path} must be a list, got {kind}")
    return grid


def load_walkthrough_yaml(path: str | Path | None = None) -> dict[str, Any]:
    """
    Nested walkthrough settings.

    An explicit path must load. Without one, config/pipeline/walkthrough.yaml
    is used when present and {} otherwise.
    """
    if path is not None:
        return load_yaml_config(path, explicit=True)
    if not WALKTHROUGH_CONFIG_PATH.exists():
        logger.debug(f"No default walkthrough config at {WALKTHROUGH_CONFIG_PATH}")
        return {}
    return load_yaml_config(WALKTHROUGH_CONFIG_PATH)
