"""
Layering of configuration sources.

Model hyperparameters, lowest to highest priority:
    built-in defaults < config/models/<name>.yaml < --config file < CLI flags

Walkthrough settings:
    dataclass defaults < walkthrough YAML < CLI overrides
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .loaders import (
    find_model_config,
    flatten_model_config,
    load_model_config,
    load_walkthrough_yaml,
    load_yaml_config,
)
from .walkthrough_config import WalkthroughConfig

logger = logging.getLogger(__name__)


def merge_configs(
    base: dict[str, Any],
    override: dict[str, Any],
    deep: bool = True,
) -> dict[str, Any]:
    """
    Overlay ``override`` on ``base`` without mutating either.

    With ``deep`` set, nested mappings present on both sides are merged key
    by key; otherwise the override value replaces the base value outright.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if deep and isinstance(current, dict) and isinstance(value, dict):
            value = merge_configs(current, value, deep=True)
        merged[key] = value
    return merged


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    # Unset CLI options arrive as None and must not hide lower layers
    kept = {}
    for key, value in values.items():
        if isinstance(value, dict):
            value = _without_none(value)
            if not value:
                continue
        elif value is None:
            continue
        kept[key] = value
    return kept


def _discovered_model_params(model_name: str) -> dict[str, Any]:
    path = find_model_config(model_name)
    if path is None:
        return {}
    try:
        params = load_model_config(model_name, flatten=True)
    except (ConfigError, OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring {path}: {e}")
        return {}
    logger.debug(f"Model defaults for {model_name} from {path}")
    return params


def build_model_config(
    model_name: str,
    cli_args: dict[str, Any] | None = None,
    config_file: str | Path | None = None,
    defaults: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Hyperparameters for one model after layering every source.

    A broken auto-discovered model YAML only logs a warning. A broken
    ``config_file`` is fatal since the user asked for it. The file may be
    laid out like a model YAML (``defaults:`` section) or as flat params.

    Raises:
        ConfigError: ``config_file`` is missing, unparsable or not a mapping
    """
    layers = [defaults or {}, _discovered_model_params(model_name)]

    if config_file is not None:
        layers.append(flatten_model_config(load_yaml_config(config_file, explicit=True)))
        logger.debug(f"Model overrides for {model_name} from {config_file}")

    if cli_args:
        layers.append(_without_none(cli_args))

    params: dict[str, Any] = {}
    for layer in layers:
        params = merge_configs(params, layer)
    return params


def build_walkthrough_config(
    config_file: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> WalkthroughConfig:
    """
    WalkthroughConfig from YAML plus CLI overrides.

    ``overrides`` are nested the same way as the YAML file, e.g.
    ``{"resampling": {"n_splits": 5}}``.

    Raises:
        ConfigError: The explicit file cannot be read, or the merged values
            do not form a valid WalkthroughConfig
    """
    data = load_walkthrough_yaml(config_file)
    if overrides:
        data = merge_configs(data, _without_none(overrides))

    try:
        config = WalkthroughConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        origin = config_file if config_file is not None else "defaults"
        raise ConfigError(f"Invalid walkthrough configuration ({origin}): {e}") from e

    logger.debug(f"Walkthrough config: models={config.models} metric={config.metric}")
    return config
