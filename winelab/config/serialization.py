"""Writing configs next to run outputs."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def _prepare(path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def save_config(config: dict[str, Any], path: str | Path) -> None:
    """Write ``config`` as block-style YAML, keeping key order."""
    path = _prepare(path)
    path.write_text(yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
    logger.info(f"Config written: {path}")


def save_config_json(config: dict[str, Any], path: str | Path) -> None:
    """Write ``config`` as JSON. Paths and other non-JSON values become strings."""
    path = _prepare(path)
    path.write_text(json.dumps(config, indent=2, default=str))
    logger.info(f"Config written: {path}")
