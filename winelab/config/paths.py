"""Configuration path constants."""

from pathlib import Path

# Note: 2 levels up from winelab/config/paths.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
CONFIG_DIR = CONFIG_ROOT / "models"
WALKTHROUGH_CONFIG_PATH = CONFIG_ROOT / "pipeline" / "walkthrough.yaml"
DEFAULT_OUTPUT_DIR = PROJECT_ROOT / "experiments" / "walkthrough"
