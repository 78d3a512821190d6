"""
Utility modules for interactive use of the walkthrough.
"""
from winelab.utils.notebook import display_metrics, get_sample_config, setup_notebook

__all__ = [
    "setup_notebook",
    "display_metrics",
    "get_sample_config",
]
