"""
Common utilities shared across all model implementations.

This package provides shared functionality for:
- Label mapping between varietal names and class indices
"""

from .label_mapping import (
    fit_classes,
    map_classes_to_labels,
    map_labels_to_classes,
)

__all__ = [
    "fit_classes",
    "map_labels_to_classes",
    "map_classes_to_labels",
]
