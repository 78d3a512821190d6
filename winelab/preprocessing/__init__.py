"""
Preprocessing recipes.

- Recipe / PreparedRecipe: declare, prep on training rows, bake new rows
- NearZeroVarianceFilter: drops constant and near-constant predictors
"""
from .nzv import NearZeroVarianceFilter, near_zero_variance_stats
from .recipe import PreparedRecipe, Recipe

__all__ = [
    "Recipe",
    "PreparedRecipe",
    "NearZeroVarianceFilter",
    "near_zero_variance_stats",
]
