"""
winelab - a narrated wine-varietal classification walkthrough.

Sequences scikit-learn calls through the stages of an introductory
machine-learning workshop: data exploration, preprocessing recipes,
model specification and tuning with resampling, and a single
evaluation on held-out data.
"""
__version__ = "0.1.0"
