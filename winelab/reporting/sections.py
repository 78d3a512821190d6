"""
Report section generators for the walkthrough.
Each function generates one section of the agenda as Markdown.
"""
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional

import pandas as pd

from .formatters import dataframe_to_markdown, format_value, image


def _chart(charts: Mapping[str, Path], name: str, caption: str) -> str:
    path = charts.get(name)
    if path is None:
        return ""
    return "\n" + image(f"charts/{Path(path).name}", caption) + "\n"


def generate_header(config) -> str:
    """Generate report header."""
    source = config.dataset.location
    return f"""# Predicting Wine Varietals
## A Classification Walkthrough

**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}

**Data:** `{source}`

---"""


def generate_introduction(config, n_rows: int, n_features: int) -> str:
    """Generate the introduction: the problem and the agenda."""
    models = ", ".join(f"`{m}`" for m in config.models)
    return f"""## Introduction

Each of the {n_rows} wines in this data set has {n_features} chemical measurements
and a known varietal. The goal is a model that predicts the varietal of a new
wine from its chemistry alone.

The walkthrough follows the usual steps of a supervised learning project:

1. Explore the data
2. Decide what to do about missing values
3. Split off a test set
4. Declare the preprocessing recipe
5. Tune and resample each candidate model ({models})
6. Compare the models on their resampled `{config.metric}`
7. Fit the chosen model on the full training set and evaluate it once on the test set

---"""


def generate_exploration_section(exploration, charts: Mapping[str, Path]) -> str:
    """Generate the data exploration section."""
    section = f"""## Data Exploration

The table has **{exploration.n_rows}** wines and **{exploration.n_features}** predictors.

### Varietals

{dataframe_to_markdown(exploration.classes)}
{_chart(charts, "class_distribution", "Wines per varietal")}
### Predictors

{dataframe_to_markdown(exploration.features, precision=2)}

### Varietal Profiles

Mean of each predictor within each varietal. Predictors whose means differ
most between varietals are the ones a model can lean on.

{dataframe_to_markdown(exploration.profiles.T, precision=2)}

### Correlations

{dataframe_to_markdown(exploration.top_pairs, index=False)}
{_chart(charts, "correlations", "Predictor correlations")}
"""
    if exploration.notes:
        section += "\n**Notes:**\n\n" + "\n".join(f"- {note}" for note in exploration.notes) + "\n"
    return section + "\n---"


def generate_preprocessing_section(
    config,
    split_summary: pd.DataFrame,
    recipe_steps: list[str],
    n_rows_loaded: int,
    n_rows_used: int,
    removed_features: Optional[list[str]] = None,
) -> str:
    """Generate the missing-data, split and recipe section."""
    if config.dataset.missing == "drop":
        missing_text = (
            f"Rows with any missing value are dropped before splitting: "
            f"{n_rows_loaded - n_rows_used} of {n_rows_loaded} row(s) removed."
        )
    else:
        missing_text = (
            "Rows with missing predictors are kept. The recipe imputes them, "
            "with imputation statistics learned from training rows only."
        )

    steps = "\n".join(f"{i}. {step}" for i, step in enumerate(recipe_steps, 1)) or "_No steps._"
    split = config.split
    section = f"""## Preprocessing

### Missing Data

{missing_text}

### Train/Test Split

{int(round((1 - split.test_size) * 100))}% of the wines are used for training and
{int(round(split.test_size * 100))}% are set aside as the test set
({'stratified by varietal' if split.stratify else 'not stratified'}, seed {split.random_seed}).
The test set is not touched again until the final evaluation.

{dataframe_to_markdown(split_summary)}

### Recipe

{steps}

The recipe is prepped (fit) on training rows and baked (applied) onto any other
rows. During resampling each fold preps its own copy on its analysis rows.
"""
    if config.recipe.scaling == "auto":
        section += "\nModels that are insensitive to scale skip the centering and scaling step.\n"
    if removed_features:
        section += f"\nIn the final fit the recipe removed: {', '.join(removed_features)}.\n"
    return section + "\n---"


def generate_modeling_section(
    config,
    tuning: Mapping[str, Any],
    resamples: Mapping[str, Any],
) -> str:
    """Generate the model specification and tuning section."""
    res = config.resampling
    scheme = f"{res.n_splits}-fold cross-validation"
    if res.n_repeats > 1:
        scheme = f"{res.n_repeats} repeats of {scheme}"

    section = f"""## Model Specification and Tuning

Every model is resampled on the training set with {scheme}
({res.n_resamples} resamples), stratified by varietal.
"""
    if not config.tune:
        section += "\nTuning is off: each model is resampled with its default hyperparameters.\n"

    for name in config.models:
        section += f"\n### {name}\n\n"
        result = tuning.get(name)
        if result is not None and result.n_candidates > 1:
            section += (
                f"{result.n_candidates} candidates were resampled. "
                f"The best by `{result.metric}`:\n\n"
                f"{dataframe_to_markdown(_tuning_table(result.show_best(5)), index=False)}\n"
            )
        if result is not None:
            section += f"\nSelected parameters: {format_value(result.best_params)}\n"
        cv = resamples.get(name)
        if cv is not None:
            section += (
                f"\nResampled `{config.metric}`: {format_value(cv.mean(config.metric))} "
                f"(std {format_value(cv.std(config.metric))})\n"
            )
    return section + "\n---"


def _tuning_table(candidates: pd.DataFrame) -> pd.DataFrame:
    keep = [c for c in candidates.columns if not c.startswith("std_") and c != "n_resamples"]
    return candidates[keep]


def generate_comparison_section(
    comparison: pd.DataFrame,
    metric: str,
    best: str,
    charts: Mapping[str, Path],
) -> str:
    """Generate the model comparison section."""
    table = comparison.drop(columns=["params"], errors="ignore")
    figures = _chart(charts, f"resampling_{metric}", f"Resampled {metric} by model")
    if metric != "accuracy":
        figures += _chart(charts, "resampling_accuracy", "Resampled accuracy by model")
    return f"""## Model Comparison

Models ranked by their mean resampled `{metric}` (higher is better):

{dataframe_to_markdown(table)}
{figures}
The selected model is **{best}**.

---"""


def generate_evaluation_section(final: Mapping[str, Any], model_name: str, charts: Mapping[str, Path]) -> str:
    """Generate the held-out test set section."""
    metrics = final["test_metrics"]
    per_class = pd.DataFrame(
        {"f1": pd.Series(metrics["per_class_f1"])}
    )
    per_class["auc"] = pd.Series({curve.label: curve.auc for curve in final["roc_curves"]})
    per_class.index.name = "varietal"

    return f"""## Held-out Evaluation

The selected model (**{model_name}**) is fit on the full training set and
evaluated once on the {metrics['n_samples']} test wines.

| Metric | Value |
|--------|-------|
| Accuracy | {format_value(metrics['accuracy'])} |
| Kappa | {format_value(metrics['kappa'])} |
| Macro F1 | {format_value(metrics['macro_f1'])} |
| ROC AUC | {format_value(metrics['roc_auc'])} |

### Confusion Matrix

{dataframe_to_markdown(final['confusion'])}
{_chart(charts, "confusion_matrix", "Confusion matrix")}
### Per-Varietal Results

{dataframe_to_markdown(per_class)}
{_chart(charts, "roc_curves", "ROC curves")}
---"""


def generate_resources_section() -> str:
    """Generate the further-resources section."""
    return """## Further Resources

- scikit-learn user guide: cross-validation, grid search and pipelines
  (https://scikit-learn.org/stable/user_guide.html)
- Kuhn & Johnson, *Applied Predictive Modeling* (Springer, 2013): resampling,
  preprocessing and near-zero-variance predictors
- Hand & Till (2001), *A Simple Generalisation of the Area Under the ROC Curve
  for Multiple Class Classification Problems*, Machine Learning 45
- UCI Machine Learning Repository: Wine data set
  (https://archive.ics.uci.edu/dataset/109/wine)

---

*Convert this report with pandoc, e.g. `pandoc walkthrough.md -o walkthrough.html`.*
"""


__all__ = [
    "generate_header",
    "generate_introduction",
    "generate_exploration_section",
    "generate_preprocessing_section",
    "generate_modeling_section",
    "generate_comparison_section",
    "generate_evaluation_section",
    "generate_resources_section",
]
