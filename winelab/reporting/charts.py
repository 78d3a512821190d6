"""
Chart generation for walkthrough reports.
Generates matplotlib visualizations for the data, resampling and test results.
"""
import logging
from pathlib import Path
from typing import Mapping, Sequence

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

matplotlib.use('Agg')

logger = logging.getLogger(__name__)

METRIC_LABELS = {
    "accuracy": "Accuracy",
    "kappa": "Kappa",
    "f1": "Macro F1",
    "roc_auc": "ROC AUC",
}


def generate_all_charts(result, output_dir: Path) -> dict[str, Path]:
    """
    Generate all charts for the report.

    Args:
        result: WalkthroughResult
        output_dir: Base output directory

    Returns:
        Chart name -> path of the saved PNG
    """
    charts_dir = output_dir / "charts"
    charts_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Generating charts in {charts_dir}")

    charts = {
        "class_distribution": plot_class_distribution(result.exploration.classes, charts_dir),
        "correlations": plot_correlation_heatmap(result.exploration.correlations, charts_dir),
    }
    if result.resamples:
        for metric in dict.fromkeys((result.config.metric, "accuracy")):
            charts[f"resampling_{metric}"] = plot_resampling_boxplot(
                result.resamples, metric, charts_dir
            )
    if result.final:
        charts["roc_curves"] = plot_roc_curves(
            result.final["roc_curves"], charts_dir, title=f"ROC curves: {result.final_model} (test set)"
        )
        charts["confusion_matrix"] = plot_confusion_matrix(result.final["confusion"], charts_dir)

    logger.info(f"  Generated {len(charts)} chart(s)")
    return charts


def plot_class_distribution(classes: pd.DataFrame, charts_dir: Path) -> Path:
    """Bar chart of wines per varietal (expects count and proportion columns)."""
    fig, ax = plt.subplots(figsize=(7, 4))
    labels = [str(c) for c in classes.index]
    values = classes["count"].to_numpy()

    ax.bar(labels, values, color='steelblue', alpha=0.8)
    ax.set_title('Wines per Varietal', fontsize=12, fontweight='bold')
    ax.set_ylabel('Count', fontsize=10)
    ax.grid(axis='y', alpha=0.3)
    for i, (v, p) in enumerate(zip(values, classes["proportion"].to_numpy())):
        ax.text(i, v, f'{p:.1%}', ha='center', va='bottom', fontsize=9)

    return _save(fig, charts_dir / 'class_distribution.png')


def plot_correlation_heatmap(corr: pd.DataFrame, charts_dir: Path) -> Path:
    """Heatmap of predictor correlations."""
    n = len(corr)
    fig, ax = plt.subplots(figsize=(max(6, 0.6 * n + 2), max(5, 0.6 * n + 1)))
    image = ax.imshow(corr.to_numpy(), cmap='RdBu_r', vmin=-1, vmax=1)
    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xticklabels(corr.columns, rotation=90, fontsize=8)
    ax.set_yticklabels(corr.index, fontsize=8)
    ax.set_title('Predictor Correlations', fontsize=12, fontweight='bold')
    fig.colorbar(image, ax=ax, shrink=0.8)

    return _save(fig, charts_dir / 'correlations.png')


def plot_resampling_boxplot(resamples: Mapping, metric: str, charts_dir: Path) -> Path:
    """Box plot of a metric across resamples, one box per model."""
    names = list(resamples)
    data = [resamples[name].values(metric) for name in names]
    data = [values[np.isfinite(values)] for values in data]

    fig, ax = plt.subplots(figsize=(max(6, 1.5 * len(names)), 4))
    ax.boxplot(data)
    ax.set_xticks(range(1, len(names) + 1))
    ax.set_xticklabels(names)
    ax.set_title(
        f'Resampled {METRIC_LABELS.get(metric, metric)} by Model', fontsize=12, fontweight='bold'
    )
    ax.set_ylabel(METRIC_LABELS.get(metric, metric), fontsize=10)
    ax.grid(axis='y', alpha=0.3)

    return _save(fig, charts_dir / f'resampling_{metric}.png')


def plot_roc_curves(curves: Sequence, charts_dir: Path, title: str = 'ROC Curves') -> Path:
    """One-vs-rest ROC curve per varietal."""
    fig, ax = plt.subplots(figsize=(6, 6))
    for curve in curves:
        if len(curve.fpr) == 0:
            continue
        ax.plot(curve.fpr, curve.tpr, linewidth=2, label=f'{curve.label} (AUC {curve.auc:.3f})')
    ax.plot([0, 1], [0, 1], color='gray', linestyle='--', linewidth=1)
    ax.set_xlabel('1 - Specificity', fontsize=10)
    ax.set_ylabel('Sensitivity', fontsize=10)
    ax.set_title(title, fontsize=12, fontweight='bold')
    ax.legend(fontsize=8, loc='lower right')
    ax.grid(alpha=0.3)

    return _save(fig, charts_dir / 'roc_curves.png')


def plot_confusion_matrix(confusion: pd.DataFrame, charts_dir: Path) -> Path:
    """Heatmap of a Truth x Prediction table."""
    values = confusion.to_numpy()
    fig, ax = plt.subplots(figsize=(5, 4.5))
    ax.imshow(values, cmap='Blues')
    ax.set_xticks(range(values.shape[1]))
    ax.set_yticks(range(values.shape[0]))
    ax.set_xticklabels(confusion.columns, fontsize=9)
    ax.set_yticklabels(confusion.index, fontsize=9)
    ax.set_xlabel('Prediction', fontsize=10)
    ax.set_ylabel('Truth', fontsize=10)
    ax.set_title('Confusion Matrix (test set)', fontsize=12, fontweight='bold')

    threshold = values.max() / 2 if values.size else 0
    for i in range(values.shape[0]):
        for j in range(values.shape[1]):
            color = 'white' if values[i, j] > threshold else 'black'
            ax.text(j, i, str(values[i, j]), ha='center', va='center', color=color, fontsize=10)

    return _save(fig, charts_dir / 'confusion_matrix.png')


def _save(fig, path: Path) -> Path:
    fig.tight_layout()
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


__all__ = [
    "generate_all_charts",
    "plot_class_distribution",
    "plot_correlation_heatmap",
    "plot_resampling_boxplot",
    "plot_roc_curves",
    "plot_confusion_matrix",
]
