"""
Helpers for driving the walkthrough from Jupyter.

    >>> from winelab.utils import setup_notebook, get_sample_config, display_metrics
    >>> setup_notebook()
    >>> config = get_sample_config(quick_mode=True)
"""
from __future__ import annotations

import logging
import platform
import sys
import warnings
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)

RULE = "=" * 60
THIN_RULE = "-" * 60


def setup_notebook(
    log_level: str = "INFO",
    suppress_warnings: bool = True,
    seed: int = 42,
    max_display_rows: int = 100,
    max_display_cols: int = 50,
) -> dict[str, Any]:
    """
    Prepare an interactive session.

    Sends logging to the notebook, seeds numpy, widens pandas output and
    applies a light matplotlib style. Returns the interpreter and library
    versions so they can be recorded alongside the results.
    """
    import matplotlib.pyplot as plt
    import pandas as pd
    import sklearn

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if suppress_warnings:
        for category, module in ((FutureWarning, ""), (UserWarning, "sklearn")):
            warnings.filterwarnings("ignore", category=category, module=module)

    np.random.seed(seed)

    for option, value in {
        "display.max_rows": max_display_rows,
        "display.max_columns": max_display_cols,
        "display.width": None,
        "display.precision": 4,
    }.items():
        pd.set_option(option, value)

    style = "seaborn-v0_8-whitegrid"
    if style in plt.style.available:
        plt.style.use(style)
    plt.rcParams.update({"figure.figsize": (10, 6), "figure.dpi": 100})

    env = {
        "platform": platform.platform(),
        "python_version": sys.version.split()[0],
        "numpy_version": np.__version__,
        "pandas_version": pd.__version__,
        "sklearn_version": sklearn.__version__,
        "seed": seed,
    }
    print(RULE)
    print(f"winelab notebook ready (seed={seed})")
    print(f"  python {env['python_version']} on {env['platform']}")
    print(
        f"  numpy {env['numpy_version']}, pandas {env['pandas_version']}, "
        f"scikit-learn {env['sklearn_version']}"
    )
    print(RULE)
    return env


def _print_block(heading: str, rows: list[tuple[str, Any]], indent: str = "    ") -> None:
    print(f"  {heading}:")
    for label, value in rows:
        shown = f"{value:.4f}" if isinstance(value, float) else value
        print(f"{indent}{label}: {shown}")


def display_metrics(
    results: dict[str, Any],
    title: str = "Test Set Results",
    show_confusion: bool = True,
) -> None:
    """Print the dict returned by Trainer.run() as a plain-text summary."""
    nan = float("nan")
    print(f"\n{RULE}\n {title}\n{RULE}")

    for key, label in (("model_name", "Model"), ("run_id", "Run ID"), ("params", "Params")):
        if results.get(key):
            print(f"  {label}: {results[key]}")
    print(THIN_RULE)

    train = results.get("training_metrics")
    if train:
        _print_block("Training", [
            ("Train Accuracy", train.get("train_accuracy", nan)),
            ("Train F1", train.get("train_f1", nan)),
            ("Training Time", f"{train.get('training_time_seconds', 0.0):.1f}s"),
        ])
        print(THIN_RULE)

    test = results.get("test_metrics")
    if test:
        _print_block("Test", [
            ("Accuracy", test.get("accuracy", nan)),
            ("Kappa", test.get("kappa", nan)),
            ("Macro F1", test.get("macro_f1", nan)),
            ("ROC AUC", test.get("roc_auc", nan)),
        ])
        if test.get("per_class_f1"):
            _print_block("F1 by varietal", list(test["per_class_f1"].items()))
        if show_confusion and "confusion" in results:
            print("  Confusion matrix (rows = truth):")
            print(results["confusion"].to_string())

    print(RULE + "\n")


def get_sample_config(quick_mode: bool = False, **overrides: Any):
    """
    WalkthroughConfig for interactive use, with the bundled data set.

    quick_mode shrinks the resampling and the forests for fast iteration.
    """
    from winelab.config import build_walkthrough_config

    data: dict[str, Any] = {"dataset": {"source": "bundled"}}
    if quick_mode:
        data.update({
            "resampling": {"n_splits": 3, "n_repeats": 1},
            "model_configs": {"random_forest": {"n_estimators": 50}},
            "write_report": False,
            "save_artifacts": False,
        })
    data.update(overrides)
    if "random_forest" not in data.get("models", ["random_forest"]):
        data.get("model_configs", {}).pop("random_forest", None)
    return build_walkthrough_config(overrides=data)


__all__ = ["setup_notebook", "display_metrics", "get_sample_config"]
