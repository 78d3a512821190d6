"""
Walkthrough - the end-to-end wine varietal classification workflow.

Stages:
1. Load the wine table
2. Apply the missing-data decision
3. Explore the data
4. Split off the test set
5. Declare the preprocessing recipe
6. Tune and resample each model on the training set
7. Compare the models
8. Fit the chosen model on the training set, evaluate once on the test set
9. Write the report

Example:
    >>> from winelab.config import build_walkthrough_config
    >>> from winelab.walkthrough import run_walkthrough
    >>> config = build_walkthrough_config(overrides={"dataset": {"source": "bundled"}})
    >>> result = run_walkthrough(config)
    >>> result.comparison
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd

from winelab.config import (
    TrainerConfig,
    WalkthroughConfig,
    build_model_config,
    match_model_name,
    save_config,
    validate_config_strict,
)
from winelab.cross_validation import CrossValidationRunner, CVResult, GridTuner, TuningResult
from winelab.data import (
    DataSplit,
    ExplorationSummary,
    explore,
    handle_missing,
    load_wine_data,
    missing_value_report,
    split_train_test,
)
from winelab.evaluation import best_model, compare_models
from winelab.models import ModelRegistry, Trainer
from winelab.preprocessing import Recipe
from winelab.reporting import generate_report

logger = logging.getLogger(__name__)


@dataclass
class WalkthroughResult:
    """Every intermediate result of a walkthrough run."""

    config: WalkthroughConfig
    data: pd.DataFrame
    n_rows_loaded: int
    missing: pd.DataFrame
    exploration: ExplorationSummary
    split: DataSplit
    recipe: Recipe
    tuning: Dict[str, TuningResult] = field(default_factory=dict)
    resamples: Dict[str, CVResult] = field(default_factory=dict)
    comparison: Optional[pd.DataFrame] = None
    final_model: Optional[str] = None
    final: Optional[Dict[str, Any]] = None
    report_path: Optional[Path] = None
    total_time_seconds: float = 0.0

    @property
    def test_metrics(self) -> Optional[Dict[str, Any]]:
        return self.final["test_metrics"] if self.final else None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary."""
        return {
            "config": self.config.to_dict(),
            "n_rows_loaded": self.n_rows_loaded,
            "n_rows_used": len(self.data),
            "exploration": self.exploration.to_dict(),
            "split": self.split.to_dict(),
            "recipe": self.recipe.steps(),
            "tuning": {name: t.to_dict() for name, t in self.tuning.items()},
            "resamples": {name: r.to_dict() for name, r in self.resamples.items()},
            "final_model": self.final_model,
            "test_metrics": self.test_metrics,
            "report_path": str(self.report_path) if self.report_path else None,
            "total_time_seconds": self.total_time_seconds,
        }


def _stage(number: int, title: str) -> None:
    logger.info("=" * 70)
    logger.info(f"STAGE {number}: {title}")
    logger.info("=" * 70)


def resample_models(
    config: WalkthroughConfig,
    split: DataSplit,
) -> tuple[Dict[str, TuningResult], Dict[str, CVResult]]:
    """
    Tune (optionally) and resample every configured model on the training set.

    Returns:
        (tuning results by model, selected CVResult by model)
    """
    runner = CrossValidationRunner(config.resampling, config.recipe)
    tuner = GridTuner(runner, metric=config.metric)

    tuning: Dict[str, TuningResult] = {}
    resamples: Dict[str, CVResult] = {}
    for name in config.models:
        base = build_model_config(
            ModelRegistry.canonical_name(name), cli_args=config.model_configs.get(name)
        )
        if config.tune:
            tuning[name] = tuner.tune(name, split.X_train, split.y_train, base_config=base)
            resamples[name] = tuning[name].best_result
        else:
            resamples[name] = runner.run(name, split.X_train, split.y_train, model_config=base)
    return tuning, resamples


def run_walkthrough(config: Optional[WalkthroughConfig] = None) -> WalkthroughResult:
    """
    Run the complete walkthrough.

    Raises:
        ConfigValidationError: If the configuration is inconsistent
        DatasetError: If the wine table is malformed
        ValueError: If a stage cannot run with the given data
    """
    config = config or WalkthroughConfig()
    validate_config_strict(config)
    start_time = time.time()
    target = config.dataset.target

    logger.info("=" * 70)
    logger.info("WINE VARIETAL CLASSIFICATION WALKTHROUGH")
    logger.info(f"Models: {config.models}, metric: {config.metric}")
    logger.info("=" * 70)

    _stage(1, "Load Data")
    raw = load_wine_data(config.dataset)
    missing = missing_value_report(raw)

    _stage(2, "Missing Data")
    n_missing = int(missing["n_missing"].sum())
    logger.info(f"{n_missing} missing value(s) in the loaded table, strategy={config.dataset.missing}")
    data = handle_missing(raw, config.dataset.missing, target)

    _stage(3, "Explore")
    exploration = explore(data, target)

    _stage(4, "Train/Test Split")
    split = split_train_test(data, target, config.split)
    logger.info(f"Training set per varietal: {split.summary()['train'].to_dict()}")

    _stage(5, "Recipe")
    recipe = Recipe(config.recipe)
    for i, step in enumerate(recipe.steps(), 1):
        logger.info(f"  {i}. {step}")

    _stage(6, "Tune and Resample" if config.tune else "Resample")
    tuning, resamples = resample_models(config, split)

    _stage(7, "Compare Models")
    comparison = compare_models(resamples, config.metric)
    for name, row in comparison.iterrows():
        logger.info(
            f"  #{row['rank']} {name}: {config.metric}={row[f'mean_{config.metric}']:.4f} "
            f"(+/- {row[f'std_{config.metric}']:.4f})"
        )
    if config.final_model is not None:
        chosen = match_model_name(config.final_model, config.models)
        logger.info(f"Using requested final model: {chosen}")
    else:
        chosen = best_model(resamples, config.metric)
        logger.info(f"Best model by {config.metric}: {chosen}")

    _stage(8, "Final Fit and Test Set Evaluation")
    trainer = Trainer(
        TrainerConfig(
            model_name=ModelRegistry.canonical_name(chosen),
            model_config=resamples[chosen].params,
            recipe=config.recipe,
            random_seed=config.split.random_seed,
            output_dir=config.output_dir / "runs",
            save_artifacts=config.save_artifacts,
        )
    )
    final = trainer.run(split)

    result = WalkthroughResult(
        config=config,
        data=data,
        n_rows_loaded=len(raw),
        missing=missing,
        exploration=exploration,
        split=split,
        recipe=recipe,
        tuning=tuning,
        resamples=resamples,
        comparison=comparison,
        final_model=chosen,
        final=final,
    )

    if config.save_artifacts:
        config.output_dir.mkdir(parents=True, exist_ok=True)
        save_config(config.to_dict(), config.output_dir / "walkthrough_config.yaml")
        comparison.to_csv(config.output_dir / "model_comparison.csv")
        pd.concat([r.to_frame() for r in resamples.values()]).to_csv(
            config.output_dir / "resamples.csv", index=False
        )

    if config.write_report:
        _stage(9, "Report")
        result.report_path = generate_report(result, config.output_dir)

    result.total_time_seconds = time.time() - start_time
    logger.info("=" * 70)
    logger.info(
        f"[PASS] Walkthrough complete: {chosen} test accuracy="
        f"{final['test_metrics']['accuracy']:.4f}, "
        f"roc_auc={final['test_metrics']['roc_auc']:.4f}, "
        f"time={result.total_time_seconds:.1f}s"
    )
    logger.info("=" * 70)
    return result


__all__ = ["WalkthroughResult", "resample_models", "run_walkthrough"]
