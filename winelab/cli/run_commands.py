"""
Walkthrough execution commands - run and resample.

Options left unset fall through to the YAML config, then to the built-in
defaults.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.table import Table

from winelab.config import (
    ConfigError,
    ConfigValidationError,
    WalkthroughConfig,
    build_model_config,
    build_walkthrough_config,
    validate_config_strict,
)
from winelab.data import DatasetError

from .utils import console, dataframe_table, setup_logging, show_error, show_info, show_success, split_names

CLI_ERRORS = (ConfigError, DatasetError, ValueError, OSError)


def _dataset_overrides(source: Optional[str], path: Optional[Path], missing: Optional[str]) -> Dict[str, Any]:
    dataset: Dict[str, Any] = {"source": source, "missing": missing}
    if path is not None:
        dataset["path"] = str(path)
        dataset["source"] = source or "file"
    return dataset


def _build_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> WalkthroughConfig:
    """Merge YAML and CLI overrides; exit with code 1 on invalid settings."""
    try:
        config = build_walkthrough_config(config_file, overrides)
        validate_config_strict(config)
    except ConfigValidationError as e:
        show_error("Configuration validation failed:")
        for issue in e.errors:
            console.print(f"  [red]x[/red] {issue}")
        raise typer.Exit(code=1)
    except (ConfigError, ValueError) as e:
        show_error(f"Configuration error: {e}")
        raise typer.Exit(code=1)
    return config


def _display_config_table(config: WalkthroughConfig) -> None:
    table = Table(title="Walkthrough Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")

    res = config.resampling
    table.add_row("Data", config.dataset.location)
    table.add_row("Missing Data", config.dataset.missing)
    table.add_row("Test Size", f"{config.split.test_size:.0%}")
    table.add_row("Recipe", f"impute={config.recipe.impute}, nzv={config.recipe.nzv}, scaling={config.recipe.scaling}")
    table.add_row("Resampling", f"{res.n_splits}-fold x {res.n_repeats}")
    table.add_row("Models", ", ".join(config.models))
    table.add_row("Tuning", "grid" if config.tune else "off")
    table.add_row("Metric", config.metric)
    table.add_row("Output", str(config.output_dir))

    console.print(table)
    console.print()


def run_command(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Walkthrough YAML (default: config/pipeline/walkthrough.yaml)"
    ),
    source: Optional[str] = typer.Option(
        None, "--source", help="Data source: url, file or bundled"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", help="Local CSV file (implies --source file)"
    ),
    models: Optional[str] = typer.Option(
        None, "--models", "-m", help="Comma-separated models, e.g. 'random_forest,svm'"
    ),
    metric: Optional[str] = typer.Option(
        None, "--metric", help="Ranking metric: roc_auc, accuracy, kappa or f1"
    ),
    folds: Optional[int] = typer.Option(None, "--folds", help="Cross-validation folds"),
    repeats: Optional[int] = typer.Option(None, "--repeats", help="Cross-validation repeats"),
    test_size: Optional[float] = typer.Option(None, "--test-size", help="Test set share (0-1)"),
    tune: Optional[bool] = typer.Option(None, "--tune/--no-tune", help="Grid-tune each model"),
    missing: Optional[str] = typer.Option(
        None, "--missing", help="Missing-data strategy: impute or drop"
    ),
    final_model: Optional[str] = typer.Option(
        None, "--final-model", help="Final-fit this model instead of the best one"
    ),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    report: Optional[bool] = typer.Option(None, "--report/--no-report", help="Write walkthrough.md"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    Run the full walkthrough: explore, split, tune, compare, evaluate, report.

    Examples:
        winelab run
        winelab run --source bundled --models svm,knn --folds 5
        winelab run --path data/wine.csv --no-tune --no-report
    """
    setup_logging(verbose)
    from winelab.walkthrough import run_walkthrough

    overrides = {
        "dataset": _dataset_overrides(source, path, missing),
        "split": {"test_size": test_size},
        "resampling": {"n_splits": folds, "n_repeats": repeats},
        "models": split_names(models),
        "metric": metric,
        "tune": tune,
        "final_model": final_model,
        "output_dir": str(output_dir) if output_dir is not None else None,
        "write_report": report,
    }
    config = _build_config(config_file, overrides)
    show_success("Configuration validated")
    _display_config_table(config)

    try:
        result = run_walkthrough(config)
    except CLI_ERRORS as e:
        show_error(str(e))
        raise typer.Exit(code=1)

    console.print()
    console.print(dataframe_table(
        result.comparison.drop(columns=["params"]), title=f"Model Comparison ({config.metric})"
    ))
    console.print(dataframe_table(result.final["confusion"], title=f"Test Set: {result.final_model}"))

    metrics = result.test_metrics
    show_success(
        f"{result.final_model}: test accuracy={metrics['accuracy']:.3f}, "
        f"kappa={metrics['kappa']:.3f}, roc_auc={metrics['roc_auc']:.3f}"
    )
    if result.report_path is not None:
        show_info(f"Report: {result.report_path}")


def resample_command(
    model: str = typer.Argument(..., help="Model name or alias"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Walkthrough YAML"),
    source: Optional[str] = typer.Option(None, "--source", help="Data source: url, file or bundled"),
    path: Optional[Path] = typer.Option(None, "--path", help="Local CSV file"),
    folds: Optional[int] = typer.Option(None, "--folds", help="Cross-validation folds"),
    repeats: Optional[int] = typer.Option(None, "--repeats", help="Cross-validation repeats"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    Cross-validate one model (default hyperparameters) on the training set.

    Examples:
        winelab resample svm --source bundled --folds 5
    """
    setup_logging(verbose)
    from winelab.cross_validation import CrossValidationRunner
    from winelab.data import handle_missing, load_wine_data, split_train_test
    from winelab.models import ModelRegistry

    overrides = {
        "dataset": _dataset_overrides(source, path, None),
        "resampling": {"n_splits": folds, "n_repeats": repeats},
    }
    config = _build_config(config_file, overrides)

    try:
        canonical = ModelRegistry.canonical_name(model)
        df = handle_missing(load_wine_data(config.dataset), config.dataset.missing, config.dataset.target)
        split = split_train_test(df, config.dataset.target, config.split)
        runner = CrossValidationRunner(config.resampling, config.recipe)
        result = runner.run(
            canonical,
            split.X_train,
            split.y_train,
            model_config=build_model_config(canonical, cli_args=config.model_configs.get(model)),
            keep_predictions=False,
        )
    except CLI_ERRORS as e:
        show_error(str(e))
        raise typer.Exit(code=1)

    frame = result.to_frame().drop(columns=["model", "removed_features"]).set_index("fold")
    console.print(dataframe_table(frame, title=f"Resamples: {canonical}"))
    for metric, stats in result.summary().items():
        console.print(f"  {metric:<10} mean={stats['mean']:.4f}  std={stats['std']:.4f}")
    show_success(f"{canonical}: {result.n_folds} resamples in {result.total_time:.1f}s")


__all__ = ["run_command", "resample_command"]
