"""
Information commands - list models and explore the data.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from .run_commands import CLI_ERRORS, _build_config, _dataset_overrides
from .utils import console, dataframe_table, setup_logging, show_error


def models_command() -> None:
    """
    List the registered models, their scaling needs and default hyperparameters.
    """
    from winelab.cross_validation import get_param_grid
    from winelab.models import ModelRegistry

    console.print("\n[bold cyan]Available Models[/bold cyan]\n")

    table = Table(show_header=True, title="Registered Models")
    table.add_column("Model", style="cyan")
    table.add_column("Aliases", style="yellow")
    table.add_column("Family", style="green")
    table.add_column("Scaling", style="magenta")
    table.add_column("Tuned Parameters", style="blue")
    table.add_column("Description")

    for name in ModelRegistry.list_all():
        info = ModelRegistry.get_model_info(name)
        grid = get_param_grid(name)
        table.add_row(
            name,
            ", ".join(info["aliases"]) or "-",
            info["family"],
            "required" if info["requires_scaling"] else "none",
            ", ".join(grid) or "-",
            info["description"],
        )

    console.print(table)
    console.print("\n[dim]Example: winelab run --models random_forest,svm[/dim]\n")


def explore_command(
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Walkthrough YAML"),
    source: Optional[str] = typer.Option(None, "--source", help="Data source: url, file or bundled"),
    path: Optional[Path] = typer.Option(None, "--path", help="Local CSV file"),
    pairs: int = typer.Option(5, "--pairs", help="Number of correlated pairs to show"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """
    Load the wine table and print the exploration summaries.

    Examples:
        winelab explore --source bundled
    """
    setup_logging(verbose)
    from winelab.data import explore, load_wine_data

    config = _build_config(config_file, {"dataset": _dataset_overrides(source, path, None)})
    try:
        df = load_wine_data(config.dataset)
        summary = explore(df, config.dataset.target, n_pairs=pairs)
    except CLI_ERRORS as e:
        show_error(str(e))
        raise typer.Exit(code=1)

    console.print(f"\n[bold cyan]{summary.n_rows} wines, {summary.n_features} predictors[/bold cyan]\n")
    console.print(dataframe_table(summary.classes, title="Varietals"))
    console.print(dataframe_table(summary.features, title="Predictors", precision=2))
    console.print(dataframe_table(summary.profiles.T, title="Varietal Profiles (means)", precision=2))
    console.print(dataframe_table(summary.top_pairs, title="Most Correlated Pairs", index=False))
    for note in summary.notes:
        console.print(f"  [dim]- {note}[/dim]")


__all__ = ["models_command", "explore_command"]
