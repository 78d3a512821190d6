"""
Console output and option parsing shared by the CLI commands.
"""
import logging

import pandas as pd
from rich.console import Console
from rich.table import Table

console = Console()

_QUIET_LOGGERS = ("matplotlib", "PIL", "urllib3")


def _status(style: str, marker: str, message: str) -> None:
    console.print(f"[bold {style}]{marker}[/bold {style}] {message}")


def show_error(message: str) -> None:
    _status("red", "Error:", message)


def show_success(message: str) -> None:
    _status("green", "✓", message)


def show_info(message: str) -> None:
    _status("blue", "ℹ", message)


def setup_logging(verbose: bool = False) -> None:
    """Route library logging to stderr; DEBUG with --verbose, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def split_names(value: str | None) -> list[str] | None:
    """"rf, svm" -> ["rf", "svm"]. Blank input counts as unset."""
    if not value:
        return None
    return [name.strip() for name in value.split(",") if name.strip()] or None


def _cell(value, precision: int) -> str:
    return f"{value:.{precision}f}" if isinstance(value, float) else str(value)


def dataframe_table(df: pd.DataFrame, title: str, precision: int = 3, index: bool = True) -> Table:
    """A rich Table with one row per DataFrame row; floats are rounded."""
    table = Table(title=title)
    if index:
        table.add_column(str(df.index.name or ""), style="cyan")
    for column in df.columns:
        table.add_column(str(column), justify="right")
    for row in df.itertuples(index=index, name=None):
        table.add_row(*(_cell(v, precision) for v in row))
    return table
