"""
CLI Module - Typer-based command-line interface for the wine walkthrough.

This module provides the main CLI application and aggregates commands from submodules.
"""
import typer

from .info_commands import explore_command, models_command
from .run_commands import resample_command, run_command
from .utils import console, setup_logging, show_error, show_info, show_success

# Create main app
app = typer.Typer(
    name="winelab",
    help="Wine varietal classification walkthrough",
    add_completion=False
)

# Register commands
app.command(name="run")(run_command)
app.command(name="explore")(explore_command)
app.command(name="models")(models_command)
app.command(name="resample")(resample_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = [
    "app",
    "main",
    "console",
    "setup_logging",
    "show_error",
    "show_success",
    "show_info",
]
