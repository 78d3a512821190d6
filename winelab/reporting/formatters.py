"""
Formatting utilities for walkthrough reports.
Renders DataFrames and numbers as Markdown.
"""
import math
from typing import Any

import pandas as pd


def format_value(value: Any, precision: int = 3) -> str:
    """Format a single table cell."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return "NA"
        return f"{value:.{precision}f}"
    if isinstance(value, dict):
        return ", ".join(f"{k}={format_value(v, precision)}" for k, v in value.items()) or "defaults"
    return str(value).replace("|", "\\|")


def dataframe_to_markdown(df: pd.DataFrame, precision: int = 3, index: bool = True) -> str:
    """
    Render a DataFrame as a pipe table.

    Args:
        df: Table to render
        precision: Decimal places for floats
        index: Include the index as the first column

    Returns:
        Markdown table string (empty-table note if df has no rows)
    """
    if df.empty:
        return "_No rows._"

    headers = [str(c) for c in df.columns]
    if index:
        headers = [str(df.index.name or "")] + headers

    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    # itertuples keeps each column's dtype, so integer counts stay integers
    for row in df.itertuples(index=index, name=None):
        lines.append("| " + " | ".join(format_value(v, precision) for v in row) + " |")
    return "\n".join(lines)


def image(path: str, caption: str) -> str:
    """Markdown image reference."""
    return f"![{caption}]({path})"


__all__ = ["format_value", "dataframe_to_markdown", "image"]
