"""
Reporting module for the walkthrough document.

Public API:
    - generate_report: write walkthrough.md and its charts
    - generate_report_content: the Markdown only
"""
from .charts import generate_all_charts
from .formatters import dataframe_to_markdown
from .run import REPORT_FILENAME, generate_report, generate_report_content

__all__ = [
    "REPORT_FILENAME",
    "generate_report",
    "generate_report_content",
    "generate_all_charts",
    "dataframe_to_markdown",
]
