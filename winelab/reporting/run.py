"""
Walkthrough report generation.

Writes walkthrough.md plus a charts/ directory. Conversion to HTML, PDF or
Word is left to pandoc.
"""
import logging
from pathlib import Path

from .charts import generate_all_charts
from .sections import (
    generate_comparison_section,
    generate_evaluation_section,
    generate_exploration_section,
    generate_header,
    generate_introduction,
    generate_modeling_section,
    generate_preprocessing_section,
    generate_resources_section,
)

logger = logging.getLogger(__name__)

REPORT_FILENAME = "walkthrough.md"


def generate_report_content(result, charts: dict[str, Path]) -> str:
    """
    Generate the report markdown content.

    Args:
        result: WalkthroughResult
        charts: Chart name -> PNG path (may be empty)

    Returns:
        Markdown formatted report string
    """
    config = result.config
    sections = [
        generate_header(config),
        generate_introduction(config, result.exploration.n_rows, result.exploration.n_features),
        generate_exploration_section(result.exploration, charts),
        generate_preprocessing_section(
            config,
            split_summary=result.split.summary(),
            recipe_steps=result.recipe.steps(),
            n_rows_loaded=result.n_rows_loaded,
            n_rows_used=len(result.data),
            removed_features=result.final["removed_features"] if result.final else None,
        ),
        generate_modeling_section(config, result.tuning, result.resamples),
    ]
    if result.comparison is not None:
        sections.append(
            generate_comparison_section(result.comparison, config.metric, result.final_model, charts)
        )
    if result.final:
        sections.append(generate_evaluation_section(result.final, result.final_model, charts))
    sections.append(generate_resources_section())

    return '\n\n'.join(sections)


def generate_report(result, output_dir: Path, with_charts: bool = True) -> Path:
    """
    Write the walkthrough report.

    Args:
        result: WalkthroughResult
        output_dir: Directory for walkthrough.md and charts/
        with_charts: Render matplotlib charts

    Returns:
        Path to the Markdown report
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    charts = generate_all_charts(result, output_dir) if with_charts else {}
    report = generate_report_content(result, charts)

    report_path = output_dir / REPORT_FILENAME
    with open(report_path, 'w') as f:
        f.write(report)

    logger.info(f"Report saved to: {report_path}")
    return report_path


__all__ = ["REPORT_FILENAME", "generate_report_content", "generate_report"]
