"""
Tests for walkthrough report generation.

Tests cover:
- Markdown formatting helpers
- Section generators
- Chart files
- The complete walkthrough.md
"""
from dataclasses import replace

import numpy as np
import pandas as pd
import pytest

from winelab.config import DatasetConfig
from winelab.reporting import (
    REPORT_FILENAME,
    dataframe_to_markdown,
    generate_all_charts,
    generate_report,
    generate_report_content,
)
from winelab.reporting.formatters import format_value
from winelab.reporting.sections import (
    generate_comparison_section,
    generate_modeling_section,
    generate_preprocessing_section,
)


# =============================================================================
# FORMATTERS
# =============================================================================

class TestFormatters:
    """Tests for Markdown formatting helpers."""

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (float("nan"), "NA"),
        (0.98765, "0.988"),
        (np.float64(0.5), "0.500"),
        (7, "7"),
        ({}, "defaults"),
        ({"C": 1.0, "gamma": "scale"}, "C=1.000, gamma=scale"),
        ("a|b", "a\\|b"),
    ])
    def test_format_value(self, value, expected):
        assert format_value(value) == expected

    def test_dataframe_to_markdown(self):
        df = pd.DataFrame({"count": [59, 71], "proportion": [0.33146, 0.39888]},
                          index=pd.Index(["Barolo", "Grignolino"], name="varietal"))

        lines = dataframe_to_markdown(df).splitlines()

        assert lines[0] == "| varietal | count | proportion |"
        assert lines[1] == "|---|---|---|"
        assert lines[2] == "| Barolo | 59 | 0.331 |"
        assert len(lines) == 4

    def test_without_index(self):
        df = pd.DataFrame({"feature_a": ["alcohol"], "correlation": [0.5]})
        assert dataframe_to_markdown(df, index=False).splitlines()[2] == "| alcohol | 0.500 |"

    def test_empty(self):
        assert dataframe_to_markdown(pd.DataFrame()) == "_No rows._"


# =============================================================================
# SECTIONS
# =============================================================================

class TestSections:
    """Tests for individual report sections."""

    def test_preprocessing_drop_counts_rows(self, walkthrough_result):
        config_drop = replace(
            walkthrough_result.config,
            dataset=DatasetConfig(source="bundled", missing="drop"),
        )

        text = generate_preprocessing_section(
            config_drop,
            split_summary=walkthrough_result.split.summary(),
            recipe_steps=["center and scale all predictors"],
            n_rows_loaded=180,
            n_rows_used=178,
            removed_features=["batch"],
        )

        assert "2 of 180 row(s) removed" in text
        assert "75% of the wines" in text
        assert "1. center and scale all predictors" in text
        assert "removed: batch" in text

    def test_modeling_section_lists_models(self, walkthrough_result):
        text = generate_modeling_section(
            walkthrough_result.config, walkthrough_result.tuning, walkthrough_result.resamples
        )

        assert "### knn" in text
        assert "### naive_bayes" in text
        assert "3-fold cross-validation" in text
        assert "Selected parameters: n_neighbors=" in text

    def test_comparison_section(self, walkthrough_result):
        text = generate_comparison_section(
            walkthrough_result.comparison, "roc_auc", walkthrough_result.final_model, {}
        )

        assert f"The selected model is **{walkthrough_result.final_model}**" in text
        assert "params" not in text


# =============================================================================
# FULL REPORT
# =============================================================================

class TestReport:
    """Tests for generate_report."""

    def test_content_has_every_section(self, walkthrough_result):
        content = generate_report_content(walkthrough_result, charts={})

        for heading in (
            "# Predicting Wine Varietals",
            "## Introduction",
            "## Data Exploration",
            "## Preprocessing",
            "## Model Specification and Tuning",
            "## Model Comparison",
            "## Held-out Evaluation",
            "## Further Resources",
        ):
            assert heading in content
        assert "sklearn.datasets.load_wine" in content
        assert "![" not in content

    def test_charts_written(self, walkthrough_result, tmp_path):
        charts = generate_all_charts(walkthrough_result, tmp_path)

        assert set(charts) == {
            "class_distribution", "correlations", "resampling_roc_auc",
            "resampling_accuracy", "roc_curves", "confusion_matrix",
        }
        for path in charts.values():
            assert path.exists()
            assert path.parent == tmp_path / "charts"
            assert path.suffix == ".png"

    def test_report_written(self, walkthrough_result, tmp_path):
        path = generate_report(walkthrough_result, tmp_path)

        assert path == tmp_path / REPORT_FILENAME
        text = path.read_text()
        assert "![Confusion matrix](charts/" in text
        assert (tmp_path / "charts").is_dir()

    def test_report_without_charts(self, walkthrough_result, tmp_path):
        path = generate_report(walkthrough_result, tmp_path, with_charts=False)

        assert path.exists()
        assert not (tmp_path / "charts").exists()
