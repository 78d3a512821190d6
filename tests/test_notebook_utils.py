"""
Tests for the interactive notebook helpers.
"""
from winelab.utils import display_metrics, get_sample_config


class TestGetSampleConfig:
    """Tests for get_sample_config."""

    def test_bundled_source(self):
        config = get_sample_config()

        assert config.dataset.source == "bundled"
        assert config.resampling.n_splits == 10

    def test_quick_mode(self):
        config = get_sample_config(quick_mode=True)

        assert config.resampling.n_splits == 3
        assert config.model_configs["random_forest"]["n_estimators"] == 50
        assert not config.write_report
        assert not config.save_artifacts

    def test_overrides_drop_unused_forest_config(self):
        config = get_sample_config(quick_mode=True, models=["knn"], metric="accuracy")

        assert config.models == ["knn"]
        assert config.metric == "accuracy"
        assert "random_forest" not in config.model_configs


class TestDisplayMetrics:
    """Tests for display_metrics."""

    def test_prints_trainer_results(self, capsys):
        results = {
            "model_name": "knn",
            "run_id": "knn_1",
            "training_metrics": {"train_accuracy": 1.0, "train_f1": 1.0, "training_time_seconds": 0.2},
            "test_metrics": {
                "accuracy": 0.96, "kappa": 0.94, "macro_f1": 0.95, "roc_auc": 0.99,
                "per_class_f1": {"Barolo": 1.0},
            },
        }

        display_metrics(results, title="Held-out")
        out = capsys.readouterr().out

        assert "Held-out" in out
        assert "Model: knn" in out
        assert "Accuracy: 0.9600" in out
        assert "Barolo: 1.0000" in out
