"""
Tests for the configuration layer.

Tests cover:
- Dataclass defaults and validation
- YAML loading (explicit vs. auto-discovered files)
- Model YAML flattening and tuning grids
- Merge precedence: CLI > config file > model YAML > defaults
- Walkthrough config building and cross-field validation
- Serialization round trips
"""
import json
from pathlib import Path

import pytest
import yaml

from winelab.config import (
    CONFIG_DIR,
    DEFAULT_MODELS,
    ConfigError,
    ConfigValidationError,
    DatasetConfig,
    RecipeConfig,
    ResamplingConfig,
    SplitConfig,
    TrainerConfig,
    WalkthroughConfig,
    build_model_config,
    build_walkthrough_config,
    flatten_model_config,
    load_model_config,
    load_tuning_grid,
    load_walkthrough_yaml,
    load_yaml_config,
    match_model_name,
    merge_configs,
    save_config,
    save_config_json,
    validate_config_strict,
    validate_model_config_structure,
    validate_walkthrough_config,
)


# =============================================================================
# DATACLASSES
# =============================================================================

class TestDataclasses:
    """Tests for the stage configs."""

    def test_walkthrough_defaults(self):
        config = WalkthroughConfig()

        assert config.models == DEFAULT_MODELS
        assert config.metric == "roc_auc"
        assert config.split.test_size == 0.25
        assert config.resampling.n_splits == 10
        assert config.tune

    def test_bundled_location(self):
        assert DatasetConfig(source="bundled").location == "sklearn.datasets.load_wine"

    def test_path_string_converted(self, tmp_path):
        config = DatasetConfig(source="file", path=str(tmp_path / "wine.csv"))
        assert isinstance(config.path, Path)
        assert config.location == str(tmp_path / "wine.csv")

    @pytest.mark.parametrize("kwargs,match", [
        ({"source": "s3"}, "source must be one of"),
        ({"missing": "ignore"}, "missing must be one of"),
    ])
    def test_invalid_dataset(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            DatasetConfig(**kwargs)

    @pytest.mark.parametrize("kwargs,match", [
        ({"scaling": "never"}, "scaling must be one of"),
        ({"knn_neighbors": 0}, "knn_neighbors"),
        ({"nzv_freq_cut": 1.0}, "nzv_freq_cut"),
        ({"nzv_unique_cut": 150.0}, "nzv_unique_cut"),
    ])
    def test_invalid_recipe(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            RecipeConfig(**kwargs)

    def test_invalid_resampling(self):
        with pytest.raises(ValueError, match="n_splits"):
            ResamplingConfig(n_splits=1)
        with pytest.raises(ValueError, match="n_repeats"):
            ResamplingConfig(n_repeats=0)

    def test_unshuffled_repeats_rejected(self):
        """Repeated folds are always reshuffled, so shuffle=False cannot hold."""
        with pytest.raises(ValueError, match="shuffle=False"):
            ResamplingConfig(n_repeats=3, shuffle=False)
        assert not ResamplingConfig(n_repeats=1, shuffle=False).shuffle

    @pytest.mark.parametrize("section", [
        DatasetConfig(source="bundled", missing="drop"),
        SplitConfig(test_size=0.3, random_seed=1),
        RecipeConfig(impute="knn", scaling="auto"),
        ResamplingConfig(n_splits=5, n_repeats=2),
    ])
    def test_section_dict_round_trip(self, section):
        assert type(section).from_dict(section.to_dict()) == section

    def test_dataset_path_serialized_as_string(self, tmp_path):
        data = DatasetConfig(source="file", path=tmp_path / "wine.csv").to_dict()
        assert data["path"] == str(tmp_path / "wine.csv")

    def test_n_resamples(self):
        assert ResamplingConfig(n_splits=5, n_repeats=3).n_resamples == 15

    @pytest.mark.parametrize("kwargs,match", [
        ({"models": []}, "at least one model"),
        ({"metric": "log_loss"}, "metric must be one of"),
    ])
    def test_invalid_walkthrough(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            WalkthroughConfig(**kwargs)

    def test_dict_round_trip(self, tmp_path):
        config = WalkthroughConfig(
            dataset=DatasetConfig(source="file", path=tmp_path / "wine.csv"),
            models=["knn"],
            model_configs={"knn": {"n_neighbors": 9}},
            output_dir=tmp_path,
        )

        restored = WalkthroughConfig.from_dict(config.to_dict())

        assert restored == config

    def test_trainer_config_recipe_from_dict(self):
        config = TrainerConfig(model_name="svm", recipe={"impute": "knn"})
        assert isinstance(config.recipe, RecipeConfig)
        assert config.to_dict()["recipe"]["impute"] == "knn"


# =============================================================================
# YAML LOADING
# =============================================================================

class TestYamlLoading:
    """Tests for YAML loaders."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("metric: accuracy\nmodels: [knn]\n")
        assert load_yaml_config(path) == {"metric": "accuracy", "models": ["knn"]}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_missing_file_auto_discovery(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "absent.yaml")

    def test_missing_file_explicit(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml_config(tmp_path / "absent.yaml", explicit=True)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("models: [knn\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml_config(path)
        with pytest.raises(ConfigError, match="Failed to parse"):
            load_yaml_config(path, explicit=True)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- knn\n- svm\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml_config(path)

    def test_default_walkthrough_yaml(self):
        data = load_walkthrough_yaml()
        assert data["metric"] == "roc_auc"
        assert data["models"] == DEFAULT_MODELS


# =============================================================================
# MODEL CONFIGS
# =============================================================================

class TestModelConfigs:
    """Tests for model YAML files."""

    @pytest.mark.parametrize("name", DEFAULT_MODELS)
    def test_shipped_model_yaml_valid(self, name):
        raw = load_model_config(name, flatten=False)
        assert validate_model_config_structure(raw) == []
        assert raw["model"]["name"] == name

    def test_flatten(self):
        raw = {
            "model": {"name": "knn", "family": "classical"},
            "defaults": {"n_neighbors": 5},
            "tuning": {"grid": {"n_neighbors": [3, 5]}},
            "weights": "distance",
        }
        assert flatten_model_config(raw) == {"n_neighbors": 5, "weights": "distance"}

    def test_structure_errors(self):
        errors = validate_model_config_structure(
            {"model": {"name": "x", "family": "deep"}, "tuning": {"grid": {"a": []}}}
        )
        assert any("model.family" in e for e in errors)
        assert any("tuning.grid.a" in e for e in errors)

    def test_tuning_grid(self):
        grid = load_tuning_grid("knn", CONFIG_DIR)
        assert set(grid) == {"n_neighbors", "weights"}

    def test_tuning_grid_not_a_list(self, tmp_path):
        (tmp_path / "knn.yaml").write_text("tuning:\n  grid:\n    n_neighbors: 5\n")
        with pytest.raises(ConfigError, match="must be a list"):
            load_tuning_grid("knn", tmp_path)

    def test_no_tuning_section(self, tmp_path):
        (tmp_path / "knn.yaml").write_text("defaults:\n  n_neighbors: 5\n")
        assert load_tuning_grid("knn", tmp_path) is None


# =============================================================================
# MERGING
# =============================================================================

class TestMerging:
    """Tests for merge precedence."""

    def test_deep_merge(self):
        base = {"recipe": {"impute": "median", "nzv": True}, "tune": True}
        override = {"recipe": {"impute": "knn"}, "tune": False}

        assert merge_configs(base, override) == {
            "recipe": {"impute": "knn", "nzv": True},
            "tune": False,
        }

    def test_shallow_merge(self):
        merged = merge_configs({"recipe": {"impute": "median", "nzv": True}}, {"recipe": {"impute": "knn"}}, deep=False)
        assert merged == {"recipe": {"impute": "knn"}}

    def test_model_yaml_over_defaults(self):
        config = build_model_config("random_forest", defaults={"n_estimators": 10, "extra": 1})
        assert config["n_estimators"] == 500
        assert config["extra"] == 1

    def test_cli_over_everything(self, tmp_path):
        path = tmp_path / "rf.yaml"
        path.write_text("defaults:\n  n_estimators: 200\n  min_samples_leaf: 3\n")

        config = build_model_config(
            "random_forest",
            cli_args={"n_estimators": 25, "max_depth": None},
            config_file=path,
        )

        assert config["n_estimators"] == 25
        assert config["min_samples_leaf"] == 3
        assert "max_depth" not in config

    def test_explicit_model_file_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            build_model_config("knn", config_file=tmp_path / "absent.yaml")

    def test_walkthrough_overrides(self):
        config = build_walkthrough_config(
            overrides={
                "dataset": {"source": "bundled", "missing": None},
                "resampling": {"n_splits": 5},
                "models": ["svm", "knn"],
                "metric": None,
            }
        )

        assert config.dataset.source == "bundled"
        assert config.dataset.missing == "impute"
        assert config.resampling.n_splits == 5
        assert config.resampling.random_seed == 42
        assert config.models == ["svm", "knn"]
        assert config.metric == "roc_auc"

    def test_walkthrough_config_file(self, tmp_path):
        path = tmp_path / "walk.yaml"
        path.write_text("models: [knn]\nmetric: accuracy\ntune: false\n")

        config = build_walkthrough_config(path, overrides={"metric": "kappa"})

        assert config.models == ["knn"]
        assert config.metric == "kappa"
        assert not config.tune
        assert config.dataset.source == "url"

    def test_invalid_values_wrapped(self):
        with pytest.raises(ConfigError, match="Invalid walkthrough configuration"):
            build_walkthrough_config(overrides={"split": {"test_size": 2.0}})

    def test_unknown_key_wrapped(self):
        with pytest.raises(ConfigError):
            build_walkthrough_config(overrides={"epochs": 10})

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            build_walkthrough_config(tmp_path / "absent.yaml")


# =============================================================================
# VALIDATION AND SERIALIZATION
# =============================================================================

class TestValidation:
    """Tests for cross-field validation."""

    def test_valid_default(self):
        assert validate_walkthrough_config(WalkthroughConfig()) == []

    def test_aliases_accepted(self):
        assert validate_walkthrough_config(WalkthroughConfig(models=["rf", "svc"])) == []

    def test_collects_all_errors(self):
        config = WalkthroughConfig(
            models=["knn", "knn", "xgboost"],
            model_configs={"svm": {"C": 2.0}},
            resampling=ResamplingConfig(n_splits=60),
        )

        errors = validate_walkthrough_config(config)

        assert len(errors) == 4
        assert any("Unknown model 'xgboost'" in e for e in errors)
        assert any("Duplicate" in e for e in errors)
        assert any("unused model 'svm'" in e for e in errors)
        assert any("n_splits=60" in e for e in errors)

    @pytest.mark.parametrize("final_model", ["rf", "RF", "random_forest", "nearest_neighbors"])
    def test_final_model_alias_accepted(self, final_model):
        config = WalkthroughConfig(models=["random_forest", "knn"], final_model=final_model)
        assert validate_walkthrough_config(config) == []

    def test_final_model_not_in_models(self):
        errors = validate_walkthrough_config(WalkthroughConfig(models=["knn"], final_model="svc"))
        assert errors == ["final_model 'svc' is not in models ['knn']"]

    def test_unknown_final_model(self):
        errors = validate_walkthrough_config(WalkthroughConfig(models=["knn"], final_model="xgboost"))
        assert len(errors) == 1
        assert "Unknown final_model 'xgboost'" in errors[0]

    def test_match_model_name(self):
        assert match_model_name("RF", ["knn", "random_forest"]) == "random_forest"
        assert match_model_name("svm", ["knn"]) is None

    def test_strict_raises(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config_strict(WalkthroughConfig(models=["xgboost"]))
        assert len(exc_info.value.errors) == 1


class TestSerialization:
    """Tests for saving configs."""

    def test_save_yaml(self, tmp_path):
        config = WalkthroughConfig(models=["knn"], output_dir=tmp_path)
        path = tmp_path / "nested" / "walkthrough_config.yaml"

        save_config(config.to_dict(), path)

        with open(path) as f:
            loaded = yaml.safe_load(f)
        assert WalkthroughConfig.from_dict(loaded) == config

    def test_save_json_stringifies(self, tmp_path):
        path = tmp_path / "config.json"
        save_config_json({"output_dir": tmp_path, "n": 3}, path)

        with open(path) as f:
            assert json.load(f) == {"output_dir": str(tmp_path), "n": 3}
