"""Tests for YAML search configuration."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from console.config import build_config, load_config, load_config_data, save_config
from fuzz_core.schemas import SearchConfig


class TestSearchConfigYaml:
    def test_load_config_from_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "search.yaml"
        config_data = {
            "expr1": "a*a",
            "expr2": "b + 1",
            "conditions": ["a > 0", "b > 0"],
            "num_variables": 2,
            "seed": 42,
            "max_attempts": 1000,
        }

        with open(config_path, "w") as f:
            yaml.dump(config_data, f)

        config = load_config(config_path)

        assert config.expr1 == "a*a"
        assert config.expr2 == "b + 1"
        assert config.conditions == ["a > 0", "b > 0"]
        assert config.num_variables == 2
        assert config.seed == 42
        assert config.max_attempts == 1000
        assert config.round_mode is True

    def test_load_config_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent.yaml")

    def test_load_config_empty_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("")

        with pytest.raises(ValueError, match="Empty or invalid"):
            load_config(config_path)

    def test_load_config_not_a_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            load_config_data(config_path)

    def test_load_config_broken_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("expr1: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_data(config_path)

    def test_load_config_invalid_values(self, tmp_path: Path) -> None:
        config_path = tmp_path / "invalid.yaml"
        config_path.write_text("expr1: a\nexpr2: '1'\nnum_variables: 40\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(config_path)

    def test_load_config_data_may_be_partial(self, tmp_path: Path) -> None:
        config_path = tmp_path / "partial.yaml"
        config_path.write_text("seed: 7\nround_mode: false\n")

        assert load_config_data(config_path) == {"seed": 7, "round_mode": False}

    def test_save_and_reload(self, tmp_path: Path) -> None:
        config = SearchConfig(expr1="a/3", expr2="b", round_mode=False, seed=5, time_limit_s=1.5)
        config_path = tmp_path / "nested" / "saved.yaml"

        save_config(config, config_path)

        assert config_path.exists()
        assert load_config(config_path) == config


def test_build_config_wraps_validation_errors() -> None:
    with pytest.raises(ValueError, match="Invalid configuration"):
        build_config({"expr1": "a"})
