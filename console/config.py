"""Search configuration with YAML support."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from fuzz_core.schemas import SearchConfig


def load_config_data(yaml_path: str | Path) -> dict[str, Any]:
    """Read raw configuration values from a YAML file.

    The result may be partial; command-line arguments fill in the rest.

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty or not a mapping
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

    if not data or not isinstance(data, Mapping):
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    return dict(data)


def build_config(data: Mapping[str, Any]) -> SearchConfig:
    try:
        return SearchConfig.from_dict(data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(yaml_path: str | Path) -> SearchConfig:
    """Load a complete search configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        SearchConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is invalid or missing required fields
    """
    return build_config(load_config_data(yaml_path))


def save_config(config: SearchConfig, yaml_path: str | Path) -> None:
    """Save search configuration to YAML file for reproducibility.

    Args:
        config: SearchConfig to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
