"""Configuration loading with YAML parsing and validation."""

from pathlib import Path
from typing import Any

import pydantic_yaml
import yaml

from .schema import AvadaConfig


def load_config(config_path: Path | str) -> AvadaConfig:
    """
    Load and validate annotator configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated AvadaConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        yaml_content = f.read()

    return pydantic_yaml.parse_yaml_raw_as(AvadaConfig, yaml_content)


def load_config_with_overrides(
    config_path: Path | str | None,
    overrides: dict[str, Any],
) -> AvadaConfig:
    """
    Load config from YAML (if given) and apply dictionary overrides.

    Used by CLI flags that override config file values. Overrides whose value
    is None are ignored so unset flags keep the file's value.

    Args:
        config_path: Path to YAML configuration file, or None for overrides only
        overrides: Dictionary of values to override (dotted keys supported)

    Returns:
        Validated AvadaConfig with overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If final config is invalid
    """
    # Merge into the raw YAML so the file alone need not be a valid config
    config_dict = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path, "r") as f:
            config_dict = yaml.safe_load(f) or {}

    for key, value in overrides.items():
        if value is None:
            continue
        if "." in key:
            parts = key.split(".")
            target = config_dict
            for part in parts[:-1]:
                target = target.setdefault(part, {})
            target[parts[-1]] = value
        else:
            config_dict[key] = value

    return AvadaConfig.model_validate(config_dict)
