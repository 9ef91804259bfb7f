"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml


def load_yaml_config(filename: str) -> Any:
    """Load a YAML file from the config/ directory.

    An absolute ``filename`` is read as-is.
    """
    config_dir = Path(__file__).parent
    config_path = config_dir / filename
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)
