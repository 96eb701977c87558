import logging.config
from pathlib import Path

import yaml

LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "logging.yaml"


def setup_logging(config_path: Path = LOGGING_CONFIG_PATH) -> None:
    """Load logging configuration from YAML file."""
    with open(config_path) as f:
        config = yaml.safe_load(f)

    logging.config.dictConfig(config)
