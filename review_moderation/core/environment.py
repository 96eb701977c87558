import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PATHS = [".env"]


def running_in_docker() -> bool:
    return os.getenv("RUNNING_IN_DOCKER") == "true"


def load_app_env() -> None:
    """Load environment variables from the first .env file found."""
    logger.info("Loading environment variables...")
    if running_in_docker():
        logger.info("Skipping `load_app_env`, Docker environment detected.")
        return

    for path in ENV_PATHS:
        if Path(path).exists():
            load_dotenv(path, override=True)
            logger.info(f"Loaded .env from: {Path(path).resolve()}")
            return

    logger.warning("No .env file found, using process environment only")
