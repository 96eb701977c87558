from review_moderation.app import create_app
from review_moderation.core.environment import load_app_env
from review_moderation.core.logging import setup_logging

# Set up logging configuration
setup_logging()

# Environment must be loaded before the settings are first read
load_app_env()

app = create_app()
