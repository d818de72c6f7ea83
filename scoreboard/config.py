"""
Configuration loader
"""
import logging
import os
import yaml
from pathlib import Path
from scoreboard.models import Settings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/scoreboard.yaml"


def load_settings(config_path: str = None) -> Settings:
    """
    Load settings from YAML file

    The path comes from the argument, then the SCOREBOARD_CONFIG environment
    variable, then config/scoreboard.yaml. A missing file is not an error:
    defaults are used (no admin allow-list, in-memory store).

    Args:
        config_path: Path to config file

    Returns:
        Settings object
    """
    path = Path(config_path or os.environ.get("SCOREBOARD_CONFIG", DEFAULT_CONFIG_PATH))

    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return Settings()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    settings = Settings(**data)
    settings.admin_emails = [e.strip().lower() for e in settings.admin_emails if e and e.strip()]
    logger.info(f"Loaded config from {path} ({len(settings.admin_emails)} admin identities)")
    return settings
