import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "data" / "difficulty_tuning.json"
CONFIG_PATH_ENV = "BEATMAP_DIFFICULTY_CONFIG"


def config_path():
    """Returns the tuning file location, honouring the environment override."""
    override = os.getenv(CONFIG_PATH_ENV)
    return Path(override) if override else DEFAULT_CONFIG_PATH


def load_config(path=None):
    """
    Loads the difficulty tuning config file.

    Returns an empty dict when the file is missing or unreadable so callers
    fall back to the built-in defaults.
    """
    path = Path(path) if path else config_path()
    try:
        with open(path, 'r', encoding='utf8') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.warning("Could not find tuning config at %s, using defaults", path)
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Could not parse tuning config %s: %s", path, e)
        return {}
    if not isinstance(config, dict):
        logger.warning("Tuning config %s is not a JSON object, using defaults", path)
        return {}
    return config


# Load the config ONCE when the module is first imported
TUNING_CONFIG = load_config()


def get_config(key_path, default=None, config=None):
    """
    Safely gets a value from the loaded config using a 'dot.path'.
    Example: get_config('aim.strain_decay_base')
    """
    source = TUNING_CONFIG if config is None else config
    if not source:
        return default

    try:
        value = source
        for key in key_path.split('.'):
            value = value[key]
        return value
    except (KeyError, TypeError):
        logger.debug("Config key %s not set, using default", key_path)
        return default
