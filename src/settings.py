"""
Settings Module for Ratio Diamond

Provides persistent storage for game preferences using JSON.
Settings are stored in config.json in the project root and are checked
against the registered puzzle topologies when loaded.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any

from src.puzzle import create_calculator, get_calculator_names

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "calculator_name": "diamond",
    "value_min": 1,
    "value_max": 10,
    "game_clear_count": 5,
    "max_attempts": None,
}


def load_settings() -> Dict[str, Any]:
    """
    Load settings from config.json.

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not SETTINGS_FILE.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(SETTINGS_FILE, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning("Settings file is not a JSON object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        result = validate_settings(result)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def validate_settings(settings: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace unusable puzzle settings with their defaults.

    The value range must hold at least as many integers as the stage has
    cells, the clear count must be positive and the calculator must be
    registered.

    Args:
        settings: Merged settings dictionary

    Returns:
        New dictionary with invalid entries reset
    """
    result = dict(settings)

    if result.get("calculator_name") not in get_calculator_names():
        logger.warning(f"Unknown calculator '{result.get('calculator_name')}', using default")
        result["calculator_name"] = DEFAULT_SETTINGS["calculator_name"]

    stage_size = create_calculator(result["calculator_name"]).stage_size
    low, high = result.get("value_min"), result.get("value_max")
    if not isinstance(low, int) or not isinstance(high, int) or high - low + 1 < stage_size:
        logger.warning(f"Value range {low}..{high} too small for {stage_size} cells, using default")
        result["value_min"] = DEFAULT_SETTINGS["value_min"]
        result["value_max"] = DEFAULT_SETTINGS["value_max"]

    clear_count = result.get("game_clear_count")
    if not isinstance(clear_count, int) or clear_count < 1:
        logger.warning(f"Invalid game_clear_count {clear_count!r}, using default")
        result["game_clear_count"] = DEFAULT_SETTINGS["game_clear_count"]

    max_attempts = result.get("max_attempts")
    if max_attempts is not None and (not isinstance(max_attempts, int) or max_attempts < 1):
        logger.warning(f"Invalid max_attempts {max_attempts!r}, generation is unbounded")
        result["max_attempts"] = None

    return result


def save_settings(settings: Dict[str, Any]) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
    """
    try:
        with open(SETTINGS_FILE, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
