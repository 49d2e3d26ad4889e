"""
Settings Module for Chunk Finder

Provides persistent storage for user preferences using JSON.
Settings are stored in config.json in the working directory unless another
path is given.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .keys import DEFAULT_KEY, DEFAULT_MODIFIER

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "hotkey_key": DEFAULT_KEY,
    "hotkey_modifier": DEFAULT_MODIFIER,
    "overlay_visible": True,
    "overlay_x": -1,          # -1 = default position
    "overlay_y": -1,
    "auto_refresh_ms": 0,     # 0 = read on hotkey only
    "debug_enabled": False,
    "window_title": "Minecraft",
    "window_class": "LWJGL",
    "process_name": "",
}

# Overlay placement
OVERLAY_WIDTH = 200
OVERLAY_HEIGHT = 80
OVERLAY_MIN_VISIBLE_X = 100   # Pixels that must stay on screen
OVERLAY_MIN_VISIBLE_Y = 50
OVERLAY_DEFAULT_RIGHT_MARGIN = 220
OVERLAY_DEFAULT_TOP = 20


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: config.json)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = Path(path) if path else SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning(f"Settings file {path} does not hold an object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys and wrong-typed values
        result = DEFAULT_SETTINGS.copy()
        for key, value in settings.items():
            default = DEFAULT_SETTINGS.get(key)
            if default is not None and type(value) is not type(default):
                logger.warning(f"Setting {key}={value!r} is not a {type(default).__name__}, "
                               f"using default {default!r}")
                continue
            result[key] = value
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> bool:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (default: config.json)

    Returns:
        True if the file was written
    """
    path = Path(path) if path else SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
        return True
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
        return False


def resolve_overlay_position(
    x: int,
    y: int,
    virtual_screen: Tuple[int, int, int, int],
    primary_width: int
) -> Tuple[int, int]:
    """
    Pick where the overlay opens.

    A saved position is kept only if enough of the overlay would remain on
    the virtual screen; otherwise it goes to the top-right of the primary
    screen.

    Args:
        x: Saved left edge (-1 when never saved)
        y: Saved top edge
        virtual_screen: (left, top, width, height) spanning all monitors
        primary_width: Width of the primary screen

    Returns:
        (x, y) top-left position
    """
    left, top, width, height = virtual_screen
    right = left + width
    bottom = top + height

    if ((x, y) == (-1, -1) or
            x < left or x > right - OVERLAY_MIN_VISIBLE_X or
            y < top or y > bottom - OVERLAY_MIN_VISIBLE_Y):
        return primary_width - OVERLAY_DEFAULT_RIGHT_MARGIN, OVERLAY_DEFAULT_TOP
    return x, y
