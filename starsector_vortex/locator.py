"""
Game detection for the Starsector extension.

The Windows installer writes the install directory to the default value of
a per-user registry key. That is the only place we look.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import GAME_NAME, REGISTRY, RegistryLocation
from .errors import NotFoundError

logger = logging.getLogger(__name__)


def find_game(location: RegistryLocation = REGISTRY) -> str:
    """
    Return the game's install directory.

    Raises:
        NotFoundError: if the key is missing, the value is empty, or the
            platform has no registry.
    """
    install_path = _query_registry(location)
    if not install_path:
        logger.info(f"{GAME_NAME} not found in registry: {location.hive}\\{location.key}")
        raise NotFoundError()

    logger.info(f"Found {GAME_NAME} at {install_path}")
    return install_path


def _query_registry(location: RegistryLocation) -> Optional[str]:
    """Read one string value from the registry, or None if it isn't there."""
    try:
        import winreg
    except ImportError:
        logger.debug("winreg unavailable on this platform")
        return None

    try:
        hive = getattr(winreg, location.hive)
        with winreg.OpenKey(hive, location.key) as key:
            value, _ = winreg.QueryValueEx(key, location.value)
    except OSError as e:
        logger.debug(f"Registry lookup failed for {location.key}: {e}")
        return None

    return str(value) if value else None
