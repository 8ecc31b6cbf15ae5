"""
Constants for the Starsector game extension.

Everything here is fixed at import time. The host reads the game descriptor
values once when the extension is loaded; the installer reads the rest on
every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

GAME_ID = "starsector"
GAME_NAME = "Starsector"

# Every Starsector mod ships one of these in its own folder
MOD_INFO_FILE = "mod_info.json"

# Mod attributes set on the host's mod record
ATTR_NAME = "customFileName"
ATTR_VERSION = "version"
ATTR_AUTHOR = "author"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


@dataclass(frozen=True)
class RegistryLocation:
    """Where the game's installer records its install directory."""
    hive: str = "HKEY_CURRENT_USER"
    key: str = r"Software\Fractal Softworks\Starsector"
    value: str = ""                          # "" is the key's default value


@dataclass(frozen=True)
class GameSettings:
    """Static values handed to the host when the game is registered."""
    mod_path: str = "mods"
    executable: str = "starsector.exe"
    logo: str = "gameart.jpg"
    merge_mods: bool = True
    required_files: tuple[str, ...] = field(default=("starsector.exe",))


@dataclass(frozen=True)
class InstallerSettings:
    installer_id: str = GAME_ID
    priority: int = 50


REGISTRY = RegistryLocation()
GAME = GameSettings()
INSTALLER = InstallerSettings()
