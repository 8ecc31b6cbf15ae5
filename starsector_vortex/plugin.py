"""
Extension entry point.

The mod manager loads this module and calls main() with its extension
context. We register the game itself and the installer for its mods.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from .config import GAME, GAME_ID, GAME_NAME, INSTALLER
from .instructions import InstallResult, SupportedResult
from .installer import install_content, test_supported_content
from .locator import find_game

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameDescriptor:
    """How the host finds, launches and stages mods for a game."""
    id: str
    name: str
    query_path: Callable[[], str]
    query_mod_path: Callable[[], str]
    executable: Callable[[], str]
    logo: str = ""
    merge_mods: bool = True
    required_files: list[str] = field(default_factory=list)


TestSupported = Callable[[list, str], SupportedResult]
Install = Callable[..., InstallResult]


class HostContext(Protocol):
    """The part of the host's extension API this extension uses."""

    def register_game(self, game: GameDescriptor) -> None: ...

    def register_installer(self, installer_id: str, priority: int,
                           test_supported: TestSupported, install: Install) -> None: ...


def game_descriptor() -> GameDescriptor:
    return GameDescriptor(
        id=GAME_ID,
        name=GAME_NAME,
        query_path=find_game,
        query_mod_path=lambda: GAME.mod_path,
        executable=lambda: GAME.executable,
        logo=GAME.logo,
        merge_mods=GAME.merge_mods,
        required_files=list(GAME.required_files),
    )


def main(context: HostContext) -> bool:
    context.register_game(game_descriptor())
    context.register_installer(
        INSTALLER.installer_id, INSTALLER.priority,
        test_supported_content, install_content,
    )
    logger.info(f"Registered {GAME_NAME} extension")
    return True
