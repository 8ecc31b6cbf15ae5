"""Exceptions raised back to the host."""

from __future__ import annotations

from typing import Optional

from .config import GAME_NAME, MOD_INFO_FILE


class PluginError(Exception):
    """Base class for errors this extension reports to the host."""


class NotFoundError(PluginError):
    """The game's install directory could not be located."""

    def __init__(self, message: str = f"{GAME_NAME} installation not found"):
        super().__init__(message)


class InvalidPackageError(PluginError):
    """A mod package cannot be installed as-is."""

    def __init__(self, reason: Optional[str] = None):
        message = f"invalid or unsupported {MOD_INFO_FILE}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.reason = reason
