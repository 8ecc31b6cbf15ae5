"""
Mod installer for Starsector.

A Starsector mod is a folder with a mod_info.json at its top. The game loads
every folder under mods/, so installing means copying that folder, keeping
its name, and nothing above it.

The host calls test_supported_content() first with the package's file list.
If we claim the package, it extracts at least mod_info.json into a staging
directory and calls install_content() for the instruction list.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Optional

from .config import ATTR_AUTHOR, ATTR_NAME, ATTR_VERSION, GAME_ID, MOD_INFO_FILE
from .errors import InvalidPackageError
from .instructions import AttributeInstruction, CopyInstruction, InstallResult, SupportedResult
from .mod_info import ManifestSyntaxError, get_attr, read_mod_info

logger = logging.getLogger(__name__)


def find_mod_info(files: Iterable[str]) -> Optional[str]:
    """Return the first entry whose file name is mod_info.json."""
    for file in files:
        if os.path.basename(file) == MOD_INFO_FILE:
            return file
    return None


def test_supported_content(files: list[str], game_id: str) -> SupportedResult:
    """Claim any package for this game that contains a mod_info.json."""
    if game_id != GAME_ID:
        return SupportedResult(supported=False)

    content_path = find_mod_info(files)
    if content_path is None:
        return SupportedResult(supported=False)

    return SupportedResult(supported=True, required_files=[content_path])


def install_content(files: list[str], destination_path: str, game_id: str,
                    progress_delegate: Optional[Callable[[float], None]] = None,
                    ) -> InstallResult:
    """
    Build the instruction list for one mod package.

    Args:
        files: Package-relative paths; directories end with os.sep
        destination_path: Staging directory the package was extracted to
        game_id: The host's id for the game being managed
        progress_delegate: Accepted for the host's signature; unused

    Returns:
        The instructions. Empty if mod_info.json is not parseable.

    Raises:
        InvalidPackageError: if mod_info.json is missing, has no id, or sits
            at the package root.
    """
    content_path = find_mod_info(files)
    if content_path is None:
        raise InvalidPackageError("not found in package")

    base_path = os.path.dirname(content_path)
    content_file = Path(destination_path) / content_path
    logger.debug(f"Installing {game_id} package from {content_file}")

    try:
        manifest = read_mod_info(content_file)
    except ManifestSyntaxError as e:
        logger.warning(f"{MOD_INFO_FILE} invalid: {e}")
        return InstallResult()

    if not isinstance(manifest, dict) or manifest.get("id") in (None, ""):
        raise InvalidPackageError("missing id")

    # The mod folder's own name is what the game sees under mods/
    if not base_path:
        raise InvalidPackageError("must be inside the mod's folder, not the package root")
    output_path = os.path.basename(base_path)

    # Description is left alone so it can come from the mod's download page
    instructions = [
        AttributeInstruction(ATTR_NAME, get_attr(manifest, "name").strip()),
        AttributeInstruction(ATTR_VERSION, get_attr(manifest, "version").strip()),
        AttributeInstruction(ATTR_AUTHOR, get_attr(manifest, "author")),
    ]

    prefix = base_path + os.sep
    for file in files:
        if file.startswith(prefix) and not file.endswith(os.sep):
            instructions.append(CopyInstruction(
                source=file,
                destination=os.path.join(output_path, file[len(prefix):]),
            ))

    logger.info(
        f"Mod {manifest['id']}: {len(instructions) - 3} files to {output_path}"
    )
    return InstallResult(instructions)
