"""
Starsector mod tool

Command-line front end to the Starsector extension, for mod authors and
for checking a setup without the mod manager:

    starsector-mod-tool locate
    starsector-mod-tool check path/to/MyMod
    starsector-mod-tool watch path/to/MyMod
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from starsector_vortex.config import GAME_ID, LOG_FORMAT
from starsector_vortex.errors import PluginError
from starsector_vortex.installer import install_content, test_supported_content
from starsector_vortex.locator import find_game
from starsector_vortex.package import list_package_files
from starsector_vortex.watcher import ModInfoWatcher

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def locate() -> int:
    print(find_game())
    return 0


def check(mod_dir: Path) -> int:
    """Print the install plan for a mod folder. Returns the exit code."""
    mod_dir = mod_dir.resolve()
    files = list_package_files(mod_dir, prefix=mod_dir.name)

    probe = test_supported_content(files, GAME_ID)
    if not probe.supported:
        logger.error(f"Not a Starsector mod (no mod_info.json): {mod_dir}")
        return 1

    result = install_content(files, str(mod_dir.parent), GAME_ID)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def recheck(mod_dir: Path) -> None:
    """Run check() from the watcher thread, logging failures instead of raising."""
    try:
        check(mod_dir)
    except (PluginError, OSError, ValueError) as e:
        logger.error(f"Check failed for {mod_dir}: {e}")


def watch(mod_dir: Path) -> int:
    """Re-check the mod every time its mod_info.json changes, until Ctrl+C."""
    recheck(mod_dir)
    watcher = ModInfoWatcher(mod_dir.resolve(), recheck)
    if not watcher.start():
        return 1

    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="starsector-mod-tool",
        description="Starsector game extension: locate the game and check mods",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log debug messages",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to this file instead of stderr",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("locate", help="Print the game's install directory")
    check_p = sub.add_parser("check", help="Print the install instructions for a mod folder")
    check_p.add_argument("mod_dir", type=Path)
    watch_p = sub.add_parser("watch", help="Re-check a mod folder whenever mod_info.json changes")
    watch_p.add_argument("mod_dir", type=Path)
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    try:
        if args.command == "locate":
            return locate()
        if args.command == "check":
            return check(args.mod_dir)
        return watch(args.mod_dir)
    except PluginError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
