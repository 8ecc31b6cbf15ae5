"""Turning a mod folder on disk into the file list the installer expects."""

from __future__ import annotations

import os
from pathlib import Path


def list_package_files(root: Path, prefix: str = "") -> list[str]:
    """
    List everything under root as package-relative paths.

    Directories end with os.sep, the same way the host reports extracted
    archives. Entries are sorted within each directory and parents come
    before their contents.
    """
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        rel_dir = os.path.relpath(dirpath, root)
        rel_dir = prefix if rel_dir == "." else os.path.join(prefix, rel_dir)

        for name in dirnames:
            files.append(os.path.join(rel_dir, name) + os.sep)
        for name in sorted(filenames):
            files.append(os.path.join(rel_dir, name))

    return files
