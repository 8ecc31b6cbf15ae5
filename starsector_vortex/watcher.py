"""
Live mod_info.json checking for mod authors.

Watches a mod folder with a watchdog Observer and reports every time
mod_info.json is written, so the author can see the install plan change
as they edit.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import MOD_INFO_FILE

logger = logging.getLogger(__name__)


class ModInfoEventHandler(FileSystemEventHandler):
    """Forwards changes to mod_info.json; ignores everything else."""

    def __init__(self, mod_dir: Path, on_change: Callable[[Path], None]):
        self.mod_dir = mod_dir
        self.on_change = on_change

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via rename-over land here
        if not event.is_directory and Path(str(event.dest_path)).name == MOD_INFO_FILE:
            self.on_change(self.mod_dir)

    def _handle(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        if Path(str(event.src_path)).name == MOD_INFO_FILE:
            logger.debug(f"{MOD_INFO_FILE} changed: {event.src_path}")
            self.on_change(self.mod_dir)


class ModInfoWatcher:
    """Owns one Observer on one mod folder."""

    def __init__(self, mod_dir: Path, on_change: Callable[[Path], None]):
        self.mod_dir = mod_dir
        self.on_change = on_change
        self._observer: Optional[Observer] = None
        self._lock = threading.Lock()

    def start(self) -> bool:
        """
        Start watching. Returns False if already running or the folder
        does not exist.
        """
        with self._lock:
            if self._observer is not None:
                logger.debug(f"Already watching {self.mod_dir}")
                return False

            if not self.mod_dir.is_dir():
                logger.warning(f"Cannot watch {self.mod_dir}: not a directory")
                return False

            handler = ModInfoEventHandler(self.mod_dir, self.on_change)
            observer = Observer()
            observer.schedule(handler, str(self.mod_dir), recursive=True)
            observer.start()

            self._observer = observer
            logger.info(f"Started watching {self.mod_dir}")
            return True

    def stop(self) -> bool:
        """Stop watching. Returns True if a watcher was stopped."""
        with self._lock:
            observer, self._observer = self._observer, None
            if observer is None:
                return False

            observer.stop()
            observer.join(timeout=5)
            logger.info(f"Stopped watching {self.mod_dir}")
            return True

    def is_running(self) -> bool:
        with self._lock:
            return self._observer is not None
