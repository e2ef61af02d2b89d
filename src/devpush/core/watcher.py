"""File-change watching for the push loop.

A watcher is armed with an explicit list of files and then blocks until one
of them changes. Changes are collapsed into a single pending flag, so any
number of events between two waits produce exactly one wake-up.
"""

from abc import ABC, abstractmethod
import logging
import os
import threading
from typing import Dict, Iterable, Optional, Set

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import ObservedWatch

logger = logging.getLogger(__name__)

# "opened" and "closed_no_write" do not change content
CHANGE_EVENT_TYPES = {"modified", "created", "deleted", "moved", "closed"}


class ChangeWatcher(ABC):
    """Capability that reports changes to a fixed set of files."""

    @abstractmethod
    def arm(self, paths: Iterable[str]) -> None:
        """Watch exactly ``paths``, replacing any previous set."""
        pass

    @abstractmethod
    def wait_for_change(self, timeout: Optional[float] = None) -> Optional[str]:
        """Block until a watched file changes.

        Returns the path that triggered the wake-up, or None on timeout.
        """
        pass

    def close(self) -> None:
        """Release watcher resources."""
        pass


class TrackedFileEventHandler(FileSystemEventHandler):
    """Filters raw filesystem events down to the armed file set."""

    def __init__(self, on_change):
        super().__init__()
        self.on_change = on_change
        self.paths: Set[str] = set()

    def set_paths(self, paths: Iterable[str]) -> None:
        self.paths = {os.path.abspath(p) for p in paths}

    def matching_path(self, event: FileSystemEvent) -> Optional[str]:
        if event.is_directory or event.event_type not in CHANGE_EVENT_TYPES:
            return None

        candidates = [event.src_path]
        # Editors that save via rename show up as a move onto the tracked path
        dest_path = getattr(event, "dest_path", None)
        if dest_path:
            candidates.append(dest_path)

        for candidate in candidates:
            path = os.path.abspath(os.fsdecode(candidate))
            if path in self.paths:
                return path
        return None

    def on_any_event(self, event: FileSystemEvent) -> None:
        path = self.matching_path(event)
        if path is not None:
            logger.debug(f"{event.event_type}: {path}")
            self.on_change(path)


class WatchdogChangeWatcher(ChangeWatcher):
    """ChangeWatcher backed by a watchdog observer thread.

    One non-recursive watch is scheduled per distinct parent directory; the
    handler drops events for files outside the armed set. The observer keeps
    running between waits, so changes made while a push is in flight are
    remembered and wake the next wait immediately.
    """

    def __init__(self, observer=None):
        self.observer = observer if observer is not None else Observer()
        self.handler = TrackedFileEventHandler(self._record_change)
        self._pending = threading.Event()
        self._lock = threading.Lock()
        self._last_path: Optional[str] = None
        self._watches: Dict[str, ObservedWatch] = {}
        self._started = False

    def _record_change(self, path: str) -> None:
        with self._lock:
            self._last_path = path
            self._pending.set()

    def arm(self, paths: Iterable[str]) -> None:
        paths = list(paths)
        self.handler.set_paths(paths)

        directories = sorted({os.path.dirname(os.path.abspath(p)) for p in paths})
        wanted = {d for d in directories if os.path.isdir(d)}

        # Schedule before unscheduling: a tracked directory is never unwatched
        for directory in sorted(wanted - self._watches.keys()):
            self._watches[directory] = self.observer.schedule(
                self.handler, directory, recursive=False
            )
        for directory in sorted(self._watches.keys() - wanted):
            self.observer.unschedule(self._watches.pop(directory))

        if not self._started:
            self.observer.start()
            self._started = True

        logger.debug(f"Watching {len(paths)} files in {len(directories)} directories")

    def wait_for_change(self, timeout: Optional[float] = None) -> Optional[str]:
        if not self._pending.wait(timeout):
            return None

        with self._lock:
            path = self._last_path
            self._last_path = None
            self._pending.clear()
        return path

    def close(self) -> None:
        if self._started:
            self.observer.stop()
            self.observer.join()
            self._watches.clear()
            self._started = False
