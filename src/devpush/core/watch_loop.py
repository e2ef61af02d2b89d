"""Re-push the working tree whenever a tracked file changes.

The loop alternates between two states. In IDLE it waits on the change
watcher; on a change it moves to SYNCING and runs one push synchronously.
When the push finishes, whatever its outcome, it returns to IDLE, lists the
tracked files again and re-arms the watcher, so files added to or removed
from git are picked up on the next cycle.
"""

from enum import Enum
import logging
from typing import Callable, List, Optional

from .errors import TransferError
from .watcher import ChangeWatcher

logger = logging.getLogger(__name__)


class WatchState(Enum):
    """Enumeration of watch loop states."""

    IDLE = "idle"  # Watching, no push in flight
    SYNCING = "syncing"  # Push running


class WatchLoop:
    """Drives a push callable from file-change notifications."""

    def __init__(
        self,
        sync: Callable[[], object],
        list_files: Callable[[], List[str]],
        watcher: ChangeWatcher,
        on_transition: Optional[Callable[[WatchState, WatchState], None]] = None,
    ):
        """Initialize the watch loop.

        Args:
            sync: Runs one push; may raise TransferError
            list_files: Returns the tracked file set; may raise WatcherSetupError
            watcher: Change watcher to arm with the tracked files
            on_transition: Called with (old, new) on every state change
        """
        self.sync = sync
        self.list_files = list_files
        self.watcher = watcher
        self.on_transition = on_transition
        self.state = WatchState.IDLE
        self.failures = 0

    def _transition(self, new_state: WatchState) -> None:
        old_state, self.state = self.state, new_state
        logger.debug(f"{old_state.value} -> {new_state.value}")
        if self.on_transition:
            self.on_transition(old_state, new_state)

    def _rearm(self) -> None:
        files = self.list_files()
        if not files:
            logger.warning("No tracked files to watch")
        self.watcher.arm(files)
        logger.debug(f"Armed watcher with {len(files)} tracked files")

    def run_cycle(self) -> bool:
        """Wait for one change, push once, then re-arm.

        Returns:
            True if the push succeeded, False if it raised TransferError
        """
        changed = self.watcher.wait_for_change()
        logger.info(f"Change detected: {changed}" if changed else "Change detected")

        self._transition(WatchState.SYNCING)
        succeeded = True
        try:
            self.sync()
        except TransferError as e:
            succeeded = False
            self.failures += 1
            logger.error(f"Push failed (exit {e.exit_code}); waiting for next change")
        finally:
            self._transition(WatchState.IDLE)

        self._rearm()
        return succeeded

    def run(self, max_cycles: Optional[int] = None) -> int:
        """Run until interrupted, or until ``max_cycles`` pushes have completed.

        Raises:
            WatcherSetupError: If the tracked files cannot be listed

        Returns:
            Number of completed cycles
        """
        cycles = 0
        try:
            self._rearm()
            logger.info("Watching tracked files for changes (Ctrl-C to stop)")
            while max_cycles is None or cycles < max_cycles:
                self.run_cycle()
                cycles += 1
        finally:
            self.watcher.close()
        return cycles
