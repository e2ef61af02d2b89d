"""Core push components: path resolution, rsync mirroring and the watch loop."""

from .errors import (
    ConfigurationError,
    DevPushError,
    PathResolutionError,
    TransferError,
    WatcherSetupError,
)
from .paths import resolve_relative_path
from .sync_engine import (
    RsyncTransfer,
    SyncEngine,
    SyncPlan,
    SyncResult,
    Transfer,
    build_exclude_flags,
)
from .tracked import GitTrackedFileLister
from .watch_loop import WatchLoop, WatchState
from .watcher import ChangeWatcher, WatchdogChangeWatcher

__all__ = [
    # Errors
    "DevPushError",
    "PathResolutionError",
    "TransferError",
    "WatcherSetupError",
    "ConfigurationError",
    # Push
    "resolve_relative_path",
    "build_exclude_flags",
    "SyncEngine",
    "SyncPlan",
    "SyncResult",
    "Transfer",
    "RsyncTransfer",
    # Watch
    "GitTrackedFileLister",
    "ChangeWatcher",
    "WatchdogChangeWatcher",
    "WatchLoop",
    "WatchState",
]
