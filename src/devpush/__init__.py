"""devpush - mirror a local working tree to a remote development host.

This package provides:
- One-way rsync mirroring of the current directory, relative to home
- A watch loop that re-pushes whenever a git-tracked file changes
- YAML configuration for the default host, excludes and rsync options
"""

__version__ = "0.1.0"

# Core components
from .core.errors import (  # noqa: I001
    ConfigurationError,
    DevPushError,
    PathResolutionError,
    TransferError,
    WatcherSetupError,
)
from .core.paths import resolve_relative_path
from .core.sync_engine import RsyncTransfer, SyncEngine, SyncResult, Transfer
from .core.watch_loop import WatchLoop, WatchState
from .core.watcher import ChangeWatcher, WatchdogChangeWatcher
from .core.tracked import GitTrackedFileLister

# Configuration
from .config.settings import PushConfig

# Utilities
from .utils.logging import setup_logging

__all__ = [
    # Errors
    "DevPushError",
    "PathResolutionError",
    "TransferError",
    "WatcherSetupError",
    "ConfigurationError",
    # Core
    "resolve_relative_path",
    "SyncEngine",
    "SyncResult",
    "Transfer",
    "RsyncTransfer",
    "WatchLoop",
    "WatchState",
    "ChangeWatcher",
    "WatchdogChangeWatcher",
    "GitTrackedFileLister",
    # Configuration
    "PushConfig",
    # Utilities
    "setup_logging",
]
