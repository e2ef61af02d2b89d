"""Exception types raised by devpush components."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .sync_engine import SyncResult


class DevPushError(Exception):
    """Base class for all devpush errors."""

    pass


class PathResolutionError(DevPushError):
    """Raised when the working directory cannot be expressed relative to home."""

    pass


class TransferError(DevPushError):
    """Raised when the transfer tool exits with a non-zero status."""

    def __init__(self, message: str, exit_code: int, result: Optional["SyncResult"] = None):
        super().__init__(message)
        self.exit_code = exit_code
        self.result = result


class WatcherSetupError(DevPushError):
    """Raised when the set of tracked files cannot be listed."""

    pass


class ConfigurationError(DevPushError):
    """Raised when a configuration value is unusable."""

    pass
