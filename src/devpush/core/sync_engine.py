"""One-way rsync mirror of the working tree to a remote development host.

Each push is a stateless full-tree reconciliation: the local directory
``<home>/<relative>/`` is sent to ``<host>:<relative>``, skipping a fixed set
of local-only paths. Remote-only files are never deleted. rsync's delta
algorithm decides what actually crosses the wire; this module never skips
the call itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path
import subprocess
import time
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from .errors import ConfigurationError, TransferError
from .paths import resolve_relative_path

if TYPE_CHECKING:
    from ..config.settings import PushConfig

logger = logging.getLogger(__name__)

# -r recursive, -h human-readable sizes, -a archive, -v per-file output
BASE_FLAGS = ["-rhav", "--progress"]

COMMAND_NOT_FOUND = 127


def build_exclude_flags(excludes: Sequence[str]) -> List[str]:
    """Turn exclude patterns into ``--exclude <pattern>`` tokens, order preserved."""
    flags: List[str] = []
    for pattern in excludes:
        flags.extend(["--exclude", pattern])
    return flags


@dataclass
class SyncPlan:
    """Everything needed to run a single transfer."""

    source: str  # "<home>/<relative>/", trailing separator sends contents
    destination: str  # "<host>:<relative>"
    excludes: List[str]
    flags: List[str]
    relative_path: str
    host: str


@dataclass
class SyncResult:
    """Outcome of one transfer invocation."""

    source: str
    destination: str
    exit_code: int
    command: List[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class Transfer(ABC):
    """Capability that copies a local tree to a remote destination."""

    @abstractmethod
    def run(self, source: str, destination: str, excludes: Sequence[str], flags: Sequence[str]) -> int:
        """Run the transfer and return its exit status."""
        pass

    def command(
        self, source: str, destination: str, excludes: Sequence[str], flags: Sequence[str]
    ) -> List[str]:
        """Return the argv the transfer would run, if it is command based."""
        return []


class RsyncTransfer(Transfer):
    """Transfer backed by the rsync binary.

    Output is not captured so rsync's per-file and progress lines reach the
    operator's terminal directly.
    """

    def __init__(self, rsync_binary: str = "rsync"):
        self.rsync_binary = rsync_binary

    def command(
        self, source: str, destination: str, excludes: Sequence[str], flags: Sequence[str]
    ) -> List[str]:
        return [self.rsync_binary, *flags, *build_exclude_flags(excludes), source, destination]

    def run(self, source: str, destination: str, excludes: Sequence[str], flags: Sequence[str]) -> int:
        cmd = self.command(source, destination, excludes, flags)
        logger.debug(f"Running transfer: {' '.join(cmd)}")

        try:
            completed = subprocess.run(cmd, check=False)
        except FileNotFoundError as e:
            raise TransferError(
                f"Transfer tool '{self.rsync_binary}' not found: {e}", COMMAND_NOT_FOUND
            ) from e

        return completed.returncode


class SyncEngine:
    """Builds and runs a push of the current directory to a remote host."""

    def __init__(self, config: "PushConfig", transfer: Optional[Transfer] = None):
        """Initialize the sync engine.

        Args:
            config: Settings carrying the home directory, default host and rsync options
            transfer: Transfer capability (defaults to rsync)
        """
        self.config = config
        self.transfer = transfer or RsyncTransfer(config.transfer.rsync_binary)

    @property
    def excludes(self) -> List[str]:
        return list(self.config.transfer.excludes)

    def mode_flags(self) -> List[str]:
        flags = list(BASE_FLAGS)
        if self.config.transfer.compress:
            flags.append("-z")
        flags.extend(self.config.transfer.extra_args)
        return flags

    def resolve_host(self, host: Optional[str] = None) -> str:
        """Return the override host verbatim, or the configured default."""
        if host is None:
            return self.config.remote.target_host
        if not host.strip():
            raise ConfigurationError("Target host must not be empty")
        return host

    def plan(self, cwd: Union[str, Path], host: Optional[str] = None) -> SyncPlan:
        """Compute source, destination and flags without touching anything.

        Raises:
            PathResolutionError: If cwd is not inside the configured home
            ConfigurationError: If the host override is empty
        """
        relative = resolve_relative_path(cwd, self.config.home)
        target = self.resolve_host(host)

        local_root = os.path.normpath(os.path.join(os.fspath(self.config.home), relative))
        return SyncPlan(
            source=local_root.rstrip(os.sep) + os.sep,
            destination=f"{target}:{relative}",
            excludes=self.excludes,
            flags=self.mode_flags(),
            relative_path=relative,
            host=target,
        )

    def command(self, cwd: Union[str, Path], host: Optional[str] = None) -> List[str]:
        """Return the transfer command for a push, for dry runs."""
        plan = self.plan(cwd, host)
        return self.transfer.command(plan.source, plan.destination, plan.excludes, plan.flags)

    def push(self, cwd: Optional[Union[str, Path]] = None, host: Optional[str] = None) -> SyncResult:
        """Mirror ``cwd`` to the remote host.

        Every call invokes the transfer; nothing is memoized between calls.

        Args:
            cwd: Directory to push (defaults to the process working directory)
            host: Override for the configured default host

        Returns:
            SyncResult for a successful transfer

        Raises:
            PathResolutionError: If cwd is not inside home
            TransferError: If the transfer exits non-zero
        """
        if cwd is None:
            cwd = os.getcwd()

        plan = self.plan(cwd, host)
        cmd = self.transfer.command(plan.source, plan.destination, plan.excludes, plan.flags)

        logger.info(f"Pushing {plan.source} -> {plan.destination}")
        start = time.monotonic()
        exit_code = self.transfer.run(plan.source, plan.destination, plan.excludes, plan.flags)
        result = SyncResult(
            source=plan.source,
            destination=plan.destination,
            exit_code=exit_code,
            command=cmd,
            duration=time.monotonic() - start,
        )

        if not result.success:
            logger.error(f"Push to {plan.destination} failed with exit code {exit_code}")
            raise TransferError(
                f"Transfer to {plan.destination} exited with status {exit_code}",
                exit_code,
                result,
            )

        logger.info(f"✓ Pushed to {plan.destination} in {result.duration:.1f}s")
        return result
