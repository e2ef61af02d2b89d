"""devpush configuration management.

This module provides the settings that drive a push: which host receives the
mirror, how rsync is invoked, which local-only paths are skipped, and how
logging is set up. Settings are optional; without a config file every value
falls back to the defaults below.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "milan"
DEFAULT_DOMAIN = "sev.lab.enarx.dev"
DEFAULT_EXCLUDES = [".direnv", ".git", "shell.nix", "target"]
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

CONFIG_SEARCH_PATHS = [
    Path(".devpush.yaml"),
    Path("devpush.yaml"),
    Path.home() / ".config" / "devpush" / "config.yaml",
]


@dataclass
class RemoteConfig:
    """Remote endpoint settings."""

    default_host: str = DEFAULT_HOST
    domain: Optional[str] = DEFAULT_DOMAIN

    @property
    def target_host(self) -> str:
        """Fully qualified default host."""
        if self.domain:
            return f"{self.default_host}.{self.domain}"
        return self.default_host

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"default_host": self.default_host, "domain": self.domain}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteConfig":
        """Create from dictionary."""
        default_host = data.get("default_host", DEFAULT_HOST)
        if not default_host or not isinstance(default_host, str):
            raise ConfigurationError("remote.default_host must be a non-empty string")
        domain = data.get("domain", DEFAULT_DOMAIN)
        if domain is not None and not isinstance(domain, str):
            raise ConfigurationError("remote.domain must be a string or null")
        return cls(default_host=default_host, domain=domain)


@dataclass
class TransferConfig:
    """rsync invocation settings."""

    rsync_binary: str = "rsync"
    excludes: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDES))
    compress: bool = False
    extra_args: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rsync_binary": self.rsync_binary,
            "excludes": list(self.excludes),
            "compress": self.compress,
            "extra_args": list(self.extra_args),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransferConfig":
        """Create from dictionary."""
        excludes = data.get("excludes", DEFAULT_EXCLUDES)
        extra_args = data.get("extra_args", [])
        if not isinstance(excludes, list) or not isinstance(extra_args, list):
            raise ConfigurationError("transfer.excludes and transfer.extra_args must be lists")
        rsync_binary = data.get("rsync_binary", "rsync")
        if not rsync_binary or not isinstance(rsync_binary, str):
            raise ConfigurationError("transfer.rsync_binary must be a non-empty string")
        # YAML "false" in quotes is a string, not a bool
        compress = data.get("compress", False)
        if not isinstance(compress, bool):
            raise ConfigurationError(f"transfer.compress must be true or false, got {compress!r}")
        return cls(
            rsync_binary=rsync_binary,
            excludes=[str(pattern) for pattern in excludes],
            compress=compress,
            extra_args=[str(arg) for arg in extra_args],
        )


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    level: str = "INFO"
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"level": self.level, "file": self.file}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Create from dictionary."""
        level = data.get("level", "INFO")
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
            )
        log_file = data.get("file")
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigurationError("logging.file must be a path or null")
        return cls(level=level.upper(), file=log_file)


@dataclass
class PushConfig:
    """Main devpush configuration.

    ``home`` is not read from the YAML file; the CLI resolves it once and
    passes it in so the sync engine never looks it up on its own.
    """

    remote: RemoteConfig = field(default_factory=RemoteConfig)
    transfer: TransferConfig = field(default_factory=TransferConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    home: Path = field(default_factory=Path.home)

    @classmethod
    def load(cls, config_path: Optional[Path] = None, home: Optional[Path] = None) -> "PushConfig":
        """Load configuration from file, falling back to defaults.

        Args:
            config_path: Path to a YAML config file. If None, searches standard locations.
            home: Home directory to mirror relative to (defaults to ``Path.home()``)

        Returns:
            PushConfig instance
        """
        if config_path is None:
            for path in CONFIG_SEARCH_PATHS:
                if path.exists():
                    config_path = path
                    break

        config_data: Dict[str, Any] = {}
        if config_path is not None and config_path.exists():
            try:
                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
                logger.debug(f"Loaded devpush config from {config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load devpush config from {config_path}: {e}")
                config_data = {}
        else:
            logger.debug("No devpush config found, using defaults")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"{config_path} must contain a YAML mapping")

        config = cls.from_dict(config_data)
        if home is not None:
            config.home = Path(home)
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PushConfig":
        """Create PushConfig from dictionary.

        Raises:
            ConfigurationError: If a section is present but not a mapping
        """
        sections = {}
        for name in ("remote", "transfer", "logging"):
            section = data.get(name)
            if section is None:
                section = {}
            elif not isinstance(section, dict):
                raise ConfigurationError(
                    f"'{name}' must be a mapping, got {type(section).__name__}"
                )
            sections[name] = section

        return cls(
            remote=RemoteConfig.from_dict(sections["remote"]),
            transfer=TransferConfig.from_dict(sections["transfer"]),
            logging=LoggingConfig.from_dict(sections["logging"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "remote": self.remote.to_dict(),
            "transfer": self.transfer.to_dict(),
            "logging": self.logging.to_dict(),
        }

    def to_yaml(self) -> str:
        """Render the configuration as YAML."""
        return yaml.dump(self.to_dict(), default_flow_style=False, indent=2, sort_keys=False)

    @staticmethod
    def create_default_config(output_path: Union[str, Path]) -> None:
        """Create a default configuration file with comments.

        Args:
            output_path: Path where to save the default configuration
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        excludes_block = "\n".join(f'    - "{pattern}"' for pattern in DEFAULT_EXCLUDES)
        config_content = f"""# devpush configuration file

# Remote endpoint
remote:
  default_host: "{DEFAULT_HOST}"  # Used when no host argument is given
  domain: "{DEFAULT_DOMAIN}"  # Appended to default_host (null to disable)

# rsync settings
transfer:
  rsync_binary: "rsync"
  excludes:  # Local-only paths that are never pushed
{excludes_block}
  compress: false  # Pass -z to rsync
  extra_args: []  # Appended verbatim before the source path

# Logging
logging:
  level: "INFO"  # DEBUG, INFO, WARNING, ERROR
  file: null  # Optional log file path
"""

        with open(output_path, "w") as f:
            f.write(config_content)

        logger.info(f"Created default devpush config at {output_path}")
