"""Configuration management for devpush."""

from .settings import (
    DEFAULT_DOMAIN,
    DEFAULT_EXCLUDES,
    DEFAULT_HOST,
    LOG_LEVELS,
    LoggingConfig,
    PushConfig,
    RemoteConfig,
    TransferConfig,
)
from .validation import (
    PushConfigValidator,
    SystemValidator,
    ValidationIssue,
    ValidationResult,
    validate_environment,
)

__all__ = [
    "DEFAULT_DOMAIN",
    "DEFAULT_EXCLUDES",
    "DEFAULT_HOST",
    "LOG_LEVELS",
    "LoggingConfig",
    "PushConfig",
    "RemoteConfig",
    "TransferConfig",
    "PushConfigValidator",
    "SystemValidator",
    "ValidationIssue",
    "ValidationResult",
    "validate_environment",
]
