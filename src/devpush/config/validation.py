"""Configuration and environment validation for devpush.

Checks that the collaborator binaries (rsync, git) are reachable and that the
loaded configuration keeps the push a one-way, additive mirror. Type errors in
the YAML are already rejected by ``PushConfig.from_dict``; what is reported
here are settings that load fine but will not behave as expected.
"""

from dataclasses import dataclass, field
import logging
import shutil
from typing import List, Optional

from .settings import PushConfig

logger = logging.getLogger(__name__)

# rsync options that make the mirror destructive on the remote side
DESTRUCTIVE_RSYNC_OPTIONS = ("--delete", "--remove-source-files")


@dataclass
class ValidationIssue:
    """One problem found in the configuration or environment."""

    message: str
    field: Optional[str] = None
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.field}: {self.message}" if self.field else self.message
        if self.suggestion:
            text += f" ({self.suggestion})"
        return text


@dataclass
class ValidationResult:
    """Errors block a push; warnings are shown and the push goes ahead."""

    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    def add_error(self, message: str, field: Optional[str] = None, suggestion: Optional[str] = None):
        self.errors.append(ValidationIssue(message, field, suggestion))

    def add_warning(
        self, message: str, field: Optional[str] = None, suggestion: Optional[str] = None
    ):
        self.warnings.append(ValidationIssue(message, field, suggestion))

    def merge(self, other: "ValidationResult") -> None:
        """Append all issues from another result."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class PushConfigValidator:
    """Validator for devpush settings."""

    def __init__(self, config: PushConfig):
        self.config = config

    def validate(self) -> ValidationResult:
        result = ValidationResult()

        if not self.config.home.is_absolute():
            result.add_error(f"Home directory is not absolute: {self.config.home}", "home")

        for pattern in self.config.transfer.excludes:
            if not pattern.strip():
                result.add_error("Empty exclude pattern", "transfer.excludes")

        for arg in self.config.transfer.extra_args:
            if arg.startswith(DESTRUCTIVE_RSYNC_OPTIONS):
                result.add_warning(
                    f"{arg} removes files that the push would otherwise leave alone",
                    "transfer.extra_args",
                    suggestion="remove it to keep the mirror additive",
                )

        return result


class SystemValidator:
    """Validator for the external tools devpush shells out to."""

    @staticmethod
    def validate_tools(rsync_binary: str = "rsync", git_binary: str = "git") -> ValidationResult:
        """Check that rsync and git are on PATH."""
        result = ValidationResult()

        if shutil.which(rsync_binary) is None:
            result.add_warning(
                f"'{rsync_binary}' not found on PATH",
                suggestion="install rsync to push files to the remote host",
            )

        if shutil.which(git_binary) is None:
            result.add_warning(
                f"'{git_binary}' not found on PATH",
                suggestion="install git to use watch mode",
            )

        return result


def validate_environment(config: PushConfig) -> ValidationResult:
    """Validate configuration and tools together."""
    result = PushConfigValidator(config).validate()
    result.merge(SystemValidator.validate_tools(config.transfer.rsync_binary))
    for issue in result.errors + result.warnings:
        logger.debug(f"Validation: {issue}")
    return result
