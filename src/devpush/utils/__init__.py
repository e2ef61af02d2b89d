"""Utility modules for devpush."""

from .logging import setup_logging

__all__ = ["setup_logging"]
