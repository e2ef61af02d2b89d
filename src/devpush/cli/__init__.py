"""Command line interface for devpush."""

from .main import cli, main

__all__ = ["cli", "main"]
