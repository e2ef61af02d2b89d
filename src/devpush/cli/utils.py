"""CLI utility functions."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ..config.settings import PushConfig
from ..config.validation import ValidationResult
from ..core.sync_engine import SyncEngine
from ..core.tracked import GitTrackedFileLister
from ..core.watcher import ChangeWatcher, WatchdogChangeWatcher


def print_validation(console: Console, result: ValidationResult) -> None:
    """Show validation warnings and errors on the console."""
    if result.is_valid and not result.has_warnings:
        return

    console.print("[yellow]Warning: Environment validation issues detected[/yellow]")
    for message in result.errors + result.warnings:
        console.print(f"  [yellow]• {message}[/yellow]")


def get_config(ctx: click.Context) -> PushConfig:
    return ctx.obj["config"]


def get_console(ctx: click.Context) -> Console:
    return ctx.obj["console"]


def build_engine(ctx: click.Context) -> SyncEngine:
    """Create the sync engine, honouring a transfer injected through ``ctx.obj``."""
    return SyncEngine(get_config(ctx), transfer=ctx.obj.get("transfer"))


def build_lister(ctx: click.Context, repo_root: Optional[Path] = None) -> GitTrackedFileLister:
    return ctx.obj.get("lister") or GitTrackedFileLister(repo_root)


def build_watcher(ctx: click.Context) -> ChangeWatcher:
    return ctx.obj.get("watcher") or WatchdogChangeWatcher()


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human-readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"
