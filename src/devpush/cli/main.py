"""Main CLI entry point for devpush."""

from dataclasses import replace
import os
from pathlib import Path
import shlex
import sys
from typing import Optional

import click
from rich.console import Console

from .. import __version__
from ..config.settings import PushConfig
from ..config.validation import validate_environment
from ..core.errors import (
    ConfigurationError,
    PathResolutionError,
    TransferError,
    WatcherSetupError,
)
from ..core.watch_loop import WatchLoop
from ..utils.logging import setup_logging
from .config import config_cmd
from .utils import (
    build_engine,
    build_lister,
    build_watcher,
    format_duration,
    get_console,
    print_validation,
)

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="devpush")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a devpush configuration file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: Optional[Path]):
    """devpush - mirror the current directory to a remote development host."""

    ctx.ensure_object(dict)
    ctx.obj.setdefault("console", console)

    try:
        config = PushConfig.load(config_path, home=ctx.obj.get("home") or Path.home())
    except ConfigurationError as e:
        ctx.obj["console"].print(f"[red]Error: {e}[/red]")
        ctx.exit(1)
        return

    logging_config = config.logging
    if quiet:
        logging_config = replace(logging_config, level="ERROR")
    elif verbose:
        logging_config = replace(logging_config, level="DEBUG")

    ctx.obj["logger"] = setup_logging(logging_config)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand in ("push", "watch"):
        print_validation(ctx.obj["console"], validate_environment(config))


cli.add_command(config_cmd)  # devpush config show/init


@cli.command("push")
@click.argument("host", required=False)
@click.option("--dry-run", "-d", is_flag=True, help="Print the rsync command without running it")
@click.pass_context
def push_cmd(ctx: click.Context, host: Optional[str], dry_run: bool):
    """Push the current directory to HOST (default: the configured lab host).

    The exit status is rsync's exit status.
    """
    out = get_console(ctx)
    engine = build_engine(ctx)

    try:
        if dry_run:
            out.print(
                shlex.join(engine.command(os.getcwd(), host)),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return

        result = engine.push(os.getcwd(), host)
    except (PathResolutionError, ConfigurationError) as e:
        out.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)
    except TransferError as e:
        out.print(f"[red]Push failed: {e}[/red]")
        ctx.exit(e.exit_code)
    else:
        out.print(
            f"[green]✓ Pushed to {result.destination} in {format_duration(result.duration)}[/green]"
        )


@cli.command("watch")
@click.pass_context
def watch_cmd(ctx: click.Context):
    """Push again every time a git-tracked file changes.

    Runs until interrupted. A failed push does not stop the watch.
    """
    out = get_console(ctx)
    engine = build_engine(ctx)
    cwd = os.getcwd()

    try:
        # Fail fast if there is no tree to push
        plan = engine.plan(cwd)
        loop = WatchLoop(
            sync=lambda: engine.push(cwd),
            list_files=build_lister(ctx, Path(cwd)).list_files,
            watcher=build_watcher(ctx),
        )
        out.print(f"Watching tracked files, pushing to {plan.destination}")
        loop.run()
    except (PathResolutionError, ConfigurationError, WatcherSetupError) as e:
        out.print(f"[red]Error: {e}[/red]")
        ctx.exit(1)
    except KeyboardInterrupt:
        out.print("\nStopped watching.")


def main():
    """Entry point for the CLI."""
    cli()


def push_main():
    """Entry point for the ``push [HOST]`` shortcut."""
    cli(args=["push", *sys.argv[1:]], prog_name="push")


def watch_main():
    """Entry point for the ``watch-push`` shortcut."""
    cli(args=["watch", *sys.argv[1:]], prog_name="watch-push")


if __name__ == "__main__":
    main()
