"""Configuration commands for devpush."""

from pathlib import Path

import click

from ..config.settings import PushConfig
from .utils import get_config, get_console


@click.group("config")
def config_cmd():
    """Show or create devpush configuration."""
    pass


@config_cmd.command("show")
@click.pass_context
def show_config(ctx: click.Context):
    """Show the effective configuration as YAML."""
    config = get_config(ctx)
    out = get_console(ctx)
    out.print(config.to_yaml(), markup=False, highlight=False)
    out.print(f"# home: {config.home}  default target: {config.remote.target_host}", markup=False)


@config_cmd.command("init")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(".devpush.yaml"),
    show_default=True,
    help="Where to write the configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_config(ctx: click.Context, output: Path, force: bool):
    """Write a commented default configuration file."""
    out = get_console(ctx)

    if output.exists() and not force:
        out.print(f"[red]Error: {output} already exists (use --force to overwrite)[/red]")
        ctx.exit(1)

    PushConfig.create_default_config(output)
    out.print(f"[green]✓ Created {output}[/green]")
