"""CLI subcommands for agenthooks (config, paths)."""

from __future__ import annotations

import click


@click.group()
def config_cmd() -> None:
    """Inspect agenthooks settings."""


@config_cmd.command("list")
def config_list() -> None:
    """Show settings taken from the environment."""
    from agenthooks.core.config import default_timeout_ms, hooks_home, load_env_config

    click.echo("Environment:")
    env = load_env_config()
    if env:
        for k, v in sorted(env.items()):
            click.echo(f"  {k}: {v}")
    else:
        click.echo("  (no environment variables set)")

    click.echo("\nEffective:")
    click.echo(f"  home: {hooks_home()}")
    click.echo(f"  default_timeout_ms: {default_timeout_ms()}")


@click.command("paths")
@click.option("--cwd", default=None, help="Project directory (default: current)")
def paths_cmd(cwd: str | None) -> None:
    """Show where hook files are read from."""
    from pathlib import Path

    from agenthooks.cli.output import print_paths
    from agenthooks.hooks.config import get_global_hooks_path, get_project_hooks_path

    project_dir = Path(cwd) if cwd else Path.cwd()
    print_paths({
        "global": get_global_hooks_path(),
        "project": get_project_hooks_path(project_dir),
    })
