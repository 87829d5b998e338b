"""
CLI commands for CLI configuration.

Thin wrappers over ``opennext_cli.core.config.loader``.
"""

from __future__ import annotations

import json

import click


@click.group()
def config() -> None:
    """Config — show merged CLI preferences and where they come from."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the effective configuration (global + project)."""
    from pathlib import Path

    from opennext_cli.core.config.loader import global_config_path, project_config_path

    cfg = ctx.obj["config"]
    start = ctx.obj.get("cwd") or Path.cwd()
    data = cfg.model_dump(mode="json", by_alias=True)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.secho("⚙️  Configuration", fg="cyan", bold=True)
    click.echo(f"   Global:  {global_config_path()}")
    click.echo(f"   Project: {project_config_path(start)}")
    click.echo()
    for key, value in data.items():
        if isinstance(value, dict):
            click.echo(f"   {key}:")
            for sub_key, sub_value in value.items():
                click.echo(f"     {sub_key}: {sub_value}")
        else:
            click.echo(f"   {key}: {value}")
    click.echo()
