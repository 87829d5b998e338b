"""
CLI commands for deployment environments.

Thin wrappers over ``opennext_cli.core.use_cases.status`` and
``opennext_cli.core.use_cases.validate``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def env() -> None:
    """Env — environments declared in wrangler.toml."""


@env.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_envs(ctx: click.Context, as_json: bool) -> None:
    """List environments ([env.*] sections plus production)."""
    from opennext_cli.core.use_cases.status import list_environments

    result = list_environments(ctx.obj.get("cwd") or Path.cwd())

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    click.secho("🌍 Environments:", fg="cyan", bold=True)
    for name in result["environments"]:
        marker = " (default)" if name == result["default"] else ""
        click.echo(f"   • {name}{marker}")
    click.echo()


@env.command("validate")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate_env(ctx: click.Context, as_json: bool) -> None:
    """Check account_id in wrangler.toml and the local .dev.vars file."""
    from opennext_cli.core.use_cases.validate import run_env_validation
    from opennext_cli.main import _echo_check

    result = run_env_validation(ctx.obj.get("cwd") or Path.cwd())

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    click.secho("✅ Validating environment", fg="cyan", bold=True)
    for check in result.report.checks:
        _echo_check(check)
    click.echo()

    if not result.valid:
        sys.exit(1)
