"""
OpenNext CLI — entrypoint.

Usage:
    opennext-cli --help
    opennext-cli status
    opennext-cli validate --json
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from opennext_cli import __version__
from opennext_cli.core.config.loader import ConfigError, load_config
from opennext_cli.core.observability.logging_config import resolve_settings, setup_logging


def _start_dir(ctx: click.Context) -> Path:
    return ctx.obj.get("cwd") or Path.cwd()


_STATUS_STYLE = {
    "pass": ("✓", "green"),
    "warning": ("▲", "yellow"),
    "fail": ("✗", "red"),
}


def _echo_check(check, show_remedy: bool = True) -> None:
    icon, color = _STATUS_STYLE[check.status.value]
    click.secho(f"   {icon} {check.name}: ", fg=color, nl=False)
    click.echo(check.message)
    if show_remedy and check.remedy:
        click.echo(f"     → {check.remedy}")


@click.group()
@click.version_option(version=__version__, prog_name="opennext-cli")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to a CLI config file (default: .opennextjs-cli.json).",
)
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory to start from (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    cwd: str | None,
) -> None:
    """OpenNext CLI — inspect Next.js projects for Cloudflare Workers."""
    ctx.ensure_object(dict)
    start = Path(cwd).resolve() if cwd else None
    ctx.obj["cwd"] = start
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose

    try:
        config = load_config(
            project_root=start or Path.cwd(),
            config_path=Path(config_path) if config_path else None,
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    ctx.obj["config"] = config

    setup_logging(
        resolve_settings(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            config_verbose=config.verbose,
        )
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def locate(ctx: click.Context, as_json: bool) -> None:
    """Find the Next.js project, searching monorepo workspaces."""
    from opennext_cli.core.services.project_locator import locate_project

    location = locate_project(_start_dir(ctx))

    if as_json:
        click.echo(json.dumps(location.to_dict(), indent=2))
        return

    if location.target_found:
        click.secho(f"✅ Next.js project: {location.resolved_root}", fg="green", bold=True)
    else:
        click.secho("⚠️  No Next.js project found", fg="yellow", bold=True)
        click.echo(f"   Falling back to: {location.resolved_root}")

    if location.monorepo and location.monorepo.kind:
        click.echo(f"   Monorepo: {location.monorepo.kind.value} at {location.monorepo.root_path}")
    if ctx.obj.get("verbose") and location.searched_candidates:
        click.echo("   Searched:")
        for candidate in location.searched_candidates:
            click.echo(f"     • {candidate}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def monorepo(ctx: click.Context, as_json: bool) -> None:
    """Detect monorepo tooling above the current directory."""
    from opennext_cli.core.services.monorepo import detect_monorepo

    descriptor = detect_monorepo(_start_dir(ctx))

    if as_json:
        click.echo(json.dumps(descriptor.to_dict(), indent=2))
        return

    if not descriptor.is_monorepo:
        click.echo("Not inside a monorepo.")
        return

    assert descriptor.kind is not None
    click.secho(f"📦 {descriptor.kind.value} monorepo", fg="cyan", bold=True)
    click.echo(f"   Root: {descriptor.root_path}")
    if descriptor.patterns:
        click.echo("   Workspaces:")
        for pattern in descriptor.patterns:
            click.echo(f"     • {pattern}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show project status and configuration."""
    from opennext_cli.core.use_cases.status import get_status

    result = get_status(_start_dir(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    detection = result.detection
    click.secho(f"\n📊 {result.project_root}", fg="cyan", bold=True)
    if detection.is_nextjs:
        click.echo(f"   Next.js: {detection.nextjs_version or 'detected'}")
    else:
        click.secho("   Next.js: not detected", fg="yellow")
    if detection.package_manager:
        click.echo(f"   Package manager: {detection.package_manager}")

    click.echo()
    if result.config is not None:
        config = result.config
        click.secho("   OpenNext.js: configured", fg="green", bold=True)
        click.echo(f"     Worker: {config.identifier_name or '—'}")
        click.echo(f"     Account: {config.account_ref or '—'}")
        click.echo(f"     Caching: {config.strategy_name or '—'}")
        click.echo(f"     Environments: {', '.join(config.environment_names)}")
    else:
        click.secho("   OpenNext.js: not configured", fg="yellow", bold=True)

    if result.dependencies:
        click.echo()
        click.secho("   Dependencies:", fg="white", bold=True)
        for name, version in result.dependencies.items():
            click.echo(f"     • {name} {version}")

    if result.workers:
        click.echo()
        click.secho(f"   Workers: {len(result.workers)}", fg="white", bold=True)
        for worker in result.workers:
            label = " [OpenNext]" if worker.is_opennext else ""
            click.echo(f"     • {worker.name or '(unnamed)'}{label}  → {worker.path}")

    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(ctx: click.Context, as_json: bool) -> None:
    """Validate OpenNext.js Cloudflare configuration."""
    from opennext_cli.core.use_cases.validate import run_validation

    result = run_validation(_start_dir(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    report = result.report
    click.secho(f"\n🔍 Validating {result.location.resolved_root}", fg="cyan", bold=True)
    for check in report.checks:
        _echo_check(check)

    click.echo()
    if report.overall_valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if report.warnings:
            click.echo(f"   {len(report.warnings)} warning(s)")
        click.echo()
        return

    click.secho(
        f"❌ {len(report.errors)} error(s), {len(report.warnings)} warning(s)",
        fg="red",
        bold=True,
    )
    click.echo()
    sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def doctor(ctx: click.Context, as_json: bool) -> None:
    """Run health checks on the toolchain and project."""
    from opennext_cli.core.services.doctor import run_doctor

    report = run_doctor(_start_dir(ctx))

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(0 if report.healthy else 1)

    click.secho("\n🏥 Health Check Results", fg="cyan", bold=True)
    if not ctx.obj.get("quiet"):
        for check in report.passing:
            _echo_check(check)

    if report.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for check in report.warnings:
            _echo_check(check)

    if report.failures:
        click.echo()
        click.secho("❌ Issues:", fg="red")
        for check in report.failures:
            _echo_check(check)

    click.echo()
    if not report.failures and not report.warnings:
        click.secho("All checks passed! ✓", fg="green", bold=True)
    else:
        click.echo(f"{len(report.failures)} issue(s) found, {len(report.warnings)} warning(s)")
    click.echo()

    if not report.healthy:
        sys.exit(1)


# ── Register sub-command groups from opennext_cli/ui/cli/ ─────────

from opennext_cli.ui.cli.config import config  # noqa: E402
from opennext_cli.ui.cli.env import env  # noqa: E402

cli.add_command(config)
cli.add_command(env)


if __name__ == "__main__":
    cli()
