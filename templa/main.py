"""
templa: CLI entrypoint.

Usage:
    templa --help
    templa generate shapes/package.yml
    templa templates shapes/package.yml
    templa config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from templa import __version__
from templa.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="templa")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to templa.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """templa: generate Go source from annotation templates."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TEMPLA_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TEMPLA_LOG_FILE"),
        log_file_level=os.environ.get("TEMPLA_LOG_FILE_LEVEL"),
    )


def _load(ctx: click.Context, manifests: tuple[str, ...]):
    """Settings and packages for a command, or exit 1 with the reason."""
    from templa.core.config.loader import ConfigError, load_settings
    from templa.core.config.manifest_loader import ManifestError, load_packages

    try:
        settings = load_settings(ctx.obj.get("config_path"))
        packages = load_packages([Path(m) for m in manifests])
    except (ConfigError, ManifestError) as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)
    return settings, packages


@cli.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=False))
@click.option("--out", "out_dir", type=click.Path(file_okay=False), default=None,
              help="Output directory (default: each package's directory).")
@click.option("--dry-run", is_flag=True, help="Generate but don't write files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    manifests: tuple[str, ...],
    out_dir: str | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Render @source templates for every trigger annotation."""
    from templa.core.use_cases.generate import run_generation

    settings, packages = _load(ctx, manifests)
    result = run_generation(
        packages,
        settings,
        out_dir=Path(out_dir) if out_dir else None,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)

    if not ctx.obj.get("quiet"):
        verb = "Would write" if dry_run else "Wrote"
        for path in result.report.written:
            click.secho(f"   ✓ {verb} {path}", fg="green")
        for path in result.report.skipped:
            click.secho(f"   • Kept existing {path}", fg="yellow")

    if result.failures:
        click.secho("❌ Generation errors:", fg="red", bold=True)
        for failure in result.failures:
            click.echo(f"   • {failure.package}: @{failure.annotation} on {failure.target}: {failure.error}")

    if result.report.failed:
        click.secho("❌ Write errors:", fg="red", bold=True)
        for failed in result.report.failed:
            click.echo(f"   • {failed.file_name}: {failed.error}")

    if not result.ok:
        sys.exit(1)


@cli.command()
@click.argument("manifests", nargs=-1, required=True, type=click.Path(exists=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def templates(ctx: click.Context, manifests: tuple[str, ...], as_json: bool) -> None:
    """List @source templates declared in the packages."""
    from templa.core.use_cases.generate import list_templates

    _settings, packages = _load(ctx, manifests)
    rows = list_templates(packages)

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        click.secho("No @source templates found", fg="yellow")
        return

    for row in rows:
        click.echo(f"   • {row['package']}/{row['id'] or '?'}  gen={row['gen']}  ({row['origin']})")


@cli.group()
def config() -> None:
    """templa configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate templa.yml and show the effective settings."""
    from templa.core.config.loader import ConfigError, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"valid": True, "settings": settings.model_dump()}, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   Trigger annotations: {', '.join(settings.annotations)}")
    click.echo(f"   File suffix: {settings.file_suffix}")
    click.echo(f"   Formatter: {settings.formatter}")
    click.echo(f"   Output dir: {settings.output_dir or '(package dir)'}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
