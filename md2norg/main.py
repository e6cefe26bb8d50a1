"""
md2norg — CLI entrypoint.

Usage:
    python -m md2norg.main --help
    python -m md2norg.main convert --input notes/ --recursive
    python -m md2norg.main preview notes/index.md
    python -m md2norg.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import IO

import click

from md2norg import __version__
from md2norg.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="md2norg")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to md2norg.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """md2norg — convert Markdown notes to Neorg."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(verbose=verbose, quiet=quiet, debug=debug),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


def _confirm_replace() -> bool:
    """Ask before originals are deleted. Only 'y' (any case) proceeds.

    Nothing is written to stdout, so ``--json`` output stays parseable
    (click.prompt always echoes to stdout). A closed stdin reads as "".
    """
    click.secho(
        "Warning: This will replace the original markdown files.",
        fg="yellow",
        err=True,
    )
    click.echo("Are you sure you want to continue? (y/N)", err=True)
    answer = sys.stdin.readline()
    return answer.strip().lower() == "y"


@cli.command()
@click.option("--input", "-i", "input_dir", default=None, help="Input directory containing markdown files.")
@click.option("--output", "-o", "output_dir", default=None, help="Output directory for converted files.")
@click.option("--recursive", "-r", is_flag=True, help="Process subdirectories recursively.")
@click.option("--replace", is_flag=True, help="Replace original files (asks for confirmation).")
@click.option("--force", "-f", is_flag=True, help="Replace without asking.")
@click.option("--keep-going", is_flag=True, help="Skip files that fail instead of aborting.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def convert(
    ctx: click.Context,
    input_dir: str | None,
    output_dir: str | None,
    recursive: bool,
    replace: bool,
    force: bool,
    keep_going: bool,
    as_json: bool,
) -> None:
    """Convert every markdown file in a directory to Neorg.

    Examples:

        md2norg convert -i notes/

        md2norg convert -i notes/ -o neorg/ --recursive

        md2norg convert -i notes/ --replace --force
    """
    from md2norg.core.use_cases.convert import run_convert

    result = run_convert(
        config_path=ctx.obj.get("config_path"),
        input_dir=input_dir,
        output_dir=output_dir,
        recursive=recursive,
        replace=replace,
        keep_going=keep_going,
        confirm_replace=None if force else _confirm_replace,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.cancelled and not result.ok:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if result.cancelled:
        click.echo("Operation cancelled.")
        return

    report = result.report
    assert report is not None  # guaranteed when there is no error

    for record in report.records:
        if record.ok:
            click.echo(f"Converted: {record.source} -> {record.target}")
        else:
            click.secho(f"✗ {record.source}: {record.error}", fg="red")

    if ctx.obj.get("quiet"):
        if report.failed:
            sys.exit(1)
        return

    click.echo()
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
        report.status, "white"
    )
    click.secho(
        f"   Result: {report.converted}/{report.total} converted",
        fg=status_color,
        bold=True,
    )
    if report.aborted:
        click.secho("   Aborted at the first failure (use --keep-going to skip).", fg="red")

    if report.failed:
        sys.exit(1)


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
def preview(source: IO[str]) -> None:
    """Print the Neorg conversion of SOURCE (a file, or - for stdin)."""
    from md2norg.core.services.neorg_transforms import transform

    click.echo(transform(source.read()), nl=False)


@cli.group()
def config() -> None:
    """Converter configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate md2norg.yml configuration."""
    from md2norg.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None  # guaranteed when valid
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if result.config_path:
            click.echo(f"   File: {result.config_path}")
        click.echo(
            f"   Extensions: .{result.config.source_extension} → "
            f".{result.config.target_extension}"
        )
        click.echo(f"   Recursive: {'yes' if result.config.recursive else 'no'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
