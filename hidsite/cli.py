"""Command-line interface for hidsite.

This module defines the CLI commands using the Click framework.

Commands:
- build: Build the site into the output directory.
- classify: Show which content kind claimed each source path.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .classifier import ContentKind
from .config import CONFIG_FILE, ConfigError

_SOURCE_OPTION = click.option(
    "--source",
    "-s",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Site source directory",
)
_CONFIG_OPTION = click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Configuration file (default: SOURCE/{CONFIG_FILE})",
)


@click.group()
@click.version_option(version=__version__, prog_name="hidsite")
def cli():
    """hidsite static site builder."""


@cli.command()
@_SOURCE_OPTION
@_CONFIG_OPTION
@click.option(
    "--dest",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (overrides site_dir)",
)
@click.option("--no-clean", is_flag=True, help="Keep existing output files")
def build(source: Path, config_file: Path | None, dest: Path | None, no_clean: bool):
    """Build the site into the output directory."""
    from .build import BuildError, build_site

    source = source.resolve()
    if config_file is not None:
        config_file = config_file.resolve()
    try:
        result = build_site(source, config_file=config_file, dest=dest, clean=not no_clean)
    except ConfigError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None
    except BuildError as exc:
        # Display user-friendly error message
        rel_path = _relative(exc.source_path, source)
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    _echo_skipped(result.skipped)
    click.echo(f"Built {len(result.written)} files into {result.output_dir}")


@cli.command()
@_SOURCE_OPTION
@_CONFIG_OPTION
@click.option(
    "--kind",
    "-k",
    type=click.Choice([kind.value for kind in ContentKind]),
    default=None,
    help="Only list paths of this kind",
)
def classify(source: Path, config_file: Path | None, kind: str | None):
    """Show which content kind claimed each source path."""
    from .site import Site

    site = Site(source.resolve(), config_file.resolve() if config_file else CONFIG_FILE)
    try:
        site.load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None
    wanted = ContentKind(kind) if kind else None
    for path in site.classifier.paths(wanted):
        click.echo(f"{site.classifier.kind_of(path).value:<7} {path}")
    _echo_skipped(site.skipped())


def _echo_skipped(skipped) -> None:
    """Report dropped candidates on stderr."""
    for entry in skipped:
        click.echo(click.style(f"Skipped {entry.path}: {entry.reason}", fg="yellow"), err=True)


def _relative(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def main():
    """Entry point for the CLI application."""
    cli()
