"""Click CLI with graph, migrate, copy-graph, convert, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mini2react import __version__
from mini2react.analysis import format_report
from mini2react.converter import convert_markup_file
from mini2react.models import MigrationConfig
from mini2react.pipeline import graph_builder, run_graph, run_graph_copy, run_migration


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug)")
def cli(verbose: int):
    """mini2react: migrate mini-program components to React."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("--restrict", is_flag=True, help="Drop edges to files outside the scanned set")
@click.option("--cycles", is_flag=True, help="List import cycles instead of the tree")
def graph(source_dir: Path, restrict: bool, cycles: bool):
    """Print the import dependency forest of a source tree."""
    config = MigrationConfig(source_dir=source_dir, restrict_to_universe=restrict)
    builder = graph_builder(config)
    dep_graph = run_graph(config)

    if cycles:
        found = builder.detect_cycles(dep_graph)
        if not found:
            click.echo("No import cycles found.")
            return
        for cycle in found:
            click.echo(click.style(" -> ".join(str(p) for p in cycle), fg="yellow"))
        return

    click.echo(format_report(builder.build_forest(dep_graph)))


@cli.command()
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("-o", "--output", "output_dir", type=click.Path(path_type=Path), default="react", help="Output directory")
@click.option("--strict", is_flag=True, help="Warn about references that cannot be resolved")
def migrate(source_dir: Path, output_dir: Path, strict: bool):
    """Copy components with their dependencies and convert markup to React."""
    config = MigrationConfig(source_dir=source_dir, output_dir=output_dir, strict=strict)

    def progress(stage: str, current: int, total: int):
        if total > 0:
            click.echo(f"  {stage}: {current}/{total}", nl=(current == total))
        else:
            click.echo(f"  {stage}...")

    click.echo(f"Migrating {source_dir} -> {output_dir}\n")

    try:
        result = run_migration(config, progress=progress)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(
        f"\nDone! {len(result.components)} component(s), "
        f"{len(result.files_copied)} file(s) copied, "
        f"{len(result.files_converted)} converted"
    )
    for path, message in result.errors:
        click.echo(click.style(f"  failed: {path}: {message}", fg="red"), err=True)


@cli.command("copy-graph")
@click.argument("source_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=".")
@click.option("-o", "--output", "output_dir", type=click.Path(path_type=Path), default="react", help="Output directory")
@click.option("--entry", "entry_dir", default="components", help="Subdirectory whose files seed the graph")
def copy_graph(source_dir: Path, output_dir: Path, entry_dir: str):
    """Copy every source file reachable from the entry directory."""
    config = MigrationConfig(source_dir=source_dir, output_dir=output_dir)
    result = run_graph_copy(config, entry_dir=entry_dir)
    click.echo(f"Copied {len(result.files_copied)} file(s) to {output_dir}")
    for path, message in result.errors:
        click.echo(click.style(f"  failed: {path}: {message}", fg="red"), err=True)


@cli.command()
@click.argument("markup_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def convert(markup_file: Path):
    """Print the React component generated from a markup file."""
    click.echo(convert_markup_file(markup_file), nl=False)


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'mini2react[web]'"
        )

    from mini2react.web import create_app

    click.echo(f"Starting mini2react API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
