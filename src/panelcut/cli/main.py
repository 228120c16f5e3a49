"""Typer CLI for sheet cut layout optimization."""

from pathlib import Path
from typing import Annotated

import typer

from panelcut.application import OptimizationOutput, OptimizeCutLayoutCommand
from panelcut.application.config import (
    ConfigError,
    load_config,
    merge_settings_with_cli,
)
from panelcut.cli.commands import presets_command, validate_command
from panelcut.cli.logging_setup import configure_logging
from panelcut.infrastructure import CutDiagramRenderer, LayoutSummaryFormatter
from panelcut.infrastructure.exporters import (
    ExporterRegistry,
    ExportManager,
    UnknownFormatError,
    project_slug,
)

CONSOLE_FORMATS = ("summary", "ascii", "json", "svg")


def _export_files(
    selection: str,
    output_dir: Path | None,
    slug: str,
    result: OptimizationOutput,
) -> None:
    """Write the formats named by --output-formats and list the files."""
    try:
        formats = ExporterRegistry.resolve(selection)
    except UnknownFormatError as e:
        typer.echo(f"Unknown formats: {', '.join(e.unknown)}", err=True)
        typer.echo(f"Available formats: {', '.join(e.available)}", err=True)
        raise typer.Exit(code=1)

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    try:
        files = ExportManager(output_dir or Path("."), slug).export(formats, result)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


def _render(result: OptimizationOutput, output_format: str) -> str:
    """Render a result for the console in one of CONSOLE_FORMATS."""
    if output_format in ("json", "svg"):
        return ExporterRegistry.get(output_format)().render(result)

    if output_format == "summary":
        return LayoutSummaryFormatter().format(result)

    renderer = CutDiagramRenderer(
        unit_system=result.unit_system,
        edge_margin=result.settings.edge_margin,
        material_names=result.material_names,
        piece_labels=result.piece_labels,
    )
    return renderer.render_all_ascii(result.layout)


app = typer.Typer(
    name="panelcut",
    help="Optimize how rectangular pieces are cut from stock sheets.",
)

app.command(name="validate")(validate_command)
app.command(name="presets")(presets_command)


@app.command()
def optimize(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Console output: summary, ascii, json, svg"),
    ] = "summary",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the console output to this file"),
    ] = None,
    kerf: Annotated[
        str | None,
        typer.Option("--kerf", help='Saw kerf in project units (e.g. "1/8", "3mm")'),
    ] = None,
    margin: Annotated[
        str | None,
        typer.Option("--margin", help="Edge margin in project units"),
    ] = None,
    rotation: Annotated[
        bool | None,
        typer.Option(
            "--rotation/--no-rotation",
            help="Allow or forbid rotating pieces without grain",
        ),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help=f"Export formats, comma-separated or 'all' ({', '.join(ExporterRegistry.available_formats())})",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Directory for exported files (default: current)"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Base name for exported files"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Compute a cut layout for a project file.

    Pieces that cannot be placed are reported but do not cause a failure.

    Example:
        panelcut optimize bookcase.json --format ascii
        panelcut optimize bookcase.json --kerf 3/32 --output-formats svg,dxf
    """
    configure_logging(verbose)

    output_format = output_format.lower()
    if output_format not in CONSOLE_FORMATS:
        typer.echo(
            f"Unknown format '{output_format}'. "
            f"Choose from: {', '.join(CONSOLE_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        config = load_config(project_file)
        config = merge_settings_with_cli(
            config,
            saw_kerf=kerf,
            edge_margin=margin,
            allow_rotation=rotation,
        )
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = OptimizeCutLayoutCommand().execute_config(config)

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    if result.layout.unplaced_pieces:
        labels = result.piece_labels
        typer.echo(
            "Unplaced pieces: "
            + ", ".join(labels.get(p, p) for p in result.layout.unplaced_pieces),
            err=True,
        )

    if output_formats:
        slug = project_name or project_slug(config.name)
        _export_files(output_formats, output_dir, slug, result)
        return

    rendered = _render(result, output_format)
    if output is not None:
        output.write_text(rendered)
        typer.echo(f"Wrote {output_format} output to {output}")
    else:
        typer.echo(rendered)


if __name__ == "__main__":
    app()
