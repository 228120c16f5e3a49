"""``panelcut validate``: check a project file without packing it."""

from pathlib import Path
from typing import Annotated, Any

import typer

from panelcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)
from panelcut.cli.logging_setup import configure_logging


def validate_command(
    project_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Validate a project file.

    Exits 0 when the project is clean, 1 when it cannot be packed as written
    (unreadable, malformed, or a margin that leaves no usable sheet) and 2
    when it can be packed but some pieces will not come out as expected.

    Example:
        panelcut validate bookcase.json
    """
    configure_logging(verbose)

    typer.echo(f"Validating {project_file}...")
    typer.echo()

    try:
        config = load_config(project_file)
    except ConfigError as e:
        typer.echo("Errors:", err=True)
        for line in _load_error_lines(e):
            typer.echo(f"  {line}", err=True)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _report(result)
    raise typer.Exit(code=result.exit_code)


def _value_line(value: Any) -> list[str]:
    # Whole objects are not worth echoing back
    if value is None or isinstance(value, (dict, list)):
        return []
    return [f"  Value: {value!r}"]


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]

    if error.error_type == "json_parse":
        lines = ["Invalid JSON syntax"]
        for detail in error.details:
            if "line" in detail:
                lines.append(
                    f"  Line {detail['line']}, Column {detail['column']}: {detail['message']}"
                )
            else:
                lines.append(f"  {detail['message']}")
        return lines

    if error.error_type == "validation":
        lines = []
        for detail in error.details:
            lines.append(f"{detail['path']}: {detail['message']}")
            lines.extend(_value_line(detail.get("value")))
        return lines

    return [error.message]


def _report(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            for line in _value_line(error.value):
                typer.echo(f"  {line}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Project is valid.")
