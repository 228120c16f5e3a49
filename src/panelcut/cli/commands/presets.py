"""Presets command listing the built-in stock sheet sizes."""

from typing import Annotated

import typer

from panelcut.domain.services.units import format_dimension
from panelcut.domain.value_objects import MATERIAL_PRESETS, UnitSystem


def presets_command(
    metric: Annotated[
        bool,
        typer.Option("--metric", help="Show sizes in millimetres"),
    ] = False,
) -> None:
    """List built-in material presets.

    Preset names can be used as a material's "preset" in a project file.
    """
    unit = UnitSystem.METRIC if metric else UnitSystem.IMPERIAL

    typer.echo("MATERIAL PRESETS")
    typer.echo("=" * 50)
    for preset in MATERIAL_PRESETS:
        typer.echo(
            f"  {preset.name:<24} "
            f"{format_dimension(preset.sheet.length, unit)} x "
            f"{format_dimension(preset.sheet.width, unit)}"
        )
