"""Output formatters for cut layouts."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from panelcut.domain.services.units import (
    MM_PER_INCH,
    format_dimension,
    from_millimeters,
)
from panelcut.domain.value_objects import UnitSystem
from panelcut.infrastructure.bin_packing import CutInstruction, CutSheet, PlacedPiece

if TYPE_CHECKING:
    from panelcut.application.dtos import OptimizationOutput


class LayoutSummaryFormatter:
    """Formats a cut layout as a plain-text report.

    Lists every sheet with its pieces, followed by unplaced pieces and the
    area totals. Lengths are shown in the project's unit system.
    """

    def __init__(self, show_positions: bool = True) -> None:
        """Initialize formatter.

        Args:
            show_positions: Whether to include piece positions on each sheet.
        """
        self._show_positions = show_positions

    def format(self, output: OptimizationOutput) -> str:
        """Format an optimization result as a report."""
        layout = output.layout
        unit = output.unit_system
        names = output.material_names
        labels = output.piece_labels

        lines = [
            f"CUT LAYOUT: {output.project_name}",
            "=" * 70,
        ]

        if not layout.sheets:
            lines.append("No sheets used.")

        for sheet in layout.sheets:
            lines.append(
                f"Sheet {sheet.sheet_index + 1}: "
                f"{names.get(sheet.material_id, sheet.material_id)} "
                f"({format_dimension(sheet.width, unit)} x "
                f"{format_dimension(sheet.height, unit)}) - "
                f"{sheet.piece_count} pieces, {sheet.waste_percentage:.1f}% waste"
            )
            for placement in sheet.pieces:
                lines.append("  " + self._format_placement(placement, labels, unit))
            lines.append("")

        if layout.unplaced_pieces:
            lines.append("UNPLACED PIECES")
            lines.append("-" * 70)
            for piece_id in layout.unplaced_pieces:
                lines.append(f"  {labels.get(piece_id, piece_id)}")
            lines.append("")

        lines.append("-" * 70)
        lines.append(f"Total sheets:  {layout.total_sheets}")
        lines.append(f"Pieces placed: {layout.total_pieces_placed}")
        lines.append(f"Total area:    {self._format_area(layout.total_area, unit)}")
        lines.append(f"Used area:     {self._format_area(layout.used_area, unit)}")
        lines.append(
            f"Waste:         {self._format_area(layout.total_waste, unit)} "
            f"({layout.waste_percentage:.1f}%)"
        )

        for warning in output.warnings:
            lines.append(f"Warning: {warning}")

        return "\n".join(lines)

    def _format_placement(
        self,
        placement: PlacedPiece,
        labels: dict[str, str],
        unit: UnitSystem,
    ) -> str:
        label = labels.get(placement.piece_id, placement.piece_id)
        text = (
            f"{label} #{placement.instance_index + 1}: "
            f"{format_dimension(placement.width, unit)} x "
            f"{format_dimension(placement.height, unit)}"
        )
        if self._show_positions:
            text += (
                f" at ({format_dimension(placement.x, unit)}, "
                f"{format_dimension(placement.y, unit)})"
            )
        if placement.rotated:
            text += " (rotated)"
        return text

    def _format_area(self, area_mm2: float, unit: UnitSystem) -> str:
        """Format an area given in square millimetres."""
        if unit == UnitSystem.METRIC:
            return f"{area_mm2 / 1_000_000:.2f} m²"
        return f"{area_mm2 / (MM_PER_INCH * MM_PER_INCH * 144):.2f} sq ft"


class JsonExporter:
    """Exports a cut layout as a JSON document.

    Lengths are written in the project's unit system; the ``units`` key
    records which one.
    """

    def export(self, output: OptimizationOutput) -> str:
        """Export an optimization result as a JSON string."""
        return json.dumps(self.to_dict(output), indent=2)

    def to_dict(self, output: OptimizationOutput) -> dict[str, Any]:
        """Build the JSON-serialisable representation of a result."""
        layout = output.layout
        unit = output.unit_system
        area_factor = from_millimeters(1.0, unit) ** 2

        return {
            "project": output.project_name,
            "units": unit.value,
            "settings": {
                "saw_kerf": from_millimeters(output.settings.saw_kerf, unit),
                "edge_margin": from_millimeters(output.settings.edge_margin, unit),
                "allow_rotation": output.settings.allow_rotation,
                "optimization_priority": output.settings.optimization_priority.value,
                "cut_type": output.settings.cut_type.value,
            },
            "sheets": [self._format_sheet(sheet, unit) for sheet in layout.sheets],
            "unplaced_pieces": list(layout.unplaced_pieces),
            "summary": {
                "total_sheets": layout.total_sheets,
                "pieces_placed": layout.total_pieces_placed,
                "total_area": layout.total_area * area_factor,
                "used_area": layout.used_area * area_factor,
                "total_waste": layout.total_waste * area_factor,
                "waste_percentage": layout.waste_percentage,
                "sheets_by_material": layout.sheets_by_material,
            },
            "warnings": list(output.warnings),
        }

    def _format_sheet(self, sheet: CutSheet, unit: UnitSystem) -> dict[str, Any]:
        return {
            "sheet_index": sheet.sheet_index,
            "material_id": sheet.material_id,
            "width": from_millimeters(sheet.width, unit),
            "height": from_millimeters(sheet.height, unit),
            "waste_percentage": sheet.waste_percentage,
            "pieces": [self._format_piece(p, unit) for p in sheet.pieces],
            "cuts": [self._format_cut(c, unit) for c in sheet.cuts],
        }

    def _format_piece(self, piece: PlacedPiece, unit: UnitSystem) -> dict[str, Any]:
        return {
            "piece_id": piece.piece_id,
            "instance_index": piece.instance_index,
            "x": from_millimeters(piece.x, unit),
            "y": from_millimeters(piece.y, unit),
            "width": from_millimeters(piece.width, unit),
            "height": from_millimeters(piece.height, unit),
            "rotated": piece.rotated,
        }

    def _format_cut(self, cut: CutInstruction, unit: UnitSystem) -> dict[str, Any]:
        return {
            "axis": cut.axis.value,
            "position": from_millimeters(cut.position, unit),
            "start": from_millimeters(cut.start, unit),
            "end": from_millimeters(cut.end, unit),
        }
