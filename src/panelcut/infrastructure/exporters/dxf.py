"""DXF format exporter for cut layouts.

Generates 2D DXF files (R2010 format) for CNC routers and panel saws. Every
sheet is drawn with its outline, usable-area margin, placed pieces, cut lines
and labels; sheets are laid out side by side from left to right.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf

from panelcut.domain.services.units import MM_PER_INCH
from panelcut.domain.value_objects import CutAxis, UnitSystem
from panelcut.infrastructure.bin_packing import CutInstruction, CutSheet, PlacedPiece
from panelcut.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from panelcut.application.dtos import OptimizationOutput


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEET": {"color": 7, "linetype": "CONTINUOUS"},  # White - sheet outlines
    "MARGIN": {"color": 8, "linetype": "DASHED"},  # Gray - usable area
    "PIECES": {"color": 3, "linetype": "CONTINUOUS"},  # Green - piece outlines
    "CUTS": {"color": 1, "linetype": "DASHED"},  # Red - saw cuts
    "LABELS": {"color": 5, "linetype": "CONTINUOUS"},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports cut layouts to DXF format.

    DXF uses a y-up coordinate system, so layout rows (measured from the top
    edge of the sheet) are flipped when drawn.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(
        self,
        units: str | None = None,
        sheet_spacing: float = 100.0,
        include_cuts: bool = True,
    ) -> None:
        """Initialize the DXF exporter.

        Args:
            units: Output units - "inches" or "mm". None follows the
                   project's unit system.
            sheet_spacing: Gap between sheets, in millimetres.
            include_cuts: Whether to draw cut lines on the CUTS layer.
        """
        if units not in (None, "inches", "mm"):
            raise ValueError(f"Invalid units: {units}. Must be 'inches' or 'mm'")
        if sheet_spacing < 0:
            raise ValueError("Sheet spacing must be non-negative")

        self.units = units
        self.sheet_spacing = sheet_spacing
        self.include_cuts = include_cuts

    def render(self, output: OptimizationOutput) -> str:
        """DXF text of the whole layout."""
        if not output.layout.sheets:
            logger.warning("No sheets to export")

        stream = StringIO()
        self._build_document(output).write(stream)
        logger.info(f"Rendered DXF with {output.layout.total_sheets} sheets")
        return stream.getvalue()

    def _output_units(self, output: OptimizationOutput) -> str:
        if self.units is not None:
            return self.units
        return "mm" if output.unit_system == UnitSystem.METRIC else "inches"

    def _build_document(self, output: OptimizationOutput) -> Drawing:
        units = self._output_units(output)
        # Layout lengths are millimetres
        scale = 1.0 if units == "mm" else 1 / MM_PER_INCH

        doc = self._create_document(units)
        msp = doc.modelspace()
        labels = output.piece_labels
        names = output.material_names
        margin = output.settings.edge_margin

        offset_x = 0.0
        for sheet in output.layout.sheets:
            self._draw_sheet(msp, sheet, offset_x, scale, margin, labels, names)
            offset_x += (sheet.width + self.sheet_spacing) * scale

        return doc

    def _create_document(self, units: str) -> Drawing:
        """Create a new DXF document with layers configured."""
        doc = ezdxf.new("R2010")
        # $INSUNITS: 1 = inches, 4 = millimetres
        doc.header["$INSUNITS"] = 4 if units == "mm" else 1
        self._setup_layers(doc)
        return doc

    def _setup_layers(self, doc: Drawing) -> None:
        """Create DXF layers with their colors and linetypes."""
        for name, props in LAYERS.items():
            layer = doc.layers.add(name, color=cast(int, props["color"]))
            if props["linetype"] == "DASHED":
                if "DASHED" not in doc.linetypes:
                    doc.linetypes.add(
                        "DASHED",
                        pattern=[0.5, 0.25, -0.25],
                        description="Dashed line",
                    )
                layer.dxf.linetype = "DASHED"

    def _draw_sheet(
        self,
        msp: Modelspace,
        sheet: CutSheet,
        offset_x: float,
        scale: float,
        margin: float,
        labels: dict[str, str],
        names: dict[str, str],
    ) -> None:
        """Draw one sheet with everything placed on it.

        Args:
            msp: DXF modelspace to draw in.
            sheet: Sheet to draw.
            offset_x: Left edge of the sheet in output units.
            scale: Output units per millimetre.
            margin: Edge margin in millimetres.
            labels: Piece labels keyed by piece id.
            names: Material names keyed by material id.
        """
        width = sheet.width * scale
        height = sheet.height * scale

        self._draw_rect(msp, offset_x, 0.0, width, height, "SHEET")

        if margin > 0 and sheet.width > 2 * margin and sheet.height > 2 * margin:
            m = margin * scale
            self._draw_rect(
                msp, offset_x + m, m, width - 2 * m, height - 2 * m, "MARGIN"
            )

        for placement in sheet.pieces:
            self._draw_piece(msp, sheet, placement, offset_x, scale, labels)

        if self.include_cuts:
            for cut in sheet.cuts:
                self._draw_cut(msp, sheet, cut, offset_x, scale)

        title = (
            f"Sheet {sheet.sheet_index + 1} - "
            f"{names.get(sheet.material_id, sheet.material_id)}"
        )
        msp.add_mtext(
            title,
            dxfattribs={
                "layer": "LABELS",
                "char_height": max(height * 0.02, 4.0 * scale),
                "insert": (offset_x, height + max(height * 0.03, 6.0 * scale)),
                "attachment_point": 7,  # BOTTOM_LEFT
            },
        )

    def _draw_rect(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        """Draw a closed rectangle from its bottom-left corner."""
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
            (x, y),  # Close the polyline
        ]
        msp.add_lwpolyline(points, dxfattribs={"layer": layer})

    def _draw_piece(
        self,
        msp: Modelspace,
        sheet: CutSheet,
        placement: PlacedPiece,
        offset_x: float,
        scale: float,
        labels: dict[str, str],
    ) -> None:
        """Draw a placed piece outline and its centered label."""
        x = offset_x + placement.x * scale
        y = (sheet.height - placement.bottom_edge) * scale
        width = placement.width * scale
        height = placement.height * scale

        self._draw_rect(msp, x, y, width, height, "PIECES")

        if scale == 1.0:
            dim_text = f"{placement.width:.1f} x {placement.height:.1f} mm"
        else:
            dim_text = f'{width:.3f}" x {height:.3f}"'
        if placement.rotated:
            dim_text += " (R)"

        label = labels.get(placement.piece_id, placement.piece_id)

        # 8% of the smaller side, clamped to roughly 4mm..25mm
        text_height = max(4.0 * scale, min(25.0 * scale, min(width, height) * 0.08))

        msp.add_mtext(
            f"{label}\n{dim_text}",
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + width / 2, y + height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )

    def _draw_cut(
        self,
        msp: Modelspace,
        sheet: CutSheet,
        cut: CutInstruction,
        offset_x: float,
        scale: float,
    ) -> None:
        """Draw a cut line on the CUTS layer."""
        if cut.axis == CutAxis.HORIZONTAL:
            y = (sheet.height - cut.position) * scale
            start = (offset_x + cut.start * scale, y)
            end = (offset_x + cut.end * scale, y)
        else:
            x = offset_x + cut.position * scale
            start = (x, (sheet.height - cut.start) * scale)
            end = (x, (sheet.height - cut.end) * scale)

        msp.add_line(start, end, dxfattribs={"layer": "CUTS"})


__all__ = ["DxfExporter", "LAYERS"]
