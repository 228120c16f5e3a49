"""Cut diagram rendering for packed layouts.

This module provides SVG and ASCII rendering of sheet layouts showing piece
placements, dimensions, rotation indicators, edge margins and the advisory
cut lines produced by the packer.
"""

from __future__ import annotations

from typing import Mapping

from panelcut.domain.services.units import format_dimension
from panelcut.domain.value_objects import CutAxis, UnitSystem
from panelcut.infrastructure.bin_packing import (
    CutInstruction,
    CutLayout,
    CutSheet,
    PlacedPiece,
)


class CutDiagramRenderer:
    """Renders cut diagrams in SVG and ASCII form.

    Attributes:
        scale: Pixels per layout unit for SVG rendering.
        unit_system: Unit system for dimension text.
        edge_margin: Edge margin to outline inside each sheet.
        material_names: Material display names keyed by id.
        piece_labels: Piece display labels keyed by id.
        piece_fill: Fill color for placed pieces.
        piece_stroke: Stroke color for piece outlines.
        waste_fill: Fill color for the sheet (visible where nothing is placed).
        cut_stroke: Stroke color for cut lines.
        text_color: Color for labels and dimensions.
        show_dimensions: Whether to show piece dimensions.
        show_labels: Whether to show piece labels.
        show_cuts: Whether to draw advisory cut lines.
    """

    def __init__(
        self,
        scale: float = 0.4,
        unit_system: UnitSystem = UnitSystem.METRIC,
        edge_margin: float = 0.0,
        material_names: Mapping[str, str] | None = None,
        piece_labels: Mapping[str, str] | None = None,
        piece_fill: str = "#ADD8E6",  # Light blue
        piece_stroke: str = "#000000",  # Black
        waste_fill: str = "#D3D3D3",  # Light gray
        cut_stroke: str = "#CC0000",  # Dark red
        text_color: str = "#000000",  # Black
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_cuts: bool = True,
    ) -> None:
        self.scale = scale
        self.unit_system = unit_system
        self.edge_margin = edge_margin
        self.material_names = dict(material_names or {})
        self.piece_labels = dict(piece_labels or {})
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.cut_stroke = cut_stroke
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_cuts = show_cuts

    def render_svg(self, sheet: CutSheet, total_sheets: int = 1) -> str:
        """Generate an SVG cut diagram for a single sheet.

        Args:
            sheet: Sheet with placed pieces.
            total_sheets: Total number of sheets (for header display).

        Returns:
            SVG document as a string.
        """
        header_height = 30  # Pixels for header text

        svg_width = sheet.width * self.scale
        svg_height = sheet.height * self.scale + header_height

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            "",
            "  <!-- Background -->",
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
            "",
        ]

        parts.append(self._render_header(sheet, total_sheets, svg_width, header_height))

        # Unused sheet area shows through in the waste color
        parts.append("  <!-- Sheet outline -->")
        parts.append(
            f'  <rect x="0" y="{header_height}" '
            f'width="{svg_width}" height="{sheet.height * self.scale}" '
            f'fill="{self.waste_fill}" stroke="{self.piece_stroke}" stroke-width="2"/>'
        )

        if self.edge_margin > 0:
            margin = self.edge_margin * self.scale
            usable_w = (sheet.width - 2 * self.edge_margin) * self.scale
            usable_h = (sheet.height - 2 * self.edge_margin) * self.scale
            if usable_w > 0 and usable_h > 0:
                parts.append("  <!-- Usable area (inside edge margin) -->")
                parts.append(
                    f'  <rect x="{margin}" y="{header_height + margin}" '
                    f'width="{usable_w}" height="{usable_h}" '
                    f'fill="none" stroke="#999999" stroke-dasharray="5,5"/>'
                )

        parts.append("")
        parts.append("  <!-- Placed pieces -->")
        for placement in sheet.pieces:
            parts.append(self._render_piece(placement, header_height))

        if self.show_cuts and sheet.cuts:
            parts.append("")
            parts.append("  <!-- Cut lines -->")
            for cut in sheet.cuts:
                parts.append(self._render_cut(cut, header_height))

        parts.append("")
        parts.append("</svg>")

        return "\n".join(parts)

    def render_all_svg(self, layout: CutLayout) -> list[str]:
        """Generate SVG cut diagrams for all sheets.

        Args:
            layout: Complete cut layout.

        Returns:
            List of SVG strings, one per sheet.
        """
        total_sheets = len(layout.sheets)
        return [self.render_svg(sheet, total_sheets) for sheet in layout.sheets]

    def _material_name(self, material_id: str) -> str:
        return self.material_names.get(material_id, material_id)

    def _piece_label(self, piece_id: str) -> str:
        return self.piece_labels.get(piece_id, piece_id)

    def _render_header(
        self,
        sheet: CutSheet,
        total_sheets: int,
        svg_width: float,
        header_height: float,
    ) -> str:
        """Render sheet header with material and waste info."""
        header_text = (
            f"Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{self._material_name(sheet.material_id)} - "
            f"{sheet.waste_percentage:.1f}% waste"
        )

        return (
            f"  <!-- Header -->\n"
            f'  <rect x="0" y="0" width="{svg_width}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 8}" '
            f'font-family="Arial, sans-serif" font-size="14" '
            f'fill="{self.text_color}">{header_text}</text>'
        )

    def _render_piece(self, placement: PlacedPiece, header_height: float) -> str:
        """Render a single placed piece as SVG rect and text.

        Args:
            placement: The placed piece.
            header_height: Header height offset.

        Returns:
            SVG elements for the piece.
        """
        x = placement.x * self.scale
        y = header_height + placement.y * self.scale
        w = placement.width * self.scale
        h = placement.height * self.scale

        label = self._piece_label(placement.piece_id)
        dims = (
            f"{format_dimension(placement.width, self.unit_system)} x "
            f"{format_dimension(placement.height, self.unit_system)}"
        )
        if placement.rotated:
            dims += " (R)"

        text_x = x + w / 2
        text_y = y + h / 2

        font_size = min(12, min(w, h) / 6)
        if font_size < 6:
            # Too small for text
            return (
                f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" '
                f'fill="{self.piece_fill}" stroke="{self.piece_stroke}"/>'
            )

        svg_parts = [
            "  <g>",
            f'    <rect x="{x}" y="{y}" width="{w}" height="{h}" '
            f'fill="{self.piece_fill}" stroke="{self.piece_stroke}"/>',
        ]

        if self.show_labels:
            svg_parts.append(
                f'    <text x="{text_x}" y="{text_y - font_size / 2}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size}" fill="{self.text_color}">{label}</text>'
            )

        if self.show_dimensions:
            dims_y = text_y + font_size / 2 + 2 if self.show_labels else text_y
            svg_parts.append(
                f'    <text x="{text_x}" y="{dims_y}" '
                f'text-anchor="middle" font-family="Arial, sans-serif" '
                f'font-size="{font_size * 0.8}" fill="{self.text_color}">{dims}</text>'
            )

        svg_parts.append("  </g>")
        return "\n".join(svg_parts)

    def _render_cut(self, cut: CutInstruction, header_height: float) -> str:
        """Render an advisory cut as a dashed line."""
        position = cut.position * self.scale
        start = cut.start * self.scale
        end = cut.end * self.scale

        if cut.axis == CutAxis.HORIZONTAL:
            x1, y1, x2, y2 = start, position, end, position
        else:
            x1, y1, x2, y2 = position, start, position, end

        return (
            f'  <line x1="{x1}" y1="{header_height + y1}" '
            f'x2="{x2}" y2="{header_height + y2}" '
            f'stroke="{self.cut_stroke}" stroke-width="1" stroke-dasharray="4,2"/>'
        )

    def render_combined_svg(self, layout: CutLayout) -> str:
        """Generate a single SVG with all sheets stacked vertically.

        Args:
            layout: Complete cut layout.

        Returns:
            Combined SVG string with all sheets.
        """
        if not layout.sheets:
            return (
                '<svg width="100" height="50" xmlns="http://www.w3.org/2000/svg">'
                '<text x="10" y="30">No sheets to display</text></svg>'
            )

        header_height = 30
        sheet_spacing = 20

        svg_width = max(sheet.width for sheet in layout.sheets) * self.scale
        svg_height = sum(
            sheet.height * self.scale + header_height + sheet_spacing
            for sheet in layout.sheets
        )

        parts: list[str] = [
            f'<svg width="{svg_width}" height="{svg_height}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{svg_width}" height="{svg_height}" '
            f'fill="white"/>',
        ]

        y_offset = 0.0
        total_sheets = len(layout.sheets)

        for sheet in layout.sheets:
            parts.append(f'  <g transform="translate(0, {y_offset})">')
            parts.append(f"    <!-- Sheet {sheet.sheet_index + 1} -->")

            # Reuse the single-sheet rendering without its <svg> wrapper
            sheet_svg = self.render_svg(sheet, total_sheets)
            start_idx = sheet_svg.find(">") + 1
            end_idx = sheet_svg.rfind("</svg>")
            inner_content = sheet_svg[start_idx:end_idx]

            for line in inner_content.strip().split("\n"):
                if line.strip():
                    parts.append(f"  {line}")

            parts.append("  </g>")

            y_offset += sheet.height * self.scale + header_height + sheet_spacing

        parts.append("</svg>")
        return "\n".join(parts)

    def render_ascii(
        self,
        sheet: CutSheet,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Generate an ASCII cut diagram for a single sheet.

        Args:
            sheet: Sheet with placed pieces.
            width: Terminal width in characters (default 80).
            total_sheets: Total number of sheets (for header display).

        Returns:
            ASCII string representation of the sheet.
        """
        # Reserve 2 chars for borders
        usable_width = width - 2
        scale_x = usable_width / sheet.width

        aspect_ratio = sheet.height / sheet.width
        grid_height = int(usable_width * aspect_ratio * 0.5)  # 0.5 for char aspect ratio
        grid_height = max(grid_height, 10)

        scale_y = grid_height / sheet.height

        grid = [[" " for _ in range(usable_width)] for _ in range(grid_height)]

        for placement in sheet.pieces:
            self._draw_piece_ascii(grid, placement, scale_x, scale_y)

        lines: list[str] = [
            f"Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{self._material_name(sheet.material_id)} - "
            f"{sheet.waste_percentage:.1f}% waste",
            "+" + "-" * usable_width + "+",
        ]
        for row in grid:
            lines.append("|" + "".join(row) + "|")
        lines.append("+" + "-" * usable_width + "+")

        return "\n".join(lines)

    def _draw_piece_ascii(
        self,
        grid: list[list[str]],
        placement: PlacedPiece,
        scale_x: float,
        scale_y: float,
    ) -> None:
        """Draw a single piece onto the ASCII grid.

        Args:
            grid: 2D character grid.
            placement: The placed piece.
            scale_x: Characters per unit (horizontal).
            scale_y: Characters per unit (vertical).
        """
        grid_height = len(grid)
        grid_width = len(grid[0]) if grid else 0

        x1 = max(0, min(int(placement.x * scale_x), grid_width - 1))
        x2 = max(0, min(int(placement.right_edge * scale_x), grid_width - 1))
        y1 = max(0, min(int(placement.y * scale_y), grid_height - 1))
        y2 = max(0, min(int(placement.bottom_edge * scale_y), grid_height - 1))

        for x in range(x1, x2 + 1):
            grid[y1][x] = "-"
            grid[y2][x] = "-"

        for y in range(y1, y2 + 1):
            grid[y][x1] = "|"
            grid[y][x2] = "|"

        for cy in (y1, y2):
            for cx in (x1, x2):
                grid[cy][cx] = "+"

        label_row = y1 + 1
        dims_row = y1 + 2
        room = x2 - x1 - 1

        if label_row < y2 and room > 0:
            label = self._piece_label(placement.piece_id)[:room]
            for i, char in enumerate(label):
                grid[label_row][x1 + 1 + i] = char

        if dims_row < y2 and room > 0:
            dims = f"{placement.width:.0f}x{placement.height:.0f}"
            if placement.rotated:
                dims += "R"
            for i, char in enumerate(dims[:room]):
                grid[dims_row][x1 + 1 + i] = char

    def render_all_ascii(self, layout: CutLayout, width: int = 80) -> str:
        """Generate ASCII cut diagrams for all sheets.

        Args:
            layout: Complete cut layout.
            width: Terminal width in characters.

        Returns:
            Combined ASCII string with all sheets and a summary.
        """
        if not layout.sheets:
            return "No sheets to display."

        total_sheets = len(layout.sheets)
        parts: list[str] = []

        for sheet in layout.sheets:
            parts.append(self.render_ascii(sheet, width, total_sheets))
            parts.append("")

        parts.append("=" * width)
        parts.append(
            f"SUMMARY: {total_sheets} sheet{'s' if total_sheets != 1 else ''}, "
            f"{layout.waste_percentage:.1f}% total waste"
        )

        for material_id, count in layout.sheets_by_material.items():
            parts.append(
                f"  {self._material_name(material_id)}: "
                f"{count} sheet{'s' if count != 1 else ''}"
            )

        return "\n".join(parts)

    def render_waste_summary(self, layout: CutLayout) -> str:
        """Generate a text summary of waste and sheet usage.

        Args:
            layout: Complete cut layout.

        Returns:
            Formatted summary string.
        """
        lines: list[str] = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {layout.total_sheets}",
            f"Total Waste: {layout.waste_percentage:.1f}%",
            "",
            "Sheets by Material:",
        ]

        for material_id, count in layout.sheets_by_material.items():
            lines.append(
                f"  {self._material_name(material_id)}: "
                f"{count} sheet{'s' if count != 1 else ''}"
            )

        lines.append("")
        lines.append("Per-Sheet Details:")

        for sheet in layout.sheets:
            lines.append(
                f"  Sheet {sheet.sheet_index + 1}: "
                f"{sheet.piece_count} piece{'s' if sheet.piece_count != 1 else ''}, "
                f"{sheet.waste_percentage:.1f}% waste "
                f"({self._material_name(sheet.material_id)})"
            )

        if layout.unplaced_pieces:
            lines.append("")
            lines.append(f"Unplaced Pieces: {len(layout.unplaced_pieces)}")
            for piece_id in layout.unplaced_pieces:
                lines.append(f"  {self._piece_label(piece_id)}")

        return "\n".join(lines)
