"""SVG exporter for cut diagrams.

Wraps CutDiagramRenderer; all sheets of a layout are stacked in one SVG.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from panelcut.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from panelcut.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from panelcut.application.dtos import OptimizationOutput


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for cut layout diagrams.

    Generates SVG visualizations of sheet layouts showing piece placements,
    dimensions, rotation markers, edge margins and cut lines.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 0.4,
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_cuts: bool = True,
    ) -> None:
        """Initialize the SVG exporter.

        Args:
            scale: Pixels per millimetre for SVG rendering (default 0.4).
            show_dimensions: Whether to show piece dimensions (default True).
            show_labels: Whether to show piece labels (default True).
            show_cuts: Whether to draw cut lines (default True).
        """
        self.scale = scale
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_cuts = show_cuts

    def _renderer_for(self, output: OptimizationOutput) -> CutDiagramRenderer:
        return CutDiagramRenderer(
            scale=self.scale,
            unit_system=output.unit_system,
            edge_margin=output.settings.edge_margin,
            material_names=output.material_names,
            piece_labels=output.piece_labels,
            show_dimensions=self.show_dimensions,
            show_labels=self.show_labels,
            show_cuts=self.show_cuts,
        )

    def render(self, output: OptimizationOutput) -> str:
        """Combined SVG with the sheets stacked vertically."""
        return self._renderer_for(output).render_combined_svg(output.layout)
