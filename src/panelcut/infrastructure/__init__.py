"""Infrastructure layer - packing algorithms, renderers and exporters."""

from .bin_packing import (
    BinPackingService,
    CutInstruction,
    CutLayout,
    CutSheet,
    FreeRectangle,
    GuillotineSheetPacker,
    PlacedPiece,
    SheetPackResult,
    calculate_guillotine_cut,
    merge_layouts,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .formatters import JsonExporter, LayoutSummaryFormatter
from .piece_expander import ExpandedPieces, PieceExpander, PieceInstance

# Exporter framework from exporters/ package
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonLayoutExporter,
    SvgExporter,
)

__all__ = [
    # Piece expansion
    "ExpandedPieces",
    "PieceExpander",
    "PieceInstance",
    # Bin packing
    "BinPackingService",
    "CutInstruction",
    "CutLayout",
    "CutSheet",
    "FreeRectangle",
    "GuillotineSheetPacker",
    "PlacedPiece",
    "SheetPackResult",
    "calculate_guillotine_cut",
    "merge_layouts",
    # Rendering and formatting
    "CutDiagramRenderer",
    "JsonExporter",
    "LayoutSummaryFormatter",
    # Exporter framework
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonLayoutExporter",
    "SvgExporter",
]
