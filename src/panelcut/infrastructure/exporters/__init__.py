"""File exports of a cut layout.

Formats:
- dxf: every sheet drawn for CNC and panel saw workflows
- json: layout, settings and totals
- svg: cut diagrams of all sheets

Usage:
    from panelcut.infrastructure.exporters import ExporterRegistry, ExportManager

    formats = ExporterRegistry.resolve("svg,dxf")
    files = ExportManager(Path("out"), "bookcase").export(formats, output)
"""

from panelcut.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    UnknownFormatError,
    project_slug,
)

# Import exporters to trigger registration
from panelcut.infrastructure.exporters.dxf import DxfExporter
from panelcut.infrastructure.exporters.json_layout import JsonLayoutExporter
from panelcut.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "UnknownFormatError",
    "project_slug",
    "DxfExporter",
    "JsonLayoutExporter",
    "SvgExporter",
]
