"""JSON exporter for cut layouts."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from panelcut.infrastructure.exporters.base import ExporterRegistry
from panelcut.infrastructure.formatters import JsonExporter

if TYPE_CHECKING:
    from panelcut.application.dtos import OptimizationOutput


@ExporterRegistry.register("json")
class JsonLayoutExporter:
    """The layout, settings and totals as one JSON document."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self) -> None:
        self._formatter = JsonExporter()

    def render(self, output: OptimizationOutput) -> str:
        return self._formatter.export(output)
