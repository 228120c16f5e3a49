"""Data transfer objects passed between the application and its outputs."""

from __future__ import annotations

from dataclasses import dataclass, field

from panelcut.domain.value_objects import CutPiece, Material, ProjectSettings, UnitSystem
from panelcut.infrastructure.bin_packing import CutLayout


@dataclass
class OptimizationOutput:
    """Everything produced by one optimization run.

    Lengths in ``materials``, ``pieces``, ``settings`` and ``layout`` are in
    millimetres; ``settings.unit_system`` selects how they are displayed.

    Attributes:
        layout: The computed cut layout.
        materials: Materials the layout was computed for.
        pieces: Pieces the layout was computed for.
        settings: Settings used for the run.
        project_name: Human-readable project name.
        warnings: Non-blocking advisories gathered while preparing the run.
    """

    layout: CutLayout
    materials: list[Material]
    pieces: list[CutPiece]
    settings: ProjectSettings
    project_name: str = "project"
    warnings: list[str] = field(default_factory=list)

    @property
    def unit_system(self) -> UnitSystem:
        """Display unit system of the project."""
        return self.settings.unit_system

    @property
    def material_names(self) -> dict[str, str]:
        """Material display names keyed by material id."""
        return {material.id: material.name for material in self.materials}

    @property
    def piece_labels(self) -> dict[str, str]:
        """Piece display labels keyed by piece id."""
        return {piece.id: piece.label for piece in self.pieces}
