"""Application commands (use cases) for cut layout optimization."""

from __future__ import annotations

import logging
from typing import Sequence

from panelcut.application.config import (
    ProjectConfiguration,
    config_to_materials,
    config_to_pieces,
    config_to_settings,
    validate_config,
)
from panelcut.domain.value_objects import CutPiece, Material, ProjectSettings
from panelcut.infrastructure.bin_packing import BinPackingService

from .dtos import OptimizationOutput

logger = logging.getLogger(__name__)


class OptimizeCutLayoutCommand:
    """Command to compute a cut layout for a project.

    Accepts either a loaded project file (execute_config) or domain objects
    directly (execute).
    """

    def __init__(
        self,
        service_factory: type[BinPackingService] = BinPackingService,
    ) -> None:
        self.service_factory = service_factory

    def execute(
        self,
        materials: Sequence[Material],
        pieces: Sequence[CutPiece],
        settings: ProjectSettings,
        project_name: str = "project",
        warnings: list[str] | None = None,
    ) -> OptimizationOutput:
        """Pack the pieces and wrap the result for output.

        Args:
            materials: Available stock materials (millimetres).
            pieces: Pieces to cut (millimetres).
            settings: Project settings (millimetres).
            project_name: Display name for reports and exports.
            warnings: Advisories to carry through to the output.

        Returns:
            OptimizationOutput with the layout and its inputs.
        """
        layout = self.service_factory(settings).optimize(materials, pieces)

        if layout.unplaced_pieces:
            logger.info(
                "Unplaced pieces: %s", ", ".join(layout.unplaced_pieces)
            )

        return OptimizationOutput(
            layout=layout,
            materials=list(materials),
            pieces=list(pieces),
            settings=settings,
            project_name=project_name,
            warnings=list(warnings or []),
        )

    def execute_config(self, config: ProjectConfiguration) -> OptimizationOutput:
        """Validate, convert and pack a loaded project file.

        Validation warnings and errors are carried into the output as
        warnings; they never stop packing.
        """
        validation = validate_config(config)
        warnings = [f"{e.path}: {e.message}" for e in validation.errors]
        warnings.extend(f"{w.path}: {w.message}" for w in validation.warnings)

        for warning in warnings:
            logger.debug("Validation: %s", warning)

        return self.execute(
            config_to_materials(config),
            config_to_pieces(config),
            config_to_settings(config),
            project_name=config.name,
            warnings=warnings,
        )
