"""Validation structures and packing advisory checks.

Pydantic already guarantees the shape of a project file. The checks here
look at how the pieces relate to the materials and settings, and report
anything that will leave pieces unplaced or be silently ignored.
"""

from dataclasses import dataclass, field
from typing import Any

from panelcut.application.config.adapter import (
    config_to_materials,
    config_to_pieces,
    config_to_settings,
)
from panelcut.application.config.schema import ProjectConfiguration
from panelcut.domain.services.units import format_dimension
from panelcut.domain.value_objects import CutType, GrainDirection


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "materials[0].sheet")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if the configuration has any warnings."""
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_settings_advisories(config: ProjectConfiguration) -> ValidationResult:
    """Warn about settings that are accepted but not acted on."""
    result = ValidationResult()

    if config.settings.cut_type == CutType.NESTING:
        result.add_warning(
            path="settings.cut_type",
            message="Nesting is not supported; pieces will be packed with guillotine cuts",
            suggestion="Set cut_type to 'guillotine' to silence this warning",
        )

    return result


def check_piece_advisories(config: ProjectConfiguration) -> ValidationResult:
    """Check every piece against its material's usable sheet area.

    Reports sheets that the edge margin leaves unusable (error), pieces that
    reference an unknown material, pieces with zero quantity, and pieces too
    large for their sheet in every orientation they may be placed in.
    """
    result = ValidationResult()

    settings = config_to_settings(config)
    materials = {m.id: m for m in config_to_materials(config)}
    pieces = config_to_pieces(config)
    unit = settings.unit_system
    margin = settings.edge_margin

    usable: dict[str, tuple[float, float]] = {}
    for i, material in enumerate(materials.values()):
        usable_w = material.sheet_width - 2 * margin
        usable_h = material.sheet_height - 2 * margin
        if usable_w <= 0 or usable_h <= 0:
            result.add_error(
                path=f"materials[{i}]",
                message=(
                    f"Edge margin of {format_dimension(margin, unit)} leaves no usable "
                    f"area on '{material.id}' sheets"
                ),
                value=material.id,
            )
        usable[material.id] = (usable_w, usable_h)

    for i, piece in enumerate(pieces):
        path = f"pieces[{i}]"

        if piece.quantity == 0:
            result.add_warning(
                path=f"{path}.quantity",
                message=f"Piece '{piece.id}' has quantity 0 and will not be cut",
            )

        if piece.material_id not in materials:
            result.add_warning(
                path=f"{path}.material_id",
                message=(
                    f"Piece '{piece.id}' references unknown material "
                    f"'{piece.material_id}' and will be left unplaced"
                ),
                suggestion=f"Known materials: {', '.join(materials) or 'none'}",
            )
            continue

        usable_w, usable_h = usable[piece.material_id]
        if usable_w <= 0 or usable_h <= 0:
            continue

        width, height = piece.dimensions.width, piece.dimensions.length
        fits = width <= usable_w and height <= usable_h
        can_rotate = (
            settings.allow_rotation and piece.grain_direction == GrainDirection.NONE
        )
        if can_rotate:
            fits = fits or (height <= usable_w and width <= usable_h)

        if not fits:
            result.add_warning(
                path=f"{path}.dimensions",
                message=(
                    f"Piece '{piece.id}' ({format_dimension(width, unit)} x "
                    f"{format_dimension(height, unit)}) does not fit the usable "
                    f"{format_dimension(usable_w, unit)} x "
                    f"{format_dimension(usable_h, unit)} area of "
                    f"'{piece.material_id}' and will be left unplaced"
                ),
                suggestion=(
                    None
                    if can_rotate or not settings.allow_rotation
                    else "Grain direction prevents rotation; set it to 'none' if rotating is acceptable"
                ),
            )

    return result


def validate_config(config: ProjectConfiguration) -> ValidationResult:
    """Perform full validation of a project configuration.

    Args:
        config: A ProjectConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    result.merge(check_settings_advisories(config))
    result.merge(check_piece_advisories(config))
    return result
