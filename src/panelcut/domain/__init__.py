"""Domain layer - value objects and unit handling."""

from .services import (
    MM_PER_INCH,
    format_dimension,
    from_millimeters,
    parse_dimension,
    to_millimeters,
)
from .value_objects import (
    DEFAULT_SETTINGS,
    MATERIAL_PRESETS,
    CutAxis,
    CutPiece,
    CutType,
    GrainDirection,
    Material,
    MaterialPreset,
    OptimizationPriority,
    ProjectSettings,
    SheetSize,
    UnitSystem,
    find_material_preset,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "MATERIAL_PRESETS",
    "MM_PER_INCH",
    "CutAxis",
    "CutPiece",
    "CutType",
    "GrainDirection",
    "Material",
    "MaterialPreset",
    "OptimizationPriority",
    "ProjectSettings",
    "SheetSize",
    "UnitSystem",
    "find_material_preset",
    "format_dimension",
    "from_millimeters",
    "parse_dimension",
    "to_millimeters",
]
