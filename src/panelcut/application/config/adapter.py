"""Adapter converting a ProjectConfiguration into domain objects.

Every length is converted to millimetres here; nothing downstream converts
units again.
"""

from panelcut.application.config.schema import (
    DimensionsConfig,
    MaterialConfig,
    PieceConfig,
    ProjectConfiguration,
    resolve_length,
)
from panelcut.domain.value_objects import (
    DEFAULT_SETTINGS,
    CutPiece,
    Material,
    ProjectSettings,
    SheetSize,
    UnitSystem,
    find_material_preset,
)


def _length(value: float | str, unit: UnitSystem) -> float:
    mm = resolve_length(value, unit)
    if mm is None:
        # ProjectConfiguration rejects unparseable strings on load
        raise ValueError(f"Cannot parse dimension '{value}'")
    return mm


def _sheet_size(dimensions: DimensionsConfig, unit: UnitSystem) -> SheetSize:
    return SheetSize(
        length=_length(dimensions.length, unit),
        width=_length(dimensions.width, unit),
    )


def config_to_settings(config: ProjectConfiguration) -> ProjectSettings:
    """Convert the settings block to ProjectSettings in millimetres.

    Omitted kerf and margin fall back to the project defaults.
    """
    settings = config.settings
    unit = settings.unit_system

    saw_kerf = (
        DEFAULT_SETTINGS.saw_kerf
        if settings.saw_kerf is None
        else _length(settings.saw_kerf, unit)
    )
    edge_margin = (
        DEFAULT_SETTINGS.edge_margin
        if settings.edge_margin is None
        else _length(settings.edge_margin, unit)
    )

    return ProjectSettings(
        unit_system=unit,
        saw_kerf=saw_kerf,
        allow_rotation=settings.allow_rotation,
        optimization_priority=settings.optimization_priority,
        cut_type=settings.cut_type,
        edge_margin=edge_margin,
    )


def config_to_material(material: MaterialConfig, unit: UnitSystem) -> Material:
    """Convert one material, resolving presets."""
    if material.preset is not None:
        preset = find_material_preset(material.preset)
        if preset is None:
            raise ValueError(f"Unknown preset '{material.preset}'")
        sheet = preset.sheet
    else:
        assert material.sheet is not None
        sheet = _sheet_size(material.sheet, unit)

    return Material(id=material.id, name=material.display_name, sheet=sheet)


def config_to_materials(config: ProjectConfiguration) -> list[Material]:
    """Convert all materials, in file order."""
    unit = config.settings.unit_system
    return [config_to_material(m, unit) for m in config.materials]


def config_to_piece(piece: PieceConfig, unit: UnitSystem) -> CutPiece:
    """Convert one piece."""
    return CutPiece(
        id=piece.id,
        name=piece.name,
        dimensions=_sheet_size(piece.dimensions, unit),
        material_id=piece.material_id,
        quantity=piece.quantity,
        grain_direction=piece.grain_direction,
        notes=piece.notes,
    )


def config_to_pieces(config: ProjectConfiguration) -> list[CutPiece]:
    """Convert all pieces, in file order."""
    unit = config.settings.unit_system
    return [config_to_piece(p, unit) for p in config.pieces]
