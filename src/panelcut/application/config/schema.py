"""Pydantic configuration schema models for cut-layout projects.

This module defines the schema for JSON project files. It uses Pydantic v2
for validation and serialization.

Lengths may be given as numbers or as dimension strings (``"3/4"``,
``'1 1/2"'``, ``"2440mm"``). Strings are interpreted in the project's unit
system, so they are checked once the whole file has been read.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from panelcut.domain.services.units import parse_dimension, to_millimeters
from panelcut.domain.value_objects import (
    MATERIAL_PRESETS,
    CutType,
    GrainDirection,
    OptimizationPriority,
    UnitSystem,
    find_material_preset,
)

# Supported schema versions for project files
# Version 1.0: Materials, pieces and packing settings
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


def resolve_length(value: float | str, unit: UnitSystem) -> float | None:
    """Convert a configured length to millimetres.

    Returns:
        The length in millimetres, or None if a string cannot be parsed or
        the converted length is not finite.
    """
    if isinstance(value, str):
        return parse_dimension(value, unit)
    mm = to_millimeters(float(value), unit)
    return mm if math.isfinite(mm) else None


def _check_number(value: float | str, allow_zero: bool) -> float | str:
    if isinstance(value, str):
        if not value.strip():
            raise ValueError("must not be empty")
        return value
    if value < 0 or (value == 0 and not allow_zero):
        raise ValueError("must be non-negative" if allow_zero else "must be positive")
    return value


class DimensionsConfig(BaseModel):
    """Rectangular size of a sheet or piece.

    Attributes:
        length: Vertical extent as laid out on the sheet.
        width: Horizontal extent as laid out on the sheet.
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    length: float | str
    width: float | str

    @field_validator("length", "width")
    @classmethod
    def validate_positive(cls, v: float | str) -> float | str:
        """Numbers must be positive; strings are checked against the unit system later."""
        return _check_number(v, allow_zero=False)


class SettingsConfig(BaseModel):
    """Project-wide packing settings.

    Kerf and margin default to 1/8" and 1/4" when omitted, whatever the
    unit system.

    Attributes:
        unit_system: Unit system lengths are written in.
        saw_kerf: Blade width (non-negative).
        allow_rotation: Whether pieces without grain may be turned 90 degrees.
        optimization_priority: Packing goal (informational).
        cut_type: Cutting style; only guillotine packing is performed.
        edge_margin: Unusable border on every side of a sheet (non-negative).
    """

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    unit_system: UnitSystem = UnitSystem.IMPERIAL
    saw_kerf: float | str | None = None
    allow_rotation: bool = True
    optimization_priority: OptimizationPriority = OptimizationPriority.MINIMIZE_SHEETS
    cut_type: CutType = CutType.GUILLOTINE
    edge_margin: float | str | None = None

    @field_validator("saw_kerf", "edge_margin")
    @classmethod
    def validate_non_negative(cls, v: float | str | None) -> float | str | None:
        """Numbers must be non-negative."""
        if v is None:
            return v
        return _check_number(v, allow_zero=True)


class MaterialConfig(BaseModel):
    """Stock sheet material.

    Either ``sheet`` or ``preset`` (a name from the material presets) must be
    given.

    Attributes:
        id: Unique material identifier referenced by pieces.
        name: Display name (defaults to the id or the preset name).
        sheet: Sheet dimensions.
        preset: Name of a built-in sheet preset.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    sheet: DimensionsConfig | None = None
    preset: str | None = None

    @model_validator(mode="after")
    def validate_sheet_source(self) -> MaterialConfig:
        """Exactly one of 'sheet' or 'preset' must be specified."""
        if self.sheet is None and self.preset is None:
            raise ValueError("Specify either 'sheet' dimensions or a 'preset'")
        if self.sheet is not None and self.preset is not None:
            raise ValueError("Specify either 'sheet' or 'preset', not both")
        if self.preset is not None and find_material_preset(self.preset) is None:
            raise ValueError(
                f"Unknown preset '{self.preset}'. "
                f"Available presets: {[p.name for p in MATERIAL_PRESETS]}"
            )
        return self

    @property
    def display_name(self) -> str:
        """Name shown in reports."""
        return self.name or self.preset or self.id


class PieceConfig(BaseModel):
    """A rectangular part to be cut.

    Attributes:
        id: Unique piece identifier.
        name: Display name.
        dimensions: Piece size.
        material_id: Id of the material to cut it from.
        quantity: Number of identical copies (0 means none).
        grain_direction: Grain constraint; any grain locks orientation.
        notes: Free-form notes.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    dimensions: DimensionsConfig
    material_id: str
    quantity: int = Field(default=1, ge=0)
    grain_direction: GrainDirection = GrainDirection.NONE
    notes: str = ""


class ProjectConfiguration(BaseModel):
    """Root configuration model for a cut-layout project file.

    Example:
        >>> config = ProjectConfiguration(
        ...     schema_version="1.0",
        ...     materials=[MaterialConfig(id="ply", preset="4×8 Plywood Sheet")],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    name: str = "Untitled Project"
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    materials: list[MaterialConfig] = Field(default_factory=list)
    pieces: list[PieceConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("materials")
    @classmethod
    def validate_unique_material_ids(
        cls, v: list[MaterialConfig]
    ) -> list[MaterialConfig]:
        """Material ids must be unique."""
        _check_unique([m.id for m in v], "material")
        return v

    @field_validator("pieces")
    @classmethod
    def validate_unique_piece_ids(cls, v: list[PieceConfig]) -> list[PieceConfig]:
        """Piece ids must be unique."""
        _check_unique([p.id for p in v], "piece")
        return v

    @model_validator(mode="after")
    def validate_lengths(self) -> ProjectConfiguration:
        """Every length must convert to a finite length in the project's unit system."""
        unit = self.settings.unit_system

        lengths: list[tuple[str, float | str | None, bool]] = [
            ("settings.saw_kerf", self.settings.saw_kerf, True),
            ("settings.edge_margin", self.settings.edge_margin, True),
        ]
        for i, material in enumerate(self.materials):
            if material.sheet is not None:
                lengths.append((f"materials[{i}].sheet.length", material.sheet.length, False))
                lengths.append((f"materials[{i}].sheet.width", material.sheet.width, False))
        for i, piece in enumerate(self.pieces):
            lengths.append((f"pieces[{i}].dimensions.length", piece.dimensions.length, False))
            lengths.append((f"pieces[{i}].dimensions.width", piece.dimensions.width, False))

        for path, value, allow_zero in lengths:
            if value is None:
                continue
            mm = resolve_length(value, unit)
            if mm is None and not isinstance(value, str):
                raise ValueError(f"{path}: {value} is too large to convert to millimetres")
            if mm is None:
                raise ValueError(
                    f"{path}: cannot parse '{value}' as a {unit.value} dimension"
                )
            if mm < 0 or (mm == 0 and not allow_zero):
                qualifier = "non-negative" if allow_zero else "positive"
                raise ValueError(f"{path}: '{value}' must be {qualifier}")

        return self


def _check_unique(ids: list[str], kind: str) -> None:
    seen: set[str] = set()
    duplicates: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            duplicates.add(item_id)
        seen.add(item_id)
    if duplicates:
        raise ValueError(f"Duplicate {kind} ids: {', '.join(sorted(duplicates))}")
