"""Value objects for the panel cutting domain.

These are the typed inputs the packing core consumes: stock materials,
pieces to cut, and the subset of project settings that affect packing.
All lengths share one unit; conversion happens before packing runs
(see ``panelcut.domain.services.units``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class UnitSystem(str, Enum):
    """Measurement system a project is entered and displayed in."""

    IMPERIAL = "imperial"
    METRIC = "metric"


class GrainDirection(str, Enum):
    """Grain direction constraint for cut pieces.

    Attributes:
        NONE: No grain constraint, piece may rotate when rotation is allowed.
        LENGTHWISE: Grain runs along the piece length; orientation is locked.
        WIDTHWISE: Grain runs along the piece width; orientation is locked.
    """

    NONE = "none"
    LENGTHWISE = "lengthwise"
    WIDTHWISE = "widthwise"


class OptimizationPriority(str, Enum):
    """Optimization goal selected for a project.

    Accepted and carried through settings. The packer currently applies the
    same ordering and fit heuristic for both values.
    """

    MINIMIZE_SHEETS = "minimize_sheets"
    MINIMIZE_WASTE = "minimize_waste"


class CutType(str, Enum):
    """Cutting style requested for a project."""

    GUILLOTINE = "guillotine"
    NESTING = "nesting"


class CutAxis(str, Enum):
    """Orientation of a straight cut line across a sheet."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class SheetSize:
    """Length and width of a stock sheet or a piece.

    Length maps to the vertical (height) axis of a layout, width to the
    horizontal axis.
    """

    length: float
    width: float

    @property
    def area(self) -> float:
        """Area in squared input units."""
        return self.length * self.width


@dataclass(frozen=True)
class Material:
    """A stock material supplied as fixed-size sheets."""

    id: str
    name: str
    sheet: SheetSize

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Material id must not be empty")
        if not (_is_positive(self.sheet.length) and _is_positive(self.sheet.width)):
            raise ValueError("Sheet dimensions must be positive and finite")

    @property
    def sheet_width(self) -> float:
        """Horizontal extent of a sheet in a layout."""
        return self.sheet.width

    @property
    def sheet_height(self) -> float:
        """Vertical extent of a sheet in a layout."""
        return self.sheet.length


@dataclass(frozen=True)
class CutPiece:
    """A rectangular piece to cut, possibly several times.

    Dimensions are not validated here: a piece with non-positive dimensions
    is simply never placed. Neither is one with NaN or infinite dimensions.
    """

    id: str
    dimensions: SheetSize
    material_id: str
    quantity: int = 1
    grain_direction: GrainDirection = GrainDirection.NONE
    name: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Cut piece id must not be empty")
        if self.quantity < 0:
            raise ValueError("Quantity must be non-negative")

    @property
    def label(self) -> str:
        """Display label, falling back to the id."""
        return self.name or self.id

    @property
    def area(self) -> float:
        """Total area for all instances of this piece."""
        return self.dimensions.area * self.quantity


@dataclass(frozen=True)
class ProjectSettings:
    """Project-wide settings.

    Only ``saw_kerf``, ``allow_rotation`` and ``edge_margin`` influence
    packing; the remaining fields are carried for the surrounding
    application.

    Attributes:
        unit_system: System used for display and input parsing.
        saw_kerf: Blade width reserved between neighbouring pieces.
        allow_rotation: Global switch permitting 90 degree rotation.
        optimization_priority: Requested optimization goal.
        cut_type: Requested cutting style.
        edge_margin: Unusable border around every sheet.
    """

    unit_system: UnitSystem = UnitSystem.IMPERIAL
    saw_kerf: float = 3.175
    allow_rotation: bool = True
    optimization_priority: OptimizationPriority = OptimizationPriority.MINIMIZE_SHEETS
    cut_type: CutType = CutType.GUILLOTINE
    edge_margin: float = 6.35

    def __post_init__(self) -> None:
        if not (math.isfinite(self.saw_kerf) and self.saw_kerf >= 0):
            raise ValueError("Saw kerf must be non-negative and finite")
        if not (math.isfinite(self.edge_margin) and self.edge_margin >= 0):
            raise ValueError("Edge margin must be non-negative and finite")


@dataclass(frozen=True)
class MaterialPreset:
    """A named, commonly stocked sheet size (in millimetres)."""

    name: str
    sheet: SheetSize


# Defaults of a new project, lengths in millimetres (1/8" kerf, 1/4" margin).
DEFAULT_SETTINGS = ProjectSettings()

MATERIAL_PRESETS: tuple[MaterialPreset, ...] = (
    MaterialPreset("4×8 Plywood Sheet", SheetSize(length=2438.4, width=1219.2)),
    MaterialPreset("5×5 Baltic Birch", SheetSize(length=1524.0, width=1524.0)),
    MaterialPreset("4×4 Plywood Sheet", SheetSize(length=1219.2, width=1219.2)),
)


def find_material_preset(name: str) -> MaterialPreset | None:
    """Look up a material preset by name, ignoring case."""
    wanted = name.strip().lower()
    for preset in MATERIAL_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None
