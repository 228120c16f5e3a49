"""Guillotine bin packing for sheet material cutting.

This module provides the data structures describing a cut layout and the
algorithms that produce it:

- GuillotineSheetPacker fills one sheet with a best-area-fit greedy search
  over a list of free rectangles, splitting the chosen rectangle
  guillotine-style after every placement.
- BinPackingService drives the packer sheet after sheet for every material
  and aggregates area and waste totals.

All output dataclasses are frozen (immutable) so a finished layout can be
shared freely.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Sequence

from panelcut.domain.value_objects import (
    CutAxis,
    CutPiece,
    Material,
    ProjectSettings,
)
from panelcut.infrastructure.piece_expander import PieceExpander, PieceInstance

logger = logging.getLogger(__name__)


def _is_usable(length: float) -> bool:
    """A length a piece can occupy; NaN and infinity never fit."""
    return math.isfinite(length) and length > 0


@dataclass(frozen=True)
class PlacedPiece:
    """A piece instance placed at a position on a sheet.

    Coordinates are absolute sheet coordinates, so every placement lies
    inside ``[edge_margin, sheet_dimension - edge_margin]``.

    Attributes:
        piece_id: Id of the originating cut piece.
        instance_index: Which copy of the piece this is.
        x: Left edge.
        y: Top edge.
        width: Width as placed (accounts for rotation).
        height: Height as placed (accounts for rotation).
        rotated: True if placed turned 90 degrees from its original orientation.
        sheet_index: Index of the sheet holding the piece.
    """

    piece_id: str
    instance_index: int
    x: float
    y: float
    width: float
    height: float
    rotated: bool
    sheet_index: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece's right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the piece's bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        """Area covered by the piece."""
        return self.width * self.height


@dataclass(frozen=True)
class CutInstruction:
    """An advisory straight cut used for diagram rendering.

    Attributes:
        axis: HORIZONTAL cuts run along x at ``y == position``; VERTICAL cuts
            run along y at ``x == position``.
        position: Centre line of the saw kerf.
        start: Start of the cut span along the other axis.
        end: End of the cut span along the other axis.
        sheet_index: Index of the sheet the cut belongs to.
    """

    axis: CutAxis
    position: float
    start: float
    end: float
    sheet_index: int

    @property
    def length(self) -> float:
        """Length of the cut span."""
        return self.end - self.start


@dataclass(frozen=True)
class CutSheet:
    """One stock sheet with the pieces placed on it.

    Attributes:
        sheet_index: Zero-based index of the sheet across the whole layout.
        material_id: Material the sheet is cut from.
        width: Sheet width.
        height: Sheet height.
        pieces: Placed pieces, in placement order.
        cuts: Advisory cut lines, in emission order.
    """

    sheet_index: int
    material_id: str
    width: float
    height: float
    pieces: tuple[PlacedPiece, ...]
    cuts: tuple[CutInstruction, ...] = ()

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def area(self) -> float:
        """Full sheet area, margins included."""
        return self.width * self.height

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces."""
        return sum(p.area for p in self.pieces)

    @property
    def waste_area(self) -> float:
        """Sheet area not covered by pieces."""
        return self.area - self.used_area

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet that is waste."""
        if self.area == 0:
            return 0.0
        return (1 - self.used_area / self.area) * 100

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.pieces)


@dataclass(frozen=True)
class CutLayout:
    """Complete result of one packing run.

    Attributes:
        sheets: Produced sheets ordered by sheet_index.
        unplaced_pieces: Deduplicated ids of pieces that could not be placed.
        total_waste: ``total_area - used_area``.
        total_area: Sum of the areas of all produced sheets.
        used_area: Sum of the areas of all placed pieces.
    """

    sheets: tuple[CutSheet, ...] = ()
    unplaced_pieces: tuple[str, ...] = ()
    total_waste: float = 0.0
    total_area: float = 0.0
    used_area: float = 0.0

    @classmethod
    def from_sheets(
        cls,
        sheets: Sequence[CutSheet],
        unplaced_pieces: Sequence[str] = (),
    ) -> CutLayout:
        """Build a layout, computing area totals from the sheets."""
        total_area = sum(sheet.area for sheet in sheets)
        used_area = sum(sheet.used_area for sheet in sheets)
        return cls(
            sheets=tuple(sheets),
            unplaced_pieces=tuple(dict.fromkeys(unplaced_pieces)),
            total_waste=total_area - used_area,
            total_area=total_area,
            used_area=used_area,
        )

    @property
    def total_sheets(self) -> int:
        """Number of sheets in the layout."""
        return len(self.sheets)

    @property
    def total_pieces_placed(self) -> int:
        """Number of piece instances placed across all sheets."""
        return sum(sheet.piece_count for sheet in self.sheets)

    @property
    def waste_percentage(self) -> float:
        """Waste as a percentage of the total sheet area."""
        if self.total_area == 0:
            return 0.0
        return self.total_waste / self.total_area * 100

    @property
    def sheets_by_material(self) -> dict[str, int]:
        """Count of sheets per material id, in order of first use."""
        counts: dict[str, int] = {}
        for sheet in self.sheets:
            counts[sheet.material_id] = counts.get(sheet.material_id, 0) + 1
        return counts

    @property
    def placed_piece_ids(self) -> set[str]:
        """Ids of pieces with at least one placed instance."""
        return {p.piece_id for sheet in self.sheets for p in sheet.pieces}

    @property
    def is_complete(self) -> bool:
        """True if every piece was placed."""
        return not self.unplaced_pieces


@dataclass
class FreeRectangle:
    """Empty axis-aligned region of a sheet available for placement."""

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        """Area of the region."""
        return self.width * self.height


@dataclass
class SheetPackResult:
    """Outcome of packing a single sheet.

    Attributes:
        placed: Pieces placed on the sheet, in placement order.
        cuts: Advisory cut lines emitted while splitting.
        remaining: Instances that did not fit, in their original order.
    """

    placed: list[PlacedPiece] = field(default_factory=list)
    cuts: list[CutInstruction] = field(default_factory=list)
    remaining: list[PieceInstance] = field(default_factory=list)


@dataclass(frozen=True)
class _Candidate:
    """Best fit found so far while scanning free rectangles."""

    rect_index: int
    width: float
    height: float
    rotated: bool
    waste: float


class GuillotineSheetPacker:
    """Best-area-fit packer with guillotine splitting for a single sheet.

    Each instance, in the order given, is placed into the free rectangle that
    leaves the least unused area. Ties go to the earliest rectangle, then to
    the un-rotated orientation. There is no backtracking: an instance that
    fits nowhere is deferred to the next sheet.

    Attributes:
        kerf: Blade width reserved between neighbouring pieces.
        edge_margin: Unusable border around the sheet.
    """

    def __init__(self, kerf: float = 0.0, edge_margin: float = 0.0) -> None:
        """Initialize the packer.

        Args:
            kerf: Saw kerf width (non-negative).
            edge_margin: Edge margin on every side of the sheet (non-negative).
        """
        if not (math.isfinite(kerf) and kerf >= 0):
            raise ValueError("Kerf must be non-negative and finite")
        if not (math.isfinite(edge_margin) and edge_margin >= 0):
            raise ValueError("Edge margin must be non-negative and finite")
        self.kerf = kerf
        self.edge_margin = edge_margin

    def pack_sheet(
        self,
        instances: Sequence[PieceInstance],
        sheet_width: float,
        sheet_height: float,
        material_id: str,
        sheet_index: int,
    ) -> SheetPackResult:
        """Place as many instances as possible onto one sheet.

        Args:
            instances: Instances to place, already sorted by decreasing area.
            sheet_width: Full sheet width.
            sheet_height: Full sheet height.
            material_id: Material of the sheet (for logging).
            sheet_index: Index assigned to placements and cuts.

        Returns:
            SheetPackResult with placements, cuts and leftover instances.
        """
        result = SheetPackResult()
        margin = self.edge_margin
        usable_width = sheet_width - 2 * margin
        usable_height = sheet_height - 2 * margin

        if not (_is_usable(usable_width) and _is_usable(usable_height)):
            logger.debug(
                "Sheet %d (%s): edge margin %s leaves no usable area",
                sheet_index,
                material_id,
                margin,
            )
            result.remaining.extend(instances)
            return result

        free_rects = [FreeRectangle(margin, margin, usable_width, usable_height)]

        for instance in instances:
            candidate = self._find_best_fit(instance, free_rects)
            if candidate is None:
                result.remaining.append(instance)
                continue

            rect = free_rects.pop(candidate.rect_index)
            placement = PlacedPiece(
                piece_id=instance.piece_id,
                instance_index=instance.instance_index,
                x=rect.x,
                y=rect.y,
                width=candidate.width,
                height=candidate.height,
                rotated=candidate.rotated,
                sheet_index=sheet_index,
            )
            result.placed.append(placement)

            if candidate.rotated:
                logger.debug(
                    "Piece '%s' #%d placed rotated at (%s, %s) as %sx%s",
                    instance.piece_id,
                    instance.instance_index,
                    rect.x,
                    rect.y,
                    candidate.width,
                    candidate.height,
                )

            self._split(rect, placement, free_rects, result.cuts)

        logger.debug(
            "Sheet %d (%s): placed %d, deferred %d, %d free rectangles left",
            sheet_index,
            material_id,
            len(result.placed),
            len(result.remaining),
            len(free_rects),
        )
        return result

    def _orientations(self, instance: PieceInstance) -> list[tuple[float, float, bool]]:
        """Candidate (width, height, rotated) orientations, un-rotated first."""
        orientations = [(instance.width, instance.height, False)]
        if instance.can_rotate:
            orientations.append((instance.height, instance.width, True))
        return orientations

    def _find_best_fit(
        self,
        instance: PieceInstance,
        free_rects: list[FreeRectangle],
    ) -> _Candidate | None:
        """Scan every free rectangle and orientation for the least waste.

        Only a strictly smaller waste replaces the current best, which keeps
        the earliest rectangle and the un-rotated orientation on ties.
        """
        best: _Candidate | None = None

        for index, rect in enumerate(free_rects):
            if not (_is_usable(rect.width) and _is_usable(rect.height)):
                continue
            for width, height, rotated in self._orientations(instance):
                if not (_is_usable(width) and _is_usable(height)):
                    continue
                if width > rect.width or height > rect.height:
                    continue
                waste = rect.area - width * height
                if best is None or waste < best.waste:
                    best = _Candidate(index, width, height, rotated, waste)

        return best

    def _split(
        self,
        rect: FreeRectangle,
        placement: PlacedPiece,
        free_rects: list[FreeRectangle],
        cuts: list[CutInstruction],
    ) -> None:
        """Split the used rectangle into at most two free children.

        The piece sits in the rectangle's top-left corner. ``right_space`` and
        ``bottom_space`` are what remains beside and below it once a kerf is
        taken off; a side with no positive space yields no child.
        """
        kerf = self.kerf
        x, y = placement.x, placement.y
        placed_w, placed_h = placement.width, placement.height
        sheet_index = placement.sheet_index

        right_space = rect.width - placed_w - kerf
        bottom_space = rect.height - placed_h - kerf
        cut_x = x + placed_w + kerf / 2
        cut_y = y + placed_h + kerf / 2

        if right_space > 0 and bottom_space > 0:
            if right_space >= bottom_space:
                # Full-width strip below; the right child is only as tall as the piece.
                free_rects.append(
                    FreeRectangle(x + placed_w + kerf, y, right_space, placed_h)
                )
                free_rects.append(
                    FreeRectangle(x, y + placed_h + kerf, rect.width, bottom_space)
                )
                cuts.append(
                    CutInstruction(CutAxis.VERTICAL, cut_x, y, y + placed_h, sheet_index)
                )
                cuts.append(
                    CutInstruction(
                        CutAxis.HORIZONTAL, cut_y, x, x + rect.width, sheet_index
                    )
                )
            else:
                # Full-height strip to the right; the bottom child is only as wide as the piece.
                free_rects.append(
                    FreeRectangle(x, y + placed_h + kerf, placed_w, bottom_space)
                )
                free_rects.append(
                    FreeRectangle(x + placed_w + kerf, y, right_space, rect.height)
                )
                cuts.append(
                    CutInstruction(
                        CutAxis.HORIZONTAL, cut_y, x, x + placed_w, sheet_index
                    )
                )
                cuts.append(
                    CutInstruction(
                        CutAxis.VERTICAL, cut_x, y, y + rect.height, sheet_index
                    )
                )
        elif right_space > 0:
            free_rects.append(
                FreeRectangle(x + placed_w + kerf, y, right_space, rect.height)
            )
            cuts.append(
                CutInstruction(CutAxis.VERTICAL, cut_x, y, y + rect.height, sheet_index)
            )
        elif bottom_space > 0:
            free_rects.append(
                FreeRectangle(x, y + placed_h + kerf, rect.width, bottom_space)
            )
            cuts.append(
                CutInstruction(CutAxis.HORIZONTAL, cut_y, x, x + rect.width, sheet_index)
            )


class BinPackingService:
    """Coordinates sheet packing across all materials of a project.

    Pieces are expanded into instances and grouped by material. Each
    material's instances are sorted once by decreasing area (stable), then
    packed sheet after sheet until none remain or a pass places nothing.
    Sheet indices run across all materials.

    Attributes:
        settings: Project settings (kerf, rotation, edge margin).
        expander: PieceExpander built from the rotation setting.
        packer: GuillotineSheetPacker built from kerf and edge margin.
    """

    def __init__(self, settings: ProjectSettings) -> None:
        """Initialize service with project settings.

        Args:
            settings: Project settings. Only saw_kerf, allow_rotation and
                edge_margin affect packing.
        """
        self.settings = settings
        self.expander = PieceExpander(allow_rotation=settings.allow_rotation)
        self.packer = GuillotineSheetPacker(
            kerf=settings.saw_kerf,
            edge_margin=settings.edge_margin,
        )

    def optimize(
        self,
        materials: Sequence[Material],
        pieces: Sequence[CutPiece],
    ) -> CutLayout:
        """Pack all pieces onto sheets of their materials.

        Args:
            materials: Available stock materials.
            pieces: Pieces to cut.

        Returns:
            CutLayout with sheets, unplaced piece ids and area totals.
        """
        material_map = {material.id: material for material in materials}
        expanded = self.expander.expand(pieces, materials)

        logger.info(
            "Optimizing %d pieces across %d material groups (priority: %s)",
            expanded.instance_count,
            len(expanded.instances_by_material),
            self.settings.optimization_priority.value,
        )

        sheets: list[CutSheet] = []
        unplaced: list[str] = list(expanded.unplaced_ids)

        for material_id, instances in expanded.instances_by_material.items():
            material = material_map[material_id]
            leftovers = self._pack_material(material, instances, sheets)
            unplaced.extend(instance.piece_id for instance in leftovers)

        layout = CutLayout.from_sheets(sheets, unplaced)

        logger.info(
            "Produced %d sheets, %d unplaced pieces, %.1f%% waste",
            layout.total_sheets,
            len(layout.unplaced_pieces),
            layout.waste_percentage,
        )
        return layout

    def _sort_by_area(self, instances: list[PieceInstance]) -> list[PieceInstance]:
        """Sort instances by area, largest first.

        ``sorted`` is stable, so equal areas keep their input order.
        """
        return sorted(instances, key=lambda instance: instance.area, reverse=True)

    def _pack_material(
        self,
        material: Material,
        instances: list[PieceInstance],
        sheets: list[CutSheet],
    ) -> list[PieceInstance]:
        """Pack one material's instances, appending a sheet per pass.

        Args:
            material: Material whose sheets are being filled.
            instances: Instances of that material.
            sheets: Layout sheets so far; new sheets are appended.

        Returns:
            Instances that could not be placed.
        """
        remaining = self._sort_by_area(instances)

        while remaining:
            sheet_index = len(sheets)
            result = self.packer.pack_sheet(
                remaining,
                material.sheet_width,
                material.sheet_height,
                material.id,
                sheet_index,
            )

            if not result.placed:
                # Another sheet would look exactly like this one.
                logger.warning(
                    "Material '%s': %d pieces cannot fit on a %sx%s sheet",
                    material.id,
                    len(remaining),
                    material.sheet_width,
                    material.sheet_height,
                )
                return remaining

            sheets.append(
                CutSheet(
                    sheet_index=sheet_index,
                    material_id=material.id,
                    width=material.sheet_width,
                    height=material.sheet_height,
                    pieces=tuple(result.placed),
                    cuts=tuple(result.cuts),
                )
            )
            remaining = result.remaining

        return []


def calculate_guillotine_cut(
    materials: Sequence[Material],
    pieces: Sequence[CutPiece],
    settings: ProjectSettings,
) -> CutLayout:
    """Compute a guillotine cut layout.

    Pure function: the same inputs always produce the same layout.

    Args:
        materials: Available stock materials.
        pieces: Pieces to cut.
        settings: Project settings.

    Returns:
        The resulting CutLayout.
    """
    return BinPackingService(settings).optimize(materials, pieces)


def merge_layouts(*layouts: CutLayout) -> CutLayout:
    """Combine independently computed layouts into one.

    Sheets are concatenated in argument order and renumbered so sheet
    indices stay monotonic. Unplaced ids are deduplicated, and an id placed
    by any of the layouts is not reported as unplaced.

    Args:
        *layouts: Layouts to merge.

    Returns:
        A new CutLayout with recomputed totals.
    """
    sheets: list[CutSheet] = []
    for layout in layouts:
        for sheet in layout.sheets:
            sheets.append(_renumber_sheet(sheet, len(sheets)))

    placed_ids = set().union(*(layout.placed_piece_ids for layout in layouts))
    unplaced = [
        piece_id
        for layout in layouts
        for piece_id in layout.unplaced_pieces
        if piece_id not in placed_ids
    ]
    return CutLayout.from_sheets(sheets, unplaced)


def _renumber_sheet(sheet: CutSheet, sheet_index: int) -> CutSheet:
    """Return a copy of a sheet with a new index on it, its pieces and cuts."""
    if sheet.sheet_index == sheet_index:
        return sheet
    return replace(
        sheet,
        sheet_index=sheet_index,
        pieces=tuple(replace(p, sheet_index=sheet_index) for p in sheet.pieces),
        cuts=tuple(replace(c, sheet_index=sheet_index) for c in sheet.cuts),
    )
