"""Expansion of cut pieces into individually placeable instances.

Each (piece, quantity) pair becomes ``quantity`` PieceInstance objects,
grouped by material. Rotation eligibility is resolved here, once per
instance, so the packer never looks at grain direction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from panelcut.domain.value_objects import CutPiece, GrainDirection, Material

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PieceInstance:
    """One physical copy of a cut piece awaiting placement.

    Attributes:
        piece_id: Id of the originating CutPiece.
        instance_index: Index of this copy, in ``[0, quantity)``.
        width: Horizontal size in the un-rotated orientation.
        height: Vertical size in the un-rotated orientation.
        can_rotate: Whether the 90 degree orientation may be tried.
    """

    piece_id: str
    instance_index: int
    width: float
    height: float
    can_rotate: bool = False

    @property
    def area(self) -> float:
        """Area of this instance."""
        return self.width * self.height


@dataclass
class ExpandedPieces:
    """Result of expanding a piece list.

    Attributes:
        instances_by_material: Instances grouped by material id, in order of
            first appearance of each material among the pieces.
        unplaced_ids: Ids of pieces whose material is unknown.
    """

    instances_by_material: dict[str, list[PieceInstance]] = field(default_factory=dict)
    unplaced_ids: list[str] = field(default_factory=list)

    @property
    def instance_count(self) -> int:
        """Total number of instances across all materials."""
        return sum(len(group) for group in self.instances_by_material.values())


class PieceExpander:
    """Turns cut pieces into per-material lists of placeable instances.

    Attributes:
        allow_rotation: Global rotation switch from project settings.
    """

    def __init__(self, allow_rotation: bool = True) -> None:
        self.allow_rotation = allow_rotation

    def can_rotate(self, piece: CutPiece) -> bool:
        """Whether instances of a piece may be rotated.

        Grain direction locks orientation regardless of the global switch.
        """
        return self.allow_rotation and piece.grain_direction == GrainDirection.NONE

    def expand(
        self,
        pieces: Sequence[CutPiece],
        materials: Iterable[Material],
    ) -> ExpandedPieces:
        """Expand pieces into instances grouped by material.

        Args:
            pieces: Pieces to expand, in input order.
            materials: Known materials.

        Returns:
            ExpandedPieces with per-material instance lists and the ids of
            pieces referencing an unknown material.
        """
        known_ids = {material.id for material in materials}
        result = ExpandedPieces()

        for piece in pieces:
            if piece.material_id not in known_ids:
                logger.debug(
                    "Piece '%s' references unknown material '%s'",
                    piece.id,
                    piece.material_id,
                )
                result.unplaced_ids.append(piece.id)
                continue

            group = result.instances_by_material.setdefault(piece.material_id, [])
            can_rotate = self.can_rotate(piece)
            for index in range(piece.quantity):
                group.append(
                    PieceInstance(
                        piece_id=piece.id,
                        instance_index=index,
                        width=piece.dimensions.width,
                        height=piece.dimensions.length,
                        can_rotate=can_rotate,
                    )
                )

        return result
