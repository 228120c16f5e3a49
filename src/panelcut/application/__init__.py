"""Application layer - use cases, DTOs and project file handling."""

from .commands import OptimizeCutLayoutCommand
from .dtos import OptimizationOutput

__all__ = [
    "OptimizeCutLayoutCommand",
    "OptimizationOutput",
]
