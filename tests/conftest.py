"""Pytest configuration and shared fixtures for panelcut tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from panelcut.application import OptimizationOutput, OptimizeCutLayoutCommand
from panelcut.application.config import load_config_from_dict
from panelcut.domain.value_objects import (
    CutPiece,
    GrainDirection,
    Material,
    ProjectSettings,
    SheetSize,
    UnitSystem,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI and exporters"
    )


# =============================================================================
# Domain fixtures (millimetres)
# =============================================================================


@pytest.fixture
def plywood() -> Material:
    """A 4x8 plywood sheet: 1219.2 wide, 2438.4 long."""
    return Material(
        id="ply",
        name="4x8 Plywood",
        sheet=SheetSize(length=2438.4, width=1219.2),
    )


@pytest.fixture
def make_piece() -> Callable[..., CutPiece]:
    """Factory for cut pieces; width is horizontal, length vertical."""

    def _make(
        piece_id: str,
        width: float,
        length: float,
        quantity: int = 1,
        material_id: str = "ply",
        grain: GrainDirection = GrainDirection.NONE,
        name: str = "",
    ) -> CutPiece:
        return CutPiece(
            id=piece_id,
            name=name,
            dimensions=SheetSize(length=length, width=width),
            material_id=material_id,
            quantity=quantity,
            grain_direction=grain,
        )

    return _make


# =============================================================================
# Project file fixtures
# =============================================================================


@pytest.fixture
def bookcase_data() -> dict[str, Any]:
    """A small imperial bookcase project."""
    return {
        "schema_version": "1.0",
        "name": "Bookcase",
        "settings": {
            "unit_system": "imperial",
            "saw_kerf": "1/8",
            "allow_rotation": True,
            "edge_margin": 0.25,
        },
        "materials": [
            {"id": "ply", "name": "3/4 Plywood", "sheet": {"length": 96, "width": 48}},
        ],
        "pieces": [
            {
                "id": "side",
                "name": "Side",
                "dimensions": {"length": 72, "width": "11 1/4"},
                "material_id": "ply",
                "quantity": 2,
                "grain_direction": "lengthwise",
            },
            {
                "id": "shelf",
                "name": "Shelf",
                "dimensions": {"length": "11 1/4", "width": 34.5},
                "material_id": "ply",
                "quantity": 4,
            },
        ],
    }


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a project dict to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "project.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def bookcase_file(
    bookcase_data: dict[str, Any],
    write_project: Callable[[dict[str, Any]], Path],
) -> Path:
    """The bookcase project written to disk."""
    return write_project(bookcase_data)


# =============================================================================
# Optimization output fixtures
# =============================================================================


@pytest.fixture
def simple_output() -> OptimizationOutput:
    """A metric run with one sheet, one rotated piece and one unplaced piece.

    On a 1000 wide x 500 long sheet with no kerf or margin, "Alpha" lands at
    the origin and "Bravo" only fits rotated into the 400x300 strip beside
    it. "Huge Panel" never fits.
    """
    mdf = Material(id="mdf", name="MDF Sheet", sheet=SheetSize(length=500, width=1000))
    pieces = [
        CutPiece(
            id="a",
            name="Alpha",
            dimensions=SheetSize(length=300, width=600),
            material_id="mdf",
        ),
        CutPiece(
            id="b",
            name="Bravo",
            dimensions=SheetSize(length=400, width=300),
            material_id="mdf",
        ),
        CutPiece(
            id="huge",
            name="Huge Panel",
            dimensions=SheetSize(length=2000, width=2000),
            material_id="mdf",
        ),
    ]
    settings = ProjectSettings(
        unit_system=UnitSystem.METRIC, saw_kerf=0.0, edge_margin=0.0
    )
    return OptimizeCutLayoutCommand().execute(
        [mdf],
        pieces,
        settings,
        project_name="Simple",
        warnings=["pieces[2].dimensions: too big"],
    )


@pytest.fixture
def bookcase_output(bookcase_data: dict[str, Any]) -> OptimizationOutput:
    """The imperial bookcase project, optimized."""
    return OptimizeCutLayoutCommand().execute_config(load_config_from_dict(bookcase_data))
