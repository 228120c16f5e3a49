"""Tests for the DXF exporter."""

from __future__ import annotations

from pathlib import Path

import ezdxf
import pytest

from panelcut.application import OptimizationOutput
from panelcut.infrastructure.bin_packing import CutLayout, CutSheet
from panelcut.infrastructure.exporters import DxfExporter, Exporter, ExporterRegistry
from panelcut.infrastructure.exporters.dxf import LAYERS


def polylines_on(msp, layer: str) -> list:
    return [e for e in msp.query("LWPOLYLINE") if e.dxf.layer == layer]


def xy_points(polyline) -> list[tuple[float, float]]:
    return [(round(x, 6), round(y, 6)) for x, y in polyline.get_points("xy")]


# --- Construction ---


class TestDxfExporterInit:
    """Tests for DxfExporter configuration."""

    def test_registered(self) -> None:
        assert ExporterRegistry.get("dxf") is DxfExporter
        assert isinstance(DxfExporter(), Exporter)

    def test_defaults(self) -> None:
        exporter = DxfExporter()
        assert exporter.units is None
        assert exporter.sheet_spacing == 100.0
        assert exporter.include_cuts is True

    def test_invalid_units(self) -> None:
        with pytest.raises(ValueError, match="Invalid units"):
            DxfExporter(units="feet")

    def test_negative_spacing(self) -> None:
        with pytest.raises(ValueError, match="spacing"):
            DxfExporter(sheet_spacing=-1)


# --- Document contents ---


class TestDxfDocument:
    """Tests for the generated drawing."""

    def test_layers_created(self, simple_output: OptimizationOutput) -> None:
        doc = DxfExporter()._build_document(simple_output)

        for name in LAYERS:
            assert name in doc.layers
        assert doc.layers.get("CUTS").dxf.linetype == "DASHED"

    def test_units_follow_project(
        self,
        simple_output: OptimizationOutput,
        bookcase_output: OptimizationOutput,
    ) -> None:
        """Metric projects are drawn in mm, imperial ones in inches."""
        metric = DxfExporter()._build_document(simple_output)
        imperial = DxfExporter()._build_document(bookcase_output)

        assert metric.header["$INSUNITS"] == 4
        assert imperial.header["$INSUNITS"] == 1

    def test_entity_counts(self, simple_output: OptimizationOutput) -> None:
        """One sheet outline, one outline per piece, one label per piece plus a title."""
        msp = DxfExporter()._build_document(simple_output).modelspace()

        assert len(polylines_on(msp, "SHEET")) == 1
        assert len(polylines_on(msp, "PIECES")) == 2
        assert len(polylines_on(msp, "MARGIN")) == 0
        assert len(list(msp.query("MTEXT"))) == 3
        assert len(list(msp.query("LINE"))) == 2

    def test_piece_rows_flipped(self, simple_output: OptimizationOutput) -> None:
        """A piece at the top of the layout is drawn at the top of the sheet."""
        msp = DxfExporter()._build_document(simple_output).modelspace()

        alpha = polylines_on(msp, "PIECES")[0]
        assert xy_points(alpha) == [
            (0.0, 200.0),
            (600.0, 200.0),
            (600.0, 500.0),
            (0.0, 500.0),
            (0.0, 200.0),
        ]

    def test_cut_lines(self, simple_output: OptimizationOutput) -> None:
        msp = DxfExporter()._build_document(simple_output).modelspace()

        vertical = list(msp.query("LINE"))[0]
        assert vertical.dxf.layer == "CUTS"
        assert (vertical.dxf.start.x, vertical.dxf.start.y) == pytest.approx((600, 500))
        assert (vertical.dxf.end.x, vertical.dxf.end.y) == pytest.approx((600, 200))

    def test_cuts_can_be_omitted(self, simple_output: OptimizationOutput) -> None:
        msp = DxfExporter(include_cuts=False)._build_document(simple_output).modelspace()
        assert list(msp.query("LINE")) == []

    def test_labels(self, simple_output: OptimizationOutput) -> None:
        msp = DxfExporter()._build_document(simple_output).modelspace()
        texts = [m.plain_text() for m in msp.query("MTEXT")]

        assert "Alpha\n600.0 x 300.0 mm" in texts
        assert "Bravo\n400.0 x 300.0 mm (R)" in texts
        assert "Sheet 1 - MDF Sheet" in texts

    def test_inch_output_scales_coordinates(
        self, simple_output: OptimizationOutput
    ) -> None:
        doc = DxfExporter(units="inches")._build_document(simple_output)
        sheet = polylines_on(doc.modelspace(), "SHEET")[0]

        assert doc.header["$INSUNITS"] == 1
        xs = [x for x, _ in sheet.get_points("xy")]
        assert max(xs) == pytest.approx(1000 / 25.4)

    def test_margin_outline(self, bookcase_output: OptimizationOutput) -> None:
        """The bookcase's 1/4" margin is drawn inside the 48x96 sheet."""
        msp = DxfExporter()._build_document(bookcase_output).modelspace()

        (margin,) = polylines_on(msp, "MARGIN")
        assert xy_points(margin)[0] == (0.25, 0.25)
        assert xy_points(margin)[2] == (47.75, 95.75)

    def test_sheets_side_by_side(self, simple_output: OptimizationOutput) -> None:
        simple_output.layout = CutLayout.from_sheets(
            [CutSheet(0, "mdf", 1000, 500, ()), CutSheet(1, "mdf", 1000, 500, ())]
        )
        msp = DxfExporter(sheet_spacing=50)._build_document(simple_output).modelspace()

        first, second = polylines_on(msp, "SHEET")
        assert xy_points(first)[0] == (0.0, 0.0)
        assert xy_points(second)[0] == (1050.0, 0.0)


# --- Rendered text ---


class TestDxfRender:
    """Tests for the rendered DXF text."""

    def test_written_file_readable(
        self, tmp_path: Path, simple_output: OptimizationOutput
    ) -> None:
        path = tmp_path / "layout.dxf"
        path.write_text(DxfExporter().render(simple_output), encoding="utf-8")

        doc = ezdxf.readfile(path)
        msp = doc.modelspace()
        assert len(polylines_on(msp, "PIECES")) == 2
        assert doc.header["$INSUNITS"] == 4

    def test_empty_layout(
        self, tmp_path: Path, simple_output: OptimizationOutput
    ) -> None:
        """A layout without sheets still produces a valid, empty drawing."""
        simple_output.layout = CutLayout.from_sheets([])
        path = tmp_path / "empty.dxf"
        path.write_text(DxfExporter().render(simple_output), encoding="utf-8")

        msp = ezdxf.readfile(path).modelspace()
        assert len(list(msp.query("LWPOLYLINE"))) == 0

    def test_text_structure(self, simple_output: OptimizationOutput) -> None:
        content = DxfExporter().render(simple_output)

        assert "SECTION" in content
        assert "LWPOLYLINE" in content
        assert content.rstrip().endswith("EOF")
