"""Tests for project file loading and error reporting."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from panelcut.application.config import (
    ConfigError,
    ProjectConfiguration,
    load_config,
    load_config_from_dict,
)
from panelcut.application.config.loader import _format_json_path


class TestFormatJsonPath:
    """Tests for _format_json_path."""

    def test_dotted_fields(self) -> None:
        assert _format_json_path(("settings", "saw_kerf")) == "settings.saw_kerf"

    def test_list_indices(self) -> None:
        assert (
            _format_json_path(("pieces", 0, "dimensions", "width"))
            == "pieces[0].dimensions.width"
        )

    def test_leading_index(self) -> None:
        assert _format_json_path((2, "id")) == "[2].id"

    def test_empty(self) -> None:
        assert _format_json_path(()) == ""


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_valid_file(self, bookcase_file: Path) -> None:
        config = load_config(bookcase_file)

        assert isinstance(config, ProjectConfiguration)
        assert config.name == "Bookcase"
        assert [p.id for p in config.pieces] == ["side", "shelf"]

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == path
        assert "not found" in str(exc_info.value)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{\n  "schema_version": "1.0",\n  "pieces": [,]\n}')

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 3
        assert "line 3" in error.message

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literal_is_json_error(self, tmp_path: Path, literal: str) -> None:
        """JavaScript number literals are refused before schema validation."""
        path = tmp_path / "nan.json"
        path.write_text(
            '{"schema_version": "1.0", "materials": [{"id": "ply", '
            f'"sheet": {{"length": {literal}, "width": 48}}}}], "pieces": []}}'
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.error_type == "json_parse"
        assert literal.lstrip("-") in error.message
        assert "line" not in error.details[0]

    def test_validation_error_details(
        self,
        bookcase_data: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """Field errors carry a JSON path and the offending value."""
        bookcase_data["pieces"][1]["dimensions"]["width"] = -3
        path = write_project(bookcase_data)

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "pieces[1].dimensions.width"
        assert error.details[0]["value"] == -3
        assert "pieces[1].dimensions.width" in error.message
        assert "(got: -3)" in error.message

    def test_project_level_error_reported_at_root(
        self,
        bookcase_data: dict[str, Any],
        write_project: Callable[..., Path],
    ) -> None:
        """Errors raised for the whole project are reported at (root)."""
        bookcase_data["settings"]["saw_kerf"] = "a bit"
        path = write_project(bookcase_data)

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        detail = exc_info.value.details[0]
        assert detail["path"] == "(root)"
        assert "settings.saw_kerf" in detail["message"]

    def test_directory_is_read_error(self, tmp_path: Path) -> None:
        """An unreadable path surfaces as a file read error."""
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.error_type in {"file_read_error", "permission_denied"}


class TestLoadConfigFromDict:
    """Tests for load_config_from_dict."""

    def test_valid(self, bookcase_data: dict[str, Any]) -> None:
        config = load_config_from_dict(bookcase_data)
        assert config.settings.saw_kerf == "1/8"

    def test_non_finite_length_reported_once(self, bookcase_data: dict[str, Any]) -> None:
        """A NaN length yields one error at the field, not one per accepted type."""
        bookcase_data["materials"][0]["sheet"]["length"] = float("nan")

        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(bookcase_data)

        details = exc_info.value.details
        assert exc_info.value.error_type == "validation"
        assert [d["path"] for d in details] == ["materials[0].sheet.length"]
        assert details[0]["error_type"] == "finite_number"

    def test_invalid_has_no_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"schema_version": "9.0"})

        assert exc_info.value.error_type == "validation"
        assert exc_info.value.path is None
        assert exc_info.value.details[0]["path"] == "schema_version"
