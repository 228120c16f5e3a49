"""Reading project files.

A project file goes through three gates (read, JSON syntax, schema) and any
failure becomes a ConfigError whose ``error_type`` says which gate refused it.
Non-finite numbers never get past the JSON gate: ``NaN`` and ``Infinity``
are JavaScript literals Python's json module accepts, and no length may be
either.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from panelcut.application.config.schema import ProjectConfiguration

# Branch names pydantic adds to an error location inside a union field
# (lengths are ``float | str``, optional ones also ``None``).
_UNION_BRANCHES = frozenset({"float", "str", "none"})


class ConfigError(Exception):
    """A project file that cannot be used.

    Attributes:
        message: Human-readable summary, also the ``str()`` of the error.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: The project file, or None for in-memory data.
        details: Line/column for JSON errors; path/message/value/error_type
            per field for validation errors.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("settings", "saw_kerf"))
        'settings.saw_kerf'
        >>> _format_json_path(("pieces", 0, "dimensions", "width"))
        'pieces[0].dimensions.width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _field_errors(error: PydanticValidationError) -> list[dict[str, Any]]:
    """One entry per offending field.

    A length that fails every union branch would otherwise be reported once
    per branch; only the first branch (the numeric one) is kept.
    """
    details: list[dict[str, Any]] = []
    union_paths: set[str] = set()
    for err in error.errors():
        loc = tuple(err["loc"])
        in_union = bool(loc) and loc[-1] in _UNION_BRANCHES
        while loc and loc[-1] in _UNION_BRANCHES:
            loc = loc[:-1]
        path = _format_json_path(loc) or "(root)"
        if in_union:
            if path in union_paths:
                continue
            union_paths.add(path)
        details.append(
            {
                "path": path,
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _summary(details: list[dict[str, Any]]) -> str:
    lines = ["Project validation failed:"]
    for detail in details:
        value = detail.get("value")
        # Whole-object inputs make the line unreadable
        if value is None or isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']}")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None) -> ProjectConfiguration:
    try:
        return ProjectConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _field_errors(e)
        raise ConfigError(_summary(details), "validation", path, details) from e


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Project file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading project file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading project file: {path}: {e}", "file_read_error", path
        ) from e


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not a number a project can use")


def _parse_json(content: str, path: Path) -> Any:
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in project file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e
    except ValueError as e:
        raise ConfigError(
            f"Invalid JSON in project file: {path}: {e}",
            "json_parse",
            path,
            [{"message": str(e)}],
        ) from e


def load_config(path: Path) -> ProjectConfiguration:
    """Load and validate a project from a JSON file.

    Raises:
        ConfigError: With ``error_type`` file_not_found, permission_denied,
            file_read_error, json_parse or validation.
    """
    return _validate(_parse_json(_read_text(path), path), path)


def load_config_from_dict(data: dict[str, Any]) -> ProjectConfiguration:
    """Validate an in-memory project (``path`` on errors is None).

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data, None)
