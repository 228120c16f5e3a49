"""Project file schema, loading and validation.

Public API:
    - ProjectConfiguration: Root configuration model
    - SettingsConfig / MaterialConfig / PieceConfig / DimensionsConfig
    - load_config: Load a project from a JSON file
    - load_config_from_dict: Load a project from a dictionary
    - ConfigError: Exception for project file errors
    - config_to_settings / config_to_materials / config_to_pieces: Convert
      to domain objects in millimetres
    - merge_settings_with_cli: Apply command-line setting overrides
    - validate_config: Advisory checks returning a ValidationResult

Example:
    >>> from pathlib import Path
    >>> from panelcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("bookcase.json"))
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelcut.application.config.adapter import (
    config_to_material,
    config_to_materials,
    config_to_piece,
    config_to_pieces,
    config_to_settings,
)
from panelcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from panelcut.application.config.merger import merge_settings_with_cli
from panelcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    DimensionsConfig,
    MaterialConfig,
    PieceConfig,
    ProjectConfiguration,
    SettingsConfig,
    resolve_length,
)
from panelcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_piece_advisories,
    check_settings_advisories,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "DimensionsConfig",
    "MaterialConfig",
    "PieceConfig",
    "ProjectConfiguration",
    "SettingsConfig",
    "resolve_length",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Adapting
    "config_to_material",
    "config_to_materials",
    "config_to_piece",
    "config_to_pieces",
    "config_to_settings",
    "merge_settings_with_cli",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "check_piece_advisories",
    "check_settings_advisories",
    "validate_config",
]
