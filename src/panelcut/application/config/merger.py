"""Configuration merging utilities for CLI override support.

Precedence is CLI args > project file values > defaults. Only CLI arguments
that are not None override the file.
"""

from typing import Any

from panelcut.application.config.loader import load_config_from_dict
from panelcut.application.config.schema import ProjectConfiguration


def merge_settings_with_cli(
    config: ProjectConfiguration,
    *,
    saw_kerf: float | str | None = None,
    edge_margin: float | str | None = None,
    allow_rotation: bool | None = None,
) -> ProjectConfiguration:
    """Merge CLI setting overrides into a project configuration.

    Overrides are written in the project's unit system and validated exactly
    like values read from the file.

    Args:
        config: The base ProjectConfiguration
        saw_kerf: Override for settings.saw_kerf (if not None)
        edge_margin: Override for settings.edge_margin (if not None)
        allow_rotation: Override for settings.allow_rotation (if not None)

    Returns:
        A new ProjectConfiguration with merged values

    Raises:
        ConfigError: If an override is invalid.

    Example:
        >>> merged = merge_settings_with_cli(config, saw_kerf="3/32")
        >>> merged.settings.saw_kerf
        '3/32'
    """
    overrides: dict[str, Any] = {
        "saw_kerf": saw_kerf,
        "edge_margin": edge_margin,
        "allow_rotation": allow_rotation,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return config

    data = config.model_dump(mode="json")
    data["settings"].update(overrides)
    return load_config_from_dict(data)
