"""CLI command implementations for the panelcut application.

This package contains subcommands for the panelcut CLI:
- validate: Validate a project file
- presets: List built-in material presets
"""

from panelcut.cli.commands.presets import presets_command
from panelcut.cli.commands.validate import validate_command

__all__ = ["presets_command", "validate_command"]
