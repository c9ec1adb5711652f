"""CLI command implementations for the staircut application.

This package contains subcommands for the staircut CLI, including:
- validate: Validate a project configuration file
"""

from staircut.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
