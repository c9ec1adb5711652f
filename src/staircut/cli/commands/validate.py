"""Validate command for checking project configuration files.

Loads a JSON project file, validates it against the schema and checks that
each catalog can serve the pieces the measurements call for.
"""

from pathlib import Path
from typing import Annotated

import typer

from staircut.application.config import (
    ConfigError,
    ProjectConfiguration,
    config_to_inventory,
    load_config,
)
from staircut.domain import ConfigurationError, PieceType, require_candidates


def display_load_error(error: ConfigError) -> None:
    """Display a configuration loading error on stderr.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path") or "(root)"
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _catalog_errors(config: ProjectConfiguration) -> list[str]:
    """Check each catalog against the pieces the measurements produce."""
    if not config.measurements:
        return []

    inventory = config_to_inventory(config)
    errors: list[str] = []
    for piece_type in (PieceType.TREAD, PieceType.RISER):
        try:
            require_candidates(piece_type, inventory.catalog_for(piece_type))
        except ConfigurationError as e:
            errors.append(f"inventory.{piece_type.value}s: {e.message}")
    return errors


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file to validate"),
    ],
) -> None:
    """Validate a staircase project file.

    Checks the file for JSON syntax errors, schema errors (missing fields,
    non-positive dimensions, duplicate steps or plank ids) and catalogs that
    cannot serve any tread or riser.

    Exit codes:
        0 - Configuration is valid
        1 - Configuration has errors

    Example:
        staircut validate my-staircase.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    errors = _catalog_errors(config)
    if errors:
        typer.echo("Errors:", err=True)
        for error in errors:
            typer.echo(f"  {error}", err=True)
        typer.echo()
        typer.echo(f"Validation failed: {len(errors)} error(s)", err=True)
        raise typer.Exit(code=1)

    if config.name:
        typer.echo(f"Project: {config.name}")
    typer.echo(f"Steps: {len(config.measurements)}")
    typer.echo(f"Tread planks: {len(config.inventory.treads)}")
    typer.echo(f"Riser planks: {len(config.inventory.risers)}")
    typer.echo()
    typer.echo("Validation passed. Configuration is valid.")
