"""Typer CLI for staircase cutting optimization."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from staircut.application import optimize as run_optimization
from staircut.application.config import (
    ConfigError,
    config_to_constraints,
    config_to_inventory,
    config_to_measurements,
    load_config,
    merge_constraints_with_cli,
)
from staircut.cli.commands import display_load_error, validate_command
from staircut.domain import ConfigurationError
from staircut.infrastructure import JsonExporter, OptimizationReportFormatter

OUTPUT_FORMATS = ("text", "json")

# Exit code when the plan was produced but some pieces could not be placed
EXIT_UNFIT_PIECES = 2


app = typer.Typer(
    name="staircut",
    help="Plan the cheapest plank purchase for staircase treads and risers.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.command()
def optimize(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON project file"),
    ],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = "text",
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", help="Saw blade kerf in mm (overrides config)"),
    ] = None,
    margin: Annotated[
        float | None,
        typer.Option("--margin", help="Safety margin in mm (overrides config)"),
    ] = None,
    no_tread_rotation: Annotated[
        bool,
        typer.Option("--no-tread-rotation", help="Never turn treads end for end"),
    ] = False,
    no_riser_rotation: Annotated[
        bool,
        typer.Option("--no-riser-rotation", help="Never turn risers a quarter"),
    ] = False,
    show_placements: Annotated[
        bool,
        typer.Option("--placements", help="List piece positions in the text report"),
    ] = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the report to a file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing details"),
    ] = False,
) -> None:
    """Compute the cheapest set of planks for a staircase.

    Exit codes:
        0 - Every piece was placed
        1 - The project could not be loaded or optimized
        2 - A plan was produced but some pieces could not be placed
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if output_format not in OUTPUT_FORMATS:
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {', '.join(OUTPUT_FORMATS)}", err=True)
        raise typer.Exit(code=1)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        constraints = merge_constraints_with_cli(
            config_to_constraints(config),
            kerf=kerf,
            margin=margin,
            no_tread_rotation=no_tread_rotation,
            no_riser_rotation=no_riser_rotation,
        )
        result = run_optimization(
            config_to_measurements(config),
            config_to_inventory(config),
            constraints,
        )
    except ConfigurationError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output_format == "json":
        report = JsonExporter().export(result)
    else:
        formatter = OptimizationReportFormatter(include_placements=show_placements)
        report = formatter.format(result, title=config.name)

    if output_file is not None:
        output_file.write_text(report, encoding="utf-8")
        typer.echo(f"Report written to {output_file}")
    else:
        typer.echo(report)

    if not result.all_pieces_fit:
        typer.echo(
            f"Warning: {len(result.unfit_pieces)} piece(s) could not be placed",
            err=True,
        )
        raise typer.Exit(code=EXIT_UNFIT_PIECES)


if __name__ == "__main__":
    app()
