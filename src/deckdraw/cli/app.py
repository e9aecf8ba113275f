"""CLI application entry point for deckdraw.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from deckdraw import __version__
from deckdraw.cli.output import (
    console,
    print_close_result,
    print_error,
    print_header,
    print_rectangles_table,
    print_saved,
    print_session_summary,
    print_shape_info,
    print_step,
    print_validation,
)
from deckdraw.config import DeckDrawSettings, LoggingConfig
from deckdraw.core import (
    decompose_shape,
    get_validation_requirements,
    polygon_area,
    replay_clicks,
    total_area,
    try_close_shape,
    validate_selected_walls,
    validate_shape,
)
from deckdraw.core.geometry import is_closed
from deckdraw.domain import CloseShapeFailed, OutOfBounds, Point, SelectWall
from deckdraw.exceptions import DeckDrawError, DecompositionError, ShapeLoadError, ShapeSaveError
from deckdraw.io import ClickScriptReader, ResultWriter, ShapeReader
from deckdraw.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="deckdraw",
    help="Close, validate and decompose deck outlines drawn on a grid.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]deckdraw[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Close, validate and decompose deck outlines drawn on a grid."""


LogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--log-file",
        help="Write detailed logs to file",
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Logging level (DEBUG|INFO|WARNING|ERROR)",
    ),
]
QuietOption = Annotated[
    bool,
    typer.Option(
        "--quiet",
        "-q",
        help="Minimal console output",
    ),
]


def _build_settings(log_file: Path | None, log_level: str, quiet: bool) -> DeckDrawSettings:
    """Validate logging options, configure logging and build settings."""
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = DeckDrawSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper() if not quiet else "ERROR",
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    return settings


def _load_shape(shape: Path, settings: DeckDrawSettings, quiet: bool) -> ShapeReader:
    reader = ShapeReader(shape)
    reader.load()

    if not quiet:
        ppf = settings.drawing.pixels_per_foot
        points = reader.points
        print_shape_info(
            shape_path=str(shape),
            point_count=reader.point_count,
            is_closed=is_closed(points, settings.drawing.epsilon),
            area_sq_ft=polygon_area(points) / (ppf * ppf) if len(points) >= 3 else 0.0,
        )
    return reader


def _handle_errors(error: Exception) -> None:
    """Map an exception raised by a command to an error message and exit code."""
    if isinstance(error, ShapeLoadError):
        print_error(f"Could not load {error.path}: {error.reason}")
    elif isinstance(error, ShapeSaveError):
        print_error(f"Could not save {error.path}: {error.reason}")
    elif isinstance(error, DeckDrawError):
        print_error(str(error))
    else:
        print_error(f"Unexpected error: {error}")
    raise typer.Exit(code=1)


@app.command()
def close(
    shape: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON file holding an open outline",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the close result to this JSON file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List every vertex of the closed outline",
        ),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Close an open outline, inserting a corner when needed.

    Example:
        deckdraw close deck.json -o deck-closed.json
    """
    settings = _build_settings(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading shape")

    try:
        reader = _load_shape(shape, settings, quiet)
        result = try_close_shape(reader.points, settings)

        if not quiet:
            print_step("Closing")
            print_close_result(result, settings.drawing.pixels_per_foot, verbose=verbose)

        if output is not None:
            ResultWriter(output).write_close_result(result)
            if not quiet:
                print_saved(str(output))
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)

    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def validate(
    shape: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON file holding a closed outline",
            show_default=False,
        ),
    ],
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Check that a closed outline can be built.

    Exits with status 1 when the outline is invalid.
    """
    settings = _build_settings(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading shape")

    try:
        reader = _load_shape(shape, settings, quiet)
        result = validate_shape(reader.points, settings)
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)

    if not quiet:
        print_step("Validating")
        print_validation(result.is_valid, result.error)
        if not result.is_valid:
            console.print(f"\n{get_validation_requirements()}")

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def decompose(
    shape: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON file holding an outline",
            show_default=False,
        ),
    ],
    ledger: Annotated[
        list[int] | None,
        typer.Option(
            "--ledger",
            "-l",
            help="Ledger wall index; repeat for several parallel walls (default: from file)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-sections.json)",
        ),
    ] = None,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Decompose an outline into rectangular deck sections.

    Open outlines are closed first. Wall indices refer to the outline that
    is decomposed: wall i runs from vertex i to vertex i + 1.

    Example:
        deckdraw decompose deck.json --ledger 0
    """
    settings = _build_settings(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading shape")

    try:
        reader = _load_shape(shape, settings, quiet)
        points = reader.points

        if not is_closed(points, settings.drawing.epsilon) or len(points) < 4:
            if not quiet:
                print_step("Closing")
            result = try_close_shape(points, settings)
            if not quiet:
                print_close_result(result, settings.drawing.pixels_per_foot)
            if not result.success:
                raise DecompositionError(result.error or "outline could not be closed")
            points = list(result.simplified_points or ())
        else:
            validation = validate_shape(points, settings)
            if not validation.is_valid:
                raise DecompositionError(validation.error or "outline is invalid")

        ledgers = list(ledger) if ledger else reader.ledger
        selection = validate_selected_walls(ledgers, points, settings.drawing.epsilon)
        if not selection.is_valid:
            raise DecompositionError(selection.error or "invalid ledger selection")

        if not quiet:
            print_step("Decomposing")

        rectangles = decompose_shape(points, ledgers, settings.drawing)

        if not quiet:
            ppf = settings.drawing.pixels_per_foot
            print_rectangles_table(rectangles, ppf)
            console.print(f"  {total_area(rectangles) / (ppf * ppf):,.1f} sq ft in {len(rectangles)} sections")

        output_path = output if output is not None else ResultWriter.get_sections_path(shape)
        ResultWriter(output_path).write_decomposition(
            points, ledgers, rectangles, settings.drawing.pixels_per_foot
        )
        if not quiet:
            print_saved(str(output_path))
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)


@app.command()
def trace(
    clicks: Annotated[
        Path,
        typer.Argument(
            help="Path to a JSON click script",
            show_default=False,
        ),
    ],
    ledger: Annotated[
        list[int] | None,
        typer.Option(
            "--ledger",
            "-l",
            help="Decompose with these ledger walls once the outline is closed",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the final session state to this JSON file",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Print the action of every click",
        ),
    ] = False,
    log_file: LogFileOption = None,
    log_level: LogLevelOption = "WARNING",
    quiet: QuietOption = False,
) -> None:
    """Replay recorded clicks through a drawing session.

    Clicks are in model pixels. After the outline closes, further clicks
    select ledger walls; the selection (or --ledger) drives decomposition.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    settings = _build_settings(log_file, log_level, quiet)

    if not quiet:
        print_header(__version__)
        print_step("Loading clicks")

    try:
        reader = ClickScriptReader(clicks)
        reader.load()
        raw_clicks: list[Point] = reader.clicks

        if not quiet:
            print_step(f"Replaying {len(raw_clicks)} clicks")

        session, actions = replay_clicks(raw_clicks, settings, reader.viewport_scale)

        if verbose:
            for index, (click, action) in enumerate(zip(raw_clicks, actions)):
                detail = ""
                if isinstance(action, OutOfBounds):
                    detail = action.message
                elif isinstance(action, CloseShapeFailed):
                    detail = action.error
                elif isinstance(action, SelectWall):
                    detail = f"wall {action.wall_index}"
                console.print(f"    {index:>3}  ({click.x:g}, {click.y:g})  {action.type.value}  {detail}")

        ledgers = list(ledger) if ledger else reader.ledger or list(session.selected_wall_indices)
        if session.is_shape_closed and ledgers:
            selection = validate_selected_walls(ledgers, session.points, settings.drawing.epsilon)
            if not selection.is_valid:
                raise DecompositionError(selection.error or "invalid ledger selection")
            session.decompose(ledgers)

        stats = session.finish()
        if not quiet:
            console.print(f"  Final state: {session.state.value}")
            if session.last_error:
                console.print(f"  Last error: {session.last_error}")
            print_session_summary(stats)
            if session.rectangles:
                print_step("Sections")
                print_rectangles_table(session.rectangles, settings.drawing.pixels_per_foot)

        if output is not None:
            ResultWriter(output).write(session.snapshot())
            if not quiet:
                print_saved(str(output))
    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)


def cli() -> None:
    """CLI entry point."""
    app()


def main() -> None:
    """Main entry point for python -m deckdraw."""
    cli()


if __name__ == "__main__":
    main()
