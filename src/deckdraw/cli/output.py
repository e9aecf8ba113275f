"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from deckdraw.domain import CloseResult, Point, Rectangle
from deckdraw.utils.logging import SessionStats
from deckdraw.utils.units import format_feet_inches

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]deckdraw[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_info(shape_path: str, point_count: int, is_closed: bool, area_sq_ft: float) -> None:
    """Print shape file information.

    Args:
        shape_path: Path to the shape file
        point_count: Number of points in the file
        is_closed: First point is repeated at the end
        area_sq_ft: Enclosed area in square feet
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(shape_path)
    line.append(" (closed)" if is_closed else " (open)")
    console.print(line)
    console.print(f"  {point_count} points {SYM_DOT} {area_sq_ft:,.1f} sq ft")


def format_point(point: Point, pixels_per_foot: float) -> str:
    """Format a point as feet-inches coordinates."""
    return (
        f"({format_feet_inches(point.x / pixels_per_foot)}, "
        f"{format_feet_inches(point.y / pixels_per_foot)})"
    )


def print_close_result(result: CloseResult, pixels_per_foot: float, verbose: bool = False) -> None:
    """Print the outcome of a close attempt.

    Args:
        result: Close result to report
        pixels_per_foot: Scale for feet-inch display
        verbose: List every vertex of the simplified ring
    """
    if not result.success:
        console.print(f"  [red]{SYM_ERR} Not closed:[/red] {result.error}")
        return

    closed = result.closed_points or ()
    simplified = result.simplified_points or ()
    corner = "corner added" if result.corner_added else "no corner added"
    console.print(f"  [green]{SYM_OK} Closed[/green] {SYM_DOT} {len(closed)} points {SYM_DOT} {corner}")
    console.print(f"  {len(simplified)} points after simplification")

    if verbose:
        for index, point in enumerate(simplified):
            console.print(f"    {index:>3}  {format_point(point, pixels_per_foot)}")


def print_validation(is_valid: bool, error: str | None) -> None:
    """Print a validation outcome."""
    if is_valid:
        console.print(f"  [green]{SYM_OK} Valid shape[/green]")
    else:
        console.print(f"  [red]{SYM_ERR} Invalid shape:[/red] {error}")


def print_rectangles_table(rectangles: list[Rectangle], pixels_per_foot: float) -> None:
    """Print decomposition rectangles as a table.

    Args:
        rectangles: Decomposition output
        pixels_per_foot: Scale for feet-inch display
    """
    if not rectangles:
        console.print("  Nothing to build: decomposition produced no rectangles")
        return

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Id")
    table.add_column("Origin")
    table.add_column("Width", justify="right")
    table.add_column("Depth", justify="right")
    table.add_column("Ledger", justify="center")
    table.add_column("Adjacent")

    for rect in rectangles:
        dims = rect.dimensions(pixels_per_foot)
        table.add_row(
            rect.id,
            format_point(Point(rect.x, rect.y), pixels_per_foot),
            format_feet_inches(dims.width_feet),
            format_feet_inches(dims.height_feet),
            SYM_OK if rect.is_ledger_rectangle else "",
            ", ".join(rect.adjacent_rectangles),
        )

    console.print(table)


def print_session_summary(stats: SessionStats) -> None:
    """Print statistics of a replayed drawing session.

    Args:
        stats: Session statistics
    """
    console.print(
        f"  {stats.clicks} clicks {SYM_DOT} {stats.points_added} points {SYM_DOT} "
        f"{stats.out_of_bounds} out of bounds"
    )
    failed_style = "red" if stats.closes_failed > 0 else "green"
    console.print(
        f"  {stats.closes_succeeded} closed {SYM_DOT} "
        f"[{failed_style}]{stats.closes_failed} failed closes[/{failed_style}]"
    )
    if stats.decompositions:
        console.print(f"  {stats.rectangles_created} rectangles from {stats.decompositions} decomposition(s)")


def print_saved(output_path: str) -> None:
    """Print where a result document was written."""
    line = Text(f"\n{SYM_OK} Saved ", style="bold green")
    line.append(output_path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
