"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from mapmaker.domain import MapData

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Progress bar for label computation, one tick per territory."""
    return Progress(
        TextColumn("  [progress.description]{task.description}"),
        BarColumn(bar_width=30, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    console.print(f"\n[bold]Mapmaker[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_map_info(map_path: str, map_data: MapData) -> None:
    """Print map description summary.

    Args:
        map_path: Path to the map description
        map_data: Loaded map
    """
    line = Text("  ")
    line.append(map_path)
    console.print(line)
    console.print(
        f"  {len(map_data.territories):,} territories {SYM_DOT} "
        f"{len(map_data.bonuses):,} bonuses {SYM_DOT} "
        f"{len(map_data.super_bonuses):,} super bonuses {SYM_DOT} "
        f"{len(map_data.adjacencies):,} adjacencies"
    )


def print_invalid_territories(names: list[str], verbose: bool) -> None:
    """Print the territories whose boundaries cross themselves.

    Args:
        names: Names of invalid territories
        verbose: Whether to list every name
    """
    style = "red" if names else "green"
    console.print(f"  [{style}]{len(names)}[/{style}] self-intersecting territories")
    if verbose and names:
        names_str = ", ".join(names[:20])
        if len(names) > 20:
            names_str += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(names) - 20} more)"
        console.print(f"  {names_str}")


def print_armies(map_data: MapData) -> None:
    """Print army values of all bonuses and super bonuses as a table."""
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Bonus")
    table.add_column("Territories", justify="right")
    table.add_column("Armies", justify="right")

    for bonus in map_data.bonuses:
        table.add_row(bonus.name, str(len(bonus.children)), str(bonus.armies))
    for super_bonus in map_data.super_bonuses:
        table.add_row(
            f"[italic]{super_bonus.name}[/italic]",
            f"{len(super_bonus.children)} bonuses",
            str(super_bonus.armies),
        )

    console.print(table)


def _format_time(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    minutes, rest = divmod(seconds, 60)
    if not minutes:
        return f"{rest:.1f}s"
    return f"{int(minutes)}m {rest:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print worker count; ``is_auto`` marks a count taken from the CPU count."""
    mode = "1 worker (in-process)" if workers == 1 else f"{workers} workers"
    if is_auto:
        mode += " (auto)"
    console.print(f"  {mode} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_path: str,
    total_time_s: float,
    processed: int,
    invalid: int,
    bonuses: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        total_time_s: Total processing time in seconds
        processed: Number of territories labelled
        invalid: Number of self-intersecting territories
        bonuses: Number of bonuses and super bonuses scored
        errors: Number of errors encountered
        avg_time_ms: Average label time per territory in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    invalid_style = "yellow" if invalid > 0 else "green"
    console.print(
        f"  {processed} territories {SYM_DOT} {bonuses} bonuses {SYM_DOT} "
        f"[{invalid_style}]{invalid} invalid[/{invalid_style}] {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg per territory")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress territories")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of territories labelled before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} territories completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output file created")
