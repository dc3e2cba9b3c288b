"""CLI application entry point for mapmaker.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from mapmaker import __version__
from mapmaker.cli.output import (
    SYM_OK,
    console,
    create_progress,
    print_armies,
    print_cancellation_notice,
    print_cancellation_summary,
    print_error,
    print_header,
    print_invalid_territories,
    print_map_info,
    print_processing_info,
    print_step,
    print_success,
)
from mapmaker.config import (
    ArmyConfig,
    LabelConfig,
    LoggingConfig,
    MapmakerSettings,
    ProcessingConfig,
)
from mapmaker.core import MapProcessor, is_valid_polygon
from mapmaker.domain import MapData
from mapmaker.exceptions import MapLoadError, MapmakerError, MapSaveError
from mapmaker.io import MapReader, MapWriter

# Create the Typer app
app = typer.Typer(
    name="mapmaker",
    help="Compute label points, boundary validity and bonus armies for territory maps.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Mapmaker[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def process(
    input_map: Annotated[
        Path,
        typer.Argument(
            help="Path to input JSON map description",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-processed.json)",
        ),
    ] = None,
    precision: Annotated[
        float,
        typer.Option(
            "--precision",
            "-e",
            help="Label point distance tolerance in map units",
            min=0.0,
        ),
    ] = 1.0,
    min_armies: Annotated[
        int,
        typer.Option(
            "--min-armies",
            help="Lowest army value of any bonus",
            min=0,
        ),
    ] = 1,
    max_armies: Annotated[
        int,
        typer.Option(
            "--max-armies",
            help="Army value of a bonus with the highest score",
            min=1,
        ),
    ] = 10,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto, 1 = no subprocesses)",
            min=1,
        ),
    ] = None,
    list_invalid: Annotated[
        bool,
        typer.Option(
            "--list-invalid",
            help="List all territories with self-intersecting boundaries and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Validate and show what would be done without writing output",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
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
    """Process a map description: validate boundaries, place labels, score bonuses.

    Every territory gets the interior point farthest from its boundary as its
    label point, self-intersecting boundaries are flagged, and every bonus
    gets an army value based on its size and the number of outside
    territories bordering it.

    Example:
        mapmaker europe.json

    This will create europe-processed.json with all computed values.
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not input_map.exists():
        print_error(
            f"Input file not found: {input_map}",
            details=f"The file '{input_map}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_map.is_file():
        print_error(
            f"Input path is not a file: {input_map}",
            details="Please provide a path to a JSON map description.",
        )
        raise typer.Exit(code=1)

    try:
        settings = MapmakerSettings(
            label=LabelConfig(precision=precision),
            army=ArmyConfig(min_armies=min_armies, max_armies=max_armies),
            processing=ProcessingConfig(max_workers=workers),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "ERROR",
            ),
        )
    except ValidationError as e:
        print_error("Invalid options", details=str(e.errors()[0]["msg"]))
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        if not quiet:
            print_step("Loading map")

        map_data = MapReader(input_map).load()

        if not quiet:
            print_map_info(str(input_map), map_data)

        if list_invalid:
            _handle_list_invalid(map_data, quiet)
            raise typer.Exit(code=0)

        if dry_run:
            _handle_dry_run(map_data, settings, quiet, verbose)
            raise typer.Exit(code=0)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Processing")
            print_processing_info(actual_workers, is_auto=(workers is None))

        output_path = output if output is not None else MapWriter.get_processed_path(input_map)
        processor = MapProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Processing {len(map_data.territories)} territories",
                        total=len(map_data.territories),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    stats = processor.process(
                        map_data,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                stats = processor.process(map_data, max_workers=workers)
        except KeyboardInterrupt:
            if not quiet:
                partial = processor.processing_logger.stats
                print_cancellation_notice()
                print_cancellation_summary(
                    processed=partial.processed_count,
                    cancelled=partial.cancelled_count,
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        MapWriter(output_path).save(map_data)

        if not quiet:
            if verbose:
                print_step("Armies")
                print_armies(map_data)
            print_success(
                output_path=str(output_path),
                total_time_s=stats.duration_seconds,
                processed=stats.processed_count,
                invalid=stats.invalid_count,
                bonuses=stats.bonus_count,
                errors=stats.error_count,
                avg_time_ms=stats.avg_territory_time_ms,
            )

    except MapLoadError as e:
        print_error(f"Could not load map: {e.reason}")
        raise typer.Exit(code=1)
    except MapSaveError as e:
        print_error(f"Could not save map: {e.reason}")
        raise typer.Exit(code=1)
    except MapmakerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _invalid_territory_names(map_data: MapData) -> list[str]:
    """Names of territories whose boundaries cross themselves."""
    return [t.name for t in map_data.territories if not is_valid_polygon(t.geometry)]


def _handle_list_invalid(map_data: MapData, quiet: bool) -> None:
    """Handle --list-invalid mode.

    Args:
        map_data: Loaded map
        quiet: Suppress headings
    """
    if not quiet:
        print_step("Validating boundaries")

    names = _invalid_territory_names(map_data)

    if not quiet:
        console.print(f"\n[bold]{len(names)} self-intersecting territories[/bold]\n")

    for name in names:
        console.print(f"  {name}")


def _handle_dry_run(
    map_data: MapData, settings: MapmakerSettings, quiet: bool, verbose: bool
) -> None:
    """Handle --dry-run mode.

    Args:
        map_data: Loaded map
        settings: Mapmaker settings
        quiet: Suppress output
        verbose: Show verbose output
    """
    if quiet:
        return

    print_step("Validating (dry run)")
    names = _invalid_territory_names(map_data)
    print_invalid_territories(names, verbose)

    to_label = len(map_data.territories)
    if settings.validation.skip_invalid:
        to_label -= len(names)

    console.print("\n[bold]Analysis[/bold]\n")
    console.print(f"  Territories to label  {to_label}")
    console.print(f"  Bonuses to score      {len(map_data.bonuses) + len(map_data.super_bonuses)}")
    console.print(f"  Label precision       {settings.label.precision}")
    console.print(
        f"  Army range            {settings.army.min_armies}-{settings.army.max_armies}"
    )

    console.print(f"\n[bold green]{SYM_OK} Dry run complete[/bold green] - no changes made")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
