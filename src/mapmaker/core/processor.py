"""Map processing pipeline.

This module coordinates the full map workflow: boundary validation, label
points for every territory (in parallel worker processes), the adjacency
graph and bonus army values.

Key components:
- process_territory: Top-level picklable function for parallel execution
- MapProcessor: Main orchestrator class for map processing
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from mapmaker.config import MapmakerSettings
from mapmaker.core.calculator import ArmyCalculator
from mapmaker.core.polylabel import polylabel
from mapmaker.core.shamos_hoey import is_valid_polygon
from mapmaker.domain import MapData, Point, Polygon, Territory
from mapmaker.graph import UndirectedGraph
from mapmaker.io import MapReader, MapWriter
from mapmaker.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_territory(territory_dict: dict[str, Any], precision: float) -> dict[str, Any]:
    """Compute the label point of a single territory.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        territory_dict: Serialized territory (from Territory.to_dict())
        precision: Label distance tolerance in map units

    Returns:
        Dictionary containing either:
        - Success: {"id": int, "center": [x, y], "distance": float, "duration_ms": float}
        - Error: {"error": str, "territory_name": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        polygon = Polygon.from_dict(territory_dict)
        center, distance = polylabel(polygon, precision)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "id": territory_dict["id"],
            "center": center.to_list(),
            "distance": distance,
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "territory_name": territory_dict.get("name", "unknown"),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


def build_adjacency_graph(map_data: MapData) -> UndirectedGraph:
    """Build the undirected territory graph of a map.

    Every territory id is registered as a vertex, then every adjacency pair
    is inserted as an edge. Self-adjacencies are ignored by the graph.
    """
    graph = UndirectedGraph()
    for territory in map_data.territories:
        graph.insert_vertex(territory.id)
    for pair in map_data.adjacencies:
        graph.insert_edge(pair)
    return graph


class MapProcessor:
    """Orchestrates map processing.

    Manages the complete workflow:
    1. Validate territory boundaries (sweep-line crossing test)
    2. Compute label points for valid territories, in parallel
    3. Build the adjacency graph
    4. Assign army values to bonuses and super bonuses

    Example:
        settings = MapmakerSettings()
        processor = MapProcessor(settings)
        stats = processor.process_file(
            input_path=Path("europe.json"),
            output_path=Path("europe-processed.json"),
        )
    """

    def __init__(self, config: MapmakerSettings) -> None:
        """Initialize map processor with configuration.

        Args:
            config: Mapmaker settings
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        map_data: MapData,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Process a map in place.

        Args:
            map_data: The map; territories and bonuses are updated in place
            max_workers: Maximum worker processes (None = config default,
                1 = compute in this process)
            progress_callback: Optional callback(completed, total, territory_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        self.processing_logger = ProcessingLogger(self.logger)
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting map processing",
            territories=len(map_data.territories),
            bonuses=len(map_data.bonuses),
            super_bonuses=len(map_data.super_bonuses),
            max_workers=max_workers,
        )

        to_label: list[Territory] = []
        for territory in map_data.territories:
            territory.valid = is_valid_polygon(territory.geometry)
            if not territory.valid:
                self.processing_logger.log_territory_invalid(territory.name)
                if self.config.validation.skip_invalid:
                    self.processing_logger.log_territory_skipped(
                        territory.name, "self-intersecting boundary"
                    )
                    continue
            to_label.append(territory)

        self.logger.info(
            "Validated territories",
            total=len(map_data.territories),
            invalid=stats.invalid_count,
            to_process=len(to_label),
        )

        if to_label:
            if max_workers == 1:
                self._label_territories_inline(to_label, progress_callback)
            else:
                self._label_territories_parallel(to_label, max_workers, progress_callback)
        else:
            self.logger.info("No territories to label")

        graph = build_adjacency_graph(map_data)
        self.processing_logger.log_graph_built(graph.vertex_count(), graph.edge_count())

        calculator = ArmyCalculator(
            territories=map_data.territories,
            bonuses=map_data.bonuses,
            super_bonuses=map_data.super_bonuses,
            neighbors=graph,
        )
        calculator.calculate_armies(self.config.army.min_armies, self.config.army.max_armies)
        for bonus in map_data.bonuses:
            self.processing_logger.log_bonus_armies(bonus.name, bonus.armies)
        for super_bonus in map_data.super_bonuses:
            self.processing_logger.log_bonus_armies(super_bonus.name, super_bonus.armies, True)
        stats.bonus_count = len(map_data.bonuses) + len(map_data.super_bonuses)

        stats.end_time = time.time()

        self.logger.info(
            "Processing complete",
            processed=stats.processed_count,
            invalid=stats.invalid_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            bonuses=stats.bonus_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def process_file(
        self,
        input_path: Path,
        output_path: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Load a map description, process it and save the result.

        Args:
            input_path: Path to the JSON map description
            output_path: Output path (auto-generated if None)
            max_workers: Maximum worker processes
            progress_callback: Optional progress callback, see :meth:`process`

        Returns:
            ProcessingStats of the run

        Raises:
            MapLoadError: If the map cannot be read
            MapFormatError: If the map description is malformed
            MapSaveError: If the result cannot be written
        """
        if output_path is None:
            output_path = MapWriter.get_processed_path(input_path)

        map_data = MapReader(input_path).load()
        stats = self.process(map_data, max_workers=max_workers, progress_callback=progress_callback)
        MapWriter(output_path).save(map_data)

        self.logger.info("Map saved", output=str(output_path))
        return stats

    def _apply_result(self, territory: Territory, result: dict[str, Any]) -> bool:
        """Store a worker result on its territory; return True on success."""
        if "error" in result:
            self.processing_logger.log_territory_error(
                territory_name=result["territory_name"],
                error=Exception(result["error"]),
                traceback=result.get("traceback"),
            )
            return False

        territory.center = Point.from_sequence(result["center"])
        territory.distance = result["distance"]

        duration_ms = result.get("duration_ms", 0.0)
        self.processing_logger.log_territory_complete(
            territory_name=territory.name,
            distance=territory.distance,
            duration_ms=duration_ms,
        )
        self.processing_logger.stats.territory_timings_ms.append(duration_ms)
        return True

    def _label_territories_inline(
        self,
        territories: list[Territory],
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> None:
        """Compute label points one after another in this process."""
        precision = self.config.label.precision
        total = len(territories)

        for completed, territory in enumerate(territories, start=1):
            self.processing_logger.log_territory_start(territory.name)
            result = process_territory(territory.to_dict(), precision)
            success = self._apply_result(territory, result)
            if progress_callback is not None:
                progress_callback(completed, total, territory.name, success)

    def _label_territories_parallel(
        self,
        territories: list[Territory],
        max_workers: int | None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> None:
        """Compute label points in parallel using ProcessPoolExecutor.

        Args:
            territories: Territories to label; updated in place
            max_workers: Maximum worker processes
            progress_callback: Optional callback(completed, total, territory_name, success)
                for progress updates
        """
        stats = self.processing_logger.stats
        precision = self.config.label.precision

        self.logger.info(
            "Starting parallel processing",
            territory_count=len(territories),
            max_workers=max_workers,
        )

        total = len(territories)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for territory in territories:
                future = executor.submit(process_territory, territory.to_dict(), precision)
                pending_futures[future] = territory

            try:
                for future in as_completed(list(pending_futures)):
                    territory = pending_futures.pop(future)
                    success = False

                    try:
                        success = self._apply_result(territory, future.result())
                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_territory_error(
                            territory_name=territory.name,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, territory.name, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                for f in pending_futures:
                    f.cancel()

                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)

                executor.shutdown(wait=True, cancel_futures=True)
                raise
