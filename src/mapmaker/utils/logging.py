"""Logging utilities for Mapmaker."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "mapmaker"
_FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    processed_count: int = 0
    invalid_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    bonus_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    territory_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_territory_time_ms(self) -> float | None:
        if not self.territory_timings_ms:
            return None
        return sum(self.territory_timings_ms) / len(self.territory_timings_ms)

    @property
    def min_territory_time_ms(self) -> float | None:
        return min(self.territory_timings_ms) if self.territory_timings_ms else None

    @property
    def max_territory_time_ms(self) -> float | None:
        return max(self.territory_timings_ms) if self.territory_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so configuring twice
    does not duplicate output.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for installed in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(installed)
        installed.close()

    if log_file is not None:
        root.addHandler(
            _named_handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, _FILE_FORMAT)
        )
    if not quiet:
        root.addHandler(_named_handler(logging.StreamHandler(), console_level, "%(message)s"))

    structlog.configure(
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(_HANDLER_NAME)
    logger.info("Logging initialized", log_file=log_file and str(log_file), level=file_level)
    return logger


def _named_handler(handler: logging.Handler, level: str, fmt: str) -> logging.Handler:
    """Tag a handler so a later configure_logging call can replace it."""
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level.upper())
    handler.setFormatter(logging.Formatter(fmt))
    return handler


class ProcessingLogger:
    """Logger for tracking processing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_territory_start(self, territory_name: str) -> None:
        """Log start of territory processing."""
        self._logger.debug("Processing territory", territory=territory_name)

    def log_territory_complete(
        self,
        territory_name: str,
        distance: float,
        duration_ms: float,
    ) -> None:
        """Log successful label point computation."""
        self._logger.info(
            "Territory processed",
            territory=territory_name,
            distance=round(distance, 2),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1

    def log_territory_invalid(self, territory_name: str) -> None:
        """Log a territory whose boundary crosses itself."""
        self._logger.warning("Territory boundary self-intersects", territory=territory_name)
        self._stats.invalid_count += 1

    def log_territory_skipped(self, territory_name: str, reason: str) -> None:
        """Log skipped territory."""
        self._logger.debug("Territory skipped", territory=territory_name, reason=reason)
        self._stats.skipped_count += 1

    def log_territory_error(
        self,
        territory_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log territory processing error."""
        self._logger.error(
            "Territory processing failed",
            territory=territory_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((territory_name, str(error)))

    def log_bonus_armies(self, bonus_name: str, armies: int, super_bonus: bool = False) -> None:
        """Log the army value assigned to a bonus."""
        self._logger.debug(
            "Armies assigned",
            bonus=bonus_name,
            armies=armies,
            super_bonus=super_bonus,
        )

    def log_graph_built(self, vertex_count: int, edge_count: int) -> None:
        """Log adjacency graph size."""
        self._logger.debug(
            "Adjacency graph built",
            vertices=vertex_count,
            edges=edge_count,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
