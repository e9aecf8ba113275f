"""Logging utilities for deckdraw."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class SessionStats:
    """Statistics from a drawing session."""

    clicks: int = 0
    points_added: int = 0
    closes_succeeded: int = 0
    closes_failed: int = 0
    corners_added: int = 0
    out_of_bounds: int = 0
    vertices_edited: int = 0
    decompositions: int = 0
    rectangles_created: int = 0
    errors: list[str] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def close_attempts(self) -> int:
        return self.closes_succeeded + self.closes_failed

    @property
    def duration_seconds(self) -> float:
        """Calculate session duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (console only if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("deckdraw")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class SessionLogger:
    """Logger for tracking drawing events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("deckdraw.session")
        self._stats = SessionStats(start_time=time.time())

    def log_click(self, x: float, y: float, state: str, action: str) -> None:
        """Log a click and the action it produced."""
        self._logger.debug("Click", x=round(x, 2), y=round(y, 2), state=state, action=action)
        self._stats.clicks += 1

    def log_point_added(self, x: float, y: float, total: int) -> None:
        self._logger.debug("Point added", x=x, y=y, points=total)
        self._stats.points_added += 1

    def log_shape_closed(self, vertices: int, corner_added: bool) -> None:
        """Log a successful close."""
        self._logger.info("Shape closed", vertices=vertices, corner_added=corner_added)
        self._stats.closes_succeeded += 1
        if corner_added:
            self._stats.corners_added += 1

    def log_close_failed(self, error: str) -> None:
        """Log a rejected close."""
        self._logger.info("Close rejected", error=error)
        self._stats.closes_failed += 1
        self._stats.errors.append(error)

    def log_out_of_bounds(self, message: str) -> None:
        self._logger.debug("Click out of bounds", message=message)
        self._stats.out_of_bounds += 1

    def log_vertex_edit(self, operation: str, index: int, vertices: int) -> None:
        """Log a vertex removal or insertion on a closed shape."""
        self._logger.info("Vertex edited", operation=operation, index=index, vertices=vertices)
        self._stats.vertices_edited += 1

    def log_edit_rejected(self, operation: str, error: str) -> None:
        self._logger.info("Vertex edit rejected", operation=operation, error=error)
        self._stats.errors.append(error)

    def log_decomposition(self, ledgers: list[int], rectangles: int, duration_ms: float) -> None:
        """Log a decomposition run."""
        self._logger.info(
            "Shape decomposed",
            ledgers=ledgers,
            rectangles=rectangles,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.decompositions += 1
        self._stats.rectangles_created += rectangles

    def log_undo(self, remaining: int) -> None:
        self._logger.debug("Undo", history=remaining)

    def finish(self) -> SessionStats:
        """Stamp the end time and return the statistics."""
        self._stats.end_time = time.time()
        return self._stats

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats
