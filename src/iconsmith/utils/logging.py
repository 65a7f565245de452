"""Logging utilities for Iconsmith."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class SynthesisStats:
    """Statistics from a synthesis run."""

    glyph_count: int = 0
    contour_count: int = 0
    point_count: int = 0
    font_size_bytes: int = 0
    first_codepoint: int | None = None
    last_codepoint: int | None = None
    glyph_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate synthesis duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_glyph_time_ms(self) -> float | None:
        """Average per-glyph processing time."""
        if not self.glyph_times_ms:
            return None
        return sum(self.glyph_times_ms) / len(self.glyph_times_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

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

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
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

    logger = structlog.get_logger("iconsmith")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


def get_logger(name: str = "iconsmith") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger without touching global configuration."""
    return structlog.get_logger(name)


class SynthesisLogger:
    """Logger for tracking synthesis progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = SynthesisStats()

    def log_synthesis_start(self, module_name: str, glyph_count: int) -> None:
        """Log start of a synthesis pass."""
        self._logger.info("Synthesizing font", module=module_name, glyphs=glyph_count)

    def log_glyph_start(self, identifier: str, collection: str, order: int) -> None:
        """Log start of glyph processing."""
        self._logger.debug(
            "Processing glyph",
            glyph=identifier,
            collection=collection,
            order=order,
        )

    def log_glyph_complete(
        self,
        identifier: str,
        codepoint: int,
        glyph_id: int,
        contours: int,
        points: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph processing."""
        self._logger.debug(
            "Glyph assembled",
            glyph=identifier,
            codepoint=f"U+{codepoint:04X}",
            glyph_id=glyph_id,
            contours=contours,
            points=points,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.glyph_count += 1
        self._stats.contour_count += contours
        self._stats.point_count += points
        self._stats.glyph_times_ms.append(duration_ms)
        if self._stats.first_codepoint is None:
            self._stats.first_codepoint = codepoint
        self._stats.last_codepoint = codepoint

    def log_glyph_error(self, identifier: str, error: Exception) -> None:
        """Log a fatal glyph error."""
        self._logger.error(
            "Glyph processing failed",
            glyph=identifier,
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_duplicate_order(self, order: int, identifiers: list[str]) -> None:
        """Log glyphs sharing one order value."""
        self._logger.warning(
            "Duplicate glyph order, keeping input sequence",
            order=order,
            glyphs=identifiers,
        )

    def log_table_built(self, tag: str) -> None:
        """Log a completed font table."""
        self._logger.debug("Table built", table=tag)

    def log_synthesis_complete(self, module_name: str, size_bytes: int) -> None:
        """Log end of a synthesis pass."""
        self._stats.font_size_bytes = size_bytes
        self._logger.info(
            "Font synthesized",
            module=module_name,
            glyphs=self._stats.glyph_count,
            bytes=size_bytes,
        )

    @property
    def stats(self) -> SynthesisStats:
        """Get current synthesis statistics."""
        return self._stats
