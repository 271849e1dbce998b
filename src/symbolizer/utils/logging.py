"""Logging utilities for Symbolizer."""

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from symbolizer.domain import Diagnostic, Variant

# Handlers installed by configure_logging, replaced on reconfiguration
_HANDLER_NAME = "symbolizer"


@dataclass
class RenderStats:
    """Statistics from a render run."""

    variants_rendered: list[Variant] = field(default_factory=list)
    fallbacks: list[Variant] = field(default_factory=list)
    paths_emitted: int = 0
    warning_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Log records go to stderr at ``console_level`` and, when ``log_file`` is
    given, to that file at ``file_level``.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, only errors reach the console

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in [h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

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

    logger = structlog.get_logger("symbolizer")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None, level=console_level)

    return logger


class RenderLogger:
    """Logger for tracking render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_variant_complete(self, variant: Variant, path_count: int, region_width: float) -> None:
        """Log a composed weight region."""
        self._logger.info("Variant rendered", variant=variant.value, paths=path_count, region_width=round(region_width, 3))
        self._stats.variants_rendered.append(variant)
        self._stats.paths_emitted += path_count

    def log_fallback(self, variant: Variant, reason: str) -> None:
        """Log a variant rendered from the regular artwork."""
        self._logger.info("Variant falls back to regular", variant=variant.value, reason=reason)
        self._stats.fallbacks.append(variant)

    def log_diagnostic(self, diagnostic: Diagnostic) -> None:
        """Log a diagnostic, as a warning for unsupported content."""
        variant = diagnostic.variant.value if diagnostic.variant else None
        if diagnostic.kind.is_warning:
            self._logger.warning(diagnostic.message, kind=diagnostic.kind.name, variant=variant)
            self._stats.warning_count += 1
        else:
            self._logger.info(diagnostic.message, kind=diagnostic.kind.name, variant=variant)

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats
