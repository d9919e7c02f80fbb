"""
LoggingService - structlog setup shared by the propdoc engine.

propdoc runs inside editors, doc generators and test suites, so importing
it never touches the global structlog configuration. Engine modules take
lazy loggers from ``LoggingService.get_logger`` at import time; they
resolve against whatever configuration is active when they emit. An
application that wants propdoc's JSON (or console) output on stderr calls
``configure_logging`` once.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TextIO

import structlog
from structlog.types import Processor

LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}
FORMATS = ("json", "console")
MAX_LOGGER_NAME_LENGTH = 200


@dataclass
class LoggingConfig:
    """
    Options for the structlog pipeline.

    ``level`` and ``format`` are normalised and checked on construction.

    Attributes:
        level: Minimum level emitted (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: "json" for machine-readable lines, "console" for humans
        output_stream: Where records go; None means ``sys.stderr`` at
            configuration time
    """

    level: str = "INFO"
    format: str = "json"
    output_stream: Optional[TextIO] = None

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        if self.level not in LEVELS:
            raise ValueError(
                f"Invalid log level: {self.level}. Must be one of: {', '.join(LEVELS)}"
            )

        self.format = self.format.lower()
        if self.format not in FORMATS:
            raise ValueError(f"Invalid format: {self.format}. Must be 'json' or 'console'")


class LoggingService:
    """
    Process-wide logging entry point.

    Loggers are never cached on first use, so reconfiguring (as the test
    suite does per test) redirects loggers created earlier as well.

    Example:
        LoggingService.configure_logging(level="DEBUG", format="console")

        logger = LoggingService.get_logger("propdoc_core.parsing.intake")
        logger.debug("intake_found", block_index=0)
    """

    _config: Optional[LoggingConfig] = None
    _loggers: Dict[str, Any] = {}

    @classmethod
    def configure_logging(
        cls, level: str = "INFO", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Install the processor chain and level filter.

        Args:
            level: Minimum level, case-insensitive
            format: "json" or "console"
            config: Full LoggingConfig; overrides ``level`` and ``format``

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If logging is already configured
        """
        if cls._config is not None:
            raise RuntimeError("Logging already configured; call reset() first")

        cfg = config if config is not None else LoggingConfig(level=level, format=format)

        structlog.configure(
            processors=cls._build_processors(cfg.format),
            wrapper_class=structlog.make_filtering_bound_logger(LEVELS[cfg.level]),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream or sys.stderr),
            cache_logger_on_first_use=False,
        )
        cls._config = cfg

    @classmethod
    def is_configured(cls) -> bool:
        return cls._config is not None

    @classmethod
    def current_config(cls) -> Optional[LoggingConfig]:
        return cls._config

    @classmethod
    def reset(cls) -> None:
        """Forget the configuration and restore structlog's defaults."""
        cls._config = None
        cls._loggers = {}
        structlog.reset_defaults()

    @classmethod
    def get_logger(cls, name: str) -> Any:
        """
        Return the logger for ``name``, creating it on first request.

        Safe to call at import time: the returned proxy binds ``logger=name``
        and looks up the active configuration on every call.

        Raises:
            ValueError: If name is empty or longer than 200 characters
        """
        if not name:
            raise ValueError("Logger name cannot be empty")

        if len(name) > MAX_LOGGER_NAME_LENGTH:
            raise ValueError(f"Logger name exceeds maximum length ({MAX_LOGGER_NAME_LENGTH})")

        if name not in cls._loggers:
            cls._loggers[name] = structlog.get_logger(name, logger=name)
        return cls._loggers[name]

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        logger: Any = None,
        level: str = "debug",
        **metrics: Any,
    ) -> None:
        """
        Emit ``operation`` as an event carrying its duration.

        Args:
            operation: Event name, e.g. "props_extracted"
            duration_ms: Elapsed wall time in milliseconds, rounded to
                microseconds in the record
            logger: Logger to emit through (a bound one keeps its context);
                defaults to the "propdoc" logger
            level: Level name of the record
            **metrics: Extra fields such as counts

        Raises:
            ValueError: If operation is empty, duration_ms is negative or
                level is unknown
        """
        if not operation:
            raise ValueError("operation cannot be empty")

        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        if level.upper() not in LEVELS:
            raise ValueError(f"Invalid log level: {level}")

        target = logger if logger is not None else cls.get_logger("propdoc")
        emit = getattr(target, level.lower())
        emit(operation, duration_ms=round(duration_ms, 3), **metrics)

    @staticmethod
    def _build_processors(format: str) -> List[Processor]:
        processors: List[Processor] = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors
