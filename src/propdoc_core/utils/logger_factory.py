"""
Logger Factory - module-level access to LoggingService.

Engine modules call ``get_logger(__name__)`` at import time; applications
call ``configure_logging()`` once, optionally relying on ``PROPDOC_LOG_*``
settings for the level and format.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Optional

from propdoc_core.config import get_settings
from propdoc_core.logging_service import LoggingService


def get_logger(name: str) -> Any:
    """
    Get the logger for a module.

    Example:
        ```python
        from propdoc_core.utils import get_logger

        logger = get_logger(__name__)
        logger.debug("type_map_built", type_count=3)
        ```

    Raises:
        ValueError: If name is empty or exceeds 200 characters
    """
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure propdoc logging.

    Values left as None come from ``get_settings()`` (``PROPDOC_LOG_LEVEL``
    and ``PROPDOC_LOG_FORMAT``), which is only consulted in that case.

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If logging is already configured
    """
    if level is None or format is None:
        settings = get_settings()
        level = level if level is not None else settings.log_level
        format = format if format is not None else settings.log_format

    LoggingService.configure_logging(level=level, format=format)
