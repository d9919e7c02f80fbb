"""
Utilities for propdoc.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from propdoc_core.utils.logger_factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
]
