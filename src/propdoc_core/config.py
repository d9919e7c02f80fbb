"""
Configuration Management for propdoc.

Two layers:

- ``ExtractionOptions``: the explicit, immutable flags handed to the
  extraction engine. The engine reads nothing else.
- ``PropdocSettings``: Pydantic Settings loaded from environment variables
  (``PROPDOC_`` prefix) and ``.env`` files, for applications that want
  zero-config defaults, built on first use by ``get_settings()``.
  ``get_settings().to_options()`` bridges the two.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

from propdoc_core.models import PropOrder


class ExtractionOptions(BaseModel):
    """
    Flags controlling one extraction call.

    Attributes:
        normalise_comment: Collapse doc comments to a single line
        normalise_type: Collapse whitespace inside type text
        normalise_default_value: Collapse whitespace inside default values
        fallback_types: Types for properties left as "unknown", keyed by
            the destructured (external) name
        intake_call: Call that receives the component's properties
        bindable_marker: Call wrapping a default to mark it bindable
    """

    model_config = ConfigDict(frozen=True)

    normalise_comment: bool = False
    normalise_type: bool = True
    normalise_default_value: bool = True
    fallback_types: Dict[str, str] = Field(default_factory=dict)
    intake_call: str = Field(default="$props", min_length=1)
    bindable_marker: str = Field(default="$bindable", min_length=1)


class PropdocSettings(BaseSettings):
    """
    Centralized configuration for applications embedding propdoc.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (``PROPDOC_NORMALISE_TYPE=false``)
    2. .env file in the working directory
    3. Hardcoded default values

    Example:
        ```python
        from propdoc_core.config import get_settings

        extractor = PropExtractor(get_settings().to_options())
        ```
    """

    # ========================================
    # EXTRACTION
    # ========================================

    normalise_comment: bool = Field(
        default=False, description="Collapse doc comments to a single line"
    )

    normalise_type: bool = Field(
        default=True, description="Collapse whitespace runs inside type text"
    )

    normalise_default_value: bool = Field(
        default=True, description="Collapse whitespace runs inside default values"
    )

    fallback_types: Dict[str, str] = Field(
        default_factory=dict,
        description="Types used for unresolved properties (JSON object in env)",
    )

    intake_call: str = Field(
        default="$props", min_length=1, description="Call receiving component properties"
    )

    bindable_marker: str = Field(
        default="$bindable", min_length=1, description="Call marking a default as bindable"
    )

    # ========================================
    # PRESENTATION
    # ========================================

    tooltip_order: PropOrder = Field(
        default=PropOrder.REQUIRED, description="Order applied by sort_props callers"
    )

    # ========================================
    # LOGGING
    # ========================================

    log_level: str = Field(default="INFO", description="Logging level")

    log_format: str = Field(default="json", description="Log output format (json or console)")

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Returns:
            Uppercase log level string

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Returns:
            Lowercase log format string

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    @field_validator("fallback_types")
    @classmethod
    def validate_fallback_types(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Drop entries with blank names or blank types."""
        return {name.strip(): t.strip() for name, t in v.items() if name.strip() and t.strip()}

    def to_options(self) -> ExtractionOptions:
        """Build the explicit option set the extraction engine consumes."""
        return ExtractionOptions(
            normalise_comment=self.normalise_comment,
            normalise_type=self.normalise_type,
            normalise_default_value=self.normalise_default_value,
            fallback_types=dict(self.fallback_types),
            intake_call=self.intake_call,
            bindable_marker=self.bindable_marker,
        )

    # ========================================
    # PYDANTIC CONFIGURATION
    # ========================================

    model_config = {
        "env_prefix": "PROPDOC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "forbid",
    }


def get_config_summary(settings: PropdocSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: PropdocSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "extraction": {
            "normalise_comment": settings.normalise_comment,
            "normalise_type": settings.normalise_type,
            "normalise_default_value": settings.normalise_default_value,
            "fallback_types": dict(settings.fallback_types),
            "intake_call": settings.intake_call,
            "bindable_marker": settings.bindable_marker,
        },
        "presentation": {
            "tooltip_order": settings.tooltip_order.value,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
    }


@lru_cache
def get_settings() -> PropdocSettings:
    """
    Return the process-wide settings, loading them on first call.

    Importing propdoc never reads the environment; a malformed ``.env``
    only fails the caller that asks for settings.
    """
    return PropdocSettings()
