"""
Unit tests for PropdocSettings and ExtractionOptions.

Tests configuration loading, validation, and environment variable handling.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pydantic
import pytest

from propdoc_core import extract_props
from propdoc_core.config import (
    ExtractionOptions,
    PropdocSettings,
    get_config_summary,
    get_settings,
)
from propdoc_core.models import PropOrder

# ============================================================
# EXTRACTION OPTIONS TESTS
# ============================================================


def test_extraction_options_defaults():
    """Test the default flags of the extraction engine."""
    options = ExtractionOptions()

    assert options.normalise_comment is False
    assert options.normalise_type is True
    assert options.normalise_default_value is True
    assert options.fallback_types == {}
    assert options.intake_call == "$props"
    assert options.bindable_marker == "$bindable"


def test_extraction_options_frozen():
    """Test options cannot be mutated after construction."""
    options = ExtractionOptions()

    with pytest.raises(pydantic.ValidationError):
        options.normalise_type = False


def test_extraction_options_reject_empty_marker():
    with pytest.raises(pydantic.ValidationError):
        ExtractionOptions(bindable_marker="")


# ============================================================
# SETTINGS LOADING TESTS
# ============================================================


def test_default_configuration():
    """Test that default configuration loads successfully with all defaults."""
    settings = PropdocSettings()

    assert settings.normalise_comment is False
    assert settings.normalise_type is True
    assert settings.normalise_default_value is True
    assert settings.fallback_types == {}
    assert settings.intake_call == "$props"
    assert settings.bindable_marker == "$bindable"
    assert settings.tooltip_order == PropOrder.REQUIRED
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_environment_override(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("PROPDOC_NORMALISE_TYPE", "false")
    monkeypatch.setenv("PROPDOC_TOOLTIP_ORDER", "alphabetical")
    monkeypatch.setenv("PROPDOC_FALLBACK_TYPES", '{"size": "number"}')

    settings = PropdocSettings()

    assert settings.normalise_type is False
    assert settings.tooltip_order == PropOrder.ALPHABETICAL
    assert settings.fallback_types == {"size": "number"}


def test_env_file_loading(tmp_path):
    """Test values are read from a .env file in the working directory."""
    (tmp_path / ".env").write_text("PROPDOC_NORMALISE_COMMENT=true\n")

    settings = PropdocSettings()

    assert settings.normalise_comment is True


def test_extra_fields_forbidden():
    with pytest.raises(pydantic.ValidationError):
        PropdocSettings(unknown_option=True)


# ============================================================
# VALIDATION TESTS
# ============================================================


@pytest.mark.parametrize("level", ["debug", "Info", "WARNING", "error", "critical"])
def test_log_level_uppercased(level):
    settings = PropdocSettings(log_level=level)

    assert settings.log_level == level.upper()


def test_invalid_log_level():
    with pytest.raises(pydantic.ValidationError) as exc_info:
        PropdocSettings(log_level="VERBOSE")

    assert "log_level must be one of" in str(exc_info.value)


def test_log_format_lowercased():
    settings = PropdocSettings(log_format="CONSOLE")

    assert settings.log_format == "console"


def test_invalid_log_format():
    with pytest.raises(pydantic.ValidationError):
        PropdocSettings(log_format="xml")


def test_invalid_tooltip_order():
    with pytest.raises(pydantic.ValidationError):
        PropdocSettings(tooltip_order="size")


def test_fallback_types_blank_entries_dropped():
    settings = PropdocSettings(fallback_types={" size ": " number ", "": "string", "x": "  "})

    assert settings.fallback_types == {"size": "number"}


def test_validate_assignment():
    settings = PropdocSettings()

    with pytest.raises(pydantic.ValidationError):
        settings.log_level = "LOUD"


# ============================================================
# HELPERS
# ============================================================


def test_to_options():
    """Test settings are bridged to an ExtractionOptions instance."""
    settings = PropdocSettings(
        normalise_comment=True,
        fallback_types={"size": "number"},
        bindable_marker="bindable",
    )

    options = settings.to_options()

    assert isinstance(options, ExtractionOptions)
    assert options.normalise_comment is True
    assert options.fallback_types == {"size": "number"}
    assert options.bindable_marker == "bindable"
    assert options.intake_call == "$props"


def test_get_config_summary():
    settings = PropdocSettings(tooltip_order="type", log_format="console")

    summary = get_config_summary(settings)

    assert set(summary) == {"extraction", "presentation", "logging"}
    assert summary["presentation"]["tooltip_order"] == "type"
    assert summary["logging"] == {"level": "INFO", "format": "console"}
    assert summary["extraction"]["intake_call"] == "$props"


# ============================================================
# LAZY SETTINGS TESTS
# ============================================================


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_get_settings_is_cached(fresh_settings):
    assert get_settings() is get_settings()


def test_get_settings_reads_environment_on_first_call(fresh_settings, monkeypatch):
    monkeypatch.setenv("PROPDOC_TOOLTIP_ORDER", "type")

    assert get_settings().tooltip_order == PropOrder.TYPE


def test_invalid_env_file_only_fails_settings_access(fresh_settings, tmp_path):
    """Extraction keeps working next to a .env with unknown PROPDOC_ keys."""
    (tmp_path / ".env").write_text("PROPDOC_BOGUS=2\n")

    result = extract_props(["type P = { a: string };\nlet { a }: P = $props();"])

    assert result.prop_names == ["a"]
    with pytest.raises(pydantic.ValidationError):
        get_settings()
