"""Tests for engine settings loading and validation."""

import logging
import textwrap

import pytest

from intent.config import (
    EngineSettings,
    configure_logging,
    load_settings,
    parse_settings_yaml,
)
from intent.declaration import Suite
from intent.expectations import CompoundPolicy, DEFAULT_CONTAINS_LIMIT


def test_defaults():
    settings = EngineSettings()
    assert settings.contains_diagnostic_limit == DEFAULT_CONTAINS_LIMIT
    assert settings.compound_policy == CompoundPolicy.ALL
    assert settings.log_level == "WARNING"


def test_parse_valid_settings():
    settings, result = parse_settings_yaml(textwrap.dedent("""
        contains_diagnostic_limit: 5
        compound_policy: first_failure
        log_level: debug
    """))
    assert result.is_valid
    assert settings.contains_diagnostic_limit == 5
    assert settings.compound_policy == CompoundPolicy.FIRST_FAILURE
    assert settings.log_level == "DEBUG"


def test_empty_document_gives_defaults():
    settings, result = parse_settings_yaml("")
    assert result.is_valid
    assert settings == EngineSettings()


def test_unknown_key_is_reported():
    settings, result = parse_settings_yaml("contains_limit: 5\n")
    assert settings is None
    assert not result.is_valid
    assert result.errors[0].path == "contains_limit"
    assert "Unknown setting" in result.errors[0].message


def test_limit_must_be_positive_integer():
    for raw in ("0", "-3", "ten", "true"):
        settings, result = parse_settings_yaml(f"contains_diagnostic_limit: {raw}\n")
        assert settings is None, raw
        assert result.errors[0].path == "contains_diagnostic_limit"


def test_bad_policy_is_reported():
    _, result = parse_settings_yaml("compound_policy: sometimes\n")
    assert not result.is_valid
    assert result.errors[0].value == "sometimes"
    assert "first_failure" in result.errors[0].suggestion


def test_bad_log_level_is_reported():
    _, result = parse_settings_yaml("log_level: LOUD\n")
    assert result.errors[0].path == "log_level"


def test_multiple_errors_collected():
    _, result = parse_settings_yaml("compound_policy: x\nlog_level: y\n")
    assert len(result.errors) == 2
    assert "2 error(s)" in str(result)


def test_invalid_yaml():
    settings, result = parse_settings_yaml("limit: [unclosed\n")
    assert settings is None
    assert "Invalid YAML syntax" in result.errors[0].message


def test_non_mapping_document():
    settings, result = parse_settings_yaml("- a\n- b\n")
    assert settings is None
    assert result.errors[0].value == "list"


def test_load_settings_from_file(tmp_path):
    path = tmp_path / "intent.yaml"
    path.write_text("contains_diagnostic_limit: 3\n")

    settings, result = load_settings(path)
    assert result.is_valid
    assert settings.contains_diagnostic_limit == 3


def test_load_settings_missing_file(tmp_path):
    settings, result = load_settings(tmp_path / "missing.yaml")
    assert settings is None
    assert result.errors[0].message == "File not found"


def test_configure_logging_sets_level():
    handler = logging.NullHandler()
    configure_logging(EngineSettings(log_level="DEBUG"), handler)

    package_logger = logging.getLogger("intent")
    assert package_logger.level == logging.DEBUG
    assert handler in package_logger.handlers


# --- settings flow into suites ---


@pytest.mark.asyncio
async def test_suite_uses_contains_limit():
    suite = Suite(settings=EngineSettings(contains_diagnostic_limit=2))
    result = await suite.expect([1, 2, 3]).contains(9)
    assert result.message == "Expected list(1, 2, ...) to contain 9"


@pytest.mark.asyncio
async def test_suite_uses_compound_policy():
    suite = Suite(settings=EngineSettings(compound_policy=CompoundPolicy.FIRST_FAILURE))
    compound = suite.all_of(suite.expect(1).equals(2), suite.expect(1).equals(3))
    assert compound.policy == CompoundPolicy.FIRST_FAILURE
    result = await compound
    assert result.message == "Expected 2 but found 1"
