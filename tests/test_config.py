"""
Tests for configuration loading, merging and logging setup.
Path: tests/test_config.py
"""

import pytest
import structlog
from structlog.testing import capture_logs

from context_bucket import MarkedContextBucket
from context_bucket.config import (
    DEFAULT_CONFIG,
    deep_merge,
    get_by_path,
    get_value,
    load_config,
    load_with_defaults,
)
from context_bucket.utils.logging import get_logger, initialize_logging_config
from tests.contexts import AnotherMockContext, MockContext


def test_get_value_with_dots_and_slashes():
    data = {"bucket": {"marks": ["a"], "nested": {"value": 1}}}

    assert get_value(data, "bucket.marks") == ["a"]
    assert get_value(data, "bucket/nested/value") == 1
    assert get_value(data, "bucket.missing") is None
    assert get_value(data, "bucket.marks.deeper") is None
    assert get_by_path(data, []) == data


def test_deep_merge_rules():
    base = {"logging": {"level": "WARNING", "format": "console"}, "bucket": {"marks": ["a", "b"]}}
    override = {"logging": {"level": "DEBUG", "format": None}, "bucket": {"marks": ["c"]}}

    merged = deep_merge(base, override)

    assert merged == {"logging": {"level": "DEBUG"}, "bucket": {"marks": ["c"]}}
    assert base["logging"]["format"] == "console"
    assert base["bucket"]["marks"] == ["a", "b"]


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "bucket.yml"
    path.write_text("bucket:\n  marks:\n    - tests.contexts:MockContext\n")

    assert load_config(path) == {"bucket": {"marks": ["tests.contexts:MockContext"]}}


def test_load_config_missing_or_invalid_returns_empty(tmp_path):
    broken = tmp_path / "broken.yml"
    broken.write_text("bucket: [unclosed\n")
    scalar = tmp_path / "scalar.yml"
    scalar.write_text("just a string\n")

    assert load_config(tmp_path / "absent.yml") == {}
    assert load_config(broken) == {}
    assert load_config(scalar) == {}


def test_load_with_defaults(tmp_path):
    path = tmp_path / "bucket.yml"
    path.write_text("logging:\n  level: DEBUG\n")

    config = load_with_defaults(path)

    assert config["logging"] == {"level": "DEBUG", "format": "console"}
    assert config["bucket"] == {"marks": []}
    assert load_with_defaults() == DEFAULT_CONFIG
    assert load_with_defaults() is not DEFAULT_CONFIG


def test_marked_bucket_from_yaml_file(tmp_path):
    path = tmp_path / "bucket.yml"
    path.write_text("bucket:\n  marks:\n    - tests.contexts:MockContext\n")

    bucket = MarkedContextBucket.from_config(load_with_defaults(path),
                                             MockContext("m"), AnotherMockContext("a"))

    assert [c.name for c in bucket] == ["m"]


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


def emitted_levels():
    """Emit one event per level and return the names that got through"""
    with capture_logs() as logs:
        logger = get_logger("tests")
        logger.debug("tests.debug")
        logger.info("tests.info")
        logger.warning("tests.warning")
        logger.error("tests.error")
    return [entry["event"] for entry in logs]


def test_initialize_logging_config_json_debug(reset_structlog):
    initialize_logging_config({"logging": {"level": "debug", "format": "json"}})

    assert structlog.is_configured()
    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
    assert emitted_levels() == ["tests.debug", "tests.info", "tests.warning", "tests.error"]


def test_initialize_logging_config_unknown_level_falls_back_to_warning(reset_structlog):
    initialize_logging_config({"logging": {"level": "verbose"}})

    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)
    assert emitted_levels() == ["tests.warning", "tests.error"]


def test_initialize_logging_config_defaults(reset_structlog):
    initialize_logging_config()

    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)
    assert emitted_levels() == ["tests.warning", "tests.error"]
