"""Tests for schema document format versions and runtime configuration."""

from __future__ import annotations

import logging

import pytest

from typedrops.config import TypeDropsConfig
from typedrops.exceptions import FormatVersionError
from typedrops.format_version import (
    SCHEMA_FORMAT_VERSION,
    SemanticVersion,
    check_format_version,
    parse_format_version,
)


def test_parse_format_version():
    assert parse_format_version("v1.2.3") == SemanticVersion(1, 2, 3)
    assert str(parse_format_version(" 0.1.0 ")) == "0.1.0"


@pytest.mark.parametrize("raw", ["1.2", "a.b.c", 1.2])
def test_parse_format_version_rejects(raw):
    with pytest.raises(FormatVersionError):
        parse_format_version(raw)


def test_check_format_version():
    assert check_format_version(SCHEMA_FORMAT_VERSION).compatible
    assert check_format_version(None).file_version is None

    newer = check_format_version("0.9.0")
    assert newer.compatible and newer.minor_newer

    assert not check_format_version("1.0.0").compatible
    assert not check_format_version("garbage").compatible


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("TYPEDROPS_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TYPEDROPS_CACHE_ENABLED", "false")
    monkeypatch.setenv("TYPEDROPS_ATOMIZE", "1")
    config = TypeDropsConfig.from_env()
    assert config.log_level == "DEBUG"
    assert config.cache_enabled is False
    assert config.atomize is True


def test_set_logging_splits_streams(capsys):
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    try:
        TypeDropsConfig(log_level="INFO", print_level="WARNING").set_logging()
        logger = logging.getLogger("typedrops.test")
        logger.info("to stdout")
        logger.warning("to stderr")
        captured = capsys.readouterr()
        assert "to stdout" in captured.out and "to stdout" not in captured.err
        assert "to stderr" in captured.err and "to stderr" not in captured.out
    finally:
        root.handlers[:] = saved[1]
        root.setLevel(saved[0])
