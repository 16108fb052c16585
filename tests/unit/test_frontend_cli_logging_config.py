"""Unit tests for CLI logging setup."""

import logging
from unittest.mock import patch

import pytest

from zkdrop.frontend.cli import app
from zkdrop.frontend.cli.logging_config import configure_logging


@pytest.fixture
def basic_config():
    with patch("zkdrop.frontend.cli.logging_config.logging.basicConfig") as mock:
        yield mock


def _level(mock):
    return mock.call_args.kwargs["level"]


def test_default_level(basic_config, monkeypatch):
    monkeypatch.delenv("ZKDROP_LOG_LEVEL", raising=False)
    configure_logging()
    assert _level(basic_config) == logging.WARNING


def test_env_replaces_default(basic_config, monkeypatch):
    monkeypatch.setenv("ZKDROP_LOG_LEVEL", "info")
    configure_logging()
    assert _level(basic_config) == logging.INFO


def test_explicit_level_beats_env(basic_config, monkeypatch):
    monkeypatch.setenv("ZKDROP_LOG_LEVEL", "ERROR")
    configure_logging(logging.DEBUG)
    assert _level(basic_config) == logging.DEBUG


def test_unknown_env_level_falls_back(basic_config, monkeypatch):
    monkeypatch.setenv("ZKDROP_LOG_LEVEL", "chatty")
    configure_logging()
    assert _level(basic_config) == logging.WARNING


def test_verbose_flag_wins_over_env(basic_config, monkeypatch, tmp_path):
    """-v selects DEBUG even when the environment asks for ERROR."""
    monkeypatch.setenv("ZKDROP_LOG_LEVEL", "ERROR")
    monkeypatch.setenv("ZKDROP_PASSWORD", "pw")
    app.main(["-v", "open", str(tmp_path / "missing.json")])
    assert _level(basic_config) == logging.DEBUG
