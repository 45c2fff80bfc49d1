#!/usr/bin/env python3
"""
test_runtime_config.py
----------------------
Tests for environment driven configuration and split stream logging.
"""
from __future__ import annotations

import logging

import pytest

from project_spec_designer.runtime_config import DesignerConfig


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_defaults(monkeypatch):
    for name in (
        "PROJECT_SPEC_DESIGNER_LOG_LEVEL",
        "PROJECT_SPEC_DESIGNER_PRINT_LEVEL",
        "PROJECT_SPEC_DESIGNER_CACHE_ENABLED",
    ):
        monkeypatch.delenv(name, raising=False)
    config = DesignerConfig.from_env()
    assert config.log_level == "WARNING"
    assert config.print_level == "WARNING"
    assert config.cache_enabled is False


def test_from_env(monkeypatch):
    monkeypatch.setenv("PROJECT_SPEC_DESIGNER_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PROJECT_SPEC_DESIGNER_PRINT_LEVEL", "ERROR")
    monkeypatch.setenv("PROJECT_SPEC_DESIGNER_CACHE_ENABLED", "True")
    config = DesignerConfig.from_env()
    assert (config.log_level, config.print_level, config.cache_enabled) == ("DEBUG", "ERROR", True)


def test_split_streams(capsys):
    logger = DesignerConfig(print_level="WARNING").set_logging("INFO")
    assert logging.getLogger().level == logging.INFO

    logger.info("checking")
    logger.warning("possible cycle")
    captured = capsys.readouterr()
    assert "checking" in captured.out and "checking" not in captured.err
    assert "possible cycle" in captured.err and "possible cycle" not in captured.out


def test_unknown_level_falls_back_to_warning():
    DesignerConfig().set_logging("chatty")
    assert logging.getLogger().level == logging.WARNING
