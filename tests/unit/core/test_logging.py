"""Tests for frankenai.core.logging."""

from __future__ import annotations

import logging

import pytest

from frankenai.core.logging import configure_logging, get_logger


class TestConfigureLogging:
    """Tests for configure_logging level selection."""

    @pytest.mark.parametrize(
        "flags,expected",
        [
            ({}, logging.WARNING),
            ({"verbose": True}, logging.INFO),
            ({"debug": True}, logging.DEBUG),
            ({"debug": True, "verbose": True}, logging.DEBUG),
            ({"quiet": True, "debug": True}, logging.ERROR),
        ],
    )
    def test_level(self, flags, expected) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(**flags)
            assert root.level == expected
        finally:
            root.setLevel(previous)


class TestGetLogger:
    """Tests for get_logger."""

    def test_named_logger(self) -> None:
        assert get_logger("frankenai.detection").name == "frankenai.detection"

    def test_default_name(self) -> None:
        assert get_logger().name == "frankenai"
