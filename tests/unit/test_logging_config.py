"""
Unit Tests for logging configuration
"""

import logging

from config.logging_config import get_logger, set_level, setup_logger


class TestLoggingConfig:
    """Test setup_logger / get_logger / set_level."""

    def test_module_logger_uses_package_handlers(self):
        logger = get_logger("core.layout.agent")
        assert logger.name == "core.layout.agent"
        assert logging.getLogger("core").handlers

    def test_handlers_shared(self):
        press = setup_logger("press")
        core = setup_logger("core")
        assert press.handlers == core.handlers
        assert len(press.handlers) == 2

    def test_default_name(self):
        assert setup_logger().name == "press"

    def test_set_level(self):
        previous = logging.getLogger("core").level
        try:
            set_level("debug")
            assert logging.getLogger("core").level == logging.DEBUG
            assert logging.getLogger("press").level == logging.DEBUG
        finally:
            set_level(logging.getLevelName(previous))

    def test_set_level_empty_is_noop(self):
        level = logging.getLogger("press").level
        set_level("")
        assert logging.getLogger("press").level == level
