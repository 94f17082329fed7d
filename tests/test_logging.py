"""
Tests for CLI logging setup
"""

import logging

import pytest

from templater.logging import ClickEchoHandler, ROOT_LOGGER_NAME, get_logger, setup_logging


class TestClickEchoHandler:
    """Test the click based handler."""

    def test_writes_formatted_record_to_stderr(self, capsys):
        logger = logging.getLogger("templater.tests.echo")
        logger.propagate = False
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(handler)

        try:
            logger.warning("Template has no types file")
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        captured = capsys.readouterr()
        assert captured.err == "[WARNING] Template has no types file\n"
        assert captured.out == ""


class TestGetLogger:
    """Test logger retrieval."""

    def test_default_name(self):
        assert get_logger().name == ROOT_LOGGER_NAME

    def test_sets_level(self):
        logger = get_logger("templater.tests.level", level="debug")
        assert logger.level == logging.DEBUG


class TestSetupLogging:
    """Test CLI logging configuration."""

    def test_configures_root_templater_logger(self):
        logger = setup_logging("INFO")

        assert logger.name == "templater"
        assert logger.level == logging.INFO
        assert any(isinstance(handler, ClickEchoHandler) for handler in logger.handlers)

    def test_repeated_calls_keep_one_handler(self):
        setup_logging("WARNING")
        logger = setup_logging("ERROR")

        handlers = [handler for handler in logger.handlers if isinstance(handler, ClickEchoHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.ERROR

    def test_module_loggers_reach_handler(self, capsys):
        setup_logging("WARNING")
        logging.getLogger("templater.core.hooks").warning("Removing placeholders without a value: {{x}}")
        logging.getLogger("templater.core.hooks").info("hidden")

        err = capsys.readouterr().err
        assert "[WARNING] Removing placeholders without a value: {{x}}" in err
        assert "hidden" not in err

    def test_debug_format_includes_logger_name(self, capsys):
        setup_logging("DEBUG")
        logging.getLogger("templater.store").debug("loaded")

        assert "[DEBUG] templater.store - loaded" in capsys.readouterr().err

    def test_custom_format(self, capsys):
        setup_logging("WARNING", format_string="%(levelname)s:%(message)s")
        logging.getLogger("templater").warning("custom")

        assert "WARNING:custom" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
