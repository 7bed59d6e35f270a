"""Tests for logging setup."""

import io
import logging

from httpchain.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_configures_package_logger(self):
        stream = io.StringIO()
        logger = setup_logging(level="INFO", stream=stream)

        assert logger.name == "httpchain"
        assert logger.level == logging.INFO
        assert logger.propagate is False

        logging.getLogger("httpchain.transports.base").info("hello from a transport")
        assert "httpchain.transports.base - INFO - hello from a transport" in stream.getvalue()

    def test_level_filters_messages(self):
        stream = io.StringIO()
        setup_logging(level="WARNING", stream=stream)

        logging.getLogger("httpchain.http.client").info("quiet")
        assert stream.getvalue() == ""

    def test_unknown_level_falls_back_to_warning(self):
        assert setup_logging(level="chatty", stream=io.StringIO()).level == logging.WARNING

    def test_second_call_keeps_handlers_but_updates_level(self):
        """Test that repeated setup does not stack handlers."""
        stream = io.StringIO()
        setup_logging(level="WARNING", stream=stream)
        logger = setup_logging(level="DEBUG")

        assert len(logger.handlers) == 1
        logger.debug("now visible")
        assert "now visible" in stream.getvalue()

    def test_force_replaces_handlers(self):
        first, second = io.StringIO(), io.StringIO()
        setup_logging(stream=first)
        logger = setup_logging(level="ERROR", stream=second, force=True, format_string="%(message)s")

        logger.error("only here")
        assert first.getvalue() == ""
        assert second.getvalue() == "only here\n"

    def test_log_file(self, tmp_path):
        path = tmp_path / "httpchain.log"
        logger = setup_logging(level="INFO", log_file=path, stream=io.StringIO())

        logger.info("to the file")
        for handler in logger.handlers:
            handler.flush()

        assert "to the file" in path.read_text()
