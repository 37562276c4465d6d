"""Unit tests for the logger utilities."""

import logging

from lazyinit.utils.logger import StructuredFormatter, log_with_context, setup_logger


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_appends_context(self):
        formatter = StructuredFormatter(fmt="%(message)s")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "Constructed", None, None)
        record.context = {"accessor": "db", "strategy": "locked"}

        assert formatter.format(record) == "Constructed | accessor=db | strategy=locked"

    def test_without_context(self):
        formatter = StructuredFormatter(fmt="%(message)s")
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "plain", None, None)

        assert formatter.format(record) == "plain"


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_only(self):
        logger = setup_logger(name="lazyinit.test.console", log_level="debug")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        logger = setup_logger(name="lazyinit.test.file", run_id="abc", log_dir=tmp_path)
        log_with_context(logger, "warning", "Construction failed", accessor="db")
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / "run_abc.log").read_text(encoding="utf-8")
        assert "Construction failed | accessor=db" in content

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logger(name="lazyinit.test.repeat")
        logger = setup_logger(name="lazyinit.test.repeat")

        assert len(logger.handlers) == 1


class TestLogWithContext:
    """Tests for log_with_context."""

    def test_context_on_record(self, caplog):
        logger = logging.getLogger("lazyinit.test.context")
        with caplog.at_level(logging.INFO, logger="lazyinit.test.context"):
            log_with_context(logger, "info", "Constructed", accessor="db")

        record = caplog.records[-1]
        assert record.getMessage() == "Constructed"
        assert record.context == {"accessor": "db"}
