"""
Tests for logging setup.
"""
import io
import json
import logging

import structlog

from dimstep.logging_config import configure_cli_logging, get_file_handler, setup_logging


class TestSetupLogging:
    """Tests for structlog configuration."""

    def test_json_output(self):
        """Test JSON rendering of structured events."""
        stream = io.StringIO()
        setup_logging(log_level="INFO", json_logs=True, stream=stream)

        structlog.get_logger("dimstep.test").info("brightness_adjusted", new=65)

        record = json.loads(stream.getvalue().splitlines()[-1])
        assert record["event"] == "brightness_adjusted"
        assert record["new"] == 65
        assert record["level"] == "info"
        assert record["logger"] == "dimstep.test"

    def test_level_filters(self):
        """Test events below the level are dropped."""
        stream = io.StringIO()
        setup_logging(log_level="WARNING", stream=stream)

        structlog.get_logger("dimstep.test").info("quiet")
        structlog.get_logger("dimstep.test").warning("loud")

        output = stream.getvalue()
        assert "quiet" not in output
        assert "loud" in output


class TestFileHandler:
    """Tests for the JSON file handler."""

    def test_writes_json(self, tmp_path):
        """Test the file handler writes JSON lines."""
        log_file = tmp_path / "dimstep.log"
        handler = get_file_handler(str(log_file))
        logger = logging.getLogger("dimstep.file_test")
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)
        try:
            logger.warning("device_adjustment_failed")
        finally:
            logger.removeHandler(handler)
            handler.close()

        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["message"] == "device_adjustment_failed"
        assert record["levelname"] == "WARNING"

    def test_level(self, tmp_path):
        """Test the file handler level."""
        handler = get_file_handler(str(tmp_path / "x.log"), log_level="ERROR")
        try:
            assert handler.level == logging.ERROR
        finally:
            handler.close()


class TestConfigureCliLogging:
    """Tests for the per-run setup used by the command line."""

    def test_verbose_raises_level(self):
        """Test verbose raises the level to INFO."""
        configure_cli_logging("WARNING", verbose=True)

        assert logging.getLogger().level == logging.INFO

    def test_quiet_uses_given_level(self):
        """Test the given level is used when not verbose."""
        configure_cli_logging("ERROR")

        assert logging.getLogger().level == logging.ERROR

    def test_log_file_attached(self, tmp_path):
        """Test the log file receives events."""
        log_file = tmp_path / "run.log"

        configure_cli_logging("INFO", log_file=log_file)
        structlog.get_logger("dimstep.test").info("brightness_adjusted")

        assert "brightness_adjusted" in log_file.read_text()
