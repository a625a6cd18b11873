"""Tests for logging setup and the timing decorator."""
import logging

import pytest

from kubenv.utils.logging_config import get_log_level, setup_logging, timed


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("KUBENV_LOG_LEVEL", "debug")

        assert get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("KUBENV_LOG_LEVEL", "chatty")

        assert get_log_level() == logging.WARNING

    def test_console_only_by_default(self):
        setup_logging(level="INFO")

        handlers = logging.getLogger("kubenv").handlers
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        setup_logging()

        assert len(logging.getLogger("kubenv").handlers) == 1

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "kubenv.log"
        setup_logging(level=logging.ERROR, log_file=log_file)

        logging.getLogger("kubenv.test").debug("written to file only")
        for handler in logging.getLogger("kubenv").handlers:
            handler.flush()

        assert "written to file only" in log_file.read_text()
        assert (tmp_path / "logs" / "kubenv-perf.log").exists()


class TestTimed:
    """Tests for the timed decorator."""

    def test_logs_success(self, caplog):
        class Thing:
            @timed("apply")
            def apply(self, name):
                return name.upper()

        with caplog.at_level(logging.INFO, logger="kubenv.perf"):
            assert Thing().apply("dev") == "DEV"

        assert "apply" in caplog.text
        assert "dev" in caplog.text
        assert "OK" in caplog.text

    def test_logs_and_reraises_failure(self, caplog):
        @timed("sync")
        def boom():
            raise ValueError("bad")

        with caplog.at_level(logging.INFO, logger="kubenv.perf"):
            with pytest.raises(ValueError):
                boom()

        assert "FAIL: bad" in caplog.text
